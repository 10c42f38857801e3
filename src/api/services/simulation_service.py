"""
Monte Carlo simulation service.
"""

from typing import Optional
import logging

from src.combat import MatchSimulator
from src.data.models import MatchConfig

from ..config import settings
from ..schemas.simulation import SimulationResultSchema

logger = logging.getLogger(__name__)


class SimulationService:
    """Runs headless matches against the scripted player."""

    def __init__(self, config: MatchConfig):
        self.config = config

    def run(
        self,
        iterations: Optional[int] = None,
        reaction_ms: float = 250.0,
        seed: Optional[int] = None,
    ) -> SimulationResultSchema:
        """
        Run a Monte Carlo simulation.

        Args:
            iterations: Number of matches (settings default if omitted).
            reaction_ms: Scripted player's interrupt reaction delay.
            seed: Base seed for reproducible runs.

        Raises:
            ValueError: If iterations exceeds the configured maximum.
        """
        iterations = iterations or settings.DEFAULT_SIMULATION_COUNT
        if iterations > settings.MAX_SIMULATION_COUNT:
            raise ValueError(
                f"iterations must be at most {settings.MAX_SIMULATION_COUNT}, got {iterations}"
            )

        simulator = MatchSimulator(self.config, base_seed=seed)
        result = simulator.simulate(iterations=iterations, reaction_ms=reaction_ms)

        return SimulationResultSchema(
            iterations=result.iterations,
            player_win_rate=result.player_win_rate,
            ai_win_rate=result.ai_win_rate,
            tie_rate=result.tie_rate,
            avg_duration_ms=result.avg_duration_ms,
            avg_player_hp=result.avg_player_hp,
            avg_ai_hp=result.avg_ai_hp,
            confidence_interval=list(result.win_rate_confidence),
        )
