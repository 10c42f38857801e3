"""Monte Carlo Match Simulation.

Plays many headless matches of the AI against a scripted player to
estimate win rates, match length and remaining health.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Tuple
import logging
import random
import statistics

from src.core.constants import SIMULATION_FRAME_MS
from src.data.models.match_config import MatchConfig
from src.data.models.skill import SkillKind

from .actor import ActorId
from .combat_engine import CombatEngine
from .match_state import MatchResult, MatchState, Winner

logger = logging.getLogger(__name__)


class ScriptedPlayer:
    """
    Rule-based stand-in for the human player.

    Each frame, in priority order:
    1. Interrupt an interruptible AI cast once it has run for ``reaction_ms``.
    2. Raise the defensive buff against a cast that cannot be interrupted.
    3. Press the channeled attack, then the instant attack.
    """

    def __init__(self, config: MatchConfig, reaction_ms: float = 250.0):
        self.reaction_ms = reaction_ms

        table = config.player
        self.interrupt_ids = [s.id for s in table.skills_of_kind(SkillKind.INTERRUPT)]
        self.defensive_ids = [s.id for s in table.skills_of_kind(SkillKind.DEFENSIVE)]
        self.attack_ids = [
            s.id for s in table.skills_of_kind(SkillKind.CHARGE) + table.skills_of_kind(SkillKind.NORMAL)
        ]

    def act(self, engine: CombatEngine, state: MatchState) -> MatchState:
        """Try skills in priority order; stop at the first accepted one."""
        for skill_id in self._priorities(state):
            result = engine.activate_skill(state, ActorId.PLAYER, skill_id)
            if result.accepted:
                return result.state
        return state

    def _priorities(self, state: MatchState) -> List[str]:
        ai = state.ai
        cast = ai.active_skill
        if ai.is_casting and cast is not None:
            elapsed = cast.cast_time_ms * ai.cast_progress / 100
            if cast.is_interruptible:
                if elapsed >= self.reaction_ms:
                    return self.interrupt_ids + self.attack_ids
            else:
                return self.defensive_ids + self.attack_ids
        return self.attack_ids


@dataclass
class SimulationResult:
    """
    Result of a Monte Carlo run.

    Contains statistical analysis of multiple matches.
    """

    # Win statistics
    player_win_rate: float  # 0.0 to 1.0
    ai_win_rate: float
    tie_rate: float

    # Match statistics
    avg_duration_ms: float
    avg_player_hp: float
    avg_ai_hp: float

    # Sample size
    iterations: int

    # Confidence interval (95%) on the player win rate
    win_rate_confidence: Tuple[float, float] = (0.0, 1.0)

    # Raw results for detailed analysis
    individual_results: List[MatchResult] = field(default_factory=list)


class MatchSimulator:
    """
    Monte Carlo match simulator.

    Usage:
        simulator = MatchSimulator(base_seed=7)
        result = simulator.simulate(iterations=200)
        print(f"Player win rate: {result.player_win_rate:.1%}")
    """

    def __init__(
        self,
        config: Optional[MatchConfig] = None,
        base_seed: Optional[int] = None,
        frame_ms: float = SIMULATION_FRAME_MS,
    ):
        """
        Initialize simulator.

        Args:
            config: Match configuration (default tables if omitted).
            base_seed: Base seed for reproducibility (seeds will be derived).
            frame_ms: Fixed frame length for headless ticks.
        """
        if frame_ms <= 0:
            raise ValueError(f"frame_ms must be positive, got {frame_ms}")
        self.config = config
        self.base_seed = base_seed
        self.frame_ms = frame_ms
        self.rng = random.Random(base_seed)

    def simulate(self, iterations: int = 100, reaction_ms: float = 250.0) -> SimulationResult:
        """
        Run Monte Carlo simulation.

        Args:
            iterations: Number of matches to play.
            reaction_ms: Scripted player's interrupt reaction delay.

        Returns:
            SimulationResult with statistical analysis.
        """
        results = [
            self.run_match(self._get_iteration_seed(i), reaction_ms)
            for i in range(iterations)
        ]
        analysis = self._analyze_results(results, iterations)
        logger.info(
            "Simulated %d matches: player win rate %.1f%%",
            iterations,
            analysis.player_win_rate * 100,
        )
        return analysis

    def run_match(self, seed: int, reaction_ms: float = 250.0) -> MatchResult:
        """Play one match to completion with fixed frames."""
        engine = CombatEngine(self.config, seed=seed)
        player = ScriptedPlayer(engine.config, reaction_ms=reaction_ms)

        state = engine.start(engine.new_match())
        while not engine.is_finished(state):
            state = engine.advance(state, self.frame_ms)
            if not engine.is_finished(state):
                state = player.act(engine, state)

        return engine.get_result(state)

    def _get_iteration_seed(self, iteration: int) -> int:
        """Get deterministic seed for an iteration."""
        if self.base_seed is not None:
            return self.base_seed + iteration
        return self.rng.randint(0, 2**31)

    def _analyze_results(self, results: List[MatchResult], iterations: int) -> SimulationResult:
        """Analyze simulation results."""
        player_wins = sum(1 for r in results if r.winner == Winner.PLAYER)
        ai_wins = sum(1 for r in results if r.winner == Winner.AI)
        ties = iterations - player_wins - ai_wins

        def rate(count: int) -> float:
            return count / iterations if iterations > 0 else 0.0

        def mean(values: List[float]) -> float:
            return statistics.mean(values) if values else 0.0

        return SimulationResult(
            player_win_rate=rate(player_wins),
            ai_win_rate=rate(ai_wins),
            tie_rate=rate(ties),
            avg_duration_ms=mean([r.duration for r in results]),
            avg_player_hp=mean([r.player_hp for r in results]),
            avg_ai_hp=mean([r.ai_hp for r in results]),
            iterations=iterations,
            win_rate_confidence=wilson_interval(player_wins, iterations),
            individual_results=results,
        )


def wilson_interval(successes: int, n: int, z: float = 1.96) -> Tuple[float, float]:
    """Wilson score interval for a binomial proportion (95% by default)."""
    if n == 0:
        return (0.0, 1.0)

    p = successes / n
    denominator = 1 + z * z / n
    center = (p + z * z / (2 * n)) / denominator
    spread = z * ((p * (1 - p) / n + z * z / (4 * n * n)) ** 0.5) / denominator

    return (max(0.0, center - spread), min(1.0, center + spread))
