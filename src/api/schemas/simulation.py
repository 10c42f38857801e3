"""
Simulation-related API schemas.
"""

from pydantic import BaseModel, Field
from typing import Optional, List


class SimulationRequest(BaseModel):
    """Monte Carlo simulation request."""

    iterations: Optional[int] = Field(default=None, ge=1)
    reaction_ms: float = Field(default=250.0, ge=0, le=5000)
    seed: Optional[int] = None


class SimulationResultSchema(BaseModel):
    """Simulation result schema."""

    iterations: int
    player_win_rate: float
    ai_win_rate: float
    tie_rate: float
    avg_duration_ms: float
    avg_player_hp: float
    avg_ai_hp: float
    confidence_interval: List[float]
