"""API services."""

from .match_service import MatchService, MatchSession
from .simulation_service import SimulationService

__all__ = [
    "MatchService",
    "MatchSession",
    "SimulationService",
]
