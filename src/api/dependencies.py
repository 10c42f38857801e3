"""
Dependency injection for API services.
"""

from functools import lru_cache

from .services.match_service import MatchService
from .services.simulation_service import SimulationService


@lru_cache()
def get_match_service() -> MatchService:
    """Get MatchService singleton."""
    return MatchService()


@lru_cache()
def get_simulation_service() -> SimulationService:
    """Get SimulationService singleton."""
    return SimulationService(get_match_service().config)
