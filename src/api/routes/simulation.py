"""
Monte Carlo simulation API routes.
"""

from fastapi import APIRouter, HTTPException, Depends

from ..schemas.simulation import SimulationRequest, SimulationResultSchema
from ..services.simulation_service import SimulationService
from ..dependencies import get_simulation_service

router = APIRouter()


@router.post("/run", response_model=SimulationResultSchema)
async def run_simulation(
    request: SimulationRequest,
    service: SimulationService = Depends(get_simulation_service),
):
    """
    Play N headless matches against the scripted player.

    Returns win rates and averages across all matches.
    """
    try:
        return service.run(
            iterations=request.iterations,
            reaction_ms=request.reaction_ms,
            seed=request.seed,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
