"""
Static data API routes.
"""

from fastapi import APIRouter, HTTPException, Depends
from typing import List, Dict, Any

from ..services.match_service import MatchService
from ..dependencies import get_match_service

router = APIRouter()


@router.get("/config")
async def get_config(
    service: MatchService = Depends(get_match_service),
) -> Dict[str, Any]:
    """Get the match configuration in use."""
    return service.config.model_dump()


@router.get("/skills/{actor_id}")
async def get_skills(
    actor_id: str,
    service: MatchService = Depends(get_match_service),
) -> List[Dict[str, Any]]:
    """Get an actor's skill table."""
    if actor_id == "player":
        table = service.config.player
    elif actor_id == "ai":
        table = service.config.ai
    else:
        raise HTTPException(status_code=404, detail="Actor not found")
    return [s.model_dump() for s in table.skills]


@router.get("/skills/{actor_id}/{skill_id}")
async def get_skill(
    actor_id: str,
    skill_id: str,
    service: MatchService = Depends(get_match_service),
) -> Dict[str, Any]:
    """Get specific skill by ID."""
    skills = await get_skills(actor_id, service)
    for skill in skills:
        if skill["id"] == skill_id:
            return skill
    raise HTTPException(status_code=404, detail="Skill not found")
