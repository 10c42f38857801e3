"""
Match session API routes.
"""

from fastapi import APIRouter, HTTPException, Depends
from typing import List, Optional

from ..schemas.common import BaseResponse
from ..schemas.match import (
    AdvanceRequest,
    CreateMatchRequest,
    DiagnosticsResponse,
    MatchResultSchema,
    MatchStateSchema,
    SkillActivationResponse,
    SkillRequest,
    SkillSlotSchema,
)
from ..services.match_service import MatchService
from ..dependencies import get_match_service

router = APIRouter()


@router.post("/create", response_model=MatchStateSchema)
async def create_match(
    request: Optional[CreateMatchRequest] = None,
    service: MatchService = Depends(get_match_service),
):
    """Create a new idle match."""
    seed = request.seed if request else None
    return service.create_match(seed=seed)


@router.get("/{match_id}", response_model=MatchStateSchema)
async def get_match(
    match_id: str,
    service: MatchService = Depends(get_match_service),
):
    """Get match state."""
    match = service.get_match(match_id)
    if not match:
        raise HTTPException(status_code=404, detail="Match not found")
    return match


@router.delete("/{match_id}", response_model=BaseResponse)
async def delete_match(
    match_id: str,
    service: MatchService = Depends(get_match_service),
):
    """Delete match."""
    if not service.delete_match(match_id):
        raise HTTPException(status_code=404, detail="Match not found")
    return BaseResponse(message="Match deleted")


# === Lifecycle ===


@router.post("/{match_id}/start", response_model=MatchStateSchema)
async def start_match(
    match_id: str,
    service: MatchService = Depends(get_match_service),
):
    """Start an idle match."""
    try:
        return service.start(match_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{match_id}/pause", response_model=MatchStateSchema)
async def pause_match(
    match_id: str,
    service: MatchService = Depends(get_match_service),
):
    """Pause a running match."""
    try:
        return service.pause(match_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{match_id}/resume", response_model=MatchStateSchema)
async def resume_match(
    match_id: str,
    service: MatchService = Depends(get_match_service),
):
    """Resume a paused match."""
    try:
        return service.resume(match_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{match_id}/restart", response_model=MatchStateSchema)
async def restart_match(
    match_id: str,
    service: MatchService = Depends(get_match_service),
):
    """Discard the current match and start a fresh one."""
    try:
        return service.restart(match_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{match_id}/advance", response_model=MatchStateSchema)
async def advance_match(
    match_id: str,
    request: AdvanceRequest,
    service: MatchService = Depends(get_match_service),
):
    """
    Advance the match clock.

    Long intervals are simulated as a series of capped frames.
    """
    try:
        return service.advance(match_id, request.elapsed_ms)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


# === Skills ===


@router.post("/{match_id}/skill", response_model=SkillActivationResponse)
async def use_skill(
    match_id: str,
    request: SkillRequest,
    service: MatchService = Depends(get_match_service),
):
    """Request a skill activation. Rejected requests still answer 200."""
    try:
        return service.use_skill(match_id, request.actor_id, request.skill_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{match_id}/skills/{actor_id}", response_model=List[SkillSlotSchema])
async def get_skill_slots(
    match_id: str,
    actor_id: str,
    service: MatchService = Depends(get_match_service),
):
    """Get skill bar availability for an actor."""
    try:
        return service.get_skill_slots(match_id, actor_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


# === Results ===


@router.get("/{match_id}/result", response_model=MatchResultSchema)
async def get_result(
    match_id: str,
    service: MatchService = Depends(get_match_service),
):
    """Get the result of a finished match."""
    try:
        result = service.get_result(match_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    if result is None:
        raise HTTPException(status_code=409, detail="Match not finished")
    return result


@router.get("/{match_id}/diagnostics", response_model=DiagnosticsResponse)
async def get_diagnostics(
    match_id: str,
    service: MatchService = Depends(get_match_service),
):
    """Get recent AI decision messages."""
    try:
        return service.get_diagnostics(match_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
