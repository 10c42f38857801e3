"""
Match-related API schemas.
"""

from pydantic import BaseModel, Field
from typing import Optional, List


# === Request Schemas ===


class CreateMatchRequest(BaseModel):
    """Match creation request."""

    seed: Optional[int] = None  # Fixed seed for a reproducible AI


class AdvanceRequest(BaseModel):
    """Advance the match clock."""

    elapsed_ms: float = Field(..., ge=0, le=600_000)


class SkillRequest(BaseModel):
    """Skill activation request."""

    skill_id: str
    actor_id: str = "player"


# === Response Schemas ===


class BuffSchema(BaseModel):
    """Active buff schema."""

    id: str
    name: str
    kind: str
    end_time: float
    magnitude: Optional[float] = None
    icon: Optional[str] = None

    class Config:
        from_attributes = True


class ActorSchema(BaseModel):
    """Actor state schema."""

    id: str
    name: str
    hp: int
    max_hp: int
    buffs: List[BuffSchema]
    is_casting: bool
    active_skill_id: Optional[str] = None
    active_skill_name: Optional[str] = None
    active_skill_color: Optional[str] = None
    cast_progress: float
    global_cooldown_ends_at: float
    silenced_until: float
    cooldowns: dict[str, float]


class CombatEventSchema(BaseModel):
    """Combat log entry schema."""

    timestamp: float
    type: str
    source: str
    target: str
    skill_name: str
    value: Optional[int] = None

    class Config:
        from_attributes = True


class FeedbackTextSchema(BaseModel):
    """Floating text schema."""

    id: str
    text: str
    category: str
    target: str
    created_at: float
    x: float

    class Config:
        from_attributes = True


class MatchStateSchema(BaseModel):
    """Match snapshot schema."""

    match_id: str
    status: str
    duration: float
    match_duration_ms: int
    winner: Optional[str] = None
    player: ActorSchema
    ai: ActorSchema
    combat_log: List[CombatEventSchema]
    feedback_texts: List[FeedbackTextSchema]


class SkillActivationResponse(BaseModel):
    """Skill activation response."""

    accepted: bool
    reason: Optional[str] = None
    interrupt: Optional[str] = None
    damage: Optional[int] = None
    state: MatchStateSchema


class SkillSlotSchema(BaseModel):
    """Skill bar slot schema."""

    skill_id: str
    name: str
    kind: str
    icon: Optional[str] = None
    on_cooldown: bool
    on_gcd: bool
    silenced: bool
    available: bool
    remaining_ms: float
    total_ms: float


class MatchResultSchema(BaseModel):
    """Finished match result schema."""

    match_id: str
    winner: str
    duration: float
    player_hp: int
    ai_hp: int
    player_max_hp: int
    ai_max_hp: int
    player_damage_dealt: int
    ai_damage_dealt: int
    player_damage_taken: int
    ai_damage_taken: int
    player_interrupts: int


class DiagnosticsResponse(BaseModel):
    """Recent AI diagnostic messages."""

    match_id: str
    enabled: bool
    messages: List[str]
