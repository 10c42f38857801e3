"""Skill data model for the duel simulator."""

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from src.core.constants import DEFAULT_BUFF_DURATION_MS, DEFAULT_GCD_MS


class SkillKind(StrEnum):
    """Skill classification."""
    NORMAL = "normal"
    CHARGE = "charge"
    INTERRUPT = "interrupt"
    DEFENSIVE = "defensive"


class SkillColor(StrEnum):
    """Cast bar color. Yellow casts can be interrupted, red casts cannot."""
    YELLOW = "yellow"
    RED = "red"


class Skill(BaseModel):
    """Static skill definition, read-only at runtime."""
    id: str = Field(..., min_length=1, description="Unique identifier within an actor's table")
    name: str = Field(..., description="Display name")
    kind: SkillKind
    damage: int = Field(default=0, ge=0, description="Base damage")
    cast_time_ms: int = Field(default=0, ge=0, description="Cast duration, 0 = instant")
    cooldown_ms: int = Field(default=0, ge=0, description="Per-skill cooldown")
    triggers_gcd: bool = Field(default=True, description="Whether the skill starts the shared cooldown")
    gcd_ms: int = Field(default=DEFAULT_GCD_MS, ge=0, description="Shared cooldown duration")
    damage_reduction: Optional[float] = Field(default=None, ge=0.0, le=1.0, description="Reduction ratio for defensive skills")
    buff_duration_ms: int = Field(default=DEFAULT_BUFF_DURATION_MS, ge=0, description="Defensive buff lifetime")
    color: Optional[SkillColor] = Field(default=None, description="Cast bar color for charge skills")
    interruptible: bool = Field(default=False, description="Explicitly interruptible regardless of color")
    icon: Optional[str] = Field(default=None, description="Display hint for the skill bar")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_defensive(self) -> "Skill":
        if self.kind == SkillKind.DEFENSIVE and self.damage_reduction is None:
            raise ValueError(f"defensive skill '{self.id}' requires damage_reduction")
        return self

    @property
    def is_instant(self) -> bool:
        return self.cast_time_ms == 0

    @property
    def is_interruptible(self) -> bool:
        """Yellow casts and explicitly flagged skills can be interrupted."""
        return self.color == SkillColor.YELLOW or self.interruptible
