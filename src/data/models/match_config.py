"""Match configuration model for the duel simulator."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from src.core.constants import (
    DEFAULT_GCD_MS,
    DEFAULT_MATCH_DURATION_MS,
)

from .skill import Skill, SkillKind


class ActorConfig(BaseModel):
    """Static definition of one side of the duel."""
    name: str = Field(..., description="Display name")
    max_hp: int = Field(..., gt=0)
    skills: list[Skill] = Field(default_factory=list, description="Skill table in display order")

    model_config = {"frozen": True}

    @field_validator("skills")
    @classmethod
    def _unique_ids(cls, skills: list[Skill]) -> list[Skill]:
        seen: set[str] = set()
        for skill in skills:
            if skill.id in seen:
                raise ValueError(f"duplicate skill id '{skill.id}'")
            seen.add(skill.id)
        return skills

    def get_skill(self, skill_id: str) -> Optional[Skill]:
        """Look up a skill by id, None if the table has no such entry."""
        for skill in self.skills:
            if skill.id == skill_id:
                return skill
        return None

    def skills_of_kind(self, kind: SkillKind) -> list[Skill]:
        return [s for s in self.skills if s.kind == kind]

    @property
    def skill_ids(self) -> list[str]:
        return [s.id for s in self.skills]


class MatchConfig(BaseModel):
    """Full static configuration for a match."""
    match_duration_ms: int = Field(default=DEFAULT_MATCH_DURATION_MS, gt=0)
    gcd_ms: int = Field(default=DEFAULT_GCD_MS, ge=0, description="Default shared cooldown for skills that omit one")
    player: ActorConfig
    ai: ActorConfig

    model_config = {"frozen": True}
