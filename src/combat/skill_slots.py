"""Skill bar availability view.

Derived, read-only information for rendering an actor's skill buttons.
"""

from dataclasses import dataclass
from typing import Optional, List, TYPE_CHECKING

if TYPE_CHECKING:
    from .actor import Actor
    from src.data.models.skill import Skill


@dataclass
class SkillSlot:
    """Availability of one skill at a point in time."""

    skill_id: str
    name: str
    kind: str
    icon: Optional[str]
    on_cooldown: bool
    on_gcd: bool
    silenced: bool
    remaining_ms: float  # Remaining time on the blocking timer
    total_ms: float  # Full length of the blocking timer

    @property
    def is_available(self) -> bool:
        return not (self.on_cooldown or self.on_gcd or self.silenced)


def build_skill_slot(actor: "Actor", skill: "Skill", now: float) -> SkillSlot:
    """
    Compute a skill's availability.

    The skill's own cooldown takes priority over the shared cooldown when
    reporting the remaining time.
    """
    cd_end = actor.cooldown_ends_at(skill.id)
    on_cooldown = cd_end > now
    on_gcd = skill.triggers_gcd and actor.gcd_active(now)

    remaining = 0.0
    total = 0.0
    if on_cooldown:
        remaining = cd_end - now
        total = float(skill.cooldown_ms)
    elif on_gcd:
        remaining = actor.global_cooldown_ends_at - now
        total = float(skill.gcd_ms)

    return SkillSlot(
        skill_id=skill.id,
        name=skill.name,
        kind=str(skill.kind),
        icon=skill.icon,
        on_cooldown=on_cooldown,
        on_gcd=on_gcd,
        silenced=actor.is_silenced(now),
        remaining_ms=remaining,
        total_ms=total,
    )


def build_skill_slots(actor: "Actor", skills: List["Skill"], now: float) -> List[SkillSlot]:
    return [build_skill_slot(actor, s, now) for s in skills]
