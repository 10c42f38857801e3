"""Buff System for Duel Combat.

Handles timed beneficial effects on actors:
- Damage reduction (defensive skills)
- Interrupt immunity
- Silence immunity

All timestamps are on the match clock (milliseconds since match start).
"""

from dataclasses import dataclass
from typing import Optional, List, TYPE_CHECKING
from enum import StrEnum
import itertools

if TYPE_CHECKING:
    from .actor import Actor
    from src.data.models.skill import Skill


class BuffKind(StrEnum):
    """Types of buffs."""

    DAMAGE_REDUCTION = "damage_reduction"  # Incoming damage multiplied by (1 - magnitude)
    IMMUNE_INTERRUPT = "immune_interrupt"  # Interrupts against this actor fail
    IMMUNE_SILENCE = "immune_silence"  # Interrupts cannot silence this actor


@dataclass
class Buff:
    """
    An active buff instance.

    Attributes:
        id: Unique buff instance id.
        name: Display name (usually the granting skill's name).
        kind: Buff kind.
        end_time: Match time at which the buff stops applying.
        magnitude: Optional strength, e.g. reduction ratio in [0, 1].
        icon: Display hint.
    """

    id: str
    name: str
    kind: BuffKind
    end_time: float
    magnitude: Optional[float] = None
    icon: Optional[str] = None

    def is_active(self, now: float) -> bool:
        """A buff past its expiry is never consulted."""
        return self.end_time > now

    def remaining(self, now: float) -> float:
        return max(0.0, self.end_time - now)


class BuffSystem:
    """
    Manages buffs on actors.

    Usage:
        buff_system = BuffSystem()
        buff_system.apply_skill_buff(actor, skill, now)
        buff_system.purge_expired(actor, now)
    """

    def __init__(self):
        self._ids = itertools.count(1)

    def apply(
        self,
        actor: "Actor",
        kind: BuffKind,
        name: str,
        duration_ms: float,
        now: float,
        magnitude: Optional[float] = None,
        icon: Optional[str] = None,
    ) -> Buff:
        """
        Push a new buff onto an actor.

        Buffs of the same kind do not merge; each instance expires on its own.

        Returns:
            The created buff.
        """
        buff = Buff(
            id=f"buff_{int(now)}_{next(self._ids)}",
            name=name,
            kind=kind,
            end_time=now + duration_ms,
            magnitude=magnitude,
            icon=icon,
        )
        actor.buffs.append(buff)
        return buff

    def apply_skill_buff(self, actor: "Actor", skill: "Skill", now: float) -> Buff:
        """Apply the damage reduction buff granted by a defensive skill."""
        return self.apply(
            actor,
            BuffKind.DAMAGE_REDUCTION,
            name=skill.name,
            duration_ms=skill.buff_duration_ms,
            now=now,
            magnitude=skill.damage_reduction,
            icon=skill.icon or "Shield",
        )

    def purge_expired(self, actor: "Actor", now: float) -> List[Buff]:
        """
        Remove buffs with ``end_time <= now``.

        Returns:
            The removed buffs.
        """
        expired = [b for b in actor.buffs if not b.is_active(now)]
        if expired:
            actor.buffs = [b for b in actor.buffs if b.is_active(now)]
        return expired

    @staticmethod
    def find_active(actor: "Actor", kind: BuffKind, now: float) -> Optional[Buff]:
        """Get the first active buff of a kind, in application order."""
        for buff in actor.buffs:
            if buff.kind == kind and buff.is_active(now):
                return buff
        return None

    @staticmethod
    def has_active(actor: "Actor", kind: BuffKind, now: float) -> bool:
        return BuffSystem.find_active(actor, kind, now) is not None


# Helper functions
def create_damage_reduction(name: str, now: float, duration_ms: float, magnitude: float) -> Buff:
    """Create a standalone damage reduction buff (useful for scripted setups)."""
    return Buff(
        id=f"buff_{int(now)}_{name}",
        name=name,
        kind=BuffKind.DAMAGE_REDUCTION,
        end_time=now + duration_ms,
        magnitude=magnitude,
    )
