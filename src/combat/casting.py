"""Casting System for Duel Combat.

Handles channeled skills: starting a cast, integrating cast progress over
elapsed time, the AI's fake-cast self-cancel, and cast completion.
"""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from .damage import DamageResult, DamageSystem
from .diagnostics import DiagnosticChannel
from .events import EventType

if TYPE_CHECKING:
    from .actor import Actor
    from .match_state import MatchState
    from src.data.models.skill import Skill


@dataclass
class CastUpdate:
    """What happened to a cast during one tick."""

    skill_name: str = ""
    progress: float = 0.0
    completed: bool = False
    self_cancelled: bool = False
    damage: Optional[DamageResult] = None


class CastingSystem:
    """
    Manages channeled casts.

    Usage:
        casting = CastingSystem(damage_system)
        casting.begin(actor, skill)
        update = casting.update(state, actor, opponent, elapsed_ms)
    """

    def __init__(
        self,
        damage_system: DamageSystem,
        diagnostics: Optional[DiagnosticChannel] = None,
    ):
        self.damage_system = damage_system
        self.diagnostics = diagnostics or DiagnosticChannel.disabled()

    def begin(self, actor: "Actor", skill: "Skill") -> None:
        """Start channeling; progress restarts at 0."""
        actor.start_cast(skill)

    def schedule_fake_cancel(self, actor: "Actor", skill: "Skill", now: float, fraction: float) -> float:
        """
        Mark the current cast as bait that cancels itself.

        Returns:
            Match time at which the cast will self-cancel.
        """
        cancel_at = now + skill.cast_time_ms * fraction
        actor.fake_cast_cancel_at = cancel_at
        if self.diagnostics.enabled:
            self.diagnostics.emit(
                f"AI starts fake cast [{skill.name}], self-cancel in {(cancel_at - now) / 1000:.2f}s"
            )
        return cancel_at

    def update(
        self,
        state: "MatchState",
        caster: "Actor",
        opponent: "Actor",
        elapsed_ms: float,
    ) -> Optional[CastUpdate]:
        """
        Advance a caster's cast by elapsed time.

        A pending self-cancel whose time has been reached takes priority over
        completion in the same tick.

        Args:
            state: Working copy of the match state.
            caster: Actor that may be casting.
            opponent: Target of the cast.
            elapsed_ms: Time elapsed this tick.

        Returns:
            CastUpdate, or None if the actor is not casting.
        """
        skill = caster.active_skill
        if not caster.is_casting or skill is None:
            return None

        if skill.cast_time_ms > 0:
            caster.cast_progress += elapsed_ms / skill.cast_time_ms * 100
        else:
            caster.cast_progress = 100.0

        now = state.now
        if caster.fake_cast_cancel_at is not None and now >= caster.fake_cast_cancel_at:
            caster.clear_cast()
            self.diagnostics.emit(
                f"Fake cast succeeded: AI cancelled [{skill.name}] to bait the interrupt"
            )
            state.log_event(EventType.FAKE_CAST_CANCEL, caster.id, caster.id, skill.name)
            return CastUpdate(skill_name=skill.name, self_cancelled=True)

        if caster.cast_progress >= 100:
            caster.clear_cast()
            damage = self.damage_system.apply_damage(state, caster, opponent, skill)
            return CastUpdate(
                skill_name=skill.name,
                progress=100.0,
                completed=True,
                damage=damage,
            )

        return CastUpdate(skill_name=skill.name, progress=caster.cast_progress)
