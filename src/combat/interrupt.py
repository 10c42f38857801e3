"""Interrupt resolution for Duel Combat.

An interrupt is instant, has no cast time, and resolves against the
opponent's current cast:
- opponent not casting -> miss ("dodged"), nothing changes
- interruptible cast (yellow or flagged) -> cast cleared, silence applied
- otherwise (red) -> immune, nothing changes

The interrupt's own cooldown is paid by the caller in every case.
"""

from enum import StrEnum
from typing import Optional, TYPE_CHECKING

from src.core.constants import INTERRUPT_SILENCE_MS

from .buffs import BuffKind, BuffSystem
from .diagnostics import DiagnosticChannel
from .events import (
    EventType,
    FeedbackCategory,
    FeedbackEmitter,
    TEXT_DODGED,
    TEXT_INTERRUPT_IMMUNE,
    TEXT_INTERRUPTED,
)

if TYPE_CHECKING:
    from .actor import Actor
    from .match_state import MatchState
    from src.data.models.skill import Skill


class InterruptOutcome(StrEnum):
    """Result of an interrupt attempt."""

    SUCCESS = "success"
    MISSED = "missed"  # Target was not casting
    IMMUNE = "immune"  # Cast could not be interrupted


class InterruptSystem:
    """
    Resolves interrupt skills.

    Usage:
        interrupts = InterruptSystem(feedback)
        outcome = interrupts.resolve(state, caster, target, skill)
    """

    def __init__(
        self,
        feedback: FeedbackEmitter,
        diagnostics: Optional[DiagnosticChannel] = None,
        silence_ms: int = INTERRUPT_SILENCE_MS,
    ):
        self.feedback = feedback
        self.diagnostics = diagnostics or DiagnosticChannel.disabled()
        self.silence_ms = silence_ms

    def resolve(
        self,
        state: "MatchState",
        caster: "Actor",
        target: "Actor",
        skill: "Skill",
    ) -> InterruptOutcome:
        """
        Resolve an interrupt from caster onto target.

        Args:
            state: Working copy of the match state.
            caster: Actor using the interrupt.
            target: Actor whose cast is being interrupted.
            skill: The interrupt skill (used for the log entry).

        Returns:
            InterruptOutcome.
        """
        now = state.now
        cast = target.active_skill

        if target.is_casting and cast is not None:
            self.diagnostics.emit(
                f"{caster.id} uses interrupt; {target.id} casting [{cast.name}] color={cast.color}"
            )
        else:
            self.diagnostics.emit(f"{caster.id} uses interrupt; {target.id} is not casting")

        if not target.is_casting or cast is None:
            self.diagnostics.emit("Interrupt missed: target was not casting")
            self._add_feedback(state, TEXT_DODGED, FeedbackCategory.IMMUNE, target, now)
            return InterruptOutcome.MISSED

        if not cast.is_interruptible or BuffSystem.has_active(target, BuffKind.IMMUNE_INTERRUPT, now):
            self.diagnostics.emit(f"Interrupt failed: [{cast.name}] is immune to interrupts")
            self._add_feedback(state, TEXT_INTERRUPT_IMMUNE, FeedbackCategory.IMMUNE, target, now)
            return InterruptOutcome.IMMUNE

        target.clear_cast()
        caster.interrupts_landed += 1
        if not BuffSystem.has_active(target, BuffKind.IMMUNE_SILENCE, now):
            target.silenced_until = now + self.silence_ms
        self.diagnostics.emit(f"Interrupt succeeded: [{cast.name}] cancelled")

        self._add_feedback(state, TEXT_INTERRUPTED, FeedbackCategory.INTERRUPT, target, now)
        state.log_event(EventType.INTERRUPT_SUCCESS, caster.id, target.id, skill.name)
        return InterruptOutcome.SUCCESS

    def _add_feedback(self, state, text, category, target, now) -> None:
        state.feedback_texts.append(self.feedback.create(text, category, target.id, now))
