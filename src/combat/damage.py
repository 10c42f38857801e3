"""Damage System for Duel Combat.

Resolves a skill hit from one actor onto another:
- Base damage from the skill table
- Damage reduction buffs (floored to an integer)
- Combat log entry and floating feedback text
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING
import math

from .buffs import BuffKind, BuffSystem
from .events import (
    EventType,
    FeedbackCategory,
    FeedbackEmitter,
    TEXT_IMMUNE,
    damage_text,
)

if TYPE_CHECKING:
    from .actor import Actor
    from .match_state import MatchState
    from src.data.models.skill import Skill


@dataclass
class DamageResult:
    """Outcome of a single hit."""

    source_id: str
    target_id: str
    skill_name: str
    base_damage: int  # Skill damage before mitigation
    final_damage: int  # Damage after mitigation
    mitigated: bool = False  # A reduction buff was in effect
    hp_removed: int = 0  # Health actually removed (clamped at 0)

    @property
    def is_immune(self) -> bool:
        """Mitigation reduced a positive hit to exactly 0."""
        return self.mitigated and self.final_damage == 0 and self.base_damage > 0


def calculate_mitigated_damage(base_damage: int, reduction: float) -> int:
    """Apply a reduction ratio and floor to an integer."""
    return max(0, math.floor(base_damage * (1 - reduction)))


class DamageSystem:
    """
    Applies skill damage between actors.

    Usage:
        damage_system = DamageSystem(feedback)
        result = damage_system.apply_damage(state, source, target, skill)
    """

    def __init__(self, feedback: FeedbackEmitter):
        self.feedback = feedback

    def resolve(self, target: "Actor", skill: "Skill", now: float) -> DamageResult:
        """
        Compute the damage a skill would deal to a target right now.

        Only active (unexpired) damage reduction buffs with a non-zero
        magnitude count as mitigation.
        """
        base = skill.damage
        buff = BuffSystem.find_active(target, BuffKind.DAMAGE_REDUCTION, now)
        if buff is not None and buff.magnitude:
            final = calculate_mitigated_damage(base, buff.magnitude)
            mitigated = True
        else:
            final = base
            mitigated = False

        return DamageResult(
            source_id="",
            target_id=target.id,
            skill_name=skill.name,
            base_damage=base,
            final_damage=final,
            mitigated=mitigated,
        )

    def apply_damage(
        self,
        state: "MatchState",
        source: "Actor",
        target: "Actor",
        skill: "Skill",
    ) -> DamageResult:
        """
        Resolve and apply a hit, logging it and emitting feedback.

        Mitigated hits are logged as ``damage_taken`` with the reduced value;
        unmitigated hits are logged as ``damage_dealt`` with the full value.

        Args:
            state: Working copy of the match state.
            source: Attacking actor.
            target: Receiving actor.
            skill: Skill that landed.

        Returns:
            DamageResult describing the hit.
        """
        now = state.now
        result = self.resolve(target, skill, now)
        result.source_id = source.id

        if result.mitigated:
            if result.is_immune:
                self._add_feedback(state, TEXT_IMMUNE, FeedbackCategory.IMMUNE, target, now)
            elif result.final_damage < result.base_damage:
                self._add_feedback(
                    state,
                    damage_text(result.final_damage, mitigated=True),
                    FeedbackCategory.DAMAGE,
                    target,
                    now,
                )
            event_type = EventType.DAMAGE_TAKEN
        else:
            self._add_feedback(
                state, damage_text(result.final_damage), FeedbackCategory.DAMAGE, target, now
            )
            event_type = EventType.DAMAGE_DEALT

        state.log_event(event_type, source.id, target.id, skill.name, result.final_damage)

        result.hp_removed = target.take_damage(result.final_damage)
        source.total_damage_dealt += result.hp_removed
        return result

    def _add_feedback(self, state, text, category, target, now) -> None:
        state.feedback_texts.append(self.feedback.create(text, category, target.id, now))
