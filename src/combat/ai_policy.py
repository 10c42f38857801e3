"""AI decision policy for the duel simulator.

Simple scripted opponent:
1. Reactive defense against a heavy red cast, if a defensive skill is ready.
2. Otherwise each off-cooldown skill is admitted with a fixed chance and one
   admitted skill is picked uniformly; nothing admitted means idling.
3. Yellow channeled picks may be fake casts that cancel themselves early.
"""

from dataclasses import dataclass
from typing import Optional, List, TYPE_CHECKING
import random

from src.core.constants import (
    AI_ACTION_CHANCE,
    FAKE_CAST_CHANCE,
    REACTIVE_DEFENSE_DAMAGE_THRESHOLD,
)
from src.data.models.skill import Skill, SkillColor, SkillKind

from .diagnostics import DiagnosticChannel

if TYPE_CHECKING:
    from .actor import Actor
    from .match_state import MatchState


@dataclass
class AIDecision:
    """A single tick's decision."""

    skill: Optional[Skill] = None
    reason: str = ""
    fake_cast: bool = False  # Cancel the cast early to bait an interrupt

    @property
    def is_idle(self) -> bool:
        return self.skill is None


class AIPolicy:
    """Decision maker for the AI actor."""

    def __init__(
        self,
        skills: List[Skill],
        rng: Optional[random.Random] = None,
        diagnostics: Optional[DiagnosticChannel] = None,
    ):
        """
        Initialize the policy.

        Args:
            skills: The AI's skill table.
            rng: Random number generator for deterministic simulation.
            diagnostics: Channel for decision messages.
        """
        self.skills = list(skills)
        self.rng = rng or random.Random()
        self.diagnostics = diagnostics or DiagnosticChannel.disabled()

    def is_eligible(self, ai: "Actor", now: float) -> bool:
        """The AI may act when not casting, not silenced and off the shared cooldown."""
        return not ai.is_casting and not ai.is_silenced(now) and not ai.gcd_active(now)

    def explain_wait(self, ai: "Actor", now: float) -> Optional[str]:
        """Describe why the AI cannot act this tick."""
        if ai.is_casting and ai.active_skill is not None:
            return f"AI casting [{ai.active_skill.name}] progress {ai.cast_progress:.1f}%"
        if ai.is_silenced(now):
            return f"AI waiting: silenced, {(ai.silenced_until - now) / 1000:.1f}s left"
        if ai.gcd_active(now):
            return f"AI waiting: shared cooldown, {(ai.global_cooldown_ends_at - now) / 1000:.1f}s left"
        return None

    def decide(self, state: "MatchState", now: float) -> AIDecision:
        """
        Choose the AI's action for this tick.

        Args:
            state: Current match state.
            now: Match time.

        Returns:
            AIDecision (idle if no skill was chosen).
        """
        ai = state.ai
        player = state.player

        decision = self._reactive_defense(ai, player, now)
        if decision is None:
            decision = self._random_pick(ai, now)

        if decision.is_idle:
            self.diagnostics.emit("AI idle: no skill available, waiting for cooldowns")
            return decision

        skill = decision.skill
        decision.fake_cast = self._roll_fake_cast(skill)
        if self.diagnostics.enabled:
            self.diagnostics.emit(
                f"AI decision: {decision.reason} | skill: {skill.name} | "
                f"channeled: {'yes' if not skill.is_instant else 'no'} | damage: {skill.damage}"
            )
        return decision

    def _reactive_defense(self, ai: "Actor", player: "Actor", now: float) -> Optional[AIDecision]:
        """Answer a heavy red cast with a ready defensive skill.

        The default AI table has no defensive entry, so this only fires with
        a custom configuration.
        """
        cast = player.active_skill
        if not player.is_casting or cast is None:
            return None
        if cast.color != SkillColor.RED or cast.damage <= REACTIVE_DEFENSE_DAMAGE_THRESHOLD:
            return None

        for skill in self.skills:
            if skill.kind == SkillKind.DEFENSIVE and not ai.is_on_cooldown(skill.id, now):
                return AIDecision(
                    skill=skill,
                    reason=f"player is casting heavy red skill [{cast.name}], defending",
                )
        return None

    def _random_pick(self, ai: "Actor", now: float) -> AIDecision:
        """Admit each ready skill independently, then pick one uniformly."""
        ready = [s for s in self.skills if not ai.is_on_cooldown(s.id, now)]
        if not ready:
            self.diagnostics.emit("AI: all skills on cooldown, cannot act")
            return AIDecision(reason="all skills on cooldown")

        admitted = [s for s in ready if self.rng.random() < AI_ACTION_CHANCE]
        if not admitted:
            return AIDecision(reason="no skill admitted this tick")

        skill = self.rng.choice(admitted)
        return AIDecision(
            skill=skill,
            reason=f"picked at random from {len(admitted)} admitted skills",
        )

    def _roll_fake_cast(self, skill: Skill) -> bool:
        """Yellow channeled skills are sometimes bait."""
        if skill.is_instant or skill.color != SkillColor.YELLOW:
            return False
        return self.rng.random() < FAKE_CAST_CHANCE
