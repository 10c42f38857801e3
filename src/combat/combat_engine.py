"""Combat Engine for the duel simulator.

The transition functions that own every legal change to a MatchState:
- Lifecycle (start, pause, resume, restart)
- Tick advancement (cast progress, damage, buff expiry, AI decisions)
- Skill activation requests (validation and dispatch)
- Win condition checking
"""

from dataclasses import dataclass
from typing import Optional, List, Union
from enum import StrEnum
import logging
import random

from src.core.constants import FAKE_CAST_CANCEL_POINT
from src.data.loaders import load_match_config
from src.data.models.match_config import ActorConfig, MatchConfig
from src.data.models.skill import Skill, SkillKind

from .actor import Actor, ActorId
from .ai_policy import AIPolicy
from .buffs import BuffSystem
from .casting import CastingSystem
from .damage import DamageResult, DamageSystem
from .diagnostics import DiagnosticChannel
from .events import EventType, FeedbackEmitter, purge_feedback, trim_log
from .interrupt import InterruptOutcome, InterruptSystem
from .match_state import MatchResult, MatchState, MatchStatus, Winner
from .skill_slots import SkillSlot, build_skill_slots

logger = logging.getLogger(__name__)


class RejectionReason(StrEnum):
    """Why a skill activation was ignored."""

    NOT_PLAYING = "not_playing"
    UNKNOWN_ACTOR = "unknown_actor"
    UNKNOWN_SKILL = "unknown_skill"
    SILENCED = "silenced"
    ON_COOLDOWN = "on_cooldown"
    GCD_ACTIVE = "gcd_active"
    CASTING = "casting"


@dataclass
class ActivationResult:
    """Outcome of a skill activation request."""

    state: MatchState
    accepted: bool
    reason: Optional[RejectionReason] = None
    interrupt: Optional[InterruptOutcome] = None
    damage: Optional[DamageResult] = None


def determine_winner(state: MatchState) -> Winner:
    """
    Decide the winner of a finished match.

    A dead actor loses outright (player checked first); otherwise the higher
    remaining health wins and equal health is a tie.
    """
    if state.player.hp <= 0:
        return Winner.AI
    if state.ai.hp <= 0:
        return Winner.PLAYER
    if state.player.hp > state.ai.hp:
        return Winner.PLAYER
    if state.ai.hp > state.player.hp:
        return Winner.AI
    return Winner.TIE


class CombatEngine:
    """
    Main duel simulation engine.

    Every entry point takes a snapshot and returns a new one; the input is
    never mutated.

    Usage:
        engine = CombatEngine(seed=42)
        state = engine.start(engine.new_match())
        state = engine.advance(state, 16)
        result = engine.activate_skill(state, "player", "p_attack")
        state = result.state
    """

    def __init__(
        self,
        config: Optional[MatchConfig] = None,
        seed: Optional[int] = None,
        diagnostics: Optional[DiagnosticChannel] = None,
    ):
        """
        Initialize combat engine.

        Args:
            config: Static match configuration (default tables if omitted).
            seed: Random seed for deterministic simulation.
            diagnostics: Channel for AI decision messages.
        """
        self.config = config or load_match_config()
        self.rng = random.Random(seed)
        self.diagnostics = diagnostics or DiagnosticChannel.disabled()

        # Subsystems
        self._init_subsystems(seed)

    def _init_subsystems(self, seed: Optional[int]) -> None:
        """Initialize all combat subsystems."""
        # Cosmetic jitter uses its own generator
        self.feedback = FeedbackEmitter(random.Random(seed))

        self.buffs = BuffSystem()
        self.damage_system = DamageSystem(self.feedback)
        self.casting = CastingSystem(self.damage_system, self.diagnostics)
        self.interrupts = InterruptSystem(self.feedback, self.diagnostics)
        self.ai_policy = AIPolicy(self.config.ai.skills, self.rng, self.diagnostics)

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def new_match(self) -> MatchState:
        """Create a fresh idle match with both actors at full health."""
        return MatchState(
            player=Actor.from_config(ActorId.PLAYER, self.config.player),
            ai=Actor.from_config(ActorId.AI, self.config.ai),
        )

    def start(self, state: Optional[MatchState] = None) -> MatchState:
        """Start an idle match; any other state is returned unchanged."""
        if state is not None and state.status != MatchStatus.IDLE:
            return state
        fresh = self.new_match()
        fresh.status = MatchStatus.PLAYING
        logger.debug("Match started")
        return fresh

    def pause(self, state: MatchState) -> MatchState:
        """Pause a running match; state is preserved for resume."""
        if state.status != MatchStatus.PLAYING:
            return state
        paused = state.clone()
        paused.status = MatchStatus.PAUSED
        return paused

    def resume(self, state: MatchState) -> MatchState:
        if state.status != MatchStatus.PAUSED:
            return state
        resumed = state.clone()
        resumed.status = MatchStatus.PLAYING
        return resumed

    def restart(self, state: Optional[MatchState] = None) -> MatchState:
        """Discard any match (including an ended one) and start over."""
        fresh = self.new_match()
        fresh.status = MatchStatus.PLAYING
        logger.debug("Match restarted")
        return fresh

    # =========================================================================
    # TICK
    # =========================================================================

    def advance(self, state: MatchState, elapsed_ms: float) -> MatchState:
        """
        Advance the simulation by elapsed time.

        The caller is responsible for capping large gaps (see MatchLoop).

        Args:
            state: Current snapshot.
            elapsed_ms: Non-negative elapsed milliseconds.

        Returns:
            Next snapshot (the input itself if the match is not playing).

        Raises:
            ValueError: If elapsed_ms is negative.
        """
        if elapsed_ms < 0:
            raise ValueError(f"elapsed_ms must be non-negative, got {elapsed_ms}")
        if state.status != MatchStatus.PLAYING:
            return state

        state = state.clone()

        # Win check happens before any simulation this tick
        if self._check_finished(state):
            self._end_match(state)
            return state

        state.duration += elapsed_ms
        now = state.now

        # Casting: player first, then AI
        self.casting.update(state, state.player, state.ai, elapsed_ms)
        self.casting.update(state, state.ai, state.player, elapsed_ms)

        # Buff expiry
        for actor in (state.player, state.ai):
            self.buffs.purge_expired(actor, now)

        # AI decision
        if self.ai_policy.is_eligible(state.ai, now):
            self._run_ai(state, now)
        elif self.diagnostics.enabled:
            reason = self.ai_policy.explain_wait(state.ai, now)
            if reason:
                self.diagnostics.emit(reason)

        state.feedback_texts = purge_feedback(state.feedback_texts, now)
        state.combat_log = trim_log(state.combat_log)
        return state

    def _check_finished(self, state: MatchState) -> bool:
        return (
            state.duration >= self.config.match_duration_ms
            or state.player.hp <= 0
            or state.ai.hp <= 0
        )

    def _end_match(self, state: MatchState) -> None:
        """Finalize a match in place."""
        state.status = MatchStatus.ENDED
        state.winner = determine_winner(state)
        logger.info(
            "Match ended: winner=%s duration=%.0fms player_hp=%d ai_hp=%d",
            state.winner,
            state.duration,
            state.player.hp,
            state.ai.hp,
        )

    def _run_ai(self, state: MatchState, now: float) -> None:
        """Let the AI pick and execute a skill."""
        decision = self.ai_policy.decide(state, now)
        if decision.is_idle:
            return

        skill = decision.skill
        ai = state.ai
        self._execute_skill(state, ai, state.player, skill)

        if decision.fake_cast and ai.is_casting:
            self.casting.schedule_fake_cancel(ai, skill, now, FAKE_CAST_CANCEL_POINT)
        if skill.cooldown_ms > 0:
            self.diagnostics.emit(f"Skill [{skill.name}] on cooldown for {skill.cooldown_ms / 1000:.1f}s")

        state.log_event(EventType.SKILL_CAST, ai.id, state.player.id, skill.name)

    # =========================================================================
    # SKILL ACTIVATION
    # =========================================================================

    def activate_skill(
        self,
        state: MatchState,
        requester_id: Union[ActorId, str],
        skill_id: str,
    ) -> ActivationResult:
        """
        Handle a skill activation request.

        Invalid requests are not errors: they are returned as rejected with
        the snapshot unchanged.

        Args:
            state: Current snapshot.
            requester_id: Actor using the skill ("player" or "ai").
            skill_id: Skill id from that actor's table.

        Returns:
            ActivationResult with the next snapshot.
        """
        if state.status != MatchStatus.PLAYING:
            return self._reject(state, RejectionReason.NOT_PLAYING)

        try:
            actor_id = ActorId(requester_id)
        except ValueError:
            return self._reject(state, RejectionReason.UNKNOWN_ACTOR)

        skill = self._actor_config(actor_id).get_skill(skill_id)
        if skill is None:
            return self._reject(state, RejectionReason.UNKNOWN_SKILL)

        now = state.now
        actor = state.actor(actor_id)
        if actor.is_silenced(now):
            return self._reject(state, RejectionReason.SILENCED)
        if actor.is_on_cooldown(skill.id, now):
            return self._reject(state, RejectionReason.ON_COOLDOWN)
        if skill.triggers_gcd and actor.gcd_active(now):
            return self._reject(state, RejectionReason.GCD_ACTIVE)
        if actor.is_casting and skill.triggers_gcd:
            return self._reject(state, RejectionReason.CASTING)

        state = state.clone()
        actor = state.actor(actor_id)
        result = self._execute_skill(state, actor, state.opponent_of(actor_id), skill)

        state.feedback_texts = purge_feedback(state.feedback_texts, now)
        state.combat_log = trim_log(state.combat_log)
        result.state = state
        return result

    def _execute_skill(
        self,
        state: MatchState,
        actor: Actor,
        opponent: Actor,
        skill: Skill,
    ) -> ActivationResult:
        """Apply an accepted skill to the working copy."""
        now = state.now
        result = ActivationResult(state=state, accepted=True)

        if skill.cooldown_ms > 0:
            actor.cooldowns[skill.id] = now + skill.cooldown_ms

        if skill.kind == SkillKind.INTERRUPT:
            result.interrupt = self.interrupts.resolve(state, actor, opponent, skill)
        elif skill.kind == SkillKind.DEFENSIVE:
            self.buffs.apply_skill_buff(actor, skill, now)
            state.log_event(EventType.BUFF_APPLIED, actor.id, actor.id, skill.name)
        elif not skill.is_instant:
            self.casting.begin(actor, skill)
        else:
            result.damage = self.damage_system.apply_damage(state, actor, opponent, skill)

        if skill.triggers_gcd:
            actor.global_cooldown_ends_at = now + skill.gcd_ms

        return result

    def _reject(self, state: MatchState, reason: RejectionReason) -> ActivationResult:
        logger.debug("Skill activation rejected: %s", reason)
        return ActivationResult(state=state, accepted=False, reason=reason)

    # =========================================================================
    # QUERIES
    # =========================================================================

    def _actor_config(self, actor_id: ActorId) -> ActorConfig:
        return self.config.player if actor_id == ActorId.PLAYER else self.config.ai

    def skill_slots(self, state: MatchState, actor_id: Union[ActorId, str]) -> List[SkillSlot]:
        """Get skill bar availability for an actor."""
        actor_id = ActorId(actor_id)
        return build_skill_slots(
            state.actor(actor_id), self._actor_config(actor_id).skills, state.now
        )

    def get_result(self, state: MatchState) -> Optional[MatchResult]:
        """Get the result of a finished match, None while it is still running."""
        if state.status != MatchStatus.ENDED or state.winner is None:
            return None
        return MatchResult(
            winner=state.winner,
            duration=state.duration,
            player_hp=state.player.hp,
            ai_hp=state.ai.hp,
            player_max_hp=state.player.max_hp,
            ai_max_hp=state.ai.max_hp,
            player_damage_dealt=state.player.total_damage_dealt,
            ai_damage_dealt=state.ai.total_damage_dealt,
            player_damage_taken=state.player.total_damage_taken,
            ai_damage_taken=state.ai.total_damage_taken,
            player_interrupts=state.player.interrupts_landed,
        )

    def is_finished(self, state: MatchState) -> bool:
        return state.is_terminal
