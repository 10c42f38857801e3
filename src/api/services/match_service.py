"""
Match session service.
"""

from collections import OrderedDict, deque
from typing import Deque, Optional, List
import logging
import uuid

from src.combat import (
    Actor,
    ActorId,
    CombatEngine,
    DiagnosticChannel,
    MatchLoop,
    MatchState,
)
from src.data.loaders import load_match_config, load_match_config_file
from src.data.models import MatchConfig

from ..config import settings
from ..schemas.match import (
    ActorSchema,
    BuffSchema,
    CombatEventSchema,
    DiagnosticsResponse,
    FeedbackTextSchema,
    MatchResultSchema,
    MatchStateSchema,
    SkillActivationResponse,
    SkillSlotSchema,
)

logger = logging.getLogger(__name__)


def load_configured_match() -> MatchConfig:
    """Load the match tables named by settings, or the bundled default."""
    if settings.MATCH_CONFIG_FILE:
        return load_match_config_file(settings.MATCH_CONFIG_FILE)
    return load_match_config()


class MatchSession:
    """One live match: its engine, frame driver and diagnostic history."""

    def __init__(
        self,
        match_id: str,
        config: MatchConfig,
        seed: Optional[int] = None,
        debug_logs: bool = False,
        max_frame_ms: float = 100,
        history: int = 200,
    ):
        self.match_id = match_id
        self.messages: Deque[str] = deque(maxlen=history)
        self.diagnostics = DiagnosticChannel(enabled=debug_logs, sink=self._record)
        self.engine = CombatEngine(config, seed=seed, diagnostics=self.diagnostics)
        self.loop = MatchLoop(self.engine, max_frame_ms=max_frame_ms)

    def _record(self, message: str) -> None:
        self.messages.append(message)
        logger.debug("[%s] %s", self.match_id[:8], message)

    @property
    def state(self) -> MatchState:
        return self.loop.state

    def to_schema(self) -> MatchStateSchema:
        """Convert to schema."""
        state = self.state
        return MatchStateSchema(
            match_id=self.match_id,
            status=str(state.status),
            duration=state.duration,
            match_duration_ms=self.engine.config.match_duration_ms,
            winner=str(state.winner) if state.winner else None,
            player=actor_to_schema(state.player),
            ai=actor_to_schema(state.ai),
            combat_log=[CombatEventSchema.model_validate(e) for e in state.combat_log],
            feedback_texts=[FeedbackTextSchema.model_validate(t) for t in state.feedback_texts],
        )


def actor_to_schema(actor: Actor) -> ActorSchema:
    """Convert an actor to schema."""
    skill = actor.active_skill
    return ActorSchema(
        id=str(actor.id),
        name=actor.name,
        hp=actor.hp,
        max_hp=actor.max_hp,
        buffs=[BuffSchema.model_validate(b) for b in actor.buffs],
        is_casting=actor.is_casting,
        active_skill_id=skill.id if skill else None,
        active_skill_name=skill.name if skill else None,
        active_skill_color=str(skill.color) if skill and skill.color else None,
        cast_progress=actor.cast_progress,
        global_cooldown_ends_at=actor.global_cooldown_ends_at,
        silenced_until=actor.silenced_until,
        cooldowns=dict(actor.cooldowns),
    )


class MatchService:
    """Match session management service."""

    def __init__(
        self,
        config: Optional[MatchConfig] = None,
        max_sessions: int = settings.MAX_SESSIONS,
        debug_logs: bool = settings.ENABLE_DEBUG_LOGS,
    ):
        self.config = config or load_configured_match()
        self.max_sessions = max_sessions
        self.debug_logs = debug_logs
        self._sessions: "OrderedDict[str, MatchSession]" = OrderedDict()

    # === Sessions ===

    def create_match(self, seed: Optional[int] = None) -> MatchStateSchema:
        """Create a new idle match."""
        while self._sessions and len(self._sessions) >= self.max_sessions:
            evicted_id, _ = self._sessions.popitem(last=False)
            logger.info("Evicted match session %s", evicted_id)

        match_id = str(uuid.uuid4())
        session = MatchSession(
            match_id,
            self.config,
            seed=seed,
            debug_logs=self.debug_logs,
            max_frame_ms=settings.MAX_FRAME_MS,
            history=settings.DIAGNOSTIC_HISTORY,
        )
        self._sessions[match_id] = session
        logger.info("Created match session %s", match_id)
        return session.to_schema()

    def get_match(self, match_id: str) -> Optional[MatchStateSchema]:
        """Get match state."""
        session = self._sessions.get(match_id)
        return session.to_schema() if session else None

    def delete_match(self, match_id: str) -> bool:
        """Delete a match session."""
        return self._sessions.pop(match_id, None) is not None

    def _get_session(self, match_id: str) -> MatchSession:
        session = self._sessions.get(match_id)
        if session is None:
            raise ValueError(f"Match {match_id} not found")
        return session

    @property
    def session_count(self) -> int:
        return len(self._sessions)

    # === Lifecycle ===

    def start(self, match_id: str) -> MatchStateSchema:
        session = self._get_session(match_id)
        session.loop.start()
        return session.to_schema()

    def pause(self, match_id: str) -> MatchStateSchema:
        session = self._get_session(match_id)
        session.loop.pause()
        return session.to_schema()

    def resume(self, match_id: str) -> MatchStateSchema:
        session = self._get_session(match_id)
        session.loop.resume()
        return session.to_schema()

    def restart(self, match_id: str) -> MatchStateSchema:
        session = self._get_session(match_id)
        session.loop.restart()
        session.messages.clear()
        return session.to_schema()

    def advance(self, match_id: str, elapsed_ms: float) -> MatchStateSchema:
        """Simulate elapsed time as a series of capped frames."""
        session = self._get_session(match_id)
        session.loop.advance_by(elapsed_ms)
        return session.to_schema()

    # === Skills ===

    def use_skill(self, match_id: str, actor_id: str, skill_id: str) -> SkillActivationResponse:
        """Request a skill activation; rejections are reported, not raised."""
        session = self._get_session(match_id)
        result = session.loop.use_skill(skill_id, actor_id)
        return SkillActivationResponse(
            accepted=result.accepted,
            reason=str(result.reason) if result.reason else None,
            interrupt=str(result.interrupt) if result.interrupt else None,
            damage=result.damage.final_damage if result.damage else None,
            state=session.to_schema(),
        )

    def get_skill_slots(self, match_id: str, actor_id: str) -> List[SkillSlotSchema]:
        """
        Get skill bar availability.

        Raises:
            ValueError: If the match or the actor does not exist.
        """
        session = self._get_session(match_id)
        slots = session.engine.skill_slots(session.state, ActorId(actor_id))
        return [
            SkillSlotSchema(
                skill_id=s.skill_id,
                name=s.name,
                kind=s.kind,
                icon=s.icon,
                on_cooldown=s.on_cooldown,
                on_gcd=s.on_gcd,
                silenced=s.silenced,
                available=s.is_available,
                remaining_ms=s.remaining_ms,
                total_ms=s.total_ms,
            )
            for s in slots
        ]

    # === Results ===

    def get_result(self, match_id: str) -> Optional[MatchResultSchema]:
        """Get the result of a finished match, None while it is running."""
        session = self._get_session(match_id)
        result = session.engine.get_result(session.state)
        if result is None:
            return None
        return MatchResultSchema(
            match_id=match_id,
            winner=str(result.winner),
            duration=result.duration,
            player_hp=result.player_hp,
            ai_hp=result.ai_hp,
            player_max_hp=result.player_max_hp,
            ai_max_hp=result.ai_max_hp,
            player_damage_dealt=result.player_damage_dealt,
            ai_damage_dealt=result.ai_damage_dealt,
            player_damage_taken=result.player_damage_taken,
            ai_damage_taken=result.ai_damage_taken,
            player_interrupts=result.player_interrupts,
        )

    def get_diagnostics(self, match_id: str) -> DiagnosticsResponse:
        session = self._get_session(match_id)
        return DiagnosticsResponse(
            match_id=match_id,
            enabled=session.diagnostics.enabled,
            messages=list(session.messages),
        )
