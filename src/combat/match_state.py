"""Match State for the duel simulator.

The authoritative snapshot of a match: both actors, elapsed time, status,
winner, recent combat log and floating feedback texts. Pure data; the
CombatEngine is the only code that produces new snapshots.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, List
from enum import StrEnum

from .actor import Actor, ActorId
from .events import CombatEvent, EventType, FeedbackText


class MatchStatus(StrEnum):
    """Match lifecycle."""

    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    ENDED = "ended"


class Winner(StrEnum):
    """Match outcome."""

    PLAYER = "player"
    AI = "ai"
    TIE = "tie"


@dataclass
class MatchState:
    """Current state of a match."""

    player: Actor
    ai: Actor
    status: MatchStatus = MatchStatus.IDLE
    duration: float = 0.0  # Accumulated match time (ms), also the match clock
    winner: Optional[Winner] = None

    combat_log: List[CombatEvent] = field(default_factory=list)
    feedback_texts: List[FeedbackText] = field(default_factory=list)

    @property
    def now(self) -> float:
        return self.duration

    @property
    def is_terminal(self) -> bool:
        return self.status == MatchStatus.ENDED

    def actor(self, actor_id: ActorId) -> Actor:
        """Get an actor by id."""
        if actor_id == ActorId.PLAYER:
            return self.player
        if actor_id == ActorId.AI:
            return self.ai
        raise ValueError(f"Unknown actor: {actor_id}")

    def opponent_of(self, actor_id: ActorId) -> Actor:
        return self.actor(ActorId(actor_id).opponent)

    def log_event(
        self,
        event_type: EventType,
        source: ActorId,
        target: ActorId,
        skill_name: str,
        value: Optional[int] = None,
    ) -> CombatEvent:
        """Append a combat log entry stamped with the match clock."""
        event = CombatEvent(
            timestamp=self.now,
            type=event_type,
            source=source,
            target=target,
            skill_name=skill_name,
            value=value,
        )
        self.combat_log.append(event)
        return event

    def events_of_type(self, event_type: EventType) -> List[CombatEvent]:
        return [e for e in self.combat_log if e.type == event_type]

    def clone(self) -> "MatchState":
        """Working copy for the engine.

        Actors are copied; log entries and feedback texts are frozen, so the
        lists are copied but their entries are shared.
        """
        return replace(
            self,
            player=self.player.clone(),
            ai=self.ai.clone(),
            combat_log=list(self.combat_log),
            feedback_texts=list(self.feedback_texts),
        )


@dataclass
class MatchResult:
    """Result of a finished match."""

    winner: Winner
    duration: float
    player_hp: int
    ai_hp: int
    player_max_hp: int
    ai_max_hp: int

    # Per-actor statistics
    player_damage_dealt: int = 0
    ai_damage_dealt: int = 0
    player_damage_taken: int = 0
    ai_damage_taken: int = 0
    player_interrupts: int = 0

    @property
    def player_hp_ratio(self) -> float:
        return self.player_hp / self.player_max_hp if self.player_max_hp else 0.0

    @property
    def ai_hp_ratio(self) -> float:
        return self.ai_hp / self.ai_max_hp if self.ai_max_hp else 0.0
