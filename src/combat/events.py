"""Combat events and floating feedback text.

The combat log and the feedback texts are display/diagnostic output; the
authoritative outcome lives in the actors.
"""

from dataclasses import dataclass
from typing import Optional, List, TYPE_CHECKING
from enum import StrEnum
import itertools
import random

from src.core.constants import (
    COMBAT_LOG_LIMIT,
    FEEDBACK_BASE_X,
    FEEDBACK_JITTER,
    FEEDBACK_TTL_MS,
)

if TYPE_CHECKING:
    from .actor import ActorId


class EventType(StrEnum):
    """Combat log entry kinds."""

    SKILL_CAST = "skill_cast"
    DAMAGE_DEALT = "damage_dealt"
    DAMAGE_TAKEN = "damage_taken"
    INTERRUPT_SUCCESS = "interrupt_success"
    BUFF_APPLIED = "buff_applied"
    FAKE_CAST_CANCEL = "fake_cast_cancel"


class FeedbackCategory(StrEnum):
    """Floating text styles."""

    DAMAGE = "damage"
    HEAL = "heal"
    CRITICAL = "critical"
    IMMUNE = "immune"
    INTERRUPT = "interrupt"


# Feedback strings
TEXT_IMMUNE = "Immune"
TEXT_INTERRUPT_IMMUNE = "Immune!"
TEXT_INTERRUPTED = "Interrupted!"
TEXT_DODGED = "Dodged!"


def damage_text(amount: int, mitigated: bool = False) -> str:
    if mitigated:
        return f"-{amount} (mitigated)"
    return f"-{amount}"


@dataclass(frozen=True)
class CombatEvent:
    """Immutable combat log entry."""

    timestamp: float
    type: EventType
    source: "ActorId"
    target: "ActorId"
    skill_name: str
    value: Optional[int] = None


@dataclass(frozen=True)
class FeedbackText:
    """Short-lived floating text over an actor."""

    id: str
    text: str
    category: FeedbackCategory
    target: "ActorId"
    created_at: float
    x: float  # Horizontal placement, percent

    def is_expired(self, now: float, ttl: float = FEEDBACK_TTL_MS) -> bool:
        return now - self.created_at >= ttl


class FeedbackEmitter:
    """
    Creates floating texts with horizontal jitter.

    Owns its own random generator so cosmetic output never disturbs the
    AI's random sequence.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self._ids = itertools.count(1)

    def create(
        self,
        text: str,
        category: FeedbackCategory,
        target: "ActorId",
        now: float,
    ) -> FeedbackText:
        return FeedbackText(
            id=f"ft_{int(now)}_{next(self._ids)}",
            text=text,
            category=category,
            target=target,
            created_at=now,
            x=FEEDBACK_BASE_X + self.rng.uniform(-FEEDBACK_JITTER, FEEDBACK_JITTER),
        )


def purge_feedback(texts: List[FeedbackText], now: float) -> List[FeedbackText]:
    """Drop entries older than the feedback TTL."""
    return [t for t in texts if not t.is_expired(now)]


def trim_log(events: List[CombatEvent], limit: int = COMBAT_LOG_LIMIT) -> List[CombatEvent]:
    """Keep only the most recent ``limit`` events, oldest dropped first."""
    if len(events) <= limit:
        return events
    return events[-limit:]
