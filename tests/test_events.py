"""Tests for combat events, feedback texts and diagnostics."""

import random

from src.combat.actor import ActorId
from src.combat.diagnostics import DiagnosticChannel
from src.combat.events import (
    CombatEvent,
    EventType,
    FeedbackCategory,
    FeedbackEmitter,
    damage_text,
    purge_feedback,
    trim_log,
)


class TestFeedback:
    """Floating text tests."""

    def test_damage_text(self):
        assert damage_text(300) == "-300"
        assert damage_text(150, mitigated=True) == "-150 (mitigated)"

    def test_emitter_jitter_is_bounded(self):
        emitter = FeedbackEmitter(random.Random(1))
        texts = [emitter.create("-1", FeedbackCategory.DAMAGE, ActorId.AI, 0) for _ in range(50)]

        assert all(40 <= t.x <= 60 for t in texts)
        assert len({t.id for t in texts}) == 50

    def test_seeded_emitter_is_deterministic(self):
        a = FeedbackEmitter(random.Random(9)).create("x", FeedbackCategory.HEAL, ActorId.PLAYER, 10)
        b = FeedbackEmitter(random.Random(9)).create("x", FeedbackCategory.HEAL, ActorId.PLAYER, 10)
        assert a == b

    def test_purge_feedback_ttl(self):
        emitter = FeedbackEmitter(random.Random(0))
        old = emitter.create("old", FeedbackCategory.DAMAGE, ActorId.AI, 0)
        new = emitter.create("new", FeedbackCategory.DAMAGE, ActorId.AI, 300)

        assert purge_feedback([old, new], 499) == [old, new]
        assert purge_feedback([old, new], 500) == [new]
        assert purge_feedback([old, new], 800) == []


class TestCombatLog:
    """Combat log tests."""

    def test_trim_keeps_most_recent(self):
        events = [
            CombatEvent(i, EventType.DAMAGE_DEALT, ActorId.PLAYER, ActorId.AI, "Twin Forms", 300)
            for i in range(55)
        ]

        trimmed = trim_log(events)

        assert len(trimmed) == 50
        assert trimmed[0].timestamp == 5
        assert trimmed[-1].timestamp == 54

    def test_short_log_untouched(self):
        events = [CombatEvent(0, EventType.BUFF_APPLIED, ActorId.PLAYER, ActorId.PLAYER, "Guard")]
        assert trim_log(events) is events


class TestDiagnosticChannel:
    """DiagnosticChannel tests."""

    def test_disabled_drops_messages(self):
        messages = []
        channel = DiagnosticChannel(enabled=False, sink=messages.append)
        channel.emit("hello")
        assert messages == []

    def test_enabled_forwards_to_sink(self):
        messages = []
        channel = DiagnosticChannel(enabled=True, sink=messages.append)
        channel.emit("hello")
        assert messages == ["hello"]

    def test_default_sink_is_logger(self, caplog):
        channel = DiagnosticChannel(enabled=True)
        with caplog.at_level("DEBUG", logger="src.combat.diagnostics"):
            channel.emit("AI idle")
        assert "AI idle" in caplog.text
