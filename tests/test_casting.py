"""Tests for Casting System."""

import random

import pytest

from src.combat.actor import Actor, ActorId
from src.combat.casting import CastingSystem
from src.combat.damage import DamageSystem
from src.combat.diagnostics import DiagnosticChannel
from src.combat.events import EventType, FeedbackEmitter
from src.combat.match_state import MatchState
from src.data.loaders import load_match_config, get_skill_by_id


def create_state() -> MatchState:
    config = load_match_config()
    return MatchState(
        player=Actor.from_config(ActorId.PLAYER, config.player),
        ai=Actor.from_config(ActorId.AI, config.ai),
    )


def tick(casting: CastingSystem, state: MatchState, caster: Actor, opponent: Actor, elapsed: float):
    """Advance the clock and the caster's cast like the engine does."""
    state.duration += elapsed
    return casting.update(state, caster, opponent, elapsed)


class TestCastingSystem:
    """CastingSystem tests."""

    @pytest.fixture
    def messages(self):
        return []

    @pytest.fixture
    def casting(self, messages):
        damage = DamageSystem(FeedbackEmitter(random.Random(0)))
        return CastingSystem(damage, DiagnosticChannel(enabled=True, sink=messages.append))

    def test_not_casting_returns_none(self, casting):
        state = create_state()
        assert casting.update(state, state.player, state.ai, 16) is None

    def test_progress_accumulates(self, casting):
        state = create_state()
        casting.begin(state.player, get_skill_by_id("p_cast"))

        update = tick(casting, state, state.player, state.ai, 500)

        assert update.progress == pytest.approx(25.0)
        assert state.player.is_casting
        assert state.ai.hp == 15_000

    def test_completion_applies_damage(self, casting):
        state = create_state()
        casting.begin(state.player, get_skill_by_id("p_cast"))

        tick(casting, state, state.player, state.ai, 1000)
        update = tick(casting, state, state.player, state.ai, 1000)

        assert update.completed
        assert update.damage.final_damage == 800
        assert not state.player.is_casting
        assert state.player.active_skill is None
        assert state.player.cast_progress == 0
        assert state.ai.hp == 14_200
        assert len(state.events_of_type(EventType.DAMAGE_DEALT)) == 1

    def test_overshoot_completes_once(self, casting):
        state = create_state()
        casting.begin(state.ai, get_skill_by_id("ai_yellow_fast"))

        update = tick(casting, state, state.ai, state.player, 1000)

        assert update.completed
        assert state.player.hp == 9_200
        assert tick(casting, state, state.ai, state.player, 1000) is None

    def test_schedule_fake_cancel(self, casting, messages):
        state = create_state()
        skill = get_skill_by_id("ai_yellow_1")
        casting.begin(state.ai, skill)

        cancel_at = casting.schedule_fake_cancel(state.ai, skill, now=100, fraction=0.3)

        assert cancel_at == pytest.approx(550)
        assert state.ai.fake_cast_cancel_at == pytest.approx(550)
        assert any("fake cast" in m for m in messages)

    def test_fake_cancel_clears_without_damage(self, casting):
        state = create_state()
        skill = get_skill_by_id("ai_yellow_1")
        casting.begin(state.ai, skill)
        casting.schedule_fake_cancel(state.ai, skill, now=0, fraction=0.3)

        assert not tick(casting, state, state.ai, state.player, 400).self_cancelled
        update = tick(casting, state, state.ai, state.player, 50)

        assert update.self_cancelled
        assert not state.ai.is_casting
        assert state.ai.fake_cast_cancel_at is None
        assert state.player.hp == 10_000
        cancels = state.events_of_type(EventType.FAKE_CAST_CANCEL)
        assert len(cancels) == 1
        assert cancels[0].skill_name == "Seven Stars Salute"

    def test_fake_cancel_beats_completion(self, casting):
        """A due self-cancel wins over completion in the same tick."""
        state = create_state()
        skill = get_skill_by_id("ai_yellow_fast")
        casting.begin(state.ai, skill)
        casting.schedule_fake_cancel(state.ai, skill, now=0, fraction=0.3)

        update = tick(casting, state, state.ai, state.player, 2000)

        assert update.self_cancelled
        assert not update.completed
        assert state.player.hp == 10_000
