"""Tests for the Monte Carlo match simulator."""

import pytest

from src.combat.combat_engine import CombatEngine
from src.combat.match_state import Winner
from src.combat.simulation import MatchSimulator, ScriptedPlayer, wilson_interval
from src.data.loaders import load_match_config, get_skill_by_id


class TestScriptedPlayer:
    """ScriptedPlayer tests."""

    @pytest.fixture
    def engine(self):
        return CombatEngine(seed=5)

    @pytest.fixture
    def player(self):
        return ScriptedPlayer(load_match_config(), reaction_ms=250)

    def test_skill_priorities_from_table(self, player):
        assert player.interrupt_ids == ["p_interrupt"]
        assert player.defensive_ids == ["p_defensive"]
        assert player.attack_ids == ["p_cast", "p_attack"]

    def test_attacks_when_ai_idle(self, engine, player):
        state = engine.start(engine.new_match())

        state = player.act(engine, state)

        assert state.player.is_casting
        assert state.player.active_skill.id == "p_cast"

    def test_waits_for_reaction_before_interrupting(self, engine, player):
        state = engine.start(engine.new_match())
        state.player.global_cooldown_ends_at = 10_000
        state.ai.start_cast(get_skill_by_id("ai_yellow_1"))
        state.ai.cast_progress = 10  # 150ms into the cast

        state = player.act(engine, state)
        assert state.ai.is_casting

        state.ai.cast_progress = 20  # 300ms into the cast
        state = player.act(engine, state)
        assert not state.ai.is_casting
        assert state.ai.silenced_until == 5_000

    def test_defends_against_red(self, engine, player):
        state = engine.start(engine.new_match())
        state.ai.start_cast(get_skill_by_id("ai_red_1"))

        state = player.act(engine, state)

        assert len(state.player.buffs) == 1
        assert state.player.is_on_cooldown("p_defensive", 0)

    def test_nothing_available_keeps_state(self, engine, player):
        state = engine.start(engine.new_match())
        state.player.silenced_until = 1_000

        assert player.act(engine, state) is state


class TestMatchSimulator:
    """MatchSimulator tests."""

    def test_invalid_frame(self):
        with pytest.raises(ValueError):
            MatchSimulator(frame_ms=0)

    def test_run_match_finishes(self):
        simulator = MatchSimulator(base_seed=11, frame_ms=50)
        result = simulator.run_match(seed=11)

        assert result.winner in (Winner.PLAYER, Winner.AI, Winner.TIE)
        assert 0 <= result.player_hp <= 10_000
        assert 0 <= result.ai_hp <= 15_000
        assert result.duration <= 120_000
        assert result.player_damage_dealt > 0

    def test_simulate_statistics(self):
        simulator = MatchSimulator(base_seed=100, frame_ms=50)
        result = simulator.simulate(iterations=4)

        assert result.iterations == 4
        assert len(result.individual_results) == 4
        assert result.player_win_rate + result.ai_win_rate + result.tie_rate == pytest.approx(1.0)
        low, high = result.win_rate_confidence
        assert 0.0 <= low <= result.player_win_rate <= high <= 1.0

    def test_seeded_runs_are_reproducible(self):
        a = MatchSimulator(base_seed=3, frame_ms=50).simulate(iterations=2)
        b = MatchSimulator(base_seed=3, frame_ms=50).simulate(iterations=2)

        assert [r.ai_hp for r in a.individual_results] == [r.ai_hp for r in b.individual_results]
        assert a.avg_duration_ms == b.avg_duration_ms

    def test_zero_iterations(self):
        result = MatchSimulator(base_seed=1).simulate(iterations=0)

        assert result.iterations == 0
        assert result.player_win_rate == 0.0
        assert result.win_rate_confidence == (0.0, 1.0)


class TestWilsonInterval:
    """Tests for the confidence interval helper."""

    def test_empty_sample(self):
        assert wilson_interval(0, 0) == (0.0, 1.0)

    def test_interval_contains_estimate(self):
        low, high = wilson_interval(30, 100)
        assert low < 0.3 < high
        assert low == pytest.approx(0.219, abs=0.005)
        assert high == pytest.approx(0.396, abs=0.005)

    def test_bounds_clamped(self):
        low, high = wilson_interval(10, 10)
        assert high == pytest.approx(1.0)
        assert 0.0 < low < 1.0
