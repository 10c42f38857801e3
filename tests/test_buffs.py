"""Tests for Buff System."""

import pytest

from src.combat.actor import Actor, ActorId
from src.combat.buffs import BuffSystem, BuffKind, create_damage_reduction
from src.data.loaders import get_skill_by_id


def create_test_actor(hp: int = 1000) -> Actor:
    """Create a test actor."""
    return Actor(id=ActorId.PLAYER, name="Tester", max_hp=hp, hp=hp)


class TestBuffSystem:
    """BuffSystem tests."""

    @pytest.fixture
    def system(self):
        """Create buff system."""
        return BuffSystem()

    def test_apply_skill_buff(self, system):
        """Defensive skills grant a damage reduction buff."""
        actor = create_test_actor()
        skill = get_skill_by_id("p_defensive")

        buff = system.apply_skill_buff(actor, skill, now=1000)

        assert buff.kind == BuffKind.DAMAGE_REDUCTION
        assert buff.magnitude == 1.0
        assert buff.end_time == 3000
        assert buff.icon == "Shield"
        assert actor.buffs == [buff]

    def test_buff_active_until_end_time(self, system):
        actor = create_test_actor()
        buff = system.apply(actor, BuffKind.DAMAGE_REDUCTION, "Guard", 500, now=0, magnitude=0.5)

        assert buff.is_active(499)
        assert not buff.is_active(500)
        assert buff.remaining(200) == 300
        assert buff.remaining(900) == 0

    def test_purge_expired(self, system):
        actor = create_test_actor()
        short = system.apply(actor, BuffKind.DAMAGE_REDUCTION, "Short", 100, now=0, magnitude=0.5)
        long = system.apply(actor, BuffKind.IMMUNE_SILENCE, "Long", 1000, now=0)

        removed = system.purge_expired(actor, now=100)

        assert removed == [short]
        assert actor.buffs == [long]

    def test_stacking_buffs_are_separate(self, system):
        """Buffs of the same kind do not merge."""
        actor = create_test_actor()
        system.apply(actor, BuffKind.DAMAGE_REDUCTION, "A", 100, now=0, magnitude=0.2)
        system.apply(actor, BuffKind.DAMAGE_REDUCTION, "B", 100, now=0, magnitude=0.4)

        assert len(actor.buffs) == 2
        assert actor.buffs[0].id != actor.buffs[1].id

    def test_find_active_uses_application_order(self, system):
        actor = create_test_actor()
        system.apply(actor, BuffKind.DAMAGE_REDUCTION, "First", 100, now=0, magnitude=0.2)
        system.apply(actor, BuffKind.DAMAGE_REDUCTION, "Second", 1000, now=0, magnitude=0.4)

        assert BuffSystem.find_active(actor, BuffKind.DAMAGE_REDUCTION, 50).name == "First"
        # The first has expired but not been purged yet
        assert BuffSystem.find_active(actor, BuffKind.DAMAGE_REDUCTION, 150).name == "Second"

    def test_has_active(self, system):
        actor = create_test_actor()
        system.apply(actor, BuffKind.IMMUNE_INTERRUPT, "Unstoppable", 100, now=0)

        assert BuffSystem.has_active(actor, BuffKind.IMMUNE_INTERRUPT, 50)
        assert not BuffSystem.has_active(actor, BuffKind.IMMUNE_INTERRUPT, 100)
        assert not BuffSystem.has_active(actor, BuffKind.IMMUNE_SILENCE, 50)


class TestBuffHelpers:
    """Tests for helper functions."""

    def test_create_damage_reduction(self):
        buff = create_damage_reduction("Guard", now=200, duration_ms=300, magnitude=0.5)

        assert buff.kind == BuffKind.DAMAGE_REDUCTION
        assert buff.end_time == 500
        assert buff.magnitude == 0.5
