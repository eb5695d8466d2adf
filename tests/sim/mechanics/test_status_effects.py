"""Tests for the status effect model: apply, decay, poison, clear."""

from spire_combat.ir.status_effects import COMBAT_SCOPED_STATUSES, StatusType
from spire_combat.sim.core.entities import Combatant
from spire_combat.sim.mechanics.status_effects import (
    apply_status_effect,
    clear_combat_statuses,
    get_status_stacks,
    has_status,
    process_status_effects,
    remove_status_effect,
)


def _make_combatant(**kwargs) -> Combatant:
    defaults = dict(name="Test", health=50, max_health=50)
    defaults.update(kwargs)
    return Combatant(**defaults)


# ---------------------------------------------------------------------------
# apply_status_effect
# ---------------------------------------------------------------------------

class TestApplyStatus:
    def test_apply_new(self):
        c = _make_combatant()
        apply_status_effect(c, StatusType.WEAK, 2)
        assert get_status_stacks(c, StatusType.WEAK) == 2

    def test_reapply_sums_stacks(self):
        """3 then 2 -> 5, never overwritten."""
        c = _make_combatant()
        apply_status_effect(c, StatusType.VULNERABLE, 3)
        apply_status_effect(c, StatusType.VULNERABLE, 2)

        assert get_status_stacks(c, StatusType.VULNERABLE) == 5
        assert len(c.status_effects) == 1

    def test_reapply_keeps_position(self):
        c = _make_combatant()
        apply_status_effect(c, StatusType.WEAK, 1)
        apply_status_effect(c, StatusType.POISON, 1)
        apply_status_effect(c, StatusType.WEAK, 1)
        assert [e.type for e in c.status_effects] == [StatusType.WEAK, StatusType.POISON]

    def test_non_positive_stacks_ignored(self):
        c = _make_combatant()
        apply_status_effect(c, StatusType.STRENGTH, 0)
        apply_status_effect(c, StatusType.STRENGTH, -2)
        assert not has_status(c, StatusType.STRENGTH)

    def test_remove(self):
        c = _make_combatant()
        apply_status_effect(c, StatusType.WEAK, 2)
        remove_status_effect(c, StatusType.WEAK)
        remove_status_effect(c, StatusType.WEAK)
        assert c.status_effects == []


# ---------------------------------------------------------------------------
# process_status_effects
# ---------------------------------------------------------------------------

class TestProcessStatusEffects:
    def test_no_effects_is_identity(self):
        c = _make_combatant(block=4)
        before = c.model_copy(deep=True)
        assert process_status_effects(c) == 0
        assert c == before

    def test_decaying_lose_one_stack(self):
        c = _make_combatant()
        apply_status_effect(c, StatusType.WEAK, 2)
        apply_status_effect(c, StatusType.VULNERABLE, 1)
        process_status_effects(c)

        assert get_status_stacks(c, StatusType.WEAK) == 1
        assert not has_status(c, StatusType.VULNERABLE)

    def test_persistent_statuses_do_not_decay(self):
        c = _make_combatant()
        apply_status_effect(c, StatusType.STRENGTH, 2)
        apply_status_effect(c, StatusType.DEXTERITY, 1)
        for _ in range(3):
            process_status_effects(c)

        assert get_status_stacks(c, StatusType.STRENGTH) == 2
        assert get_status_stacks(c, StatusType.DEXTERITY) == 1

    def test_poison_deals_stacks_then_decays(self):
        c = _make_combatant(block=10)
        apply_status_effect(c, StatusType.POISON, 3)
        lost = process_status_effects(c)

        assert lost == 3
        assert c.health == 47
        assert c.block == 10  # poison ignores block
        assert get_status_stacks(c, StatusType.POISON) == 2

    def test_poison_clamps_at_zero(self):
        c = _make_combatant(health=2)
        apply_status_effect(c, StatusType.POISON, 5)
        assert process_status_effects(c) == 2
        assert c.health == 0


# ---------------------------------------------------------------------------
# clear_combat_statuses
# ---------------------------------------------------------------------------

class TestClearCombatStatuses:
    def test_clears_only_combat_scoped(self):
        c = _make_combatant()
        apply_status_effect(c, StatusType.STRENGTH, 2)
        apply_status_effect(c, StatusType.WEAK, 1)
        apply_status_effect(c, StatusType.DEXTERITY, 1)
        clear_combat_statuses(c, COMBAT_SCOPED_STATUSES)

        assert [e.type for e in c.status_effects] == [StatusType.DEXTERITY]
