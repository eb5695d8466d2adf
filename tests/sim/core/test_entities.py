"""Tests for Combatant, Player, and Enemy models."""

import pytest

from spire_combat.ir.relics import RelicDefinition, RelicRarity
from spire_combat.ir.status_effects import StatusEffect, StatusType
from spire_combat.sim.core.entities import Combatant, Enemy, EnemyIntent, IntentType, Player


# ---------------------------------------------------------------------------
# Combatant -- health
# ---------------------------------------------------------------------------

class TestCombatantHealth:
    def test_alive_above_zero(self):
        c = Combatant(name="Test", health=1, max_health=50)
        assert not c.is_dead

    def test_dead_at_zero(self):
        c = Combatant(name="Test", health=0, max_health=50)
        assert c.is_dead

    def test_heal_caps_at_max(self):
        c = Combatant(name="Test", health=45, max_health=50)
        restored = c.heal(10)

        assert restored == 5
        assert c.health == 50

    def test_heal_zero(self):
        c = Combatant(name="Test", health=45, max_health=50)
        assert c.heal(0) == 0
        assert c.health == 45

    def test_negative_heal_raises(self):
        c = Combatant(name="Test", health=45, max_health=50)
        with pytest.raises(ValueError):
            c.heal(-1)


# ---------------------------------------------------------------------------
# Combatant -- statuses
# ---------------------------------------------------------------------------

class TestCombatantStatus:
    def test_find_status(self):
        c = Combatant(
            name="Test",
            health=10,
            max_health=10,
            status_effects=[StatusEffect(type=StatusType.WEAK, stacks=2)],
        )
        assert c.find_status(StatusType.WEAK).stacks == 2
        assert c.find_status(StatusType.POISON) is None

    def test_status_list_is_per_instance(self):
        a = Combatant(name="A", health=10, max_health=10)
        b = Combatant(name="B", health=10, max_health=10)
        a.status_effects.append(StatusEffect(type=StatusType.POISON, stacks=1))
        assert b.status_effects == []


# ---------------------------------------------------------------------------
# Player
# ---------------------------------------------------------------------------

class TestPlayer:
    def test_defaults(self):
        p = Player(health=80, max_health=80)
        assert p.name == "Ironclad"
        assert p.energy == 3
        assert p.max_energy == 3
        assert p.relics == []
        assert p.power_cards == []

    def test_has_relic(self):
        relic = RelicDefinition(
            id="anchor", name="Anchor", rarity=RelicRarity.COMMON, description=""
        )
        p = Player(health=80, max_health=80, relics=[relic])
        assert p.has_relic("anchor")
        assert not p.has_relic("akabeko")


# ---------------------------------------------------------------------------
# Enemy
# ---------------------------------------------------------------------------

class TestEnemy:
    def test_defaults(self):
        e = Enemy(id="cultist-1", enemy_id="cultist", name="Cultist", health=48, max_health=48)
        assert e.deck == []
        assert e.current_move is None
        assert e.intent == EnemyIntent()
        assert e.intent.type == IntentType.UNKNOWN
        assert not e.is_elite

    def test_deep_copy_is_independent(self):
        e = Enemy(id="cultist-1", enemy_id="cultist", name="Cultist", health=48, max_health=48)
        copy = e.model_copy(deep=True)
        copy.health = 1
        copy.status_effects.append(StatusEffect(type=StatusType.WEAK, stacks=1))

        assert e.health == 48
        assert e.status_effects == []
