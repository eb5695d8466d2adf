"""Tests for the TriggerDispatcher and the relic passive filters."""

from spire_combat.ir.cards import CardType
from spire_combat.ir.effects import EffectType
from spire_combat.ir.passives import PassiveEffect, PassiveTarget, Trigger
from spire_combat.ir.powers import PowerCardDefinition
from spire_combat.ir.relics import RelicDefinition, RelicRarity
from spire_combat.ir.status_effects import StatusType
from spire_combat.sim.core.ids import IdAllocator
from spire_combat.sim.core.rng import GameRNG
from spire_combat.sim.interpreter import EffectInterpreter
from spire_combat.sim.mechanics.status_effects import get_status_stacks
from spire_combat.sim.relic_dispatcher import RelicDispatcher, passive_applies
from spire_combat.sim.triggers import TriggerContext, TriggerDispatcher
from tests.sim.conftest import make_card, make_enemy, make_player, make_session


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class RecordingInterpreter(EffectInterpreter):
    """Interpreter that records which passive effects it was asked to apply."""

    def __init__(self) -> None:
        super().__init__(GameRNG(0), IdAllocator())
        self.applied: list[PassiveEffect] = []

    def apply_passive_effect(self, effect, session, context):
        self.applied.append(effect)
        super().apply_passive_effect(effect, session, context)


def _relic(relic_id: str, *effects: PassiveEffect) -> RelicDefinition:
    return RelicDefinition(
        id=relic_id, name=relic_id.title(), rarity=RelicRarity.COMMON,
        description="", effects=list(effects),
    )


def _power(power_id: str, *effects: PassiveEffect) -> PowerCardDefinition:
    return PowerCardDefinition(id=power_id, name=power_id.title(), description="", effects=list(effects))


def _block(trigger: Trigger, value: int, **kwargs) -> PassiveEffect:
    return PassiveEffect(trigger=trigger, type=EffectType.BLOCK, value=value, **kwargs)


# ---------------------------------------------------------------------------
# passive_applies
# ---------------------------------------------------------------------------

class TestPassiveApplies:
    def test_trigger_must_match(self):
        effect = _block(Trigger.TURN_END, 3)
        session = make_session()
        assert passive_applies(effect, Trigger.TURN_END, session, TriggerContext(), "k")
        assert not passive_applies(effect, Trigger.TURN_START, session, TriggerContext(), "k")

    def test_card_type_filter(self):
        effect = _block(Trigger.CARD_PLAYED, 1, card_type=CardType.POWER)
        session = make_session()
        power = make_card("inflame-1", type=CardType.POWER)
        attack = make_card("strike-1")

        assert passive_applies(effect, Trigger.CARD_PLAYED, session, TriggerContext(card=power), "k")
        assert not passive_applies(effect, Trigger.CARD_PLAYED, session, TriggerContext(card=attack), "k")
        assert not passive_applies(effect, Trigger.CARD_PLAYED, session, TriggerContext(), "k")

    def test_turn_filter(self):
        effect = _block(Trigger.TURN_START, 14, on_turn=2)
        assert not passive_applies(effect, Trigger.TURN_START, make_session(turn=1), TriggerContext(), "k")
        assert passive_applies(effect, Trigger.TURN_START, make_session(turn=2), TriggerContext(), "k")
        assert not passive_applies(effect, Trigger.TURN_START, make_session(turn=3), TriggerContext(), "k")

    def test_once_per_combat(self):
        effect = _block(Trigger.DAMAGE_TAKEN, 1, once_per_combat=True)
        session = make_session(spent_passives=["relic:puzzle:0"])
        assert not passive_applies(effect, Trigger.DAMAGE_TAKEN, session, TriggerContext(), "relic:puzzle:0")
        assert passive_applies(effect, Trigger.DAMAGE_TAKEN, session, TriggerContext(), "relic:other:0")


# ---------------------------------------------------------------------------
# RelicDispatcher
# ---------------------------------------------------------------------------

class TestRelicDispatcher:
    def test_fires_in_relic_order(self):
        interp = RecordingInterpreter()
        first = _block(Trigger.COMBAT_START, 1)
        second = _block(Trigger.COMBAT_START, 2)
        session = make_session(player=make_player(relics=[_relic("a", first), _relic("b", second)]))

        fired = RelicDispatcher(interp).fire(Trigger.COMBAT_START, session, TriggerContext())

        assert fired == 2
        assert interp.applied == [first, second]
        assert session.player.block == 3

    def test_once_per_combat_is_recorded(self):
        draw = PassiveEffect(trigger=Trigger.DAMAGE_TAKEN, type=EffectType.DRAW_CARDS, value=3, once_per_combat=True)
        session = make_session(player=make_player(relics=[_relic("puzzle", draw)]))
        dispatcher = RelicDispatcher(EffectInterpreter(GameRNG(0), IdAllocator()))
        context = TriggerContext(damage=5)

        assert dispatcher.fire(Trigger.DAMAGE_TAKEN, session, context) == 1
        assert dispatcher.fire(Trigger.DAMAGE_TAKEN, session, context) == 0
        assert context.cards_to_draw == 3
        assert session.spent_passives == ["relic:puzzle:0"]

    def test_no_relics(self):
        dispatcher = RelicDispatcher(EffectInterpreter(GameRNG(0), IdAllocator()))
        assert dispatcher.fire(Trigger.TURN_END, make_session(), TriggerContext()) == 0


# ---------------------------------------------------------------------------
# TriggerDispatcher
# ---------------------------------------------------------------------------

class TestTriggerDispatcher:
    def test_powers_fire_before_relics(self):
        interp = RecordingInterpreter()
        relic_effect = _block(Trigger.TURN_END, 1)
        power_effect = _block(Trigger.TURN_END, 3)
        session = make_session(player=make_player(
            relics=[_relic("orichalcum", relic_effect)],
            power_cards=[_power("metallicize", power_effect)],
        ))

        TriggerDispatcher(interp).process_effects(Trigger.TURN_END, session)

        assert interp.applied == [power_effect, relic_effect]
        assert session.player.block == 4

    def test_stacked_powers_each_fire(self):
        strength = PassiveEffect(
            trigger=Trigger.TURN_START, type=EffectType.APPLY_STATUS, value=2,
            status_type=StatusType.STRENGTH,
        )
        session = make_session(player=make_player(
            power_cards=[_power("demon_form", strength), _power("demon_form", strength)],
        ))
        TriggerDispatcher(RecordingInterpreter()).process_effects(Trigger.TURN_START, session)
        assert get_status_stacks(session.player, StatusType.STRENGTH) == 4

    def test_returns_context_with_draws(self):
        draw = PassiveEffect(trigger=Trigger.COMBAT_START, type=EffectType.DRAW_CARDS, value=2)
        session = make_session(player=make_player(relics=[_relic("bag_of_prep", draw)]))
        context = TriggerDispatcher(RecordingInterpreter()).process_effects(Trigger.COMBAT_START, session)
        assert context.cards_to_draw == 2

    def test_attacker_context_reaches_relic(self):
        thorns = PassiveEffect(
            trigger=Trigger.DAMAGE_TAKEN, type=EffectType.DAMAGE, value=3,
            target=PassiveTarget.ATTACKER,
        )
        session = make_session(
            player=make_player(relics=[_relic("bronze_scales", thorns)]),
            enemies=[make_enemy("louse-1"), make_enemy("louse-2")],
        )
        TriggerDispatcher(RecordingInterpreter()).process_effects(
            Trigger.DAMAGE_TAKEN, session, TriggerContext(damage=4, attacker_id="louse-2"),
        )
        assert [e.health for e in session.enemies] == [44, 41]

    def test_fire_power_only_fires_new_power(self):
        interp = RecordingInterpreter()
        old = _power("inflame", PassiveEffect(
            trigger=Trigger.COMBAT_START, type=EffectType.APPLY_STATUS, value=2,
            status_type=StatusType.STRENGTH,
        ))
        new = _power("inflame", old.effects[0])
        session = make_session(player=make_player(power_cards=[old, new]))

        TriggerDispatcher(interp).fire_power(new, Trigger.COMBAT_START, session)

        assert len(interp.applied) == 1
        assert get_status_stacks(session.player, StatusType.STRENGTH) == 2

    def test_relics_skipped_once_player_dead(self):
        interp = RecordingInterpreter()
        session = make_session(player=make_player(
            health=0, relics=[_relic("anchor", _block(Trigger.TURN_END, 10))],
        ))
        TriggerDispatcher(interp).process_effects(Trigger.TURN_END, session)
        assert interp.applied == []
