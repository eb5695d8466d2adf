"""Full integration tests -- load bundled content, run whole combats and runs.

If these pass, registry, engine, controller and run manager agree with
each other end-to-end.
"""

import pytest

from spire_combat.ir.cards import CardType
from spire_combat.sim.controller import CombatController
from spire_combat.sim.core.commands import EndTurn, PlayCard
from spire_combat.sim.core.entities import Player
from spire_combat.sim.core.game_state import CombatOutcome, CombatSession, GamePhase, TurnPhase
from spire_combat.sim.core.ids import IdAllocator
from spire_combat.sim.core.rng import GameRNG
from spire_combat.sim.dungeon.encounters import build_encounter
from spire_combat.sim.dungeon.run_manager import RunManager
from spire_combat.sim.engine import CombatEngine

_MAX_TURNS = 60


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _controller(registry, seed: int) -> tuple[CombatController, IdAllocator]:
    rng = GameRNG(seed)
    ids = IdAllocator()
    engine = CombatEngine(registry, rng.fork("combat"), ids, reward_rng=rng.fork("rewards"))
    return CombatController(engine), ids


def _start(registry, seed: int, enemy_ids: list[str]) -> CombatController:
    controller, ids = _controller(registry, seed)
    player = Player(health=80, max_health=80, relics=[registry.get_relic("burning_blood")])
    deck = registry.create_starter_deck(ids)
    enemies = build_encounter(registry, enemy_ids, ids)
    controller.start_combat(player, deck, enemies)
    return controller


def _greedy_turn(controller: CombatController) -> None:
    """Play cards left to right while energy allows, then end the turn."""
    progressed = True
    while progressed and not controller.session.is_over:
        progressed = False
        session = controller.session
        for card in session.hand:
            if not card.is_x_cost and card.cost > session.player.energy:
                continue
            target = session.enemies[0].id if session.enemies else None
            after = controller.play_card(card.id, target_id=target)
            if after is not session:
                progressed = True
                break
    if not controller.session.is_over:
        controller.end_turn()


def _run_combat(controller: CombatController) -> CombatSession:
    for _ in range(_MAX_TURNS):
        if controller.session.is_over:
            break
        _greedy_turn(controller)
    return controller.session


# ---------------------------------------------------------------------------
# Whole combats
# ---------------------------------------------------------------------------

class TestCombat:
    @pytest.mark.parametrize("seed", range(8))
    def test_combat_terminates(self, registry, seed):
        session = _run_combat(_start(registry, seed, ["jaw_worm"]))
        assert session.is_over
        assert session.outcome in (CombatOutcome.VICTORY, CombatOutcome.DEFEAT)

    @pytest.mark.parametrize("seed", range(5))
    def test_deck_conserved(self, registry, seed):
        controller = _start(registry, seed, ["red_louse", "green_louse"])
        for _ in range(_MAX_TURNS):
            if controller.session.is_over:
                break
            _greedy_turn(controller)
            assert controller.session.deck_size == 10

    def test_same_seed_same_history(self, registry):
        a = _start(registry, 13, ["cultist"])
        b = _start(registry, 13, ["cultist"])
        _run_combat(a)
        _run_combat(b)
        assert a.history == b.history
        assert a.session == b.session

    def test_victory_state(self, registry):
        session = _run_combat(_start(registry, 2, ["red_louse"]))
        assert session.outcome == CombatOutcome.VICTORY
        assert session.current_turn == TurnPhase.COMBAT_END
        assert session.enemies == []
        assert session.player.power_cards == []
        assert session.reward is not None
        assert len(session.reward.card_rewards) == 3

    def test_health_never_negative(self, registry):
        controller = _start(registry, 4, ["gremlin_nob"])
        for _ in range(_MAX_TURNS):
            if controller.session.is_over:
                break
            controller.end_turn()
            assert controller.session.player.health >= 0
        assert controller.session.outcome == CombatOutcome.DEFEAT
        assert controller.session.player.health == 0

    def test_session_round_trips_through_json(self, registry):
        controller = _start(registry, 6, ["cultist", "looter"])
        _greedy_turn(controller)
        dumped = controller.session.model_dump_json()
        restored = CombatSession.model_validate_json(dumped)
        assert restored == controller.session

        other, _ = _controller(registry, 6)
        other.load(restored)
        assert other.play_card("nope-1") is restored


# ---------------------------------------------------------------------------
# Scripted scenario
# ---------------------------------------------------------------------------

def test_bash_then_strike_through_controller(registry):
    controller, ids = _controller(registry, 0)
    bash = registry.create_card("bash", ids)
    strike = registry.create_card("strike", ids)
    player = Player(health=80, max_health=80)
    enemies = build_encounter(registry, ["acid_slime"], ids)
    # A deck of exactly five cards means the opening hand is the whole deck.
    filler = [registry.create_card("defend", ids) for _ in range(3)]
    controller.start_combat(player, [bash, strike, *filler], enemies)
    target = controller.session.enemies[0].id

    controller.play_card(bash.id, target_id=target)
    assert controller.session.enemies[0].health == 57
    controller.play_card(strike.id, target_id=target)
    assert controller.session.enemies[0].health == 48
    assert controller.session.player.energy == 0
    assert [c.id for c in controller.session.discard_pile] == [bash.id, strike.id]

    # Out of energy: Defend is refused and nothing changes.
    before = controller.session
    assert controller.play_card(filler[0].id) is before


# ---------------------------------------------------------------------------
# Runs
# ---------------------------------------------------------------------------

def test_multi_combat_run(registry):
    manager = RunManager(registry, GameRNG(21))
    run = manager.new_run()

    for _ in range(3):
        if run.phase == GamePhase.GAME_OVER:
            break
        manager.start_combat(run, ["red_louse"])
        for _ in range(_MAX_TURNS):
            if run.phase != GamePhase.COMBAT:
                break
            session = run.combat
            attack = next(
                (c for c in session.hand
                 if c.type == CardType.ATTACK and not c.is_x_cost and c.cost <= session.player.energy),
                None,
            )
            if attack is not None:
                manager.dispatch(run, PlayCard(card_id=attack.id, target_id=session.enemies[0].id))
            else:
                manager.dispatch(run, EndTurn())
        assert run.phase != GamePhase.COMBAT
        if run.phase == GamePhase.CARD_REWARD:
            manager.select_card_reward(run, run.reward.card_rewards[0].id)

    assert run.phase == GamePhase.MAP
    assert run.floor == 3
    assert len(run.deck) == 13
