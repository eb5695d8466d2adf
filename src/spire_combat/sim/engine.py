"""Combat engine -- the reducer that advances a combat one command at a time.

``CombatEngine.step(session, command)`` never mutates its input.  Each
handler works on a deep copy and returns a :class:`StepResult` carrying the
new session plus any deferred commands (draws requested while a card or
passive resolved, and the enemy turn scheduled by ``EndTurn``).  A command
that is not legal right now returns the *input* session object untouched.

Turn state machine::

    PLAYER_TURN --EndTurn--------------> ENEMY_TURN
    ENEMY_TURN  --ProcessEnemyTurn-----> PLAYER_TURN
    any         --last enemy removed---> COMBAT_END (victory)
    any         --player health <= 0---> COMBAT_END (defeat)
"""

from __future__ import annotations

import logging
from typing import Callable

from spire_combat.ir.cards import Card, CardType
from spire_combat.ir.passives import Trigger
from spire_combat.ir.status_effects import COMBAT_SCOPED_STATUSES
from spire_combat.sim.config import CombatConfig
from spire_combat.sim.content.registry import ContentRegistry
from spire_combat.sim.core.commands import (
    COMMAND_TYPES,
    Command,
    DrawCards,
    EndTurn,
    PlayCard,
    ProcessEnemyTurn,
    StepResult,
)
from spire_combat.sim.core.entities import Enemy, Player
from spire_combat.sim.core.game_state import CombatOutcome, CombatSession, TurnPhase
from spire_combat.sim.core.ids import IdAllocator
from spire_combat.sim.core.rng import GameRNG
from spire_combat.sim.dungeon.rewards import generate_combat_reward
from spire_combat.sim.enemy_ai import EnemyAI
from spire_combat.sim.interpreter import EffectInterpreter
from spire_combat.sim.mechanics.block import reset_block
from spire_combat.sim.mechanics.card_piles import discard_hand, draw_cards
from spire_combat.sim.mechanics.energy import reset_energy
from spire_combat.sim.mechanics.status_effects import (
    clear_combat_statuses,
    process_status_effects,
)
from spire_combat.sim.triggers import TriggerContext, TriggerDispatcher

logger = logging.getLogger(__name__)


def _draws(count: int) -> list[Command]:
    return [DrawCards(count=count)] if count > 0 else []


class CombatEngine:
    """Pure-transition combat engine.

    Parameters
    ----------
    registry:
        Loaded content, for power card definitions, default enemy moves and
        reward generation.
    rng:
        Random source for shuffles, intent selection, upgrade targets and
        rewards.
    ids:
        Id allocator for cards created mid-combat and reward cards.
    config:
        Engine tunables.  Defaults reproduce the reference game.
    reward_rng:
        Separate stream for victory rewards.  Defaults to *rng*.
    """

    def __init__(
        self,
        registry: ContentRegistry,
        rng: GameRNG,
        ids: IdAllocator | None = None,
        config: CombatConfig | None = None,
        reward_rng: GameRNG | None = None,
    ) -> None:
        self.registry = registry
        self.rng = rng
        self.reward_rng = reward_rng or rng
        self.ids = ids or IdAllocator()
        self.config = config or CombatConfig()
        self.interpreter = EffectInterpreter(rng, self.ids, self.config.energy_cap_bonus)
        self.triggers = TriggerDispatcher(self.interpreter)
        self.enemy_ai = EnemyAI(self.interpreter, rng, registry.default_moves())

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def start_combat(
        self,
        player: Player,
        deck: list[Card],
        enemies: list[Enemy],
        elite: bool = False,
    ) -> StepResult:
        """Build the opening session of a combat.

        The deck is shuffled into the draw pile, block and energy are
        reset, combat-start passives fire, every enemy declares its first
        intent and the opening hand is drawn.
        """
        session = CombatSession(
            player=player.model_copy(deep=True),
            enemies=[e.model_copy(deep=True) for e in enemies],
            draw_pile=[c.model_copy(deep=True) for c in deck],
            is_elite=elite,
        )
        self.rng.shuffle(session.draw_pile)

        player = session.player
        player.power_cards = []
        reset_block(player)
        reset_energy(player)
        for enemy in session.enemies:
            reset_block(enemy)

        logger.info(
            "Combat start: %s vs %s (elite=%s)",
            player.name,
            [e.id for e in session.enemies],
            elite,
        )

        context = self.triggers.process_effects(Trigger.COMBAT_START, session)
        session.remove_dead_enemies()
        if not session.enemies:
            self._win(session)
            return StepResult(session=session)

        for enemy in session.enemies:
            self.enemy_ai.determine_intent(enemy)
        draw_cards(session, self.config.hand_size, self.rng)
        return StepResult(session=session, deferred=_draws(context.cards_to_draw))

    def step(self, session: CombatSession, command: Command) -> StepResult:
        """Apply one command and return the committed session."""
        handler = _HANDLERS[type(command)]
        return handler(self, session, command)

    # ------------------------------------------------------------------
    # Command handlers
    # ------------------------------------------------------------------

    def _play_card(self, session: CombatSession, command: PlayCard) -> StepResult:
        if session.current_turn != TurnPhase.PLAYER_TURN:
            logger.debug("Ignoring PlayCard outside the player turn (%s)", session.current_turn.value)
            return StepResult(session=session)
        card = session.find_in_hand(command.card_id)
        if card is None:
            logger.debug("Ignoring PlayCard: %s is not in hand", command.card_id)
            return StepResult(session=session)
        if not card.is_x_cost and session.player.energy < card.cost:
            logger.debug(
                "Ignoring PlayCard: %s costs %s, energy is %d",
                card.id,
                card.cost,
                session.player.energy,
            )
            return StepResult(session=session)

        new = session.model_copy(deep=True)
        card = new.find_in_hand(command.card_id)
        draws = self.interpreter.play_card(new, card, command.target_id)
        if draws is None:
            return StepResult(session=session)

        context = TriggerContext(card=card)
        if card.type == CardType.POWER:
            self._attach_power(new, card, context)
        if not new.player.is_dead:
            self.triggers.process_effects(Trigger.CARD_PLAYED, new, context)

        if self._check_combat_end(new):
            return StepResult(session=new)
        return StepResult(session=new, deferred=_draws(draws + context.cards_to_draw))

    def _end_turn(self, session: CombatSession, command: EndTurn) -> StepResult:
        if session.current_turn != TurnPhase.PLAYER_TURN:
            logger.debug("Ignoring EndTurn outside the player turn (%s)", session.current_turn.value)
            return StepResult(session=session)

        new = session.model_copy(deep=True)
        discard_hand(new)
        # Block stays up through the enemy turn.
        context = self.triggers.process_effects(Trigger.TURN_END, new)
        if self._check_combat_end(new):
            return StepResult(session=new)

        new.current_turn = TurnPhase.ENEMY_TURN
        deferred = _draws(context.cards_to_draw)
        if self.config.auto_process_enemy_turn:
            deferred.append(ProcessEnemyTurn())
        return StepResult(session=new, deferred=deferred)

    def _process_enemy_turn(
        self,
        session: CombatSession,
        command: ProcessEnemyTurn,
    ) -> StepResult:
        if session.current_turn != TurnPhase.ENEMY_TURN:
            logger.debug(
                "Ignoring ProcessEnemyTurn outside the enemy turn (%s)",
                session.current_turn.value,
            )
            return StepResult(session=session)

        new = session.model_copy(deep=True)
        player = new.player

        # -- status decay ----------------------------------------------------
        for enemy in new.enemies:
            process_status_effects(enemy)
        new.remove_dead_enemies()
        process_status_effects(player)
        if self._check_combat_end(new):
            return StepResult(session=new)

        # -- turn boundary ---------------------------------------------------
        for enemy in new.enemies:
            reset_block(enemy)
        reset_block(player)
        reset_energy(player)
        new.turn += 1

        context = self.triggers.process_effects(Trigger.TURN_START, new)
        if self._check_combat_end(new):
            return StepResult(session=new)
        pending_draws = context.cards_to_draw

        # -- enemy actions ---------------------------------------------------
        for enemy in list(new.enemies):
            if enemy.is_dead:
                continue
            lost = self.enemy_ai.execute_intent(new, enemy)
            if player.is_dead:
                self._lose(new)
                return StepResult(session=new)
            if lost > 0:
                damage_context = TriggerContext(damage=lost, attacker_id=enemy.id)
                self.triggers.process_effects(Trigger.DAMAGE_TAKEN, new, damage_context)
                pending_draws += damage_context.cards_to_draw
                new.remove_dead_enemies()
            if not enemy.is_dead:
                self.enemy_ai.determine_intent(enemy)

        if self._check_combat_end(new):
            return StepResult(session=new)

        new.current_turn = TurnPhase.PLAYER_TURN
        draw_cards(new, self.config.hand_size, self.rng)
        return StepResult(session=new, deferred=_draws(pending_draws))

    def _draw_cards(self, session: CombatSession, command: DrawCards) -> StepResult:
        if session.is_over or command.count == 0:
            return StepResult(session=session)
        new = session.model_copy(deep=True)
        draw_cards(new, command.count, self.rng)
        return StepResult(session=new)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _attach_power(
        self,
        session: CombatSession,
        card: Card,
        context: TriggerContext,
    ) -> None:
        """Attach the standing half of a Power card and fire its on-play effects."""
        power = self.registry.get_power_card(card.base_id)
        if power is None:
            logger.warning("Power card %s has no power definition", card.base_id)
            return
        power = power.model_copy(deep=True)
        session.player.power_cards.append(power)
        # A card with its own effect list already did its on-play work.
        if not card.effects:
            self.triggers.fire_power(power, Trigger.COMBAT_START, session, context)

    def _check_combat_end(self, session: CombatSession) -> bool:
        """Finish the combat if either side is out; return True if it ended."""
        if session.player.is_dead:
            self._lose(session)
            return True
        session.remove_dead_enemies()
        if not session.enemies:
            self._win(session)
            return True
        return False

    def _win(self, session: CombatSession) -> None:
        player = session.player
        session.current_turn = TurnPhase.COMBAT_END
        session.outcome = CombatOutcome.VICTORY
        clear_combat_statuses(player, COMBAT_SCOPED_STATUSES)
        player.power_cards = []
        session.reward = generate_combat_reward(
            self.registry,
            self.reward_rng,
            self.ids,
            player,
            elite=session.is_elite,
            config=self.config,
        )
        logger.info(
            "Combat won on turn %d: +%d gold, %d card offers",
            session.turn,
            session.reward.gold,
            len(session.reward.card_rewards),
        )

    def _lose(self, session: CombatSession) -> None:
        session.player.health = 0
        session.current_turn = TurnPhase.COMBAT_END
        session.outcome = CombatOutcome.DEFEAT
        logger.info("Combat lost on turn %d", session.turn)


# ------------------------------------------------------------------
# Dispatch table -- maps Command type -> handler method
# ------------------------------------------------------------------

_HANDLERS: dict[type, Callable[..., StepResult]] = {
    PlayCard: CombatEngine._play_card,
    EndTurn: CombatEngine._end_turn,
    ProcessEnemyTurn: CombatEngine._process_enemy_turn,
    DrawCards: CombatEngine._draw_cards,
}

_missing = set(COMMAND_TYPES) - set(_HANDLERS)
if _missing:
    raise RuntimeError(
        f"CombatEngine has no handler for: {sorted(t.__name__ for t in _missing)}"
    )
