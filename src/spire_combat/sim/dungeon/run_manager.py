"""Run manager -- the map-level seam around combat.

Owns the persistent run state (health, gold, deck, relics) between combat
encounters.  Starting a combat moves the whole deck into the new session's
draw pile; when the combat ends every permanent card folds back into
``run.deck`` and the player's state is carried over.  Rewards are then
offered one screen at a time:

    COMBAT -> CARD_REWARD -> RELIC_REWARD (elite only) -> MAP
    COMBAT -> GAME_OVER (defeat)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from spire_combat.ir.cards import Card
from spire_combat.sim.config import CombatConfig
from spire_combat.sim.controller import CombatController
from spire_combat.sim.core.entities import Player
from spire_combat.sim.core.game_state import (
    CombatOutcome,
    CombatSession,
    GamePhase,
    RunState,
)
from spire_combat.sim.core.ids import IdAllocator
from spire_combat.sim.dungeon.encounters import (
    boss_for_floor,
    build_encounter,
    random_encounter,
)
from spire_combat.sim.engine import CombatEngine
from spire_combat.sim.mechanics.block import reset_block
from spire_combat.sim.mechanics.card_piles import collect_deck

if TYPE_CHECKING:
    from spire_combat.sim.content.registry import ContentRegistry
    from spire_combat.sim.core.commands import Command
    from spire_combat.sim.core.rng import GameRNG

logger = logging.getLogger(__name__)


class RunManager:
    """Drives the map-level flow of a run around individual combats.

    Parameters
    ----------
    registry:
        The content registry with all game data loaded.
    rng:
        Master RNG for the run.  Forked into ``"combat"``, ``"rewards"``
        and ``"encounters"`` streams.
    config:
        Starting stats, reward tables and engine tunables.
    ids:
        Id allocator shared by every card and enemy created in the run.
    """

    def __init__(
        self,
        registry: ContentRegistry,
        rng: GameRNG,
        config: CombatConfig | None = None,
        ids: IdAllocator | None = None,
    ) -> None:
        self.registry = registry
        self.rng = rng
        self.config = config or CombatConfig()
        self.ids = ids or IdAllocator()
        self.encounter_rng = rng.fork("encounters")
        self.engine = CombatEngine(
            registry,
            rng.fork("combat"),
            self.ids,
            self.config,
            reward_rng=rng.fork("rewards"),
        )
        self.controller = CombatController(self.engine)

    # ------------------------------------------------------------------
    # Run lifecycle
    # ------------------------------------------------------------------

    def new_run(self) -> RunState:
        """Create a fresh run: starting stats, starter deck, starter relic."""
        config = self.config
        player = Player(
            health=config.starting_health,
            max_health=config.starting_health,
            energy=config.starting_energy,
            max_energy=config.starting_energy,
            gold=config.starting_gold,
        )
        if config.starter_relic is not None:
            relic = self.registry.get_relic(config.starter_relic)
            if relic is None:
                logger.warning("Unknown starter relic %r; starting without one", config.starter_relic)
            else:
                player.relics.append(relic.model_copy(deep=True))
        deck = self.registry.create_starter_deck(self.ids)
        logger.info("New run: %d cards, relics=%s", len(deck), [r.id for r in player.relics])
        return RunState(player=player, deck=deck)

    def start_combat(
        self,
        run: RunState,
        enemy_ids: list[str] | None = None,
        elite: bool = False,
        boss: bool = False,
    ) -> CombatSession:
        """Enter a combat node.

        Parameters
        ----------
        run:
            The run, which must be on the map.
        enemy_ids:
            Explicit roster.  If omitted a random encounter is rolled.
        elite:
            Scale enemy health and add a relic to the reward.
        boss:
            Fight the boss for ``run.floor`` instead of *enemy_ids*.

        Raises
        ------
        RuntimeError
            If the run is not on the map.
        KeyError
            If *enemy_ids* names an unknown enemy.
        """
        self._require_phase(run, GamePhase.MAP)
        if boss:
            enemies = [boss_for_floor(self.registry, run.floor, self.encounter_rng, self.ids)]
        else:
            if enemy_ids is None:
                enemy_ids = random_encounter(self.registry, self.encounter_rng, elite=elite)
            enemies = build_encounter(self.registry, enemy_ids, self.ids, elite=elite, config=self.config)

        session = self.controller.start_combat(run.player, run.deck, enemies, elite=elite)
        run.deck = []
        run.combat = session
        run.phase = GamePhase.COMBAT
        if session.is_over:
            self._finish_combat(run)
        return session

    def dispatch(self, run: RunState, command: Command) -> RunState:
        """Forward a combat command; settle the combat once it ends.

        Raises
        ------
        RuntimeError
            If the run has no active combat.
        """
        self._require_phase(run, GamePhase.COMBAT)
        run.combat = self.controller.dispatch(command)
        if run.combat.is_over:
            self._finish_combat(run)
        return run

    # ------------------------------------------------------------------
    # Rewards and deck services
    # ------------------------------------------------------------------

    def select_card_reward(self, run: RunState, card_id: str) -> Card:
        """Add the offered card *card_id* to the deck.

        Raises
        ------
        ValueError
            If *card_id* is not among the offers.
        """
        self._require_phase(run, GamePhase.CARD_REWARD)
        offers = run.reward.card_rewards if run.reward is not None else []
        for card in offers:
            if card.id == card_id:
                run.deck.append(card)
                logger.info("Took card reward %s", card.name)
                self._after_card_reward(run)
                return card
        raise ValueError(f"Card {card_id!r} is not a reward offer")

    def skip_card_reward(self, run: RunState) -> None:
        self._require_phase(run, GamePhase.CARD_REWARD)
        self._after_card_reward(run)

    def take_relic_reward(self, run: RunState) -> None:
        self._require_phase(run, GamePhase.RELIC_REWARD)
        relic = run.reward.relic_reward if run.reward is not None else None
        if relic is not None:
            run.player.relics.append(relic)
            logger.info("Took relic %s", relic.name)
        self._return_to_map(run)

    def skip_relic_reward(self, run: RunState) -> None:
        self._require_phase(run, GamePhase.RELIC_REWARD)
        self._return_to_map(run)

    def remove_card(self, run: RunState, card_id: str) -> Card:
        """Remove one card from the deck (card removal service).

        Raises
        ------
        RuntimeError
            If a combat is in progress.
        ValueError
            If the deck has no card with that id.
        """
        if run.phase == GamePhase.COMBAT:
            raise RuntimeError("Cannot remove cards during combat")
        for i, card in enumerate(run.deck):
            if card.id == card_id:
                del run.deck[i]
                return card
        raise ValueError(f"Card {card_id!r} not found in deck")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _finish_combat(self, run: RunState) -> None:
        session = run.combat
        run.deck = collect_deck(session)
        run.player = session.player.model_copy(deep=True)
        reset_block(run.player)
        run.player.energy = run.player.max_energy
        run.combat = None

        if session.outcome == CombatOutcome.DEFEAT:
            run.phase = GamePhase.GAME_OVER
            logger.info("Game over on floor %d", run.floor)
            return

        run.floor += 1
        run.reward = session.reward
        if run.reward is not None and run.reward.card_rewards:
            run.phase = GamePhase.CARD_REWARD
        else:
            self._after_card_reward(run)

    def _after_card_reward(self, run: RunState) -> None:
        if run.reward is not None and run.reward.relic_reward is not None:
            run.phase = GamePhase.RELIC_REWARD
        else:
            self._return_to_map(run)

    def _return_to_map(self, run: RunState) -> None:
        run.reward = None
        run.phase = GamePhase.MAP

    @staticmethod
    def _require_phase(run: RunState, phase: GamePhase) -> None:
        if run.phase != phase:
            raise RuntimeError(f"Run is in phase {run.phase.value!r}, expected {phase.value!r}")
