"""Combat session controller -- owns the live session and the command queue.

The controller is the only holder of the current :class:`CombatSession`.
Every external action goes through :meth:`CombatController.dispatch`,
which steps the engine once, commits the resulting session, then flushes
the deferred commands that step produced before accepting anything else.
Callers only ever see committed sessions.

Usage::

    controller = CombatController(engine)
    controller.start_combat(player, deck, enemies)
    controller.play_card(controller.session.hand[0].id, target_id="cultist-1")
    controller.end_turn()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from spire_combat.sim.core.commands import (
    Command,
    CommandQueue,
    EndTurn,
    PlayCard,
    ProcessEnemyTurn,
)

if TYPE_CHECKING:
    from spire_combat.ir.cards import Card
    from spire_combat.sim.core.entities import Enemy, Player
    from spire_combat.sim.core.game_state import CombatSession
    from spire_combat.sim.engine import CombatEngine

logger = logging.getLogger(__name__)


class CombatController:
    """Drives one combat at a time through a :class:`CombatEngine`."""

    def __init__(self, engine: CombatEngine) -> None:
        self.engine = engine
        self.queue = CommandQueue()
        self._session: CombatSession | None = None
        self.history: list[Command] = []
        """Every command applied to the current session, deferred ones included."""

    @property
    def session(self) -> CombatSession:
        """The committed session.

        Raises
        ------
        RuntimeError
            If no combat has been started.
        """
        if self._session is None:
            raise RuntimeError("No active combat; call start_combat() first")
        return self._session

    @property
    def has_session(self) -> bool:
        return self._session is not None

    def start_combat(
        self,
        player: Player,
        deck: list[Card],
        enemies: list[Enemy],
        elite: bool = False,
    ) -> CombatSession:
        """Open a new combat, replacing any previous session."""
        self.queue.clear()
        self.history = []
        result = self.engine.start_combat(player, deck, enemies, elite=elite)
        self._session = result.session
        self.queue.push_front(result.deferred)
        self._flush()
        return self._session

    def load(self, session: CombatSession) -> None:
        """Adopt an existing session, e.g. one restored from JSON."""
        self.queue.clear()
        self.history = []
        self._session = session

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def dispatch(self, command: Command) -> CombatSession:
        """Apply *command* and everything it defers; return the new session."""
        session = self.session
        if session.is_over:
            logger.debug("Combat is over; ignoring %s", command.kind)
            return session
        self._apply(session, command)
        self._flush()
        return self.session

    def play_card(self, card_id: str, target_id: str | None = None) -> CombatSession:
        return self.dispatch(PlayCard(card_id=card_id, target_id=target_id))

    def end_turn(self) -> CombatSession:
        return self.dispatch(EndTurn())

    def process_enemy_turn(self) -> CombatSession:
        return self.dispatch(ProcessEnemyTurn())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _apply(self, session: CombatSession, command: Command) -> None:
        result = self.engine.step(session, command)
        self._session = result.session
        self.history.append(command)
        self.queue.push_front(result.deferred)

    def _flush(self) -> None:
        while not self.queue.is_empty:
            command = self.queue.pop()
            self._apply(self.session, command)
