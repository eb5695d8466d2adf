"""Commands accepted by the combat engine, and the deferred-command queue.

External callers issue :class:`PlayCard`, :class:`EndTurn` and
:class:`ProcessEnemyTurn`.  :class:`DrawCards` is only produced by the
engine itself: draws requested while a card resolves are deferred until
that card's state has been committed, then flushed from a
:class:`CommandQueue`.
"""

from __future__ import annotations

from collections import deque
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from spire_combat.sim.core.game_state import CombatSession


# ---------------------------------------------------------------------------
# Commands (tagged union on ``kind``)
# ---------------------------------------------------------------------------

class PlayCard(BaseModel):
    kind: Literal["play_card"] = "play_card"
    card_id: str
    """Instance id of a card in hand."""

    target_id: str | None = None
    """Instance id of the targeted enemy, for single-target effects."""


class EndTurn(BaseModel):
    kind: Literal["end_turn"] = "end_turn"


class ProcessEnemyTurn(BaseModel):
    kind: Literal["process_enemy_turn"] = "process_enemy_turn"


class DrawCards(BaseModel):
    kind: Literal["draw_cards"] = "draw_cards"
    count: int = Field(ge=0)


Command = Annotated[
    Union[PlayCard, EndTurn, ProcessEnemyTurn, DrawCards],
    Field(discriminator="kind"),
]

COMMAND_TYPES: tuple[type[BaseModel], ...] = (PlayCard, EndTurn, ProcessEnemyTurn, DrawCards)


# ---------------------------------------------------------------------------
# StepResult
# ---------------------------------------------------------------------------

class StepResult(BaseModel):
    """Result of applying one command: the committed session plus any
    follow-up commands to run after it, in order."""

    session: CombatSession
    deferred: list[Command] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# CommandQueue
# ---------------------------------------------------------------------------

class CommandQueue:
    """FIFO queue of deferred commands with front-insertion support.

    This is a plain Python class (not a Pydantic model) because it holds
    mutable internal state that should not be serialized.
    """

    def __init__(self) -> None:
        self._queue: deque[Command] = deque()

    # -- mutations -----------------------------------------------------------

    def push(self, command: Command) -> None:
        """Append *command* to the back of the queue."""
        self._queue.append(command)

    def push_front(self, commands: list[Command]) -> None:
        """Insert *commands* ahead of everything queued, keeping their order.

        Follow-ups produced by a command must run before commands that were
        already waiting.
        """
        for command in reversed(commands):
            self._queue.appendleft(command)

    def pop(self) -> Command | None:
        """Remove and return the next command, or ``None`` if empty."""
        if self._queue:
            return self._queue.popleft()
        return None

    def clear(self) -> None:
        self._queue.clear()

    # -- queries -------------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return len(self._queue) == 0

    def __len__(self) -> int:
        return len(self._queue)

    def __repr__(self) -> str:
        return f"CommandQueue(length={len(self._queue)})"
