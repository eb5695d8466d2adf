"""Shared fixtures and helpers for simulation tests."""

from __future__ import annotations

from typing import Any

import pytest

from spire_combat.ir.cards import Card, CardRarity, CardType
from spire_combat.ir.effects import CardEffect
from spire_combat.sim.content.registry import ContentRegistry
from spire_combat.sim.core.entities import Enemy, Player
from spire_combat.sim.core.game_state import CombatSession


@pytest.fixture(scope="module")
def registry() -> ContentRegistry:
    """Module-scoped registry with the bundled content loaded once."""
    reg = ContentRegistry()
    reg.load_all()
    return reg


class StubRNG:
    """Deterministic stand-in for GameRNG.

    ``weighted_index`` and ``random_choice`` return the queued picks in
    order (index 0 once the queue is empty); ``shuffle`` leaves lists
    untouched.
    """

    def __init__(self, picks: list[int] | None = None) -> None:
        self.picks = list(picks or [])
        self.weights_seen: list[list[float]] = []

    def _next(self) -> int:
        return self.picks.pop(0) if self.picks else 0

    def weighted_index(self, weights) -> int:
        self.weights_seen.append(list(weights))
        return self._next()

    def random_choice(self, seq):
        return seq[self._next()]

    def random_int(self, low: int, high: int) -> int:
        return low

    def sample(self, seq, k: int):
        return list(seq)[:k]

    def shuffle(self, lst) -> None:
        return None


def make_player(**kwargs: Any) -> Player:
    defaults: dict[str, Any] = dict(health=80, max_health=80, energy=3, max_energy=3)
    defaults.update(kwargs)
    return Player(**defaults)


def make_enemy(enemy_id: str = "jaw_worm-1", **kwargs: Any) -> Enemy:
    defaults: dict[str, Any] = dict(
        id=enemy_id,
        enemy_id=enemy_id.rsplit("-", 1)[0],
        name="Jaw Worm",
        health=44,
        max_health=44,
    )
    defaults.update(kwargs)
    return Enemy(**defaults)


def make_card(card_id: str = "strike-1", **kwargs: Any) -> Card:
    base_id = kwargs.pop("base_id", card_id.rsplit("-", 1)[0])
    defaults: dict[str, Any] = dict(
        id=card_id,
        base_id=base_id,
        name=base_id.replace("_", " ").title(),
        cost=1,
        type=CardType.ATTACK,
        rarity=CardRarity.COMMON,
        description="",
    )
    defaults.update(kwargs)
    if "effects" in defaults and defaults["effects"] is not None:
        defaults["effects"] = [
            e if isinstance(e, CardEffect) else CardEffect(**e) for e in defaults["effects"]
        ]
    return Card(**defaults)


def make_session(
    player: Player | None = None,
    enemies: list[Enemy] | None = None,
    hand: list[Card] | None = None,
    **kwargs: Any,
) -> CombatSession:
    return CombatSession(
        player=player or make_player(),
        enemies=enemies if enemies is not None else [make_enemy()],
        hand=hand or [],
        **kwargs,
    )
