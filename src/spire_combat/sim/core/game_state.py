"""Combat session and run state.

``CombatSession`` is the single value the engine transforms: one command in,
one new session out.  ``RunState`` is the thin map-level wrapper that owns
the deck between combats.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from spire_combat.ir.cards import Card
from spire_combat.ir.relics import RelicDefinition
from spire_combat.sim.core.entities import Enemy, Player


# ---------------------------------------------------------------------------
# Phases and outcomes
# ---------------------------------------------------------------------------

class TurnPhase(str, Enum):
    PLAYER_TURN = "player_turn"
    ENEMY_TURN = "enemy_turn"
    COMBAT_END = "combat_end"


class CombatOutcome(str, Enum):
    VICTORY = "victory"
    DEFEAT = "defeat"


class GamePhase(str, Enum):
    """Map-level screen the run is on."""

    MAP = "map"
    COMBAT = "combat"
    CARD_REWARD = "card_reward"
    RELIC_REWARD = "relic_reward"
    GAME_OVER = "game_over"


# ---------------------------------------------------------------------------
# CombatReward
# ---------------------------------------------------------------------------

class CombatReward(BaseModel):
    """What the player earns for winning a combat."""

    gold: int = 0
    """Already credited to the player when the reward is generated."""

    card_rewards: list[Card] = Field(default_factory=list)
    """Card offers; the player may take one or skip."""

    relic_reward: RelicDefinition | None = None
    """Offered only after an elite encounter."""


# ---------------------------------------------------------------------------
# CombatSession
# ---------------------------------------------------------------------------

class CombatSession(BaseModel):
    """Complete state of a single combat.

    Pile order: index 0 of ``draw_pile`` is the top of the pile.
    """

    player: Player
    enemies: list[Enemy] = Field(default_factory=list)
    hand: list[Card] = Field(default_factory=list)
    draw_pile: list[Card] = Field(default_factory=list)
    discard_pile: list[Card] = Field(default_factory=list)
    exhaust_pile: list[Card] = Field(default_factory=list)
    current_turn: TurnPhase = TurnPhase.PLAYER_TURN
    first_attack_this_combat: bool = True
    turn: int = 1
    """Player turn number, starting at 1."""

    is_elite: bool = False
    outcome: CombatOutcome | None = None
    reward: CombatReward | None = None
    spent_passives: list[str] = Field(default_factory=list)
    """Keys of once-per-combat passive effects that already fired."""

    # -- queries -------------------------------------------------------------

    @property
    def is_over(self) -> bool:
        return self.current_turn == TurnPhase.COMBAT_END

    @property
    def living_enemies(self) -> list[Enemy]:
        return [e for e in self.enemies if not e.is_dead]

    def get_enemy(self, enemy_id: str | None) -> Enemy | None:
        """Return the living enemy with *enemy_id*, or ``None``."""
        if enemy_id is None:
            return None
        for enemy in self.enemies:
            if enemy.id == enemy_id and not enemy.is_dead:
                return enemy
        return None

    def find_in_hand(self, card_id: str) -> Card | None:
        for card in self.hand:
            if card.id == card_id:
                return card
        return None

    @property
    def all_cards(self) -> list[Card]:
        """Every card owned this combat, across all four piles."""
        return self.hand + self.draw_pile + self.discard_pile + self.exhaust_pile

    @property
    def deck_size(self) -> int:
        return (
            len(self.hand)
            + len(self.draw_pile)
            + len(self.discard_pile)
            + len(self.exhaust_pile)
        )

    def remove_dead_enemies(self) -> list[Enemy]:
        """Drop enemies at 0 health; return the ones removed."""
        dead = [e for e in self.enemies if e.is_dead]
        if dead:
            self.enemies = [e for e in self.enemies if not e.is_dead]
        return dead


# ---------------------------------------------------------------------------
# RunState
# ---------------------------------------------------------------------------

class RunState(BaseModel):
    """Map-level state that outlives any single combat."""

    player: Player
    deck: list[Card] = Field(default_factory=list)
    """The card pool while no combat is active.  Empty during combat."""

    phase: GamePhase = GamePhase.MAP
    floor: int = 0
    combat: CombatSession | None = None
    reward: CombatReward | None = None
