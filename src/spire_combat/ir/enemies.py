"""Enemy templates and their monster-move decks."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from .effects import DAMAGE_EFFECTS, CardEffect, EffectType


class MoveType(str, Enum):
    """Category of a monster move; drives the health-ratio policy."""

    ATTACK = "attack"
    DEFEND = "defend"
    BUFF = "buff"
    DEBUFF = "debuff"
    SPECIAL = "special"


class MonsterCard(BaseModel):
    """One move in an enemy's deck.

    Effects are written from the enemy's point of view: ``ENEMY`` and
    ``ALL_ENEMIES`` land on the player, ``SELF`` on the acting enemy.
    """

    id: str
    name: str
    type: MoveType
    description: str = ""
    damage: int | None = None
    block: int | None = None
    priority: int = 1
    """Selection weight.  Higher means more likely."""

    effects: list[CardEffect] = Field(default_factory=list)

    @property
    def has_damage_effect(self) -> bool:
        return any(e.type in DAMAGE_EFFECTS for e in self.effects)

    @property
    def has_block_effect(self) -> bool:
        return any(e.type == EffectType.BLOCK for e in self.effects)


class EnemyDefinition(BaseModel):
    """Static template for an enemy type."""

    id: str
    name: str
    max_health: int
    moves: list[MonsterCard] = Field(default_factory=list)
    """Move deck.  Empty means "use the default move set"."""

    boss: bool = False
    act: int = 1
