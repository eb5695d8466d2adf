"""Relic definitions -- passive items that persist for the whole run."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from .passives import PassiveEffect


class RelicRarity(str, Enum):
    """Determines where and how often a relic can appear."""

    STARTER = "starter"
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    BOSS = "boss"


REWARD_RELIC_RARITIES: frozenset[RelicRarity] = frozenset({
    RelicRarity.COMMON,
    RelicRarity.UNCOMMON,
    RelicRarity.RARE,
})


class RelicDefinition(BaseModel):
    """Complete definition of a single relic."""

    id: str
    name: str
    rarity: RelicRarity
    description: str

    effects: list[PassiveEffect] = Field(default_factory=list)
    """Trigger-keyed effects, fired in list order."""

    first_attack_bonus: int = 0
    """Flat damage added to the first Attack card of each combat (Akabeko)."""
