"""Content templates for the combat engine.

Cards, monster moves, relics, power cards and status effects are all
Pydantic models that load cleanly from the JSON content files.  Templates
are never mutated by the engine; it only clones them into instances.
"""

from .cards import X_COST, Card, CardRarity, CardType, UpgradeDefinition
from .effects import DAMAGE_EFFECTS, CardEffect, EffectTarget, EffectType
from .enemies import EnemyDefinition, MonsterCard, MoveType
from .passives import PassiveEffect, PassiveTarget, Trigger
from .powers import PowerCardDefinition
from .relics import REWARD_RELIC_RARITIES, RelicDefinition, RelicRarity
from .status_effects import (
    COMBAT_SCOPED_STATUSES,
    DECAYING_STATUSES,
    StatusEffect,
    StatusType,
)

__all__ = [
    # cards
    "X_COST",
    "Card",
    "CardRarity",
    "CardType",
    "UpgradeDefinition",
    # effects
    "DAMAGE_EFFECTS",
    "CardEffect",
    "EffectTarget",
    "EffectType",
    # enemies
    "EnemyDefinition",
    "MonsterCard",
    "MoveType",
    # passives
    "PassiveEffect",
    "PassiveTarget",
    "Trigger",
    # powers
    "PowerCardDefinition",
    # relics
    "REWARD_RELIC_RARITIES",
    "RelicDefinition",
    "RelicRarity",
    # status_effects
    "COMBAT_SCOPED_STATUSES",
    "DECAYING_STATUSES",
    "StatusEffect",
    "StatusType",
]
