"""Card templates and instances.

A :class:`Card` read from the content data is an immutable *template*
(``id == base_id``).  Cards that live in a deck are clones of a template
with a fresh, unique ``id`` handed out by the id allocator.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel

from .effects import DAMAGE_EFFECTS, CardEffect, EffectType

X_COST = "X"
"""Cost sentinel for cards that consume all available energy."""


class CardType(str, Enum):
    """The three playable card types."""

    ATTACK = "attack"
    SKILL = "skill"
    POWER = "power"


class CardRarity(str, Enum):
    """Controls how frequently a card appears in rewards."""

    BASIC = "basic"
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"


class UpgradeDefinition(BaseModel):
    """Describes *only the deltas* that change when a card is upgraded.

    Any field left as ``None`` means "keep the base value".
    """

    cost: int | None = None
    """New energy cost after upgrade, or None to keep the base cost."""

    damage: int | None = None
    """Amount added to the legacy ``damage`` scalar."""

    block: int | None = None
    """Amount added to the legacy ``block`` scalar."""

    effects: list[CardEffect] | None = None
    """Replacement effect list after upgrade, or None to keep the base effects."""

    description: str | None = None
    """Replacement description text after upgrade, or None to keep the base."""


class Card(BaseModel):
    """A card template or a card instance in a deck."""

    id: str
    """Unique per instance.  Equal to ``base_id`` on templates."""

    base_id: str
    """Stable identity shared by every copy (e.g. ``'whirlwind'``)."""

    name: str
    """Display name; upgraded cards carry a trailing ``+``."""

    cost: Union[int, Literal["X"]]
    """Energy cost, or ``"X"`` to spend all remaining energy."""

    type: CardType
    rarity: CardRarity
    description: str

    damage: int | None = None
    """Legacy scalar damage, used only when no damage-type effect exists."""

    block: int | None = None
    """Legacy scalar block, used only when no block effect exists."""

    effects: list[CardEffect] | None = None
    """Ordered effect list.  Authoritative over the legacy scalars."""

    upgraded: bool = False

    upgrade: UpgradeDefinition | None = None
    """Explicit upgrade deltas.  ``None`` falls back to the generic rule."""

    # -- queries -------------------------------------------------------------

    @property
    def is_x_cost(self) -> bool:
        return self.cost == X_COST

    def has_effect(self, *types: EffectType) -> bool:
        """Return True if any effect on the card is one of *types*."""
        return any(e.type in types for e in self.effects or [])

    @property
    def has_damage_effect(self) -> bool:
        return self.has_effect(*DAMAGE_EFFECTS)

    @property
    def has_block_effect(self) -> bool:
        return self.has_effect(EffectType.BLOCK)
