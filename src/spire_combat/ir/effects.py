"""Card effects -- the primitive, declarative building blocks of every card.

A card's ``effects`` list is an ordered sequence of :class:`CardEffect`
entries.  The resolver applies them strictly in list order, so a card that
deals damage and *then* applies Vulnerable does not benefit from its own
debuff.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from .status_effects import StatusType


class EffectType(str, Enum):
    """Every primitive effect a card (or monster move) can declare."""

    DAMAGE = "damage"
    DAMAGE_MULTIPLIER_BLOCK = "damage_multiplier_block"
    DAMAGE_MULTIPLIER_ENERGY = "damage_multiplier_energy"
    BLOCK = "block"
    HEAL = "heal"
    DRAW_CARDS = "draw_cards"
    GAIN_ENERGY = "gain_energy"
    LOSE_ENERGY = "lose_energy"
    APPLY_STATUS = "apply_status"
    ADD_CARD_TO_DISCARD = "add_card_to_discard"
    UPGRADE_CARD = "upgrade_card"


class EffectTarget(str, Enum):
    """Who an effect lands on, seen from the side that plays it."""

    SELF = "self"
    ENEMY = "enemy"
    ALL_ENEMIES = "all_enemies"


class CardEffect(BaseModel):
    """A single declarative effect on a card or monster move."""

    type: EffectType
    """Which primitive this effect represents."""

    value: int = Field(default=0, ge=0)
    """Damage, block, heal, card count, energy amount or status stacks."""

    target: EffectTarget = EffectTarget.SELF
    """Self, the chosen enemy, or every living enemy."""

    multiplier: int | None = None
    """Scaling factor for ``DAMAGE_MULTIPLIER_BLOCK`` (block x multiplier) and
    ``DAMAGE_MULTIPLIER_ENERGY`` (hits per energy spent).  ``None`` means 1."""

    status_type: StatusType | None = None
    """Status applied by ``APPLY_STATUS``."""

    @property
    def effective_multiplier(self) -> int:
        return 1 if self.multiplier is None else self.multiplier

    @property
    def is_damage(self) -> bool:
        return self.type in DAMAGE_EFFECTS


DAMAGE_EFFECTS: frozenset[EffectType] = frozenset({
    EffectType.DAMAGE,
    EffectType.DAMAGE_MULTIPLIER_BLOCK,
    EffectType.DAMAGE_MULTIPLIER_ENERGY,
})
"""Effect types that count as "the card deals damage" for the legacy
``damage`` scalar fallback check."""
