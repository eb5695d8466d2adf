"""Status effects -- stacking modifiers attached to a combatant."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class StatusType(str, Enum):
    """Built-in status effects."""

    POISON = "poison"
    WEAK = "weak"
    VULNERABLE = "vulnerable"
    STRENGTH = "strength"
    DEXTERITY = "dexterity"


DECAYING_STATUSES: frozenset[StatusType] = frozenset({
    StatusType.POISON,
    StatusType.WEAK,
    StatusType.VULNERABLE,
})
"""Duration-based statuses: their stacks tick down by one each turn."""

COMBAT_SCOPED_STATUSES: frozenset[StatusType] = frozenset({
    StatusType.WEAK,
    StatusType.VULNERABLE,
    StatusType.STRENGTH,
})
"""Statuses stripped from the player when a combat is won."""


class StatusEffect(BaseModel):
    """One active status on a combatant.

    For duration-based types the stack count *is* the number of turns left,
    so :attr:`duration` mirrors ``stacks``.  Persistent types (Strength,
    Dexterity) have no duration.
    """

    type: StatusType
    stacks: int = Field(ge=1)

    @property
    def duration(self) -> int | None:
        if self.type in DECAYING_STATUSES:
            return self.stacks
        return None

    @property
    def decays(self) -> bool:
        return self.type in DECAYING_STATUSES
