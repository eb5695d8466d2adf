"""Passive effects shared by relics and power cards."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from .cards import CardType
from .effects import EffectType
from .status_effects import StatusType


class Trigger(str, Enum):
    """Combat events that passive effects can be keyed on."""

    COMBAT_START = "combat_start"
    TURN_START = "turn_start"
    TURN_END = "turn_end"
    CARD_PLAYED = "card_played"
    DAMAGE_TAKEN = "damage_taken"


class PassiveTarget(str, Enum):
    """Targets reachable from a passive effect owned by the player."""

    SELF = "self"
    ALL_ENEMIES = "all_enemies"
    ATTACKER = "attacker"
    """The enemy whose action fired a ``DAMAGE_TAKEN`` trigger."""


class PassiveEffect(BaseModel):
    """A single trigger-keyed effect on a relic or power card."""

    trigger: Trigger
    type: EffectType
    value: int = Field(default=0, ge=0)
    target: PassiveTarget = PassiveTarget.SELF
    status_type: StatusType | None = None

    card_type: CardType | None = None
    """For ``CARD_PLAYED``: only fire when the played card has this type."""

    on_turn: int | None = None
    """For ``TURN_START``: only fire on this turn number (1-based)."""

    once_per_combat: bool = False
    """Fire at most once per combat."""
