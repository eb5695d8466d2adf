"""Combatant models for the combat engine.

All data classes use Pydantic v2 BaseModel for validation and
serialization.  Status math lives in :mod:`spire_combat.sim.mechanics`;
these models only carry state and the small helpers every caller needs.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from spire_combat.ir.enemies import MonsterCard
from spire_combat.ir.powers import PowerCardDefinition
from spire_combat.ir.relics import RelicDefinition
from spire_combat.ir.status_effects import StatusEffect, StatusType


# ---------------------------------------------------------------------------
# Combatant base
# ---------------------------------------------------------------------------

class Combatant(BaseModel):
    """Common base for anything with health, block, and status effects."""

    name: str
    health: int
    max_health: int
    block: int = 0
    status_effects: list[StatusEffect] = Field(default_factory=list)
    """Active statuses in application order.  Never holds a zero-stack entry."""

    # -- health queries ------------------------------------------------------

    @property
    def is_dead(self) -> bool:
        return self.health <= 0

    # -- status lookup -------------------------------------------------------

    def find_status(self, status_type: StatusType) -> StatusEffect | None:
        for effect in self.status_effects:
            if effect.type == status_type:
                return effect
        return None

    # -- heal ----------------------------------------------------------------

    def heal(self, amount: int) -> int:
        """Restore up to *amount* health, capped at ``max_health``.

        Returns the health actually restored.
        """
        if amount < 0:
            raise ValueError(f"heal amount must be >= 0, got {amount}")
        before = self.health
        self.health = min(self.max_health, self.health + amount)
        return self.health - before


# ---------------------------------------------------------------------------
# Player
# ---------------------------------------------------------------------------

class Player(Combatant):
    """The player character."""

    name: str = "Ironclad"
    energy: int = 3
    max_energy: int = 3
    gold: int = 0
    relics: list[RelicDefinition] = Field(default_factory=list)
    """Owned relics in acquisition order."""

    power_cards: list[PowerCardDefinition] = Field(default_factory=list)
    """Powers attached this combat, one entry per play."""

    def has_relic(self, relic_id: str) -> bool:
        return any(r.id == relic_id for r in self.relics)


# ---------------------------------------------------------------------------
# Enemy intent
# ---------------------------------------------------------------------------

class IntentType(str, Enum):
    """What an enemy telegraphs before acting."""

    ATTACK = "attack"
    DEFEND = "defend"
    BUFF = "buff"
    DEBUFF = "debuff"
    UNKNOWN = "unknown"


class EnemyIntent(BaseModel):
    """Describes what an enemy plans to do on its next turn."""

    type: IntentType = IntentType.UNKNOWN
    value: int | None = None
    """Damage for attacks, block for defends; ``None`` otherwise."""


# ---------------------------------------------------------------------------
# Enemy
# ---------------------------------------------------------------------------

class Enemy(Combatant):
    """A single enemy in combat."""

    id: str
    """Unique per instance, e.g. ``'cultist-3'``."""

    enemy_id: str
    """Template id, e.g. ``'cultist'``."""

    deck: list[MonsterCard] = Field(default_factory=list)
    """Move deck the intent selector draws from."""

    current_move: MonsterCard | None = None
    """The declared move executed on the enemy's next action step."""

    intent: EnemyIntent = Field(default_factory=EnemyIntent)

    is_elite: bool = False
