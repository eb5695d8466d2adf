"""Damage calculation and application.

Implements the damage pipeline:
    base + strength -> + first-attack bonus -> weak (x0.75, floor)
    -> vulnerable (x1.5, floor) -> floor at 0

Then applies it to the target: block is consumed by the full hit, the
remainder comes off health, and health never goes below 0.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from pydantic import BaseModel

from spire_combat.ir.status_effects import StatusType

from .status_effects import get_status_stacks, has_status

if TYPE_CHECKING:
    from spire_combat.sim.core.entities import Combatant

WEAK_MULTIPLIER = 0.75
VULNERABLE_MULTIPLIER = 1.5


class DamageResult(BaseModel):
    """Outcome of a single hit."""

    final_damage: int = 0
    """Damage after modifiers, before block."""

    damage_after_block: int = 0
    actual_damage_dealt: int = 0
    """Health actually removed (never more than the target had)."""


def calculate_damage(
    base: int,
    source: Combatant,
    target: Combatant,
    is_first_attack: bool = False,
) -> int:
    """Calculate final damage after all modifiers.

    Pipeline (order matters):
        1. Add source's Strength
        2. If *is_first_attack*, add the source's first-attack relic bonus
        3. If source is Weak: multiply by 0.75 (floor)
        4. If target is Vulnerable: multiply by 1.5 (floor)
        5. Floor at 0
    """
    damage = base + get_status_stacks(source, StatusType.STRENGTH)

    if is_first_attack:
        damage += first_attack_bonus(source)

    if has_status(source, StatusType.WEAK):
        damage = math.floor(damage * WEAK_MULTIPLIER)

    if has_status(target, StatusType.VULNERABLE):
        damage = math.floor(damage * VULNERABLE_MULTIPLIER)

    return max(0, int(damage))


def first_attack_bonus(source: Combatant) -> int:
    """Sum of first-attack bonuses on the relics *source* owns (Akabeko)."""
    return sum(relic.first_attack_bonus for relic in getattr(source, "relics", []))


def apply_damage(target: Combatant, final_damage: int) -> DamageResult:
    """Apply an already-calculated hit to *target*.

    Block is reduced by the whole hit, not by what got through, and health
    is clamped at 0.
    """
    final_damage = max(0, final_damage)
    damage_after_block = max(0, final_damage - target.block)
    target.block = max(0, target.block - final_damage)
    actual = min(damage_after_block, max(0, target.health))
    target.health = max(0, target.health - damage_after_block)
    return DamageResult(
        final_damage=final_damage,
        damage_after_block=damage_after_block,
        actual_damage_dealt=actual,
    )


def deal_damage(
    source: Combatant,
    target: Combatant,
    base_damage: int,
    is_first_attack: bool = False,
) -> DamageResult:
    """Run the full pipeline for one hit from *source* to *target*.

    A hit on an already-dead target does nothing.
    """
    if target.is_dead:
        return DamageResult()
    final = calculate_damage(base_damage, source, target, is_first_attack)
    return apply_damage(target, final)
