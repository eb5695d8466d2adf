"""Block mechanics -- calculate, gain, reset."""

from __future__ import annotations

from typing import TYPE_CHECKING

from spire_combat.ir.status_effects import StatusType

from .status_effects import get_status_stacks

if TYPE_CHECKING:
    from spire_combat.sim.core.entities import Combatant


def calculate_block(base: int, source: Combatant) -> int:
    """Block after Dexterity.  Weak and Vulnerable never touch block."""
    return max(0, base + get_status_stacks(source, StatusType.DEXTERITY))


def gain_block(combatant: Combatant, base: int) -> int:
    """Add block to *combatant* and return the amount gained."""
    amount = calculate_block(base, combatant)
    combatant.block += amount
    return amount


def reset_block(combatant: Combatant) -> None:
    combatant.block = 0
