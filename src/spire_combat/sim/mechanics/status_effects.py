"""Status effect lifecycle -- apply, remove, per-turn processing, query.

``Combatant.status_effects`` is an ordered list of :class:`StatusEffect`
entries, at most one per type.  Applying a type that is already present
sums the stacks; any entry that reaches 0 stacks is removed, never kept
as a zero entry.

Duration-based statuses (Poison, Weak, Vulnerable) tick down by one stack
each time :func:`process_status_effects` runs.  Strength and Dexterity are
exempt and persist until removed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from spire_combat.ir.status_effects import StatusEffect, StatusType

if TYPE_CHECKING:
    from spire_combat.sim.core.entities import Combatant

logger = logging.getLogger(__name__)


def apply_status_effect(combatant: Combatant, status_type: StatusType, stacks: int) -> None:
    """Add *stacks* of *status_type* to *combatant*.

    Existing entries keep their position and have the stacks summed; new
    types are appended.

    Parameters
    ----------
    combatant:
        The combatant receiving the status.
    status_type:
        Which status to apply.
    stacks:
        Number of stacks to add.  Non-positive amounts are ignored.
    """
    if stacks <= 0:
        logger.debug("Ignoring %d stacks of %s on %s", stacks, status_type.value, combatant.name)
        return
    existing = combatant.find_status(status_type)
    if existing is not None:
        existing.stacks += stacks
    else:
        combatant.status_effects.append(StatusEffect(type=status_type, stacks=stacks))


def remove_status_effect(combatant: Combatant, status_type: StatusType) -> None:
    """Completely remove a status from *combatant* (no-op if absent)."""
    combatant.status_effects = [e for e in combatant.status_effects if e.type != status_type]


def process_status_effects(combatant: Combatant) -> int:
    """Run once-per-turn status processing on *combatant*.

    Poison first deals its stack count as damage to its owner (ignoring
    block, health clamped at 0).  Then every duration-based status loses one
    stack and entries that reach 0 are removed.

    Returns
    -------
    int
        Health lost to Poison.
    """
    if not combatant.status_effects:
        return 0

    poison_damage = 0
    poison = combatant.find_status(StatusType.POISON)
    if poison is not None:
        before = combatant.health
        combatant.health = max(0, combatant.health - poison.stacks)
        poison_damage = before - combatant.health

    remaining: list[StatusEffect] = []
    for effect in combatant.status_effects:
        if effect.decays:
            effect.stacks -= 1
            if effect.stacks <= 0:
                continue
        remaining.append(effect)
    combatant.status_effects = remaining
    return poison_damage


def clear_combat_statuses(combatant: Combatant, status_types: Iterable[StatusType]) -> None:
    """Remove every status in *status_types* from *combatant*."""
    doomed = set(status_types)
    combatant.status_effects = [e for e in combatant.status_effects if e.type not in doomed]


def get_status_stacks(combatant: Combatant, status_type: StatusType) -> int:
    """Return the stack count for *status_type*, or ``0`` if absent."""
    effect = combatant.find_status(status_type)
    return effect.stacks if effect is not None else 0


def has_status(combatant: Combatant, status_type: StatusType) -> bool:
    return combatant.find_status(status_type) is not None
