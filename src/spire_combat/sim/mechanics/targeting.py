"""Target resolution -- turn an effect target into the combatants it hits."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from spire_combat.ir.effects import EffectTarget

if TYPE_CHECKING:
    from spire_combat.sim.core.entities import Combatant, Enemy
    from spire_combat.sim.core.game_state import CombatSession

logger = logging.getLogger(__name__)


def resolve_enemy_targets(
    session: CombatSession,
    target: EffectTarget,
    target_id: str | None = None,
) -> list[Enemy]:
    """Resolve a player-side effect target to the enemies it hits.

    ``ALL_ENEMIES`` is every living enemy, in roster order.  ``ENEMY`` is the
    living enemy named by *target_id*, or nothing when that id is missing or
    dead.  ``SELF`` hits no enemies.
    """
    if target == EffectTarget.ALL_ENEMIES:
        return session.living_enemies
    if target == EffectTarget.ENEMY:
        enemy = session.get_enemy(target_id)
        if enemy is None:
            logger.debug("No living enemy with id %r; skipping effect", target_id)
            return []
        return [enemy]
    return []


def resolve_targets(
    session: CombatSession,
    source: Combatant,
    target: EffectTarget,
    target_id: str | None = None,
) -> list[Combatant]:
    """Resolve *target* from the point of view of *source*.

    For the player this is :func:`resolve_enemy_targets` plus ``SELF``.  For
    an enemy, ``ENEMY`` and ``ALL_ENEMIES`` both mean the player.
    """
    if target == EffectTarget.SELF:
        return [source]
    if source is session.player:
        return list(resolve_enemy_targets(session, target, target_id))
    return [session.player]
