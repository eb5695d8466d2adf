"""Encounter construction -- enemy rosters for combat, elite and boss nodes.

An encounter is a list of enemy template ids.  :func:`build_encounter`
turns it into :class:`Enemy` instances with fresh ids and their own copy
of the template's move deck.  Elite rosters get ``elite_health_multiplier``
times the template health, floored.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from spire_combat.sim.config import CombatConfig
from spire_combat.sim.core.entities import Enemy

if TYPE_CHECKING:
    from spire_combat.sim.content.registry import ContentRegistry
    from spire_combat.sim.core.ids import IdAllocator
    from spire_combat.sim.core.rng import GameRNG

logger = logging.getLogger(__name__)

ACT_1_BOSS_FLOOR_LIMIT = 5
ACT_2_BOSS_FLOOR_LIMIT = 10
LATE_BOSS_HEALTH_MULTIPLIER = 1.5
"""Bosses past the act 2 floors are drawn from every act, with extra health."""


def build_enemy(
    registry: ContentRegistry,
    enemy_id: str,
    ids: IdAllocator,
    health_multiplier: float = 1.0,
    elite: bool = False,
) -> Enemy:
    """Instantiate the template *enemy_id*.

    Raises
    ------
    KeyError
        If the registry has no enemy with that id.
    """
    template = registry.get_enemy(enemy_id)
    if template is None:
        raise KeyError(f"Unknown enemy id: {enemy_id!r}")
    health = math.floor(template.max_health * health_multiplier)
    return Enemy(
        id=ids.next_id(enemy_id),
        enemy_id=enemy_id,
        name=template.name,
        health=health,
        max_health=health,
        deck=registry.get_enemy_deck(enemy_id),
        is_elite=elite,
    )


def build_encounter(
    registry: ContentRegistry,
    enemy_ids: list[str],
    ids: IdAllocator,
    elite: bool = False,
    config: CombatConfig | None = None,
) -> list[Enemy]:
    """Instantiate every enemy of an encounter, scaling elites."""
    config = config or CombatConfig()
    multiplier = config.elite_health_multiplier if elite else 1.0
    return [
        build_enemy(registry, enemy_id, ids, health_multiplier=multiplier, elite=elite)
        for enemy_id in enemy_ids
    ]


def random_encounter(
    registry: ContentRegistry,
    rng: GameRNG,
    elite: bool = False,
) -> list[str]:
    """Pick an encounter.

    Normal nodes choose uniformly between one random enemy, two random
    enemies and each fixed group.  Elite nodes pick one enemy from the
    elite pool, falling back to a normal encounter if the pool is empty.
    """
    if elite:
        elites = registry.get_encounter_pool("elite")
        if elites:
            return [rng.random_choice(elites)]
        logger.warning("No elite encounters defined; using a normal encounter")

    singles = registry.get_encounter_pool("normal")
    fixed = registry.get_encounter_pool("fixed")
    if not singles:
        return list(rng.random_choice(fixed)) if fixed else []

    options = 2 + len(fixed)
    pick = rng.random_int(0, options - 1)
    if pick == 0:
        return [rng.random_choice(singles)]
    if pick == 1:
        return [rng.random_choice(singles), rng.random_choice(singles)]
    return list(fixed[pick - 2])


def boss_for_floor(
    registry: ContentRegistry,
    floor: int,
    rng: GameRNG,
    ids: IdAllocator,
) -> Enemy:
    """Build the boss for a boss node on *floor*.

    Floors below 5 draw from the act 1 bosses, below 10 from act 2, and
    anything higher from every boss with 1.5x health.
    """
    if floor < ACT_1_BOSS_FLOOR_LIMIT:
        pool = registry.get_bosses(act=1)
        multiplier = 1.0
    elif floor < ACT_2_BOSS_FLOOR_LIMIT:
        pool = registry.get_bosses(act=2)
        multiplier = 1.0
    else:
        pool = registry.get_bosses(act=1) + registry.get_bosses(act=2)
        multiplier = LATE_BOSS_HEALTH_MULTIPLIER
    if not pool:
        raise KeyError(f"No bosses available for floor {floor}")
    template = rng.random_choice(pool)
    return build_enemy(registry, template.id, ids, health_multiplier=multiplier)
