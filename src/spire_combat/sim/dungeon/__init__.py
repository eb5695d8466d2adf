"""Dungeon module -- encounters, rewards and the map-level run seam.

``RunManager`` lives in :mod:`spire_combat.sim.dungeon.run_manager`; it is
not re-exported here because the combat engine imports the reward helpers
from this package.
"""

from spire_combat.sim.dungeon.encounters import (
    boss_for_floor,
    build_encounter,
    build_enemy,
    random_encounter,
)
from spire_combat.sim.dungeon.rewards import (
    generate_card_reward,
    generate_combat_reward,
    generate_gold_reward,
    generate_relic_reward,
)

__all__ = [
    "boss_for_floor",
    "build_encounter",
    "build_enemy",
    "generate_card_reward",
    "generate_combat_reward",
    "generate_gold_reward",
    "generate_relic_reward",
    "random_encounter",
]
