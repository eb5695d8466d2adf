"""Reward generation for gold, card offers and elite relics.

- Gold: ``reward_gold_base + randint(0, reward_gold_spread - 1)`` (10-29).
- Card offers: ``card_reward_count`` distinct cards from the non-basic
  pool, rarity rolled 70/25/5 C/U/R.
- Relic: elite victories only; one common/uncommon/rare relic the player
  does not already own.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from spire_combat.ir.relics import REWARD_RELIC_RARITIES
from spire_combat.sim.config import CombatConfig
from spire_combat.sim.core.game_state import CombatReward

if TYPE_CHECKING:
    from spire_combat.ir.cards import Card, CardRarity
    from spire_combat.ir.relics import RelicDefinition
    from spire_combat.sim.content.registry import ContentRegistry
    from spire_combat.sim.core.entities import Player
    from spire_combat.sim.core.ids import IdAllocator
    from spire_combat.sim.core.rng import GameRNG


def generate_card_reward(
    registry: ContentRegistry,
    rng: GameRNG,
    ids: IdAllocator,
    config: CombatConfig | None = None,
) -> list[Card]:
    """Generate the card offers for a won combat.

    Parameters
    ----------
    registry:
        Content registry for looking up cards by rarity.
    rng:
        Seeded RNG for deterministic selection.
    ids:
        Allocator for the offered card instances.
    config:
        Offer count and rarity weights.
    """
    config = config or CombatConfig()
    cards: list[Card] = []
    seen_ids: set[str] = set()

    for _ in range(config.card_reward_count):
        rarity = _roll_rarity(rng, config)
        template = _pick_card_of_rarity(registry, rng, rarity, seen_ids)
        if template is None:
            break
        seen_ids.add(template.id)
        cards.append(registry.create_card(template.id, ids))

    return cards


def _roll_rarity(rng: GameRNG, config: CombatConfig) -> CardRarity:
    rarities = list(config.card_rarity_weights)
    weights = [config.card_rarity_weights[r] for r in rarities]
    return rarities[rng.weighted_index(weights)]


def _pick_card_of_rarity(
    registry: ContentRegistry,
    rng: GameRNG,
    rarity: CardRarity,
    seen_ids: set[str],
) -> Card | None:
    """Pick a random card of the given rarity, excluding already-seen ids."""
    candidates = registry.get_reward_pool(rarity=rarity, exclude_ids=seen_ids)
    if not candidates:
        # Fall back to any reward-eligible card
        candidates = registry.get_reward_pool(exclude_ids=seen_ids)
    if not candidates:
        return None
    return rng.random_choice(candidates)


def generate_gold_reward(rng: GameRNG, config: CombatConfig | None = None) -> int:
    config = config or CombatConfig()
    return config.reward_gold_base + rng.random_int(0, config.reward_gold_spread - 1)


def generate_relic_reward(
    registry: ContentRegistry,
    rng: GameRNG,
    owned_relics: list[str],
) -> RelicDefinition | None:
    """Pick a random reward-tier relic not already owned, or ``None``."""
    owned = set(owned_relics)
    candidates = [
        relic
        for relic in registry.get_relics_by_rarity(*REWARD_RELIC_RARITIES)
        if relic.id not in owned
    ]
    if not candidates:
        return None
    return rng.random_choice(candidates).model_copy(deep=True)


def generate_combat_reward(
    registry: ContentRegistry,
    rng: GameRNG,
    ids: IdAllocator,
    player: Player,
    elite: bool = False,
    config: CombatConfig | None = None,
) -> CombatReward:
    """Roll the full reward for a victory and credit the gold to *player*."""
    config = config or CombatConfig()
    gold = generate_gold_reward(rng, config)
    player.gold += gold
    relic = None
    if elite:
        relic = generate_relic_reward(registry, rng, [r.id for r in player.relics])
    return CombatReward(
        gold=gold,
        card_rewards=generate_card_reward(registry, rng, ids, config),
        relic_reward=relic,
    )
