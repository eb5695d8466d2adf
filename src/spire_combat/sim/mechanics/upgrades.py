"""Card upgrades.

A card with explicit :class:`UpgradeDefinition` deltas uses them.  Any
other card follows the generic rule: Attacks gain 3 damage, Skills gain 3
block, numeric costs above 0 drop by 1, and every effect value rises by 1.
"""

from __future__ import annotations

from spire_combat.ir.cards import Card, CardType

GENERIC_DAMAGE_BONUS = 3
GENERIC_BLOCK_BONUS = 3


def upgrade_card(card: Card) -> Card:
    """Return the upgraded form of *card* (same instance id).

    Upgrading an already-upgraded card returns it unchanged.
    """
    if card.upgraded:
        return card
    if card.upgrade is not None:
        upgraded = _apply_upgrade_definition(card)
    else:
        upgraded = _apply_generic_upgrade(card)
    upgraded.name = f"{card.name}+"
    upgraded.upgraded = True
    return upgraded


def _apply_upgrade_definition(card: Card) -> Card:
    delta = card.upgrade
    upgraded = card.model_copy(deep=True)
    if delta.cost is not None:
        upgraded.cost = delta.cost
    if delta.damage is not None and upgraded.damage is not None:
        upgraded.damage += delta.damage
    if delta.block is not None and upgraded.block is not None:
        upgraded.block += delta.block
    if delta.effects is not None:
        upgraded.effects = [e.model_copy() for e in delta.effects]
    if delta.description is not None:
        upgraded.description = delta.description
    return upgraded


def _apply_generic_upgrade(card: Card) -> Card:
    upgraded = card.model_copy(deep=True)
    if card.type == CardType.ATTACK and upgraded.damage is not None:
        upgraded.damage += GENERIC_DAMAGE_BONUS
    elif card.type == CardType.SKILL and upgraded.block is not None:
        upgraded.block += GENERIC_BLOCK_BONUS
    if isinstance(upgraded.cost, int) and upgraded.cost > 0:
        upgraded.cost -= 1
    if upgraded.effects:
        for effect in upgraded.effects:
            effect.value += 1
    upgraded.description = f"{card.description} (Upgraded)"
    return upgraded
