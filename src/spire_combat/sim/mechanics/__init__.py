"""Core combat mechanics.

Re-exports the primary functions from each mechanics module for convenience.

Usage::

    from spire_combat.sim.mechanics import (
        calculate_damage, deal_damage, apply_damage,
        calculate_block, gain_block, reset_block,
        reset_energy, spend_energy, gain_energy, lose_energy,
        draw_cards, discard_card, discard_hand,
        apply_status_effect, process_status_effects, get_status_stacks,
        resolve_enemy_targets, upgrade_card,
    )
"""

# -- damage ------------------------------------------------------------------
from .damage import DamageResult, apply_damage, calculate_damage, deal_damage, first_attack_bonus

# -- block -------------------------------------------------------------------
from .block import calculate_block, gain_block, reset_block

# -- energy ------------------------------------------------------------------
from .energy import consume_all_energy, gain_energy, lose_energy, reset_energy, spend_energy

# -- card piles --------------------------------------------------------------
from .card_piles import (
    collect_deck,
    discard_card,
    discard_hand,
    draw_cards,
    replace_in_hand,
    reshuffle_discard_into_draw,
)

# -- status effects ----------------------------------------------------------
from .status_effects import (
    apply_status_effect,
    clear_combat_statuses,
    get_status_stacks,
    has_status,
    process_status_effects,
    remove_status_effect,
)

# -- targeting ---------------------------------------------------------------
from .targeting import resolve_enemy_targets, resolve_targets

# -- upgrades ----------------------------------------------------------------
from .upgrades import upgrade_card

__all__ = [
    # damage
    "DamageResult",
    "apply_damage",
    "calculate_damage",
    "deal_damage",
    "first_attack_bonus",
    # block
    "calculate_block",
    "gain_block",
    "reset_block",
    # energy
    "consume_all_energy",
    "gain_energy",
    "lose_energy",
    "reset_energy",
    "spend_energy",
    # card piles
    "collect_deck",
    "discard_card",
    "discard_hand",
    "draw_cards",
    "replace_in_hand",
    "reshuffle_discard_into_draw",
    # status effects
    "apply_status_effect",
    "clear_combat_statuses",
    "get_status_stacks",
    "has_status",
    "process_status_effects",
    "remove_status_effect",
    # targeting
    "resolve_enemy_targets",
    "resolve_targets",
    # upgrades
    "upgrade_card",
]
