"""Energy system -- reset, spend, gain, lose.

Rules:
    - The player's energy is restored to max at the start of each turn.
    - Playing a card spends its cost; an X-cost card spends everything.
    - Mid-turn gains are capped at ``max_energy + cap_bonus``.
    - Energy never goes below 0.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from spire_combat.sim.core.entities import Player

DEFAULT_CAP_BONUS = 3


def reset_energy(player: Player) -> None:
    """Restore the player's energy to ``max_energy``."""
    player.energy = player.max_energy


def spend_energy(player: Player, amount: int) -> bool:
    """Attempt to spend energy.

    Returns
    -------
    bool
        True if the energy was spent, False if the player did not have
        enough (energy is left untouched).
    """
    if player.energy < amount:
        return False
    player.energy -= amount
    return True


def consume_all_energy(player: Player) -> int:
    """Zero the player's energy and return how much there was."""
    spent = player.energy
    player.energy = 0
    return spent


def gain_energy(player: Player, amount: int, cap_bonus: int = DEFAULT_CAP_BONUS) -> None:
    """Add energy, capped at ``max_energy + cap_bonus``."""
    player.energy = min(player.max_energy + cap_bonus, player.energy + amount)


def lose_energy(player: Player, amount: int) -> None:
    """Remove energy, flooring at 0."""
    player.energy = max(0, player.energy - amount)
