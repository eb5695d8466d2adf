"""Tunable constants for combat and the surrounding run."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from spire_combat.ir.cards import CardRarity


class CombatConfig(BaseModel):
    """Engine and run configuration.

    The defaults reproduce the reference game.  Pass a customised instance
    to :class:`~spire_combat.sim.engine.CombatEngine`,
    :class:`~spire_combat.sim.controller.CombatController` or
    :class:`~spire_combat.sim.dungeon.run_manager.RunManager`.
    """

    hand_size: int = 5
    """Cards drawn at the start of every player turn."""

    energy_cap_bonus: int = 3
    """Energy gained mid-turn is capped at ``max_energy + energy_cap_bonus``."""

    elite_health_multiplier: float = 1.5

    reward_gold_base: int = 10
    reward_gold_spread: int = 20
    """Reward gold is ``base + randint(0, spread - 1)``."""

    card_reward_count: int = 3
    card_rarity_weights: dict[CardRarity, int] = Field(
        default_factory=lambda: {
            CardRarity.COMMON: 70,
            CardRarity.UNCOMMON: 25,
            CardRarity.RARE: 5,
        }
    )

    starting_health: int = 80
    starting_gold: int = 99
    starting_energy: int = 3
    starter_relic: str | None = "burning_blood"

    auto_process_enemy_turn: bool = True
    """If False, ``EndTurn`` does not schedule the enemy turn; the caller
    issues ``ProcessEnemyTurn`` itself."""

    @field_validator("hand_size", "card_reward_count", "reward_gold_spread", "starting_health")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError(f"must be > 0, got {value}")
        return value

    @field_validator("elite_health_multiplier")
    @classmethod
    def _multiplier_at_least_one(cls, value: float) -> float:
        if value < 1:
            raise ValueError(f"elite_health_multiplier must be >= 1, got {value}")
        return value
