"""Core primitives for the combat engine."""

from spire_combat.sim.core.commands import (
    Command,
    CommandQueue,
    DrawCards,
    EndTurn,
    PlayCard,
    ProcessEnemyTurn,
    StepResult,
)
from spire_combat.sim.core.entities import (
    Combatant,
    Enemy,
    EnemyIntent,
    IntentType,
    Player,
)
from spire_combat.sim.core.game_state import (
    CombatOutcome,
    CombatReward,
    CombatSession,
    GamePhase,
    RunState,
    TurnPhase,
)
from spire_combat.sim.core.ids import IdAllocator
from spire_combat.sim.core.rng import GameRNG

__all__ = [
    "Combatant",
    "Command",
    "CommandQueue",
    "CombatOutcome",
    "CombatReward",
    "CombatSession",
    "DrawCards",
    "EndTurn",
    "Enemy",
    "EnemyIntent",
    "GamePhase",
    "GameRNG",
    "IdAllocator",
    "IntentType",
    "PlayCard",
    "Player",
    "ProcessEnemyTurn",
    "RunState",
    "StepResult",
    "TurnPhase",
]
