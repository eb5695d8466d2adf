"""Enemy intent selection and execution.

Each enemy telegraphs its next move one step ahead.  On its action step
the declared move is executed, then the next one is chosen by a
priority-weighted roll over the moves the enemy's health ratio favours:

    health ratio < 0.3          -> Defend / Buff
    0.3 <= health ratio < 0.6   -> Attack / Buff
    health ratio >= 0.6         -> Attack / Debuff

If no move in the deck matches the preference, the whole deck is used.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from spire_combat.ir.effects import EffectType
from spire_combat.ir.enemies import MonsterCard, MoveType
from spire_combat.sim.core.entities import EnemyIntent, IntentType

if TYPE_CHECKING:
    from spire_combat.sim.core.entities import Enemy
    from spire_combat.sim.core.game_state import CombatSession
    from spire_combat.sim.core.rng import GameRNG
    from spire_combat.sim.interpreter import EffectInterpreter

logger = logging.getLogger(__name__)

LOW_HEALTH_RATIO = 0.3
MID_HEALTH_RATIO = 0.6

_INTENT_FOR_MOVE: dict[MoveType, IntentType] = {
    MoveType.ATTACK: IntentType.ATTACK,
    MoveType.DEFEND: IntentType.DEFEND,
    MoveType.BUFF: IntentType.BUFF,
    MoveType.DEBUFF: IntentType.DEBUFF,
    MoveType.SPECIAL: IntentType.UNKNOWN,
}


def preferred_move_types(health: int, max_health: int) -> frozenset[MoveType]:
    """Move types favoured at the given health."""
    ratio = health / max_health if max_health > 0 else 0.0
    if ratio < LOW_HEALTH_RATIO:
        return frozenset({MoveType.DEFEND, MoveType.BUFF})
    if ratio < MID_HEALTH_RATIO:
        return frozenset({MoveType.ATTACK, MoveType.BUFF})
    return frozenset({MoveType.ATTACK, MoveType.DEBUFF})


def select_enemy_move(
    deck: list[MonsterCard],
    health: int,
    max_health: int,
    rng: GameRNG,
) -> MonsterCard | None:
    """Pick the next move from *deck*, or ``None`` if the deck is empty.

    The roll walks the candidates subtracting each priority and stops at
    the first one where the roll is no longer positive, falling back to the
    first candidate.
    """
    if not deck:
        return None
    preferred = preferred_move_types(health, max_health)
    candidates = [m for m in deck if m.type in preferred] or list(deck)
    index = rng.weighted_index([m.priority for m in candidates])
    return candidates[index]


def intent_for_move(move: MonsterCard) -> EnemyIntent:
    """The intent telegraphed for *move*.

    The value is the move's damage if it has any, otherwise its block.
    """
    value = move.damage
    if value is None:
        value = next((e.value for e in move.effects if e.type == EffectType.DAMAGE), None)
    if value is None:
        value = move.block
    if value is None:
        value = next((e.value for e in move.effects if e.type == EffectType.BLOCK), None)
    return EnemyIntent(type=_INTENT_FOR_MOVE[move.type], value=value)


class EnemyAI:
    """Chooses, telegraphs and executes enemy moves.

    Parameters
    ----------
    interpreter:
        Executes monster move effects with the same primitives as cards.
    rng:
        Random source for move selection.
    default_moves:
        Move set used by enemies whose deck is empty.
    """

    def __init__(
        self,
        interpreter: EffectInterpreter,
        rng: GameRNG,
        default_moves: list[MonsterCard] | None = None,
    ) -> None:
        self._interpreter = interpreter
        self.rng = rng
        self.default_moves = default_moves or []

    def determine_intent(self, enemy: Enemy) -> None:
        """Choose the enemy's next move and publish it as its intent."""
        deck = enemy.deck
        if not deck:
            logger.warning("Enemy %s has no moves; using default move set", enemy.id)
            deck = self.default_moves
        move = select_enemy_move(deck, enemy.health, enemy.max_health, self.rng)
        enemy.current_move = move
        enemy.intent = intent_for_move(move) if move is not None else EnemyIntent()

    def execute_intent(self, session: CombatSession, enemy: Enemy) -> int:
        """Carry out the enemy's declared move against the player.

        Returns
        -------
        int
            HP the player lost to this move, after block.
        """
        if enemy.current_move is None:
            self.determine_intent(enemy)
        move = enemy.current_move
        if move is None:
            return 0

        logger.debug("%s uses %s", enemy.id, move.name)
        health_before = session.player.health
        self._interpreter.execute_monster_move(
            session,
            enemy,
            effects=move.effects,
            damage=move.damage,
            block=move.block,
            has_damage_effect=move.has_damage_effect,
            has_block_effect=move.has_block_effect,
        )
        return max(0, health_before - session.player.health)
