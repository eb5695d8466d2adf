"""Card effect interpreter -- bridge between content templates and mechanics.

Reads a card's (or monster move's) declarative ``effects`` list and
dispatches each entry to the mechanics functions.  Effects apply strictly
in list order against the same session, so later effects see the results
of earlier ones.  Relic and power passives go through the same primitives
via :meth:`EffectInterpreter.apply_passive_effect`.

Usage::

    from spire_combat.sim.interpreter import EffectInterpreter

    interp = EffectInterpreter(rng=GameRNG(7), ids=IdAllocator())
    draws = interp.play_card(session, card, target_id="jaw_worm-1")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from spire_combat.ir.cards import Card, CardType
from spire_combat.ir.effects import CardEffect, EffectTarget, EffectType
from spire_combat.ir.passives import PassiveEffect, PassiveTarget
from spire_combat.sim.core.entities import Combatant
from spire_combat.sim.core.game_state import CombatSession
from spire_combat.sim.core.ids import IdAllocator
from spire_combat.sim.core.rng import GameRNG
from spire_combat.sim.mechanics.block import gain_block
from spire_combat.sim.mechanics.card_piles import replace_in_hand
from spire_combat.sim.mechanics.damage import apply_damage, deal_damage
from spire_combat.sim.mechanics.energy import (
    DEFAULT_CAP_BONUS,
    consume_all_energy,
    gain_energy,
    lose_energy,
    spend_energy,
)
from spire_combat.sim.mechanics.status_effects import apply_status_effect
from spire_combat.sim.mechanics.targeting import resolve_targets
from spire_combat.sim.mechanics.upgrades import upgrade_card

if TYPE_CHECKING:
    from spire_combat.sim.triggers import TriggerContext

logger = logging.getLogger(__name__)


class EffectInterpreter:
    """Applies card effects, legacy scalars and passive effects to a session.

    The interpreter mutates the session it is handed; the engine always
    hands it a private copy.  Per-card context (energy at the time of play,
    first-attack flag, pending draws) lives on the instance only for the
    duration of one :meth:`play_card` call.

    Parameters
    ----------
    rng:
        Random source for ``UPGRADE_CARD`` target selection.
    ids:
        Id allocator for cards created mid-combat.
    energy_cap_bonus:
        Mid-turn energy gains are capped at ``max_energy + energy_cap_bonus``.
    """

    def __init__(
        self,
        rng: GameRNG,
        ids: IdAllocator,
        energy_cap_bonus: int = DEFAULT_CAP_BONUS,
    ) -> None:
        self.rng = rng
        self.ids = ids
        self.energy_cap_bonus = energy_cap_bonus
        self._energy_at_play: int = 0
        self._first_attack: bool = False
        self._playing_card: Card | None = None
        self._pending_draws: int = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def play_card(
        self,
        session: CombatSession,
        card: Card,
        target_id: str | None = None,
    ) -> int | None:
        """Pay for and resolve *card*, which must be in ``session.hand``.

        Steps:
            1. Pay the cost.  X-cost cards spend all energy (even 0);
               others need ``energy >= cost`` or nothing happens.
            2. Take the card out of the hand.
            3. Apply ``card.effects`` in order.
            4. Apply legacy ``damage``/``block`` scalars only where no
               effect of the same kind exists.
            5. Put the card in the discard pile.

        Returns
        -------
        int | None
            Number of cards to draw once the new state is committed, or
            ``None`` if the card could not be paid for.
        """
        player = session.player
        energy_before = player.energy
        if card.is_x_cost:
            consume_all_energy(player)
        elif not spend_energy(player, card.cost):
            logger.debug(
                "Not enough energy to play %s (cost=%s, energy=%d)",
                card.id,
                card.cost,
                player.energy,
            )
            return None

        session.hand = [c for c in session.hand if c.id != card.id]

        self._energy_at_play = energy_before
        self._first_attack = session.first_attack_this_combat and card.type == CardType.ATTACK
        self._playing_card = card
        self._pending_draws = 0
        try:
            self.execute_effects(card.effects or [], session, player, target_id)
            self._apply_legacy_scalars(
                session,
                player,
                damage=card.damage,
                block=card.block,
                has_damage_effect=card.has_damage_effect,
                has_block_effect=card.has_block_effect,
                target_id=target_id,
            )
            session.discard_pile.append(card)
            if self._first_attack:
                session.first_attack_this_combat = False
            return self._pending_draws
        finally:
            self._energy_at_play = 0
            self._first_attack = False
            self._playing_card = None
            self._pending_draws = 0

    def execute_effects(
        self,
        effects: list[CardEffect],
        session: CombatSession,
        source: Combatant,
        target_id: str | None = None,
    ) -> None:
        """Execute *effects* in order on behalf of *source*.

        Parameters
        ----------
        effects:
            Ordered effect list.
        session:
            The combat session (mutated in-place).
        source:
            The player, or an enemy acting out a monster move.
        target_id:
            The enemy the player targeted, for single-target effects.
        """
        for effect in effects:
            if session.player.is_dead:
                break
            self.execute_effect(effect, session, source, target_id)

    def execute_effect(
        self,
        effect: CardEffect,
        session: CombatSession,
        source: Combatant,
        target_id: str | None = None,
    ) -> None:
        """Execute a single effect, dispatching on ``effect.type``."""
        handler = _DISPATCH[effect.type]
        handler(self, effect, session, source, target_id)

    def execute_monster_move(
        self,
        session: CombatSession,
        enemy: Combatant,
        effects: list[CardEffect],
        damage: int | None,
        block: int | None,
        has_damage_effect: bool,
        has_block_effect: bool,
    ) -> None:
        """Resolve a monster move: its effects, then its legacy scalars."""
        self.execute_effects(effects, session, enemy)
        if session.player.is_dead:
            return
        self._apply_legacy_scalars(
            session,
            enemy,
            damage=damage,
            block=block,
            has_damage_effect=has_damage_effect,
            has_block_effect=has_block_effect,
            target_id=None,
        )

    def apply_passive_effect(
        self,
        effect: PassiveEffect,
        session: CombatSession,
        context: TriggerContext,
    ) -> None:
        """Apply one relic or power-card effect for the player.

        Passive damage skips Strength, Weak and Vulnerable but is still
        absorbed by block.  Draws are added to ``context.cards_to_draw``
        and performed by the caller after the state is committed.
        """
        player = session.player
        targets = self._passive_targets(effect.target, session, context)

        if effect.type == EffectType.DAMAGE:
            for target in targets:
                if target is not player and not target.is_dead:
                    apply_damage(target, effect.value)
        elif effect.type == EffectType.BLOCK:
            gain_block(player, effect.value)
        elif effect.type == EffectType.HEAL:
            player.heal(effect.value)
        elif effect.type == EffectType.GAIN_ENERGY:
            gain_energy(player, effect.value, self.energy_cap_bonus)
        elif effect.type == EffectType.LOSE_ENERGY:
            lose_energy(player, effect.value)
        elif effect.type == EffectType.DRAW_CARDS:
            context.cards_to_draw += effect.value
        elif effect.type == EffectType.APPLY_STATUS:
            if effect.status_type is None:
                logger.warning("Passive APPLY_STATUS effect without status_type")
                return
            for target in targets:
                apply_status_effect(target, effect.status_type, effect.value)
        else:
            logger.warning("Passive effects do not support %s", effect.type.value)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _passive_targets(
        self,
        target: PassiveTarget,
        session: CombatSession,
        context: TriggerContext,
    ) -> list[Combatant]:
        if target == PassiveTarget.SELF:
            return [session.player]
        if target == PassiveTarget.ALL_ENEMIES:
            return list(session.living_enemies)
        attacker = session.get_enemy(context.attacker_id)
        return [attacker] if attacker is not None else []

    def _apply_legacy_scalars(
        self,
        session: CombatSession,
        source: Combatant,
        *,
        damage: int | None,
        block: int | None,
        has_damage_effect: bool,
        has_block_effect: bool,
        target_id: str | None,
    ) -> None:
        """Apply scalar ``damage``/``block`` unless an effect already covers it."""
        if damage and damage > 0 and not has_damage_effect:
            for target in resolve_targets(session, source, EffectTarget.ENEMY, target_id):
                deal_damage(source, target, damage, self._first_attack)
        if block and block > 0 and not has_block_effect:
            gain_block(source, block)

    def _is_player(self, session: CombatSession, source: Combatant) -> bool:
        return source is session.player

    # ------------------------------------------------------------------
    # Effect handlers (one per EffectType)
    # ------------------------------------------------------------------

    def _handle_damage(
        self,
        effect: CardEffect,
        session: CombatSession,
        source: Combatant,
        target_id: str | None,
    ) -> None:
        for target in resolve_targets(session, source, effect.target, target_id):
            deal_damage(source, target, effect.value, self._first_attack)

    def _handle_damage_multiplier_block(
        self,
        effect: CardEffect,
        session: CombatSession,
        source: Combatant,
        target_id: str | None,
    ) -> None:
        base = source.block * effect.effective_multiplier
        for target in resolve_targets(session, source, effect.target, target_id):
            deal_damage(source, target, base, self._first_attack)

    def _handle_damage_multiplier_energy(
        self,
        effect: CardEffect,
        session: CombatSession,
        source: Combatant,
        target_id: str | None,
    ) -> None:
        # Energy was read before the card's cost zeroed it.
        repetitions = self._energy_at_play * effect.effective_multiplier
        for i in range(repetitions):
            targets = resolve_targets(session, source, effect.target, target_id)
            if not targets:
                break
            for target in targets:
                deal_damage(source, target, effect.value, self._first_attack and i == 0)

    def _handle_block(
        self,
        effect: CardEffect,
        session: CombatSession,
        source: Combatant,
        target_id: str | None,
    ) -> None:
        gain_block(source, effect.value)

    def _handle_heal(
        self,
        effect: CardEffect,
        session: CombatSession,
        source: Combatant,
        target_id: str | None,
    ) -> None:
        source.heal(effect.value)

    def _handle_draw_cards(
        self,
        effect: CardEffect,
        session: CombatSession,
        source: Combatant,
        target_id: str | None,
    ) -> None:
        if not self._is_player(session, source):
            logger.debug("Enemy %s cannot draw cards; skipping", source.name)
            return
        self._pending_draws += max(0, effect.value)

    def _handle_gain_energy(
        self,
        effect: CardEffect,
        session: CombatSession,
        source: Combatant,
        target_id: str | None,
    ) -> None:
        if self._is_player(session, source):
            gain_energy(session.player, effect.value, self.energy_cap_bonus)

    def _handle_lose_energy(
        self,
        effect: CardEffect,
        session: CombatSession,
        source: Combatant,
        target_id: str | None,
    ) -> None:
        if self._is_player(session, source):
            lose_energy(session.player, effect.value)

    def _handle_apply_status(
        self,
        effect: CardEffect,
        session: CombatSession,
        source: Combatant,
        target_id: str | None,
    ) -> None:
        if effect.status_type is None:
            logger.warning("APPLY_STATUS effect missing status_type")
            return
        for target in resolve_targets(session, source, effect.target, target_id):
            apply_status_effect(target, effect.status_type, effect.value)

    def _handle_add_card_to_discard(
        self,
        effect: CardEffect,
        session: CombatSession,
        source: Combatant,
        target_id: str | None,
    ) -> None:
        card = self._playing_card
        if card is None:
            logger.debug("ADD_CARD_TO_DISCARD outside of a card play; skipping")
            return
        copy = card.model_copy(deep=True, update={"id": self.ids.next_id(card.base_id)})
        session.discard_pile.append(copy)

    def _handle_upgrade_card(
        self,
        effect: CardEffect,
        session: CombatSession,
        source: Combatant,
        target_id: str | None,
    ) -> None:
        if not self._is_player(session, source):
            return
        eligible = [c for c in session.hand if not c.upgraded]
        if not eligible:
            return
        chosen = self.rng.random_choice(eligible)
        replace_in_hand(session, chosen, upgrade_card(chosen))


# ------------------------------------------------------------------
# Dispatch table -- maps EffectType -> handler method
# ------------------------------------------------------------------

_DISPATCH: dict[EffectType, Callable[..., None]] = {
    EffectType.DAMAGE: EffectInterpreter._handle_damage,
    EffectType.DAMAGE_MULTIPLIER_BLOCK: EffectInterpreter._handle_damage_multiplier_block,
    EffectType.DAMAGE_MULTIPLIER_ENERGY: EffectInterpreter._handle_damage_multiplier_energy,
    EffectType.BLOCK: EffectInterpreter._handle_block,
    EffectType.HEAL: EffectInterpreter._handle_heal,
    EffectType.DRAW_CARDS: EffectInterpreter._handle_draw_cards,
    EffectType.GAIN_ENERGY: EffectInterpreter._handle_gain_energy,
    EffectType.LOSE_ENERGY: EffectInterpreter._handle_lose_energy,
    EffectType.APPLY_STATUS: EffectInterpreter._handle_apply_status,
    EffectType.ADD_CARD_TO_DISCARD: EffectInterpreter._handle_add_card_to_discard,
    EffectType.UPGRADE_CARD: EffectInterpreter._handle_upgrade_card,
}

_missing = set(EffectType) - set(_DISPATCH)
if _missing:
    raise RuntimeError(
        f"EffectInterpreter has no handler for: {sorted(t.value for t in _missing)}"
    )
