"""RelicDispatcher -- fires relic passives during combat.

Iterates the player's relics in acquisition order, keeps the effects keyed
on the current trigger, applies the per-effect filters (played card type,
turn number, once per combat) and executes what remains via the
interpreter.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from spire_combat.ir.passives import PassiveEffect, Trigger
    from spire_combat.sim.core.game_state import CombatSession
    from spire_combat.sim.interpreter import EffectInterpreter
    from spire_combat.sim.triggers import TriggerContext

logger = logging.getLogger(__name__)


def passive_applies(
    effect: PassiveEffect,
    trigger: Trigger,
    session: CombatSession,
    context: TriggerContext,
    key: str,
) -> bool:
    """Return True if *effect* should fire for *trigger* right now.

    *key* identifies the effect for once-per-combat bookkeeping.
    """
    if effect.trigger != trigger:
        return False
    if effect.card_type is not None:
        if context.card is None or context.card.type != effect.card_type:
            return False
    if effect.on_turn is not None and session.turn != effect.on_turn:
        return False
    if effect.once_per_combat and key in session.spent_passives:
        return False
    return True


class RelicDispatcher:
    """Fires relic triggers for the player's relics.

    Parameters
    ----------
    interpreter:
        The EffectInterpreter used to apply relic effects.
    """

    def __init__(self, interpreter: EffectInterpreter) -> None:
        self.interpreter = interpreter

    def fire(
        self,
        trigger: Trigger,
        session: CombatSession,
        context: TriggerContext,
    ) -> int:
        """Fire every matching relic effect, in relic order.

        Parameters
        ----------
        trigger:
            The combat event.
        session:
            The current combat state (mutated in-place).
        context:
            Event details (damage taken, attacker, played card) and the
            draw counter that draw-type relics add to.

        Returns
        -------
        int
            Number of relic effects that fired.
        """
        fired = 0
        for relic in session.player.relics:
            for i, effect in enumerate(relic.effects):
                key = f"relic:{relic.id}:{i}"
                if not passive_applies(effect, trigger, session, context, key):
                    continue
                if effect.once_per_combat:
                    session.spent_passives.append(key)
                logger.debug("Relic %s fires on %s", relic.id, trigger.value)
                self.interpreter.apply_passive_effect(effect, session, context)
                fired += 1
        return fired
