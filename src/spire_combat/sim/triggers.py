"""TriggerDispatcher -- fires power-card and relic passives on combat events.

Power cards fire before relics.  Within each group the order is the order
the player acquired them; there is no other priority.  Effects keyed on
``DAMAGE_TAKEN`` see the HP the player actually lost in ``context.damage``
and the enemy responsible in ``context.attacker_id``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel

from spire_combat.ir.cards import Card
from spire_combat.ir.passives import Trigger
from spire_combat.sim.relic_dispatcher import RelicDispatcher, passive_applies

if TYPE_CHECKING:
    from spire_combat.ir.powers import PowerCardDefinition
    from spire_combat.sim.core.game_state import CombatSession
    from spire_combat.sim.interpreter import EffectInterpreter

logger = logging.getLogger(__name__)


class TriggerContext(BaseModel):
    """Details of the event being dispatched."""

    damage: int = 0
    """HP lost by the player, for ``DAMAGE_TAKEN``."""

    attacker_id: str | None = None
    card: Card | None = None
    """The card just played, for ``CARD_PLAYED``."""

    cards_to_draw: int = 0
    """Draws requested by passives; the caller defers them."""


class TriggerDispatcher:
    """Dispatches passives for powers then relics.

    Parameters
    ----------
    interpreter:
        The EffectInterpreter used to apply each passive effect.
    relic_dispatcher:
        Relic half of the dispatch.  Built from *interpreter* if omitted.
    """

    def __init__(
        self,
        interpreter: EffectInterpreter,
        relic_dispatcher: RelicDispatcher | None = None,
    ) -> None:
        self.interpreter = interpreter
        self.relic_dispatcher = relic_dispatcher or RelicDispatcher(interpreter)

    def process_effects(
        self,
        trigger: Trigger,
        session: CombatSession,
        context: TriggerContext | None = None,
    ) -> TriggerContext:
        """Fire *trigger* for every attached power card, then every relic.

        Returns the context, with ``cards_to_draw`` accumulated.
        """
        context = context or TriggerContext()
        self.fire_powers(trigger, session, context)
        if not session.player.is_dead:
            self.relic_dispatcher.fire(trigger, session, context)
        return context

    def fire_powers(
        self,
        trigger: Trigger,
        session: CombatSession,
        context: TriggerContext,
    ) -> None:
        for i, power in enumerate(session.player.power_cards):
            self._fire_power(power, trigger, session, context, f"power:{i}:{power.id}")

    def fire_power(
        self,
        power: PowerCardDefinition,
        trigger: Trigger,
        session: CombatSession,
        context: TriggerContext | None = None,
    ) -> TriggerContext:
        """Fire one power's effects for *trigger*.

        Used when a Power card is played: only the new entry fires its
        immediate effects, never the powers already attached.
        """
        context = context or TriggerContext()
        index = len(session.player.power_cards) - 1
        self._fire_power(power, trigger, session, context, f"power:{index}:{power.id}")
        return context

    def _fire_power(
        self,
        power: PowerCardDefinition,
        trigger: Trigger,
        session: CombatSession,
        context: TriggerContext,
        key_prefix: str,
    ) -> None:
        for j, effect in enumerate(power.effects):
            key = f"{key_prefix}:{j}"
            if not passive_applies(effect, trigger, session, context, key):
                continue
            if effect.once_per_combat:
                session.spent_passives.append(key)
            logger.debug("Power %s fires on %s", power.id, trigger.value)
            self.interpreter.apply_passive_effect(effect, session, context)
