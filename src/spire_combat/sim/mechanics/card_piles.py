"""Card pile manipulation -- draw, discard, reshuffle, merge.

Index 0 of ``session.draw_pile`` is the top of the pile.  When the draw
pile runs dry mid-draw, the discard pile is shuffled in and drawing
continues.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from spire_combat.ir.cards import Card
    from spire_combat.sim.core.game_state import CombatSession
    from spire_combat.sim.core.rng import GameRNG


def draw_cards(session: CombatSession, n: int, rng: GameRNG) -> list[Card]:
    """Draw up to *n* cards into the hand.

    Returns the cards actually drawn (fewer than *n* if both the draw and
    discard piles run out).
    """
    drawn: list[Card] = []
    for _ in range(n):
        if not session.draw_pile:
            if not session.discard_pile:
                break
            reshuffle_discard_into_draw(session, rng)
        card = session.draw_pile.pop(0)
        session.hand.append(card)
        drawn.append(card)
    return drawn


def reshuffle_discard_into_draw(session: CombatSession, rng: GameRNG) -> None:
    """Move the whole discard pile into the draw pile, then shuffle."""
    session.draw_pile.extend(session.discard_pile)
    session.discard_pile.clear()
    rng.shuffle(session.draw_pile)


def discard_card(session: CombatSession, card: Card) -> None:
    """Move *card* from the hand to the discard pile."""
    _remove_from_hand(session, card)
    session.discard_pile.append(card)


def discard_hand(session: CombatSession) -> None:
    """Move every card in the hand to the discard pile."""
    session.discard_pile.extend(session.hand)
    session.hand.clear()


def replace_in_hand(session: CombatSession, old: Card, new: Card) -> None:
    """Swap *old* for *new* at the same hand position."""
    for i, card in enumerate(session.hand):
        if card.id == old.id:
            session.hand[i] = new
            return
    raise ValueError(f"Card {old.id!r} not found in hand")


def collect_deck(session: CombatSession) -> list[Card]:
    """Gather every card from all piles, copies made mid-combat included.

    Used when a combat ends and the piles fold back into the run's deck.
    """
    return session.all_cards


def _remove_from_hand(session: CombatSession, card: Card) -> None:
    for i, held in enumerate(session.hand):
        if held.id == card.id:
            del session.hand[i]
            return
    raise ValueError(f"Card {card.id!r} not found in hand")
