"""Formatters for game log output."""

from typing import Iterable

from solitaire_engine.models.card import Card, Suit, rank_label
from solitaire_engine.models.state import CardView, PileView

# Suit codes for log output
SUIT_CODES: dict[Suit, str] = {
    Suit.SPADES: "S",
    Suit.HEARTS: "H",
    Suit.DIAMONDS: "D",
    Suit.CLUBS: "C",
}


def format_card(card: Card | CardView) -> str:
    """Format a single card to string.

    Args:
        card: Card to format.

    Returns:
        Formatted string (e.g., "SA" for Spade Ace, "H10" for Heart 10).
        The face-up flag is not part of the string.
    """
    return f"{SUIT_CODES[card.suit]}{rank_label(card.rank)}"


def format_cards(cards: Iterable[Card | CardView]) -> str:
    """Format cards to comma-separated string, bottom card first.

    Returns:
        Comma-separated card strings (e.g., "SK,HQ,CJ").
        Empty string if no cards.
    """
    return ",".join(format_card(c) for c in cards)


def format_pile(pile: PileView) -> dict[str, object]:
    """Format a pile snapshot to dict.

    Args:
        pile: Pile to format.

    Returns:
        Dict with the pile address, its cards and how many of them are
        face down.
    """
    return {
        "pile": str(pile.pile_id),
        "cards": format_cards(pile.cards),
        "hidden": sum(1 for c in pile.cards if not c.face_up),
    }
