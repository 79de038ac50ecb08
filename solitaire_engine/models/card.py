"""Card and Suit models."""

from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from solitaire_engine.exceptions import InvalidConstruction

MIN_RANK = 1
MAX_RANK = 13

ACE = 1
JACK = 11
QUEEN = 12
KING = 13


class Suit(IntEnum):
    """Card suit (in deck assembly order)."""

    SPADES = 0
    HEARTS = 1
    DIAMONDS = 2
    CLUBS = 3


class Color(str, Enum):
    """Card color, derived from the suit."""

    RED = "red"
    BLACK = "black"


# Map rank to display string (number cards use their digits)
RANK_NAMES = {
    ACE: "A",
    JACK: "J",
    QUEEN: "Q",
    KING: "K",
}

SUIT_SYMBOLS = {
    Suit.SPADES: "♠",
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
}


def rank_label(rank: int) -> str:
    """Get the display label of a rank (1 -> "A", 11 -> "J", 7 -> "7")."""
    return RANK_NAMES.get(rank, str(rank))


def color_of(suit: Suit) -> Color:
    """Get the color of a suit: hearts and diamonds are red."""
    if suit in (Suit.HEARTS, Suit.DIAMONDS):
        return Color.RED
    return Color.BLACK


class Card(BaseModel):
    """Single playing card.

    Suit and rank are fixed at construction; only the face-up flag changes
    while the card travels between piles. Two cards are equal only if they
    are the same object, since a Spider deck holds duplicate suit/rank pairs.
    """

    model_config = ConfigDict(validate_assignment=True)

    suit: Suit = Field(frozen=True)
    rank: int = Field(frozen=True)
    face_up: bool = False

    def __init__(self, suit: Suit, rank: int, face_up: bool = False, **data: Any):
        if not isinstance(rank, int) or not MIN_RANK <= rank <= MAX_RANK:
            raise InvalidConstruction(f"Rank out of range: {rank!r}")
        super().__init__(suit=suit, rank=rank, face_up=face_up, **data)

    @property
    def color(self) -> Color:
        return color_of(self.suit)

    @property
    def is_hidden(self) -> bool:
        return not self.face_up

    def label(self) -> str:
        """Get the rank label of this card."""
        return rank_label(self.rank)

    def flip(self) -> None:
        """Turn the card over."""
        self.face_up = not self.face_up

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __str__(self) -> str:
        return f"{SUIT_SYMBOLS[self.suit]}{self.label()}"

    def __repr__(self) -> str:
        state = "up" if self.face_up else "down"
        return f"Card({self}, {state})"


def same_color(a: Card, b: Card) -> bool:
    """Check if two cards have the same color."""
    return a.color == b.color


def compare(a: Card, b: Card) -> int:
    """Compare two cards by rank only.

    Returns:
        ``a.rank - b.rank``; cards of equal rank compare equal whatever
        their suits.
    """
    return a.rank - b.rank
