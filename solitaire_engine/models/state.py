"""Read-only engine state published to the presentation layer."""

import re
from enum import Enum

from pydantic import BaseModel, Field

from .card import Card, Color, Suit, rank_label


class PileKind(str, Enum):
    """Kind of pile a card can sit in."""

    TABLEAU = "tableau"
    FOUNDATION = "foundation"
    STOCK = "stock"
    WASTE = "waste"
    CELL = "cell"


# Short prefixes accepted by PileId.parse ("t3", "f0", "c1", "w", "s")
PILE_PREFIXES = {
    "t": PileKind.TABLEAU,
    "f": PileKind.FOUNDATION,
    "s": PileKind.STOCK,
    "w": PileKind.WASTE,
    "c": PileKind.CELL,
}

_PILE_PATTERN = re.compile(r"^([a-z]+)[:\s]*(\d*)$")


class PileId(BaseModel, frozen=True):
    """Address of a pile inside the engine."""

    kind: PileKind
    index: int = Field(default=0, ge=0)

    @classmethod
    def tableau(cls, index: int) -> "PileId":
        return cls(kind=PileKind.TABLEAU, index=index)

    @classmethod
    def foundation(cls, index: int) -> "PileId":
        return cls(kind=PileKind.FOUNDATION, index=index)

    @classmethod
    def cell(cls, index: int) -> "PileId":
        return cls(kind=PileKind.CELL, index=index)

    @classmethod
    def waste(cls) -> "PileId":
        return cls(kind=PileKind.WASTE)

    @classmethod
    def stock(cls) -> "PileId":
        return cls(kind=PileKind.STOCK)

    @classmethod
    def parse(cls, text: str) -> "PileId":
        """Parse a pile address such as ``t3``, ``tableau:3`` or ``waste``.

        Raises:
            ValueError: The text does not name a pile.
        """
        match = _PILE_PATTERN.match(text.strip().lower())
        if not match:
            raise ValueError(f"Unknown pile: {text!r}")
        name, number = match.groups()
        kind = PILE_PREFIXES.get(name)
        if kind is None:
            try:
                kind = PileKind(name)
            except ValueError:
                raise ValueError(f"Unknown pile: {text!r}") from None
        return cls(kind=kind, index=int(number) if number else 0)

    def __str__(self) -> str:
        if self.kind in (PileKind.STOCK, PileKind.WASTE):
            return self.kind.value
        return f"{self.kind.value}:{self.index}"


class CardView(BaseModel, frozen=True):
    """Immutable copy of a card's visible state."""

    suit: Suit
    rank: int
    face_up: bool

    @classmethod
    def of(cls, card: Card) -> "CardView":
        return cls(suit=card.suit, rank=card.rank, face_up=card.face_up)

    @property
    def label(self) -> str:
        return rank_label(self.rank)

    @property
    def color(self) -> Color:
        return Color.RED if self.suit in (Suit.HEARTS, Suit.DIAMONDS) else Color.BLACK


class PileView(BaseModel, frozen=True):
    """Immutable copy of one pile, cards listed bottom first."""

    pile_id: PileId
    cards: tuple[CardView, ...] = ()

    @property
    def top(self) -> CardView | None:
        return self.cards[-1] if self.cards else None

    def __len__(self) -> int:
        return len(self.cards)


class EngineState(BaseModel, frozen=True):
    """Snapshot of the whole table after a transition."""

    variant: str
    tableaux: tuple[PileView, ...] = ()
    foundations: tuple[PileView, ...] = ()
    cells: tuple[PileView, ...] = ()
    stock: PileView | None = None
    waste: PileView | None = None
    selection: tuple[CardView, ...] = ()
    last_source: PileId | None = None
    move_count: int = 0
    won: bool = False

    def piles(self) -> list[PileView]:
        """Get every pile in the snapshot."""
        result = list(self.tableaux) + list(self.foundations) + list(self.cells)
        for pile in (self.stock, self.waste):
            if pile is not None:
                result.append(pile)
        return result

    def pile(self, pile_id: PileId) -> PileView | None:
        """Get a pile by its address."""
        for pile in self.piles():
            if pile.pile_id == pile_id:
                return pile
        return None


class MoveOutcome(BaseModel, frozen=True):
    """Result of a successful place."""

    target: PileId
    cards_moved: int
    revealed: bool = False  # A face-down card was turned up on the source pile
    to_foundation: bool = False
    won: bool = False


class CardMove(BaseModel, frozen=True):
    """One card travelling from one pile to another.

    A presentation layer schedules its own motion from a list of these.
    """

    card: CardView
    source: PileId
    target: PileId
