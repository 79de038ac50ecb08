"""Constrained card piles: foundations, tableaux and holding cells."""

from __future__ import annotations

from solitaire_engine.exceptions import IllegalMove, InsufficientDepth

from .card import ACE, Card
from .sequence import CardSequence
from .stack import BoundedStack


class Foundation(CardSequence):
    """Ascending run from Ace to King.

    An empty foundation takes only an Ace; afterwards each card must be one
    rank above the top and of the same suit.
    Rejected pushes leave the foundation unchanged.
    """

    def can_push(self, card: Card) -> bool:
        """Check if a card may go on top of this foundation."""
        return self._follows(self.peek(), card)

    def _follows(self, top: Card | None, card: Card) -> bool:
        if top is None:
            return card.rank == ACE
        if card.suit != top.suit:
            return False
        return card.rank == top.rank + 1

    def push(self, value: Card) -> None:
        if not self.can_push(value):
            top = self.peek()
            if top is None:
                raise IllegalMove(f"Foundation must start with an Ace, not {value}")
            raise IllegalMove(f"{value} cannot be placed on {top}")
        super().push(value)

    def accepts_run(self, run: BoundedStack[Card]) -> bool:
        """Check if every card of a run could be pushed, top card first.

        The run is given the way it sits on a tableau, so its top card is
        pushed first. Nothing is modified.
        """
        top = self.peek()
        for card in reversed(list(run)):
            if not self._follows(top, card):
                return False
            top = card
        return True

    def append_stack(self, other: BoundedStack[Card] | None) -> None:
        # Validate the whole stack first so a bad card leaves nothing behind
        if other is None or other.is_empty():
            return
        top = self.peek()
        for card in other:
            if not self._follows(top, card):
                raise IllegalMove(f"{card} cannot be placed on {top}")
            top = card
        super().append_stack(other)

    def is_complete(self) -> bool:
        """Check if the foundation holds a full Ace-to-King run."""
        return self.size() == 13


class Tableau(CardSequence):
    """Playing column from which runs are removed and onto which runs are built.

    Which runs may leave or join a column is decided by the variant rules;
    the tableau itself only knows how to hand out runs by depth.
    """

    def run_at(self, depth: int) -> CardSequence:
        """Copy the top ``depth + 1`` cards without removing them.

        Args:
            depth: Index from the top (0 is the top card).

        Returns:
            A new sequence in original order (its bottom is the card at the
            requested depth).

        Raises:
            InsufficientDepth: The tableau holds ``depth`` cards or fewer.
        """
        count = depth + 1
        if depth < 0 or count > self.size():
            raise InsufficientDepth(
                f"Cannot take {count} card(s) from a tableau of {self.size()}"
            )
        return CardSequence(self._items[-count:])

    def extract_run(self, depth: int) -> CardSequence | None:
        """Pop the top ``depth + 1`` cards as a single run.

        Returns:
            The run in original order, or None if the tableau does not hold
            enough cards (the tableau is then unchanged).
        """
        count = depth + 1
        if depth < 0 or count > self.size():
            return None
        run = CardSequence(self._items[-count:])
        del self._items[-count:]
        return run

    def reveal_top(self) -> bool:
        """Turn the top card face up.

        Returns:
            True if a face-down card was turned over.
        """
        top = self.peek()
        if top is None or top.face_up:
            return False
        top.face_up = True
        return True


class HoldingCell(CardSequence):
    """Single-card storage slot.

    ``push`` onto an occupied cell replaces its card; engine call sites check
    ``is_empty()`` first. Appending a stack of more than one card is refused.
    """

    def __init__(self):
        super().__init__(capacity=1)

    def push(self, value: Card) -> None:
        self.clear()
        super().push(value)

    def append_stack(self, other: BoundedStack[Card] | None) -> None:
        if other is not None and other.size() > 1:
            raise IllegalMove("A holding cell takes a single card")
        if other is None or other.is_empty():
            return
        self.push(other.peek())
