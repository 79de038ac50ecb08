"""Logging utilities and board display."""

import logging
import sys
from typing import TYPE_CHECKING

from solitaire_engine.models.card import SUIT_SYMBOLS

if TYPE_CHECKING:
    from solitaire_engine.models.state import CardView, EngineState, MoveOutcome, PileView


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


HIDDEN = "##"
EMPTY = "--"


class BoardDisplay:
    """Display engine snapshots to stdout."""

    def __init__(self, show_hidden: bool = False):
        """Initialize display.

        Args:
            show_hidden: Whether to show face-down cards
        """
        self.show_hidden = show_hidden

    def card_text(self, card: "CardView") -> str:
        """Render one card ("♠A", "♥10", "##" when face down)."""
        text = f"{SUIT_SYMBOLS[card.suit]}{card.label}"
        if card.face_up:
            return text
        return f"({text})" if self.show_hidden else HIDDEN

    def pile_text(self, pile: "PileView") -> str:
        """Render a pile bottom first on one line."""
        if not pile.cards:
            return EMPTY
        return " ".join(self.card_text(c) for c in pile.cards)

    def render(self, state: "EngineState") -> str:
        """Render the whole table as text."""
        lines = [f"{state.variant}  moves: {state.move_count}" + ("  WON" if state.won else "")]
        if state.stock is not None:
            top = state.waste.top if state.waste is not None else None
            waste = self.card_text(top) if top is not None else EMPTY
            lines.append(f"  stock: {len(state.stock)} card(s)   waste: {waste}")
        if state.cells:
            cells = "  ".join(f"c{i}[{self.pile_text(p)}]" for i, p in enumerate(state.cells))
            lines.append(f"  cells: {cells}")
        foundations = "  ".join(
            f"f{i}[{self.card_text(p.top) if p.top else EMPTY}]"
            for i, p in enumerate(state.foundations)
        )
        lines.append(f"  foundations: {foundations}")
        for i, pile in enumerate(state.tableaux):
            lines.append(f"  t{i}: {self.pile_text(pile)}")
        if state.selection:
            held = " ".join(self.card_text(c) for c in state.selection)
            lines.append(f"  holding: {held} (from {state.last_source})")
        return "\n".join(lines)

    def print_board(self, state: "EngineState") -> None:
        """Print the table."""
        print(self.render(state))

    def print_outcome(self, outcome: "MoveOutcome") -> None:
        """Print the result of a place."""
        message = f"  -> {outcome.cards_moved} card(s) to {outcome.target}"
        if outcome.revealed:
            message += ", turned a card face up"
        print(message)

    def print_won(self, state: "EngineState") -> None:
        """Print the win message."""
        print("=" * 60)
        print(f"You won {state.variant} in {state.move_count} moves!")
        print("=" * 60)

    def print_rules(self, lines: list[str]) -> None:
        """Print a rules summary."""
        for line in lines:
            print(f"  {line}")
