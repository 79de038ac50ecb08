"""Live card containers of one game."""

from dataclasses import dataclass, field

from solitaire_engine.models.piles import Foundation, HoldingCell, Tableau
from solitaire_engine.models.sequence import CardSequence


@dataclass
class Board:
    """Every pile on the table. Owned and mutated by the engine only."""

    tableaux: list[Tableau] = field(default_factory=list)
    foundations: list[Foundation] = field(default_factory=list)
    cells: list[HoldingCell] = field(default_factory=list)
    stock: CardSequence | None = None
    waste: CardSequence | None = None

    def free_cells(self) -> int:
        """Count empty holding cells."""
        return sum(1 for cell in self.cells if cell.is_empty())

    def empty_tableaux(self) -> int:
        """Count empty tableaux."""
        return sum(1 for tableau in self.tableaux if tableau.is_empty())

    def open_tableaux(self) -> int:
        """Count tableaux that still hold cards."""
        return len(self.tableaux) - self.empty_tableaux()

    def card_count(self) -> int:
        """Count cards in every pile."""
        piles = [*self.tableaux, *self.foundations, *self.cells]
        piles.extend(p for p in (self.stock, self.waste) if p is not None)
        return sum(p.size() for p in piles)
