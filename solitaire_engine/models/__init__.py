"""Card and pile models."""

from .card import Card, Color, Suit, color_of, compare, rank_label, same_color
from .piles import Foundation, HoldingCell, Tableau
from .sequence import CardSequence
from .stack import BoundedStack
from .state import CardMove, CardView, EngineState, MoveOutcome, PileId, PileKind, PileView

__all__ = [
    "BoundedStack",
    "Card",
    "CardMove",
    "CardSequence",
    "CardView",
    "Color",
    "EngineState",
    "Foundation",
    "HoldingCell",
    "MoveOutcome",
    "PileId",
    "PileKind",
    "PileView",
    "Suit",
    "Tableau",
    "color_of",
    "compare",
    "rank_label",
    "same_color",
]
