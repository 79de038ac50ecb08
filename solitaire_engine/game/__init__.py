"""Game logic."""

from .autoplay import diff_snapshots
from .board import Board
from .engine import SolitaireEngine, deal
from .rules import RunRule, alternates_in_color, in_sequence, is_suitable, is_visible
from .validator import MoveValidator, ValidationResult
from .variants import POLICIES, FoundationMode, StockMode, Variant, VariantPolicy, get_policy

__all__ = [
    "Board",
    "FoundationMode",
    "MoveValidator",
    "POLICIES",
    "RunRule",
    "SolitaireEngine",
    "StockMode",
    "ValidationResult",
    "Variant",
    "VariantPolicy",
    "alternates_in_color",
    "deal",
    "diff_snapshots",
    "get_policy",
    "in_sequence",
    "is_suitable",
    "is_visible",
]
