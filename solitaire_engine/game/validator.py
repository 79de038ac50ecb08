"""Move validation against a variant policy."""

from dataclasses import dataclass

from solitaire_engine.models.card import ACE, KING, Card, same_color
from solitaire_engine.models.piles import Foundation, HoldingCell, Tableau
from solitaire_engine.models.sequence import CardSequence

from .board import Board
from .variants import EmptyTableauRule, FoundationMode, VariantPolicy


@dataclass
class ValidationResult:
    """Result of move validation."""

    is_valid: bool
    error_message: str = ""


OK = ValidationResult(is_valid=True)


def _reject(message: str) -> ValidationResult:
    return ValidationResult(is_valid=False, error_message=message)


class MoveValidator:
    """Validates picks, placements and the win condition.

    The validator never mutates a pile; the engine commits a move only
    after a successful result.
    """

    def __init__(self, policy: VariantPolicy):
        """Initialize validator.

        Args:
            policy: Rules of the active variant.
        """
        self.policy = policy

    def max_movable(self, board: Board) -> int:
        """Largest run that may leave a tableau when capacity is limited.

        (free cells + 1) * 2 ** (empty tableaux)
        """
        return (board.free_cells() + 1) * 2 ** board.empty_tableaux()

    def validate_removal(self, run: CardSequence, board: Board) -> ValidationResult:
        """Validate picking up a run from a tableau.

        Args:
            run: The run as it sits on the tableau (bottom first).
            board: Current board, before the run is removed.

        Returns:
            ValidationResult
        """
        if run.is_empty():
            return _reject("Nothing to pick up")
        if not self.policy.removable.matches(run):
            return _reject(f"Run cannot be picked up: must be {self.policy.removable.describe()}")
        if self.policy.capacity_limited:
            limit = self.max_movable(board)
            if run.size() > limit:
                return _reject(f"Run of {run.size()} exceeds the movable limit of {limit}")
        return OK

    def validate_tableau(self, run: CardSequence, target: Tableau) -> ValidationResult:
        """Validate placing a run onto a tableau.

        Only the bottom card of the run is checked against the top card of
        the target; the internal order of the run was settled at pickup.
        """
        bottom = run.bottom()
        if bottom is None:
            return _reject("Nothing to place")
        top = target.peek()
        if top is None:
            if self.policy.accept.empty == EmptyTableauRule.KING_ONLY and bottom.rank != KING:
                return _reject("Only a King may be placed on an empty tableau")
            return OK
        if not top.face_up:
            return _reject("Cannot build on a face-down card")
        if top.rank - bottom.rank != 1:
            return _reject(f"{bottom} does not go on {top}: rank must be one lower")
        if self.policy.accept.alternating and same_color(top, bottom):
            return _reject(f"{bottom} does not go on {top}: colors must alternate")
        return OK

    def validate_foundation(self, run: CardSequence, target: Foundation) -> ValidationResult:
        """Validate placing the selection onto a foundation."""
        if self.policy.foundation_mode == FoundationMode.COMPLETE_RUN:
            return self._validate_complete_run(run, target)
        if run.size() != 1:
            return _reject("Only one card at a time goes to a foundation")
        card = run.peek()
        if not target.can_push(card):
            top = target.peek()
            if top is None:
                return _reject(f"Foundation must start with an Ace, not {card}")
            return _reject(f"{card} cannot be placed on {top}")
        return OK

    def _validate_complete_run(self, run: CardSequence, target: Foundation) -> ValidationResult:
        if run.size() != 13:
            return _reject("Only a complete King-to-Ace run goes to a foundation")
        top = run.peek()
        bottom = run.bottom()
        if top.rank != ACE or bottom.rank != KING:
            return _reject("Run must go from King at the bottom to Ace on top")
        if not target.is_empty():
            return _reject("A complete run goes onto an empty foundation")
        if not target.accepts_run(run):
            return _reject("Run is not a single-suit King-to-Ace sequence")
        return OK

    def validate_cell(self, run: CardSequence, target: HoldingCell) -> ValidationResult:
        """Validate placing the selection into a holding cell."""
        if run.size() != 1:
            return _reject("A holding cell takes a single card")
        if not target.is_empty():
            return _reject("Holding cell is occupied")
        return OK

    def check_win(self, board: Board) -> bool:
        """Check the variant's terminal condition."""
        rule = self.policy.win
        if rule.foundations_filled and any(f.is_empty() for f in board.foundations):
            return False
        if rule.tableau_rule is not None:
            if not all(rule.tableau_rule.matches(t) for t in board.tableaux):
                return False
        if rule.max_open_tableaux is not None and board.open_tableaux() > rule.max_open_tableaux:
            return False
        if rule.empty_stock:
            for pile in (board.stock, board.waste):
                if pile is not None and not pile.is_empty():
                    return False
        if rule.empty_cells and board.free_cells() != len(board.cells):
            return False
        return True


def top_card(pile: CardSequence) -> Card | None:
    """Get the top card of a pile if it is face up."""
    card = pile.peek()
    if card is None or not card.face_up:
        return None
    return card
