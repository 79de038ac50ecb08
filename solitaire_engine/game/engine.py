"""Rule engine shared by every solitaire variant."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Callable

from solitaire_engine.config import Config
from solitaire_engine.exceptions import EmptySelection, IllegalMove, InsufficientDepth
from solitaire_engine.models.piles import Foundation, HoldingCell, Tableau
from solitaire_engine.models.sequence import CardSequence
from solitaire_engine.models.state import (
    CardMove,
    CardView,
    EngineState,
    MoveOutcome,
    PileId,
    PileKind,
    PileView,
)

from .board import Board
from .validator import MoveValidator, ValidationResult, top_card
from .variants import FoundationMode, HiddenDeal, StockMode, Variant, VariantPolicy, get_policy

if TYPE_CHECKING:
    from solitaire_engine.logging import GameLogger

logger = logging.getLogger(__name__)

# Yukon deals this many cards face up on each column
YUKON_VISIBLE = 5


class SolitaireEngine:
    """Single-threaded state machine for one game.

    Every transition validates first and commits second, so a rejected move
    never leaves a pile partially changed. The selection (cards picked up
    but not yet placed) is owned by the engine alone; callers only see
    snapshots.
    """

    def __init__(
        self,
        policy: VariantPolicy,
        board: Board,
        game_logger: GameLogger | None = None,
    ):
        """Initialize engine around an already dealt board.

        Args:
            policy: Rules of the variant being played
            board: Piles to play on
            game_logger: GameLogger instance for move replay logging
        """
        self.policy = policy
        self.board = board
        self.validator = MoveValidator(policy)
        self.game_logger = game_logger

        self.selection = CardSequence()
        self.last_source: PileId | None = None
        self._move_count = 0
        self._won = False

        self._on_change: Callable[[EngineState], None] | None = None
        self._on_win: Callable[[EngineState], None] | None = None

    @classmethod
    def new_game(
        cls,
        variant: Variant | str | None = None,
        config: Config | None = None,
        rng: random.Random | None = None,
        game_logger: GameLogger | None = None,
    ) -> SolitaireEngine:
        """Shuffle and deal a new game.

        Args:
            variant: Variant to play (uses config if not specified)
            config: Configuration (uses defaults if not provided)
            rng: Randomness source for the shuffle (seeded from config if
                not provided)
            game_logger: GameLogger instance for move replay logging

        Returns:
            A ready engine.
        """
        config = config or Config()
        policy = get_policy(variant or config.engine.variant)
        if rng is None:
            rng = random.Random(config.engine.seed)

        board = deal(policy, rng)
        engine = cls(policy, board, game_logger)

        logger.info(
            f"New {policy.title} game: {len(board.tableaux)} tableaux, "
            f"{board.stock.size() if board.stock is not None else 0} cards in stock"
        )
        if game_logger:
            game_logger.log_game_start(engine.snapshot())
        return engine

    @property
    def variant(self) -> Variant:
        return self.policy.variant

    @property
    def move_count(self) -> int:
        """Number of successful moves so far."""
        return self._move_count

    def set_callbacks(
        self,
        on_change: Callable[[EngineState], None] | None = None,
        on_win: Callable[[EngineState], None] | None = None,
    ) -> None:
        """Set event callbacks.

        Args:
            on_change: Called with a fresh snapshot after every transition
            on_win: Called once when the game becomes won
        """
        self._on_change = on_change
        self._on_win = on_win

    # ----- Transitions -----

    def pick(self, pile_id: PileId, depth: int = 0) -> tuple[CardView, ...]:
        """Pick up cards from a pile.

        Args:
            pile_id: Source pile (tableau, waste or holding cell)
            depth: Index from the top of the deepest card to take (0 takes
                only the top card)

        Returns:
            The picked cards, bottom first.

        Raises:
            IllegalMove: A selection is already held, the pile cannot be
                picked from, or the run breaks the variant's rules.
            InsufficientDepth: The pile does not hold enough cards.
        """
        if not self.selection.is_empty():
            raise IllegalMove("Cards are already picked up; place or cancel them first")

        pile = self._pile(pile_id)
        if pile_id.kind == PileKind.TABLEAU:
            run = pile.run_at(depth)
            self._require(self.validator.validate_removal(run, self.board))
            self.selection.move_onto(pile.extract_run(depth))
        elif pile_id.kind in (PileKind.WASTE, PileKind.CELL):
            if pile.is_empty() or depth >= pile.size():
                raise InsufficientDepth(f"Not enough cards in {pile_id}")
            if depth != 0:
                raise IllegalMove(f"Only the top card of the {pile_id.kind.value} can be picked up")
            self.selection.push(pile.pop())
        else:
            raise IllegalMove(f"Cannot pick up from the {pile_id.kind.value}")

        self.last_source = pile_id
        logger.debug(f"Picked {self.selection.size()} card(s) from {pile_id}")
        if self.game_logger:
            self.game_logger.log_pick(pile_id, depth, self.selection)
        self._publish()
        return self._selection_view()

    def place(self, target_id: PileId) -> MoveOutcome:
        """Place the selection onto a pile.

        On failure the selection is kept untouched; callers usually follow
        with :meth:`cancel`.

        Raises:
            EmptySelection: Nothing is picked up.
            IllegalMove: The target does not accept the selection.
        """
        if self.selection.is_empty():
            raise EmptySelection("Nothing is picked up")

        target = self._pile(target_id)
        kind = target_id.kind
        if kind == PileKind.TABLEAU:
            self._require(self.validator.validate_tableau(self.selection, target))
        elif kind == PileKind.FOUNDATION:
            self._require(self.validator.validate_foundation(self.selection, target))
        elif kind == PileKind.CELL:
            self._require(self.validator.validate_cell(self.selection, target))
        else:
            raise IllegalMove(f"Cannot place cards on the {kind.value}")

        moved = self.selection.size()
        placed = self.selection.copy()
        if kind == PileKind.TABLEAU:
            target.move_onto(self.selection)
        elif kind == PileKind.FOUNDATION and self.policy.foundation_mode == FoundationMode.COMPLETE_RUN:
            # Ace first: the run's top card starts the foundation
            for card in reversed(self.selection.cards()):
                target.push(card)
            self.selection.clear()
        else:
            target.push(self.selection.pop())

        revealed = self._reveal_source()
        self.last_source = None
        self._move_count += 1
        won = self._update_win()

        outcome = MoveOutcome(
            target=target_id,
            cards_moved=moved,
            revealed=revealed,
            to_foundation=kind == PileKind.FOUNDATION,
            won=won,
        )
        logger.debug(f"Placed {moved} card(s) on {target_id} (move {self._move_count})")
        if self.game_logger:
            self.game_logger.log_place(target_id, placed, outcome)
        self._publish()
        return outcome

    def cancel(self) -> None:
        """Return the selection to the pile it came from.

        Raises:
            EmptySelection: Nothing is picked up.
        """
        if self.selection.is_empty() or self.last_source is None:
            raise EmptySelection("Nothing is picked up")

        source_id = self.last_source
        returned = self.selection.copy()
        source = self._pile(source_id)
        # Straight back onto the source: no pile rules apply to an undo of a pick
        source.move_onto(self.selection)
        self.last_source = None

        logger.debug(f"Returned {returned.size()} card(s) to {source_id}")
        if self.game_logger:
            self.game_logger.log_cancel(source_id, returned)
        self._publish()

    def draw_stock(self) -> CardView | None:
        """Turn one card from the stock to the waste.

        When the stock is empty the waste is turned back over onto it,
        face down, so the first card drawn comes up first again.

        Returns:
            The drawn card, or None if the waste was recycled.

        Raises:
            IllegalMove: The variant has no waste, a selection is held, or
                both stock and waste are empty.
        """
        if self.policy.stock_mode != StockMode.DRAW:
            raise IllegalMove(f"{self.policy.title} has no stock to draw from")
        if not self.selection.is_empty():
            raise IllegalMove("Place or cancel the picked up cards first")

        stock, waste = self.board.stock, self.board.waste
        drawn: CardView | None = None
        if not stock.is_empty():
            card = stock.pop()
            card.face_up = True
            waste.push(card)
            drawn = CardView.of(card)
            logger.debug(f"Drew {card} from the stock")
        elif waste.is_empty():
            raise IllegalMove("Stock and waste are both empty")
        else:
            stock.move_onto(waste.reverse_copy())
            waste.clear()
            stock.set_face_up(False)
            logger.debug(f"Recycled {stock.size()} card(s) from the waste")

        self._move_count += 1
        self._update_win()
        if self.game_logger:
            self.game_logger.log_draw_stock(drawn, stock.size())
        self._publish()
        return drawn

    def deal_row(self) -> int:
        """Deal one face-up card from the stock onto every tableau.

        Returns:
            Number of cards dealt (fewer than the tableau count when the
            stock runs out part way).

        Raises:
            IllegalMove: The variant does not deal rows, a selection is
                held, or the stock is empty.
        """
        if self.policy.stock_mode != StockMode.DEAL:
            raise IllegalMove(f"{self.policy.title} does not deal rows from the stock")
        if not self.selection.is_empty():
            raise IllegalMove("Place or cancel the picked up cards first")
        stock = self.board.stock
        if stock.is_empty():
            raise IllegalMove("Stock is empty")

        dealt = 0
        for tableau in self.board.tableaux:
            if stock.is_empty():
                break
            card = stock.pop()
            card.face_up = True
            tableau.push(card)
            dealt += 1

        self._move_count += 1
        self._update_win()
        logger.debug(f"Dealt a row of {dealt} card(s), {stock.size()} left in stock")
        if self.game_logger:
            self.game_logger.log_deal_row(dealt, stock.size())
        self._publish()
        return dealt

    def auto_complete(self) -> list[CardMove]:
        """Move every card that can go to a foundation, one at a time.

        Sources are tableau tops, the waste and the holding cells. Runs
        until no card moves. Variants that only take complete runs on
        their foundations are left alone.

        Returns:
            The moves made, in order.

        Raises:
            IllegalMove: A selection is held.
        """
        if not self.selection.is_empty():
            raise IllegalMove("Place or cancel the picked up cards first")
        if self.policy.foundation_mode != FoundationMode.SINGLE:
            return []

        moves: list[CardMove] = []
        moved = True
        while moved:
            moved = False
            for source_id, source in self._auto_sources():
                card = top_card(source)
                if card is None:
                    continue
                for index, foundation in enumerate(self.board.foundations):
                    if foundation.can_push(card):
                        foundation.push(source.pop())
                        moves.append(CardMove(
                            card=CardView.of(card),
                            source=source_id,
                            target=PileId.foundation(index),
                        ))
                        if isinstance(source, Tableau):
                            source.reveal_top()
                        moved = True
                        break

        if moves:
            logger.info(f"Auto-completed {len(moves)} card(s) to the foundations")
            self._update_win()
            if self.game_logger:
                self.game_logger.log_auto_complete(moves)
            self._publish()
        return moves

    # ----- Queries -----

    def has_won(self) -> bool:
        """Check the variant's win condition against the current board."""
        return self.validator.check_win(self.board)

    def snapshot(self) -> EngineState:
        """Build a read-only copy of the whole table."""
        board = self.board

        def view(pile_id: PileId, pile: CardSequence) -> PileView:
            return PileView(pile_id=pile_id, cards=tuple(CardView.of(c) for c in pile))

        return EngineState(
            variant=self.policy.variant.value,
            tableaux=tuple(view(PileId.tableau(i), t) for i, t in enumerate(board.tableaux)),
            foundations=tuple(
                view(PileId.foundation(i), f) for i, f in enumerate(board.foundations)
            ),
            cells=tuple(view(PileId.cell(i), c) for i, c in enumerate(board.cells)),
            stock=view(PileId.stock(), board.stock) if board.stock is not None else None,
            waste=view(PileId.waste(), board.waste) if board.waste is not None else None,
            selection=self._selection_view(),
            last_source=self.last_source,
            move_count=self._move_count,
            won=self.has_won(),
        )

    # ----- Helpers -----

    def _pile(self, pile_id: PileId) -> CardSequence:
        """Resolve a pile address to its container.

        Raises:
            IllegalMove: The variant has no such pile.
        """
        board = self.board
        piles: dict[PileKind, list[CardSequence]] = {
            PileKind.TABLEAU: board.tableaux,
            PileKind.FOUNDATION: board.foundations,
            PileKind.CELL: board.cells,
            PileKind.STOCK: [board.stock] if board.stock is not None else [],
            PileKind.WASTE: [board.waste] if board.waste is not None else [],
        }
        candidates = piles[pile_id.kind]
        if pile_id.index >= len(candidates):
            raise IllegalMove(f"{self.policy.title} has no {pile_id}")
        return candidates[pile_id.index]

    def _require(self, result: ValidationResult) -> None:
        if not result.is_valid:
            logger.debug(f"Rejected move: {result.error_message}")
            raise IllegalMove(result.error_message)

    def _reveal_source(self) -> bool:
        if self.last_source is None or self.last_source.kind != PileKind.TABLEAU:
            return False
        source = self._pile(self.last_source)
        return source.reveal_top()

    def _update_win(self) -> bool:
        won = self.has_won()
        if won and not self._won:
            logger.info(f"{self.policy.title} won in {self._move_count} moves")
            if self.game_logger:
                self.game_logger.log_game_won(self._move_count)
            if self._on_win:
                self._on_win(self.snapshot())
        self._won = won
        return won

    def _publish(self) -> None:
        if self._on_change:
            self._on_change(self.snapshot())

    def _selection_view(self) -> tuple[CardView, ...]:
        return tuple(CardView.of(c) for c in self.selection)

    def _auto_sources(self) -> list[tuple[PileId, CardSequence]]:
        board = self.board
        sources: list[tuple[PileId, CardSequence]] = []
        if board.waste is not None:
            sources.append((PileId.waste(), board.waste))
        sources.extend((PileId.cell(i), c) for i, c in enumerate(board.cells))
        sources.extend((PileId.tableau(i), t) for i, t in enumerate(board.tableaux))
        return sources


def deal(policy: VariantPolicy, rng: random.Random) -> Board:
    """Shuffle a fresh deck and lay it out for a variant.

    Args:
        policy: Variant layout
        rng: Randomness source for the shuffle

    Returns:
        The dealt board.
    """
    deck = CardSequence.random_deck(rng, decks=policy.decks)

    tableaux: list[Tableau] = []
    for size in policy.tableau_sizes:
        tableau = Tableau()
        for position in range(size):
            card = deck.pop()
            card.face_up = _dealt_face_up(policy.hidden_deal, position, size)
            tableau.push(card)
        tableaux.append(tableau)

    board = Board(
        tableaux=tableaux,
        foundations=[Foundation() for _ in range(policy.foundations)],
        cells=[HoldingCell() for _ in range(policy.cells)],
    )
    if policy.has_stock:
        board.stock = CardSequence()
        board.stock.move_onto(deck)
        board.stock.set_face_up(False)
    if policy.has_waste:
        board.waste = CardSequence()

    logger.debug(f"Dealt {board.card_count()} of {policy.deck_size} cards for {policy.title}")
    return board


def _dealt_face_up(rule: HiddenDeal, position: int, size: int) -> bool:
    if rule == HiddenDeal.ALL_VISIBLE:
        return True
    if rule == HiddenDeal.TOP_FIVE:
        return position >= size - YUKON_VISIBLE
    return position == size - 1
