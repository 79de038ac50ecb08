"""Tests for snapshot diffing."""

from solitaire_engine.game.autoplay import diff_snapshots
from solitaire_engine.game.board import Board
from solitaire_engine.game.engine import SolitaireEngine
from solitaire_engine.game.variants import KLONDIKE
from solitaire_engine.models.card import Card, Suit
from solitaire_engine.models.piles import Foundation, Tableau
from solitaire_engine.models.sequence import CardSequence
from solitaire_engine.models.state import PileId


def up(suit, rank):
    return Card(suit, rank, face_up=True)


def down(suit, rank):
    return Card(suit, rank, face_up=False)


def make_engine(*cards_per_column, stock=()):
    tableaux = [Tableau(cards) for cards in cards_per_column]
    tableaux.extend(Tableau() for _ in range(7 - len(tableaux)))
    board = Board(
        tableaux=tableaux,
        foundations=[Foundation() for _ in range(4)],
        stock=CardSequence(stock),
        waste=CardSequence(),
    )
    return SolitaireEngine(KLONDIKE, board)


class TestDiffSnapshots:
    """Tests for diff_snapshots."""

    def test_no_change(self):
        """Test identical snapshots produce no moves."""
        engine = make_engine([up(Suit.SPADES, 9)])
        state = engine.snapshot()
        assert diff_snapshots(state, state) == []

    def test_run_move(self):
        """Test a moved run yields one move per card, bottom first."""
        engine = make_engine(
            [down(Suit.CLUBS, 2), up(Suit.SPADES, 9), up(Suit.HEARTS, 8)],
            [up(Suit.HEARTS, 10)],
        )
        before = engine.snapshot()
        engine.pick(PileId.tableau(0), 1)
        engine.place(PileId.tableau(1))
        moves = diff_snapshots(before, engine.snapshot())

        assert [(m.card.rank, m.source, m.target) for m in moves] == [
            (9, PileId.tableau(0), PileId.tableau(1)),
            (8, PileId.tableau(0), PileId.tableau(1)),
        ]

    def test_revealed_card_is_not_a_move(self):
        """Test a card turned face up in place is ignored."""
        engine = make_engine([down(Suit.CLUBS, 2), up(Suit.SPADES, 1)])
        before = engine.snapshot()
        engine.pick(PileId.tableau(0))
        engine.place(PileId.foundation(0))
        moves = diff_snapshots(before, engine.snapshot())
        assert len(moves) == 1
        assert moves[0].target == PileId.foundation(0)

    def test_from_selection(self):
        """Test held cards are traced back to the pile they came from."""
        engine = make_engine([up(Suit.SPADES, 9)], [up(Suit.HEARTS, 10)])
        engine.pick(PileId.tableau(0))
        holding = engine.snapshot()
        engine.place(PileId.tableau(1))
        moves = diff_snapshots(holding, engine.snapshot())
        assert len(moves) == 1
        assert moves[0].source == PileId.tableau(0)

    def test_cards_in_hand_do_not_move(self):
        """Test picked up cards produce no move until placed."""
        engine = make_engine([up(Suit.SPADES, 9)])
        before = engine.snapshot()
        engine.pick(PileId.tableau(0))
        assert diff_snapshots(before, engine.snapshot()) == []

    def test_draw(self):
        """Test a stock draw moves one card to the waste."""
        engine = make_engine(stock=[down(Suit.HEARTS, 4)])
        before = engine.snapshot()
        engine.draw_stock()
        moves = diff_snapshots(before, engine.snapshot())
        assert [(m.source, m.target) for m in moves] == [(PileId.stock(), PileId.waste())]
        assert moves[0].card.face_up
