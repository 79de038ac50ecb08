"""Tests for run predicates."""

from solitaire_engine.game.rules import (
    RunRule,
    alternates_in_color,
    in_sequence,
    is_suitable,
    is_visible,
)
from solitaire_engine.models.card import Card, Suit


def up(suit, rank):
    return Card(suit, rank, face_up=True)


class TestPredicates:
    """Tests for the run predicates (runs listed bottom first)."""

    def test_alternating_run_is_suitable(self):
        """Test King of spades, Queen of hearts, Jack of spades."""
        run = [up(Suit.SPADES, 13), up(Suit.HEARTS, 12), up(Suit.SPADES, 11)]
        assert is_suitable(run)

    def test_same_color_run_is_not_suitable(self):
        """Test King of spades, Queen of clubs."""
        run = [up(Suit.SPADES, 13), up(Suit.CLUBS, 12)]
        assert in_sequence(run)
        assert not alternates_in_color(run)
        assert not is_suitable(run)

    def test_gap_breaks_sequence(self):
        """Test a skipped rank."""
        run = [up(Suit.SPADES, 9), up(Suit.HEARTS, 7)]
        assert not in_sequence(run)

    def test_ascending_is_not_in_sequence(self):
        """Test runs must descend towards the top."""
        run = [up(Suit.SPADES, 6), up(Suit.HEARTS, 7)]
        assert not in_sequence(run)

    def test_hidden_card(self):
        """Test a face-down card makes the run invisible."""
        run = [Card(Suit.SPADES, 9), up(Suit.HEARTS, 8)]
        assert not is_visible(run)
        assert not is_suitable(run)

    def test_empty_and_single(self):
        """Test trivial runs satisfy every predicate."""
        assert is_suitable([])
        assert is_suitable([up(Suit.CLUBS, 4)])


class TestRunRule:
    """Tests for RunRule."""

    def test_visible_only(self):
        """Test a rule that checks visibility only."""
        rule = RunRule(visible=True, sequential=False, alternating=False)
        assert rule.matches([up(Suit.DIAMONDS, 3), up(Suit.CLUBS, 5), up(Suit.HEARTS, 7)])
        assert not rule.matches([Card(Suit.DIAMONDS, 3)])

    def test_same_suit_runs(self):
        """Test a rule without the color check."""
        rule = RunRule(alternating=False)
        assert rule.matches([up(Suit.SPADES, 5), up(Suit.SPADES, 4)])

    def test_describe(self):
        """Test the rule summary names its checks."""
        assert "alternating" in RunRule().describe()
        assert RunRule(False, False, False).describe() == "any cards"
