"""Tests for card models."""

import pytest
from pydantic import ValidationError

from solitaire_engine.exceptions import InvalidConstruction
from solitaire_engine.models.card import (
    ACE,
    KING,
    Card,
    Color,
    Suit,
    color_of,
    compare,
    rank_label,
    same_color,
)


class TestCard:
    """Tests for Card class."""

    def test_create_card(self):
        """Test creating a card."""
        card = Card(Suit.SPADES, ACE)
        assert card.suit == Suit.SPADES
        assert card.rank == 1
        assert not card.face_up
        assert card.is_hidden

    @pytest.mark.parametrize("rank", [0, 14, -1])
    def test_rank_out_of_range(self, rank):
        """Test ranks outside 1..13 are refused."""
        with pytest.raises(InvalidConstruction):
            Card(Suit.HEARTS, rank)

    def test_labels(self):
        """Test rank labels."""
        assert Card(Suit.SPADES, 1).label() == "A"
        assert Card(Suit.SPADES, 10).label() == "10"
        assert Card(Suit.SPADES, 11).label() == "J"
        assert Card(Suit.SPADES, 12).label() == "Q"
        assert rank_label(KING) == "K"
        assert rank_label(7) == "7"

    def test_card_string(self):
        """Test card string representation."""
        assert str(Card(Suit.HEARTS, 12)) == "♥Q"
        assert "down" in repr(Card(Suit.CLUBS, 3))

    def test_colors(self):
        """Test hearts and diamonds are red, spades and clubs black."""
        assert color_of(Suit.HEARTS) == Color.RED
        assert color_of(Suit.DIAMONDS) == Color.RED
        assert color_of(Suit.SPADES) == Color.BLACK
        assert color_of(Suit.CLUBS) == Color.BLACK
        assert same_color(Card(Suit.SPADES, 2), Card(Suit.CLUBS, 9))
        assert not same_color(Card(Suit.SPADES, 2), Card(Suit.DIAMONDS, 2))

    def test_flip(self):
        """Test turning a card over."""
        card = Card(Suit.CLUBS, 5)
        card.flip()
        assert card.face_up
        card.flip()
        assert not card.face_up

    def test_suit_and_rank_are_fixed(self):
        """Test suit and rank cannot be reassigned."""
        card = Card(Suit.CLUBS, 5)
        with pytest.raises(ValidationError):
            card.rank = 6
        assert card.rank == 5

    def test_identity_equality(self):
        """Test cards with the same suit and rank are still distinct."""
        card1 = Card(Suit.SPADES, ACE)
        card2 = Card(Suit.SPADES, ACE)
        assert card1 == card1
        assert card1 != card2
        assert len({card1, card2}) == 2

    def test_compare_by_rank_only(self):
        """Test comparison ignores the suit."""
        assert compare(Card(Suit.SPADES, 5), Card(Suit.HEARTS, 3)) == 2
        assert compare(Card(Suit.SPADES, 5), Card(Suit.HEARTS, 5)) == 0
        assert compare(Card(Suit.SPADES, 1), Card(Suit.HEARTS, 13)) < 0
