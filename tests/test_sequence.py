"""Tests for card sequences, deck assembly and shuffling."""

import random
from collections import Counter

import pytest

from solitaire_engine.models.card import Suit
from solitaire_engine.models.piles import Foundation
from solitaire_engine.models.sequence import CardSequence, _midpoint


def multiset(cards):
    return Counter((card.suit, card.rank) for card in cards)


class TestFillBySuit:
    """Tests for deck assembly."""

    def test_full_deck(self):
        """Test a filled deck holds 52 distinct face-down cards."""
        deck = CardSequence()
        deck.fill_by_suit()
        assert deck.size() == 52
        assert len(multiset(deck)) == 52
        assert all(not card.face_up for card in deck)

    def test_order(self):
        """Test cards go suit by suit, ranks ascending."""
        deck = CardSequence()
        deck.fill_by_suit()
        cards = deck.cards()
        assert (cards[0].suit, cards[0].rank) == (Suit.SPADES, 1)
        assert (cards[12].suit, cards[12].rank) == (Suit.SPADES, 13)
        assert (cards[13].suit, cards[13].rank) == (Suit.HEARTS, 1)
        assert (cards[-1].suit, cards[-1].rank) == (Suit.CLUBS, 13)


class TestShuffle:
    """Tests for the two-stage shuffle."""

    @pytest.mark.parametrize("seed", [0, 1, 42, 2024])
    def test_preserves_single_deck(self, seed):
        """Test shuffling 52 cards keeps the same multiset."""
        deck = CardSequence()
        deck.fill_by_suit()
        before = multiset(deck)
        identities = {id(card) for card in deck}
        deck.shuffle(random.Random(seed))
        assert deck.size() == 52
        assert multiset(deck) == before
        assert {id(card) for card in deck} == identities

    @pytest.mark.parametrize("seed", [3, 7])
    def test_preserves_double_deck(self, seed):
        """Test a two-deck shuffle keeps every duplicate."""
        deck = CardSequence.random_deck(random.Random(seed), decks=2)
        counts = multiset(deck)
        assert deck.size() == 104
        assert len(counts) == 52
        assert set(counts.values()) == {2}

    def test_same_seed_same_order(self):
        """Test an injected seed makes the shuffle reproducible."""
        first = CardSequence.random_deck(random.Random(99))
        second = CardSequence.random_deck(random.Random(99))
        assert [(c.suit, c.rank) for c in first] == [(c.suit, c.rank) for c in second]

    def test_changes_order(self):
        """Test a shuffle does not return the assembly order."""
        ordered = CardSequence()
        ordered.fill_by_suit()
        shuffled = CardSequence.random_deck(random.Random(5))
        assert [(c.suit, c.rank) for c in shuffled] != [(c.suit, c.rank) for c in ordered]

    @pytest.mark.parametrize("size", [0, 1])
    def test_tiny_sequences(self, size):
        """Test empty and single-card sequences survive a shuffle."""
        deck = CardSequence()
        deck.fill_by_suit()
        small = CardSequence(deck.cards()[:size])
        small.shuffle(random.Random(1))
        assert small.size() == size

    def test_midpoint(self):
        """Test the left half gets the extra card of an odd length."""
        assert _midpoint([None] * 2) == 1
        assert _midpoint([None] * 3) == 2
        assert _midpoint([None] * 4) == 2
        assert _midpoint([None] * 5) == 3


class TestCopies:
    """Tests for copies of card piles."""

    def test_copy_of_pile_is_plain_sequence(self):
        """Test copying a foundation drops its rules."""
        foundation = Foundation()
        assert type(foundation.copy()) is CardSequence
        assert type(foundation.reverse_copy()) is CardSequence

    def test_set_face_up(self):
        """Test turning every card at once."""
        deck = CardSequence()
        deck.fill_by_suit()
        deck.set_face_up(True)
        assert all(card.face_up for card in deck)
