"""Card sequence: a stack of cards with deck assembly and shuffling."""

from __future__ import annotations

import random

from .card import MAX_RANK, MIN_RANK, Card, Suit
from .stack import BoundedStack


class CardSequence(BoundedStack[Card]):
    """Stack of cards.

    ``copy()`` and ``reverse_copy()`` of any card pile return a plain
    ``CardSequence``, so a detached run never carries pile rules with it.
    """

    def _new_empty(self) -> CardSequence:
        return CardSequence()

    def fill_by_suit(self) -> None:
        """Push all 52 cards face down, suit by suit, ranks ascending."""
        for suit in Suit:
            for rank in range(MIN_RANK, MAX_RANK + 1):
                self.push(Card(suit, rank, face_up=False))

    def cards(self) -> list[Card]:
        """Get cards as a list, bottom first."""
        return list(self._items)

    def set_face_up(self, face_up: bool) -> None:
        """Turn every card in the sequence to the given side."""
        for card in self._items:
            card.face_up = face_up

    def shuffle(self, rng: random.Random | None = None) -> None:
        """Reorder the cards randomly.

        Two stages, always in this order:

        1. Merge-shuffle: split at the midpoint found by a slow/fast cursor
           walk, merge-shuffle both halves recursively, then merge them by
           taking the head of either remainder with probability 0.5 until
           one runs out.
        2. Knuth/Fisher-Yates pass from front to back. At position ``i`` an
           offset is drawn uniformly from ``[0, remaining)`` and the values
           at ``i`` and ``i + offset`` are swapped.

        "Front" is the top of the stack. The result is a permutation of the
        input; no card is created, duplicated or lost.

        Args:
            rng: Randomness source (a fresh ``random.Random`` if omitted).
        """
        rng = rng or random.Random()
        front_to_back = self._items[::-1]
        front_to_back = _knuth_shuffle(_merge_shuffle(front_to_back, rng), rng)
        self._items = front_to_back[::-1]

    @classmethod
    def random_deck(cls, rng: random.Random | None = None, decks: int = 1) -> CardSequence:
        """Create a shuffled deck of ``52 * decks`` face-down cards."""
        deck = cls()
        for _ in range(decks):
            deck.fill_by_suit()
        deck.shuffle(rng)
        return deck


def _midpoint(cards: list[Card]) -> int:
    """Get the length of the left half using a slow/fast cursor walk.

    The slow cursor advances by one and the fast one by two until the fast
    one has no successor; the left half ends at the slow cursor.
    """
    slow = 0
    fast = 1
    while fast < len(cards) and fast + 1 < len(cards):
        slow += 1
        fast += 2
    return slow + 1


def _merge_shuffle(cards: list[Card], rng: random.Random) -> list[Card]:
    if len(cards) < 2:
        return cards
    split = _midpoint(cards)
    left = _merge_shuffle(cards[:split], rng)
    right = _merge_shuffle(cards[split:], rng)
    return _randomized_merge(left, right, rng)


def _randomized_merge(left: list[Card], right: list[Card], rng: random.Random) -> list[Card]:
    merged: list[Card] = []
    i = j = 0
    while i < len(left) and j < len(right):
        if rng.random() <= 0.5:
            merged.append(left[i])
            i += 1
        else:
            merged.append(right[j])
            j += 1
    merged.extend(left[i:])
    merged.extend(right[j:])
    return merged


def _knuth_shuffle(cards: list[Card], rng: random.Random) -> list[Card]:
    remaining = len(cards)
    if remaining < 2:
        return cards
    # The last position has nothing left to swap with
    for i in range(len(cards) - 1):
        offset = int(rng.random() * remaining)
        remaining -= 1
        j = i + offset
        cards[i], cards[j] = cards[j], cards[i]
    return cards
