"""Run predicates shared by every variant.

A run is read from its top card down to its bottom card. Each predicate
accepts any iterable of cards listed bottom first (a stack or a list).
"""

from dataclasses import dataclass
from typing import Iterable

from solitaire_engine.models.card import Card, compare, same_color


def _top_down(cards: Iterable[Card]) -> list[Card]:
    return list(cards)[::-1]


def is_visible(cards: Iterable[Card]) -> bool:
    """Check if no card in the run is face down."""
    return all(card.face_up for card in cards)


def in_sequence(cards: Iterable[Card]) -> bool:
    """Check if each card is exactly one rank below the card under it."""
    run = _top_down(cards)
    for upper, lower in zip(run, run[1:]):
        if compare(lower, upper) != 1:
            return False
    return True


def alternates_in_color(cards: Iterable[Card]) -> bool:
    """Check if no two adjacent cards share a color."""
    run = _top_down(cards)
    for upper, lower in zip(run, run[1:]):
        if same_color(upper, lower):
            return False
    return True


def is_suitable(cards: Iterable[Card]) -> bool:
    """Check if a run is visible, in sequence and alternating in color."""
    run = list(cards)
    return alternates_in_color(run) and in_sequence(run) and is_visible(run)


@dataclass(frozen=True)
class RunRule:
    """Combination of run predicates a variant requires."""

    visible: bool = True
    sequential: bool = True
    alternating: bool = True

    def matches(self, cards: Iterable[Card]) -> bool:
        """Check a run against every enabled predicate."""
        run = list(cards)
        if self.visible and not is_visible(run):
            return False
        if self.sequential and not in_sequence(run):
            return False
        if self.alternating and not alternates_in_color(run):
            return False
        return True

    def describe(self) -> str:
        parts = []
        if self.visible:
            parts.append("face up")
        if self.sequential:
            parts.append("descending by one")
        if self.alternating:
            parts.append("alternating colors")
        return ", ".join(parts) if parts else "any cards"
