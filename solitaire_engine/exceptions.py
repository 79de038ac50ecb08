"""Error kinds raised by the rule engine.

All of them are recoverable: a rejected move leaves every container exactly
as it was before the call.
"""


class SolitaireError(Exception):
    """Base class for engine errors."""


class InvalidConstruction(SolitaireError):
    """A card was created with a rank outside 1..13."""


class IllegalMove(SolitaireError):
    """A pick or place violates the variant policy or a pile invariant."""


class EmptySelection(SolitaireError):
    """Place or cancel was requested with nothing picked up."""


class InsufficientDepth(SolitaireError):
    """A pick asked for more cards than the pile holds."""
