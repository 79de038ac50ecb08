"""Rule engine for Klondike, FreeCell, Spider and Yukon solitaire."""

__version__ = "0.1.0"
