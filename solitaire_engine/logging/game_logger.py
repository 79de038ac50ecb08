"""Game logger for detailed game replay."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, TextIO

from pydantic import BaseModel

from solitaire_engine.models.card import Card
from solitaire_engine.models.state import CardMove, CardView, EngineState, MoveOutcome, PileId

from .formatters import format_card, format_cards, format_pile


class GameLogConfig(BaseModel):
    """Configuration for game logging."""

    enabled: bool = False
    output_path: str = "game_log.jsonl"


class GameLogger:
    """Logger for detailed game events in JSONL format.

    Each line in the output file is a JSON object representing one event.
    This allows step-by-step replay of the game. Several games may share
    one file; every event carries the number of the game it belongs to.
    """

    def __init__(self, config: GameLogConfig | None = None):
        """Initialize game logger.

        Args:
            config: Logging configuration. If None, logging is disabled.
        """
        self.config = config or GameLogConfig()
        self._file: TextIO | None = None
        self.game_num = 0

    def __enter__(self) -> "GameLogger":
        """Context manager entry."""
        if self.config.enabled and self.config.output_path:
            path = Path(self.config.output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(path, "a", encoding="utf-8")
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None

    def _write(self, event: dict[str, Any]) -> None:
        """Write an event to the log file.

        Args:
            event: Event dictionary to write as JSON.
        """
        if self._file:
            self._file.write(json.dumps(event, ensure_ascii=False) + "\n")
            self._file.flush()

    def log_game_start(self, state: EngineState) -> None:
        """Log game start with the dealt layout.

        Args:
            state: Snapshot taken right after the deal.
        """
        self.game_num += 1
        self._write({
            "type": "game_start",
            "game": self.game_num,
            "timestamp": datetime.now().isoformat(),
            "variant": state.variant,
            "piles": [format_pile(p) for p in state.piles()],
        })

    def log_pick(self, source: PileId, depth: int, cards: Iterable[Card]) -> None:
        """Log cards being picked up.

        Args:
            source: Pile the cards came from.
            depth: Requested depth from the top.
            cards: Picked cards, bottom first.
        """
        self._write({
            "type": "pick",
            "game": self.game_num,
            "source": str(source),
            "depth": depth,
            "cards": format_cards(cards),
        })

    def log_place(self, target: PileId, cards: Iterable[Card], outcome: MoveOutcome) -> None:
        """Log the selection being placed.

        Args:
            target: Pile that received the cards.
            cards: Placed cards, bottom first.
            outcome: Result of the move.
        """
        self._write({
            "type": "place",
            "game": self.game_num,
            "target": str(target),
            "cards": format_cards(cards),
            "revealed": outcome.revealed,
            "won": outcome.won,
        })

    def log_cancel(self, source: PileId, cards: Iterable[Card]) -> None:
        """Log the selection being returned to its source."""
        self._write({
            "type": "cancel",
            "game": self.game_num,
            "source": str(source),
            "cards": format_cards(cards),
        })

    def log_draw_stock(self, card: CardView | None, stock_left: int) -> None:
        """Log a stock draw.

        Args:
            card: Card turned to the waste, or None if the waste was recycled.
            stock_left: Cards left in the stock afterwards.
        """
        self._write({
            "type": "draw_stock",
            "game": self.game_num,
            "card": format_card(card) if card is not None else None,
            "recycled": card is None,
            "stock": stock_left,
        })

    def log_deal_row(self, dealt: int, stock_left: int) -> None:
        """Log a row dealt from the stock."""
        self._write({
            "type": "deal_row",
            "game": self.game_num,
            "dealt": dealt,
            "stock": stock_left,
        })

    def log_auto_complete(self, moves: list[CardMove]) -> None:
        """Log cards moved to the foundations automatically."""
        self._write({
            "type": "auto_complete",
            "game": self.game_num,
            "moves": [
                {
                    "card": format_card(m.card),
                    "from": str(m.source),
                    "to": str(m.target),
                }
                for m in moves
            ],
        })

    def log_game_won(self, move_count: int) -> None:
        """Log the game being won."""
        self._write({
            "type": "game_won",
            "game": self.game_num,
            "moves": move_count,
        })
