"""Main entry point for the solitaire engine."""

import argparse
import logging
import random
import sys
from datetime import datetime
from pathlib import Path
from typing import Callable

from solitaire_engine.config import Config, load_config
from solitaire_engine.exceptions import SolitaireError
from solitaire_engine.game.engine import SolitaireEngine
from solitaire_engine.game.variants import Variant
from solitaire_engine.logging import GameLogConfig, GameLogger
from solitaire_engine.models.state import EngineState, PileId
from solitaire_engine.utils.logger import BoardDisplay, setup_logging

logger = logging.getLogger(__name__)

HELP = """Commands:
  pick <pile> [depth]   pick up cards (t0..t9, w, c0..c3; depth 0 is the top card)
  place <pile>          place the picked up cards (t0.., f0.., c0..)
  cancel                put the picked up cards back
  draw                  turn a stock card to the waste
  deal                  deal a row from the stock
  auto                  move every playable card to the foundations
  show                  show the table
  rules                 show the rules of the current game
  new [variant]         start a new game
  quit                  leave"""


def generate_log_filename(log_dir: str, variant: str) -> str:
    """Generate log filename with timestamp and variant.

    Format: {ISO timestamp}_{variant}.jsonl

    Args:
        log_dir: Directory for log files.
        variant: Variant of the first game.

    Returns:
        Full path to log file.
    """
    timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    return str(Path(log_dir) / f"{timestamp}_{variant}.jsonl")


def parse_command(line: str) -> tuple[str, list[str]]:
    """Split an input line into a lower-case command and its arguments."""
    parts = line.split()
    if not parts:
        return "", []
    return parts[0].lower(), parts[1:]


class Session:
    """Interactive game session reading one command per line."""

    def __init__(
        self,
        config: Config,
        display: BoardDisplay,
        game_logger: GameLogger | None = None,
        rng: random.Random | None = None,
    ):
        """Initialize session and deal the first game.

        Args:
            config: Configuration
            display: Board display
            game_logger: GameLogger instance for move replay logging
            rng: Randomness source shared by every game of the session
        """
        self.config = config
        self.display = display
        self.game_logger = game_logger
        self.rng = rng or random.Random(config.engine.seed)
        self.engine = self._deal(config.engine.variant)

        self._commands: dict[str, Callable[[list[str]], None]] = {
            "pick": self._pick,
            "place": self._place,
            "cancel": lambda args: self.engine.cancel(),
            "draw": self._draw,
            "deal": self._deal_row,
            "auto": self._auto,
            "show": lambda args: self.display.print_board(self.engine.snapshot()),
            "rules": lambda args: self.display.print_rules(self.engine.policy.describe()),
            "new": self._new,
            "help": lambda args: print(HELP),
        }

    def _deal(self, variant: str) -> SolitaireEngine:
        engine = SolitaireEngine.new_game(
            variant, self.config, rng=self.rng, game_logger=self.game_logger
        )
        engine.set_callbacks(on_win=self._on_win)
        return engine

    def _on_win(self, state: EngineState) -> None:
        self.display.print_won(state)

    def execute(self, line: str) -> bool:
        """Run one command.

        Errors from the engine and malformed arguments are reported and
        leave the game as it was.

        Returns:
            False when the session should end.
        """
        command, args = parse_command(line)
        if not command:
            return True
        if command in ("quit", "exit", "q"):
            return False

        handler = self._commands.get(command)
        if handler is None:
            print(f"Unknown command: {command} (try 'help')")
            return True

        try:
            handler(args)
        except (SolitaireError, ValueError) as e:
            logger.debug(f"Command {line!r} failed: {e}")
            print(f"  !! {e}")
        return True

    def _pick(self, args: list[str]) -> None:
        if not args:
            raise ValueError("Usage: pick <pile> [depth]")
        pile_id = PileId.parse(args[0])
        depth = int(args[1]) if len(args) > 1 else 0
        cards = self.engine.pick(pile_id, depth)
        held = " ".join(self.display.card_text(c) for c in cards)
        print(f"  holding: {held}")

    def _place(self, args: list[str]) -> None:
        if not args:
            raise ValueError("Usage: place <pile>")
        outcome = self.engine.place(PileId.parse(args[0]))
        self.display.print_outcome(outcome)
        self.display.print_board(self.engine.snapshot())

    def _draw(self, args: list[str]) -> None:
        card = self.engine.draw_stock()
        if card is None:
            print("  waste turned back onto the stock")
        self.display.print_board(self.engine.snapshot())

    def _deal_row(self, args: list[str]) -> None:
        dealt = self.engine.deal_row()
        print(f"  dealt {dealt} card(s)")
        self.display.print_board(self.engine.snapshot())

    def _auto(self, args: list[str]) -> None:
        moves = self.engine.auto_complete()
        print(f"  moved {len(moves)} card(s) to the foundations")
        self.display.print_board(self.engine.snapshot())

    def _new(self, args: list[str]) -> None:
        variant = args[0] if args else self.engine.variant.value
        self.engine = self._deal(variant)
        self.display.print_board(self.engine.snapshot())

    def run(self, stream=sys.stdin) -> None:
        """Read commands until quit or end of input."""
        self.display.print_board(self.engine.snapshot())
        print("Type 'help' for commands.")
        while True:
            print("> ", end="", flush=True)
            line = stream.readline()
            if not line:
                break
            if not self.execute(line):
                break


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        description="Klondike, FreeCell, Spider and Yukon solitaire"
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config file (YAML)",
    )
    parser.add_argument(
        "--variant",
        choices=[v.value for v in Variant],
        help="Variant to play (overrides config)",
    )
    parser.add_argument(
        "-s",
        "--seed",
        type=int,
        help="Shuffle seed (overrides config)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--show-hidden",
        action="store_true",
        help="Show face-down cards",
    )
    parser.add_argument(
        "--game-log",
        type=Path,
        help="Directory for game log files (filename auto-generated)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success)
    """
    args = build_parser().parse_args(argv)

    # Load config
    config = load_config(args.config)

    # Apply command-line overrides
    if args.variant:
        config.engine.variant = args.variant
    if args.seed is not None:
        config.engine.seed = args.seed
    if args.verbose:
        config.logging.level = "DEBUG"
    if args.show_hidden:
        config.logging.show_hidden = True

    setup_logging(config.logging.level)
    display = BoardDisplay(show_hidden=config.logging.show_hidden)

    # A --game-log directory overrides the file named in the config
    if args.game_log is not None:
        log_path = generate_log_filename(str(args.game_log), config.engine.variant)
        game_log_config = GameLogConfig(enabled=True, output_path=log_path)
    else:
        game_log_config = config.game_log
    if game_log_config.enabled:
        print(f"Game log: {game_log_config.output_path}")

    try:
        with GameLogger(game_log_config) as game_logger:
            session = Session(config, display, game_logger)
            session.run()
        return 0

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"Engine error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
