"""Tests for the command-line interface."""

import io
import random

import pytest

from solitaire_engine.config import Config, EngineConfig
from solitaire_engine.main import Session, build_parser, generate_log_filename, parse_command
from solitaire_engine.models.state import PileId, PileKind
from solitaire_engine.utils.logger import BoardDisplay


@pytest.fixture
def session():
    """Klondike session with a fixed shuffle."""
    config = Config(engine=EngineConfig(variant="klondike", seed=11))
    return Session(config, BoardDisplay(), rng=random.Random(11))


class TestParsing:
    """Tests for argument and command parsing."""

    def test_parse_command(self):
        """Test a line splits into a command and its arguments."""
        assert parse_command("PICK t3 2\n") == ("pick", ["t3", "2"])
        assert parse_command("   ") == ("", [])

    @pytest.mark.parametrize(
        "text, kind, index",
        [
            ("t3", PileKind.TABLEAU, 3),
            ("tableau:3", PileKind.TABLEAU, 3),
            ("f0", PileKind.FOUNDATION, 0),
            ("c2", PileKind.CELL, 2),
            ("w", PileKind.WASTE, 0),
            ("stock", PileKind.STOCK, 0),
        ],
    )
    def test_parse_pile(self, text, kind, index):
        """Test pile addresses."""
        pile_id = PileId.parse(text)
        assert pile_id.kind == kind
        assert pile_id.index == index

    @pytest.mark.parametrize("text", ["x1", "", "t-1", "tableau:a"])
    def test_parse_bad_pile(self, text):
        """Test unknown addresses are refused."""
        with pytest.raises(ValueError):
            PileId.parse(text)

    def test_arguments(self):
        """Test command-line options."""
        args = build_parser().parse_args(["--variant", "freecell", "-s", "5", "-v"])
        assert args.variant == "freecell"
        assert args.seed == 5
        assert args.verbose
        assert args.config is None
        assert args.game_log is None

    def test_bad_variant(self):
        """Test an unknown variant is rejected by the parser."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--variant", "pyramid"])

    def test_log_filename(self):
        """Test log files are named after the variant."""
        path = generate_log_filename("logs", "yukon")
        assert path.startswith("logs")
        assert path.endswith("_yukon.jsonl")


class TestSession:
    """Tests for interactive commands."""

    def test_quit(self, session):
        """Test quit ends the session."""
        assert not session.execute("quit")
        assert session.execute("")

    def test_unknown_command(self, session, capsys):
        """Test unknown commands are reported."""
        assert session.execute("jump")
        assert "Unknown command" in capsys.readouterr().out

    def test_draw(self, session):
        """Test draw turns a card to the waste."""
        session.execute("draw")
        assert session.engine.board.waste.size() == 1
        assert session.engine.move_count == 1

    def test_errors_are_reported(self, session, capsys):
        """Test engine errors keep the session running."""
        assert session.execute("place t0")
        assert "Nothing is picked up" in capsys.readouterr().out
        assert session.execute("pick t0 5")
        assert session.engine.selection.is_empty()
        assert session.execute("pick nowhere")
        assert session.execute("pick")

    def test_pick_and_cancel(self, session):
        """Test picking up and putting back."""
        session.execute("pick t6")
        assert session.engine.selection.size() == 1
        session.execute("cancel")
        assert session.engine.selection.is_empty()
        assert session.engine.board.tableaux[6].size() == 7

    def test_new_game(self, session):
        """Test switching variant."""
        session.execute("new spider_easy")
        assert session.engine.variant.value == "spider_easy"
        session.execute("new pyramid")
        assert session.engine.variant.value == "spider_easy"

    def test_rules(self, session, capsys):
        """Test the rules summary names the variant."""
        session.execute("rules")
        assert "Klondike" in capsys.readouterr().out

    def test_run_until_end_of_input(self, session, capsys):
        """Test the loop reads commands from a stream."""
        session.run(io.StringIO("show\ndraw\nquit\ndraw\n"))
        assert session.engine.move_count == 1
        assert "t0:" in capsys.readouterr().out


class TestBoardDisplay:
    """Tests for the text board."""

    def test_hidden_cards(self, session):
        """Test face-down cards are masked unless requested."""
        state = session.engine.snapshot()
        assert "##" in BoardDisplay().render(state)
        assert "##" not in BoardDisplay(show_hidden=True).render(state)
