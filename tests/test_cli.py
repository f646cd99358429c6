"""
Tests for the command-line interface.
"""

import pytest

from dropfour.debug import debug, DebugLevel
from dropfour.interfaces.cli import (SimpleCLI, main, non_negative_seconds,
                                     parse_position, parse_moves)
from dropfour.utils import ROWS, COLS, Player

RED_ROW_POSITION = ",".join(["0"] * 15 + ["2", "2", "2", "0", "0"] + ["1", "1", "1", "1", "0"])


def feed_input(monkeypatch, answers):
    answers = iter(answers)

    def fake_input(prompt=""):
        try:
            return next(answers)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)


class TestParsing:
    def test_parse_position(self):
        grid = parse_position(RED_ROW_POSITION)
        assert grid.shape == (ROWS, COLS)
        assert list(grid[ROWS - 1]) == [1, 1, 1, 1, 0]

    def test_parse_position_wrong_length(self):
        with pytest.raises(ValueError):
            parse_position("0,0,0")

    def test_parse_position_not_numbers(self):
        with pytest.raises(ValueError):
            parse_position(",".join(["x"] * ROWS * COLS))

    def test_parse_moves(self):
        assert parse_moves("0, 1,2") == [0, 1, 2]


class TestCommands:
    def test_no_command(self, capsys):
        assert main([]) == 1
        assert "specify a command" in capsys.readouterr().out

    def test_check_winner(self, capsys):
        assert main(["check", "--position", RED_ROW_POSITION]) == 0
        out = capsys.readouterr().out
        assert "Winner: Red" in out
        assert "(4, 0), (4, 1), (4, 2), (4, 3)" in out

    def test_check_in_progress(self, capsys):
        position = ",".join(["0"] * 20 + ["1", "2", "0", "0", "0"])
        assert main(["check", "--position", position]) == 0
        out = capsys.readouterr().out
        assert "No winner yet" in out
        assert "Red to play" in out
        assert "Valid moves: [0, 1, 2, 3, 4]" in out

    def test_check_bad_position(self, capsys):
        position = ",".join(["1"] + ["0"] * 24)
        assert main(["check", "--position", position]) == 1
        assert "Error parsing position" in capsys.readouterr().out

    def test_replay(self, capsys):
        assert main(["replay", "--moves", "0,1,0,1,0,1,0"]) == 0
        out = capsys.readouterr().out
        assert "Move 7: Red plays column 0" in out
        assert out.rstrip().endswith("Red wins!")

    def test_replay_full_column(self, capsys):
        assert main(["replay", "--moves", "2,2,2,2,2,2"]) == 0
        assert "Move 6: ignored, column 2 is full" in capsys.readouterr().out

    def test_replay_after_win(self, capsys):
        assert main(["replay", "--moves", "0,1,0,1,0,1,0,3"]) == 0
        assert "Move 8: ignored, the game is already won" in capsys.readouterr().out

    def test_replay_invalid_column(self, capsys):
        assert main(["replay", "--moves", "0,7"]) == 1
        assert "Move 2:" in capsys.readouterr().out

    def test_replay_negative_delay(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["replay", "--moves", "0", "--delay", "-1"])
        assert exc.value.code == 2
        assert "delay must not be negative" in capsys.readouterr().err

    def test_replay_delay_not_a_number(self, capsys):
        with pytest.raises(SystemExit):
            main(["replay", "--moves", "0", "--delay", "soon"])
        assert "invalid number of seconds" in capsys.readouterr().err

    def test_non_negative_seconds(self):
        assert non_negative_seconds("0.25") == 0.25
        assert non_negative_seconds("0") == 0.0

    def test_debug_flags(self):
        cli = SimpleCLI()
        cli.parse_args(["--debug", "replay", "--moves", "0"])
        assert debug.level == DebugLevel.DEBUG

        cli = SimpleCLI()
        cli.parse_args(["--debug-level", "error", "replay", "--moves", "0"])
        assert debug.level == DebugLevel.ERROR

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "dropfour.log"
        assert main(["--debug-level", "info", "--log-file", str(log_file),
                     "replay", "--moves", "0,1,0,1,0,1,0"]) == 0
        debug.configure(log_file="")
        assert "Red wins" in log_file.read_text()


class TestPlay:
    def test_hot_seat_game(self, monkeypatch, capsys):
        feed_input(monkeypatch, ["0", "1", "0", "1", "0", "1", "0"])
        assert main(["play"]) == 0
        out = capsys.readouterr().out
        assert "Game over!" in out
        assert "Red wins!" in out

    def test_invalid_input_and_quit(self, monkeypatch, capsys):
        feed_input(monkeypatch, ["x", "9", "q"])
        assert main(["play"]) == 0
        out = capsys.readouterr().out
        assert "Invalid input" in out
        assert f"Column must be between 0 and {COLS - 1}." in out
        assert "Quitting game." in out

    def test_undo_and_restart(self, monkeypatch, capsys):
        cli = SimpleCLI()
        cli.parse_args(["play"])
        feed_input(monkeypatch, ["u", "2", "3", "u", "r", "4", "q"])
        assert cli.run() == 0

        out = capsys.readouterr().out
        assert "No moves to undo." in out
        assert "Move undone." in out
        assert "Game restarted." in out
        assert cli.game.history == [4]
        assert cli.game.get_current_player() == Player.BLACK

    def test_full_column_message(self, monkeypatch, capsys):
        feed_input(monkeypatch, ["1"] * (ROWS + 1))
        assert main(["play"]) == 0
        assert "Column 1 is full." in capsys.readouterr().out

    def test_end_of_input_quits(self, monkeypatch, capsys):
        feed_input(monkeypatch, [])
        assert main(["play"]) == 0
        assert "Quitting game." in capsys.readouterr().out
