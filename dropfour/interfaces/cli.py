"""
cli.py - Command-line interface for Drop Four

This module provides a CLI for hot-seat play, for analysing a board
position and for replaying a sequence of moves.
"""

import argparse
import sys
import time
from typing import List, Optional

import numpy as np

from dropfour.debug import debug, DebugLevel
from dropfour.utils import ROWS, COLS
from dropfour.game.board import Board
from dropfour.game.rules import DropFourGame

# Special commands returned by get_human_move
QUIT = -1
UNDO = -2
RESTART = -3

DEBUG_LEVELS = [level.name.lower() for level in DebugLevel]


def parse_position(text: str) -> np.ndarray:
    """
    Parse a comma-separated position string.

    Args:
        text: ROWS * COLS values (0 empty, 1 red, 2 black), row by row
            starting with the top row

    Returns:
        The grid as a (ROWS, COLS) array

    Raises:
        ValueError: if the string has the wrong length or non-integer values
    """
    values = [int(value) for value in text.replace(' ', '').split(',') if value]
    if len(values) != ROWS * COLS:
        raise ValueError(f"Position string must have {ROWS * COLS} values, got {len(values)}")
    return np.array(values, dtype=int).reshape(ROWS, COLS)


def parse_moves(text: str) -> List[int]:
    """Parse a comma-separated list of columns."""
    return [int(value) for value in text.replace(' ', '').split(',') if value]


def non_negative_seconds(text: str) -> float:
    """argparse type for a pause length in seconds."""
    try:
        seconds = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number of seconds: {text!r}")
    if seconds < 0:
        raise argparse.ArgumentTypeError(f"delay must not be negative, got {text}")
    return seconds


class SimpleCLI:
    """Simple command-line interface for Drop Four."""

    def __init__(self):
        self.game = DropFourGame()
        self.args = None

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='Drop Four - four in a row on a 5x5 board')
        parser.add_argument('--debug', action='store_true', help='Enable debug logging')
        parser.add_argument('--debug-level', choices=DEBUG_LEVELS, default='warning',
                            help='Logging level (default: warning)')
        parser.add_argument('--log-file', type=str, default=None,
                            help='Also write log messages to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        subparsers.add_parser('play', help='Play a two-player game at the terminal')

        check_parser = subparsers.add_parser('check', help='Analyse a board position')
        check_parser.add_argument('--position', type=str, required=True,
                                  help=f'{ROWS * COLS} comma-separated values, top row first '
                                       '(0 empty, 1 red, 2 black)')

        replay_parser = subparsers.add_parser('replay', help='Replay a sequence of moves')
        replay_parser.add_argument('--moves', type=str, required=True,
                                   help='Comma-separated columns, e.g. 0,1,1,2')
        replay_parser.add_argument('--delay', type=non_negative_seconds, default=0.0,
                                   help='Seconds to pause between moves')

        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments and apply the logging settings."""
        self.args = self.build_parser().parse_args(argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)

        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """
        Run the command selected on the command line.

        Returns:
            Process exit code
        """
        if self.args is None:
            self.parse_args(argv)

        if self.args.command == 'play':
            return self.play_game()
        elif self.args.command == 'check':
            return self.check_position()
        elif self.args.command == 'replay':
            return self.replay_moves()

        print("Please specify a command. Use --help for options.")
        return 1

    def play_game(self) -> int:
        """Play a hot-seat game, both players entering moves in turn."""
        print("Starting a new Drop Four game!")
        print(f"Enter a column number (0-{COLS - 1}) to drop a piece.")
        print("Other commands: 'q' to quit, 'u' to undo, 'r' to restart.")

        self.game.reset()
        print(self.game.render())

        while not self.game.is_game_over():
            print(self.game.status_message())
            move = self.get_human_move()

            if move is None:
                continue
            elif move == QUIT:
                print("Quitting game.")
                return 0
            elif move == UNDO:
                if self.game.undo_move():
                    print("Move undone.")
                    print(self.game.render())
                else:
                    print("No moves to undo.")
                continue
            elif move == RESTART:
                self.game.reset()
                print("Game restarted.")
                print(self.game.render())
                continue

            if self.game.make_move(move):
                print(self.game.render())
            else:
                print(f"Column {move} is full.")

        print("Game over!")
        print(self.game.status_message())
        return 0

    def get_human_move(self) -> Optional[int]:
        """
        Read one move from standard input.

        Returns:
            Column index, a special command code, or None for invalid input
        """
        player = self.game.get_current_player()
        try:
            user_input = input(f"{player.label}'s move (0-{COLS - 1}, q/u/r): ").strip().lower()
        except EOFError:
            return QUIT

        if user_input == 'q':
            return QUIT
        elif user_input == 'u':
            return UNDO
        elif user_input == 'r':
            return RESTART

        try:
            move = int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or a command.")
            return None

        if not 0 <= move < COLS:
            print(f"Column must be between 0 and {COLS - 1}.")
            return None

        return move

    def check_position(self) -> int:
        """Load a position and report its winner and playable columns."""
        try:
            board = Board.from_grid(parse_position(self.args.position))
        except ValueError as e:
            print(f"Error parsing position: {e}")
            return 1

        print("Loaded position:")
        print(board.render())
        print(f"\nPieces on board: {board.move_count}")

        winner = board.has_winner()
        if winner is not None:
            print(f"Winner: {winner.label}")
            print(f"Winning line: {board.get_winning_line()}")
        elif board.is_draw():
            print("Board is full with no winner")
        else:
            print("No winner yet")
            print(f"{board.current_player.label} to play")
            print(f"Valid moves: {board.get_valid_moves()}")

        return 0

    def replay_moves(self) -> int:
        """Replay the given columns one at a time."""
        try:
            columns = parse_moves(self.args.moves)
        except ValueError as e:
            print(f"Error parsing moves: {e}")
            return 1

        game = DropFourGame()
        print("Initial board:")
        print(game.render())

        for i, column in enumerate(columns):
            player = game.get_current_player()
            try:
                placed = game.make_move(column)
            except ValueError as e:
                print(f"\nMove {i + 1}: {e}")
                return 1

            if placed:
                print(f"\nMove {i + 1}: {player.label} plays column {column}")
                print(game.render())
            elif game.get_winner() is not None:
                print(f"\nMove {i + 1}: ignored, the game is already won")
            else:
                print(f"\nMove {i + 1}: ignored, column {column} is full")

            if self.args.delay:
                time.sleep(self.args.delay)

        print(f"\n{game.status_message()}")
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
