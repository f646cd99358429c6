"""
board.py - Board state and move application for Drop Four

This module implements the Board class, which owns the grid, applies
column drops and records the winner. Win detection itself lives in
dropfour.utils as pure functions over the grid.
"""

from typing import List, Optional

import numpy as np

from dropfour.debug import debug
from dropfour.utils import (ROWS, COLS, Player, GameResult, Position,
                            InvalidColumnError, count_pieces, find_winner,
                            find_winning_line, get_drop_row, player_for_move,
                            render_board_ascii, validate_grid)


class Board:
    """
    A 5x5 Drop Four board.

    Pieces are dropped into columns and settle in the lowest empty cell.
    RED moves first; whose turn it is follows from the number of pieces
    placed. Once a winner is found the board no longer changes.
    """

    def __init__(self):
        """Initialize an empty board."""
        debug.debug("Initializing new Board", "board")
        self.reset()

    def reset(self):
        """Reset the board to an empty state."""
        self.grid = np.zeros((ROWS, COLS), dtype=int)
        self.move_count = 0
        self.moves_made: List[int] = []
        self.winner: Optional[Player] = None
        self.last_move: Optional[Position] = None

    @classmethod
    def from_grid(cls, grid, strict: bool = True) -> 'Board':
        """
        Build a board from an explicit grid.

        The move count is the number of pieces on the grid. If both colors
        hold a winning line, the player who moved last is the winner.

        Args:
            grid: Array-like of shape (ROWS, COLS) holding Player values
            strict: Also check gravity and red/black piece counts

        Returns:
            A new Board in that position

        Raises:
            InvalidBoardError: if the grid is malformed
        """
        board = cls()
        board.grid = validate_grid(grid, ROWS, COLS, strict=strict)
        board.move_count = count_pieces(board.grid)

        last_player = board.current_player.other()
        board.winner = find_winner(board.grid, (last_player, last_player.other()))
        debug.debug(f"Loaded board with {board.move_count} pieces, winner: {board.winner}", "board")
        return board

    def copy(self) -> 'Board':
        """
        Create a deep copy of the board.

        Returns:
            A new Board instance with the same state
        """
        new_board = type(self).__new__(type(self))
        new_board.grid = self.grid.copy()
        new_board.move_count = self.move_count
        new_board.moves_made = self.moves_made.copy()
        new_board.winner = self.winner
        new_board.last_move = self.last_move
        return new_board

    @property
    def current_player(self) -> Player:
        """The player whose piece the next drop places."""
        return player_for_move(self.move_count)

    @property
    def game_result(self) -> GameResult:
        if self.winner is not None:
            return GameResult.for_winner(self.winner)
        if self.is_full():
            return GameResult.DRAW
        return GameResult.IN_PROGRESS

    def _check_column(self, column) -> None:
        if isinstance(column, bool) or not isinstance(column, (int, np.integer)):
            raise InvalidColumnError(column, COLS)
        if not 0 <= column < COLS:
            raise InvalidColumnError(column, COLS)

    def is_valid_move(self, column) -> bool:
        """
        Check if a drop into ``column`` would place a piece.

        Args:
            column: The column to drop into (0-indexed)

        Returns:
            True if the column exists, is not full and the game is not won
        """
        try:
            self._check_column(column)
        except InvalidColumnError:
            return False

        if self.winner is not None:
            return False

        return bool(self.grid[0, column] == Player.EMPTY.value)

    def get_valid_moves(self) -> List[int]:
        if self.winner is not None:
            return []
        return [col for col in range(COLS) if self.grid[0, col] == Player.EMPTY.value]

    def is_full(self) -> bool:
        return self.move_count == ROWS * COLS

    def is_draw(self) -> bool:
        """True when the board is full and nobody has four in a row."""
        return self.winner is None and self.is_full()

    def place_piece(self, column: int) -> 'Board':
        """
        Drop the current player's piece into ``column``.

        Dropping into a full column, or after the game has been won, does
        nothing. After a piece is placed the whole board is scanned for a
        winner, checking the player who just moved before the opponent.

        Args:
            column: The column to drop into (0-indexed)

        Returns:
            This board, in its updated state

        Raises:
            InvalidColumnError: if ``column`` is not an integer in range
        """
        self._check_column(column)

        if self.winner is not None:
            debug.debug(f"Ignoring drop in column {column}: {self.winner.label} has already won", "board")
            return self

        row = get_drop_row(self.grid, column)
        if row is None:
            debug.debug(f"Ignoring drop in column {column}: column is full", "board")
            return self

        player = self.current_player
        debug.trace(f"Placing {player.label} at ({row}, {column})", "board")
        self.grid[row, column] = player.value
        self.move_count += 1
        self.moves_made.append(int(column))
        self.last_move = (row, int(column))

        with debug.timer("win_check", "board"):
            self.winner = find_winner(self.grid, (player, player.other()))

        if self.winner is not None:
            debug.info(f"{self.winner.label} wins after move at {self.last_move}", "board")
        elif self.is_full():
            debug.info("Board is full with no winner", "board")

        return self

    def make_move(self, column: int) -> bool:
        """
        Place a piece and report whether it went onto the board.

        Returns:
            True if a piece was placed, False for a full column or a won game
        """
        before = self.move_count
        self.place_piece(column)
        return self.move_count > before

    def has_winner(self) -> Optional[Player]:
        """The winning player, or None while the game is undecided."""
        return self.winner

    def get_winning_line(self) -> List[Position]:
        """
        Get the positions of the winning run.

        Returns:
            (row, col) positions of the run, or an empty list if no winner
        """
        if self.winner is None:
            return []
        return find_winning_line(self.grid, self.winner)

    def get_state(self) -> np.ndarray:
        """Get a copy of the grid."""
        return self.grid.copy()

    def render(self) -> str:
        return render_board_ascii(self.grid, highlight=self.get_winning_line())

    def __str__(self) -> str:
        return self.render()
