"""
utils.py - Constants, enumerations and win detection for Drop Four

This module provides the game constants, the player/result enumerations
and the pure functions that scan a grid for four-in-a-row. Every function
here takes the grid explicitly so it can be used (and tested) without a
Board instance.

Grid convention: a numpy integer array of shape (rows, cols). Row 0 is the
top of the board; pieces settle towards the last row.
"""

from enum import Enum, auto
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

# Game constants
ROWS = 5
COLS = 5
CONNECT_N = 4  # Number of pieces in a row to win

Position = Tuple[int, int]


class InvalidColumnError(ValueError):
    """Raised when a move targets a column that does not exist."""

    def __init__(self, column, cols: int = COLS):
        super().__init__(f"Column must be an integer between 0 and {cols - 1}, got {column!r}")
        self.column = column


class InvalidBoardError(ValueError):
    """Raised when a grid cannot be the result of legal column drops."""


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    RED = 1    # Moves first
    BLACK = 2

    def other(self) -> 'Player':
        """Get the opposing player."""
        if self == Player.RED:
            return Player.BLACK
        elif self == Player.BLACK:
            return Player.RED
        return Player.EMPTY

    @property
    def label(self) -> str:
        return self.name.capitalize()

    def __str__(self):
        if self == Player.EMPTY:
            return "."
        elif self == Player.RED:
            return "R"
        else:
            return "B"


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    RED_WIN = auto()
    BLACK_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        return self != GameResult.IN_PROGRESS

    @classmethod
    def for_winner(cls, player: Player) -> 'GameResult':
        return cls.RED_WIN if player == Player.RED else cls.BLACK_WIN


class Direction(Enum):
    """The four axes a winning line can lie on."""
    HORIZONTAL = auto()     # left to right
    VERTICAL = auto()       # bottom to top
    DIAGONAL_UP = auto()    # bottom-left to top-right
    DIAGONAL_DOWN = auto()  # top-left to bottom-right


# Step (row, col) taken along each direction
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (-1, 0),
    Direction.DIAGONAL_UP: (-1, 1),
    Direction.DIAGONAL_DOWN: (1, 1),
}


def player_for_move(move_count: int) -> Player:
    """Player who places the piece after ``move_count`` pieces are on the board."""
    return Player.RED if move_count % 2 == 0 else Player.BLACK


def is_valid_position(row: int, col: int, rows: int = ROWS, cols: int = COLS) -> bool:
    return 0 <= row < rows and 0 <= col < cols


def get_drop_row(grid: np.ndarray, column: int) -> Optional[int]:
    """
    Find the row a piece dropped into ``column`` would land on.

    Args:
        grid: The game grid
        column: Column index (assumed in range)

    Returns:
        The lowest empty row, or None if the column is full
    """
    rows = grid.shape[0]
    for row in range(rows - 1, -1, -1):
        if grid[row, column] == Player.EMPTY.value:
            return row
    return None


def count_pieces(grid: np.ndarray) -> int:
    return int(np.count_nonzero(grid != Player.EMPTY.value))


def line_starts(direction: Direction, rows: int = ROWS, cols: int = COLS) -> List[Position]:
    """
    Border cells from which every line along ``direction`` begins.

    Each line of the grid along the direction starts at exactly one of
    these cells.
    """
    if direction == Direction.HORIZONTAL:
        return [(row, 0) for row in range(rows)]
    if direction == Direction.VERTICAL:
        return [(rows - 1, col) for col in range(cols)]
    if direction == Direction.DIAGONAL_UP:
        # Bottom row, then the left column above the corner
        return [(rows - 1, col) for col in range(cols)] + \
               [(row, 0) for row in range(rows - 2, -1, -1)]
    if direction == Direction.DIAGONAL_DOWN:
        # Top row, then the left column below the corner
        return [(0, col) for col in range(cols)] + \
               [(row, 0) for row in range(1, rows)]
    raise ValueError(f"Unknown direction: {direction}")


def iter_lines(grid: np.ndarray, direction: Direction,
               min_length: int = CONNECT_N) -> Iterator[List[Position]]:
    """
    Yield the cell positions of every line along ``direction``.

    Lines are walked from their border start cell by fixed index offsets.
    Lines shorter than ``min_length`` cannot hold a win and are skipped.
    """
    rows, cols = grid.shape
    dr, dc = DIRECTION_VECTORS[direction]

    for start_row, start_col in line_starts(direction, rows, cols):
        line = []
        r, c = start_row, start_col
        while is_valid_position(r, c, rows, cols):
            line.append((r, c))
            r += dr
            c += dc
        if len(line) >= min_length:
            yield line


def find_run(cells: Sequence[int], player: Player,
             connect_n: int = CONNECT_N) -> Optional[Tuple[int, int]]:
    """
    Find the first run of ``connect_n`` or more consecutive player pieces.

    The running count resets on any empty or opposing cell. A run is
    found the moment the count reaches ``connect_n``; the returned span
    is then extended over any further matching cells.

    Returns:
        (start, stop) indices of the run, or None
    """
    count = 0
    for index, cell in enumerate(cells):
        if cell != player.value:
            count = 0
            continue

        count += 1
        if count >= connect_n:
            stop = index + 1
            while stop < len(cells) and cells[stop] == player.value:
                stop += 1
            return index - connect_n + 1, stop

    return None


def has_run(cells: Sequence[int], player: Player, connect_n: int = CONNECT_N) -> bool:
    return find_run(cells, player, connect_n) is not None


def find_winning_line(grid: np.ndarray, player: Player,
                      connect_n: int = CONNECT_N) -> List[Position]:
    """
    Scan all four axes for a run belonging to ``player``.

    Args:
        grid: The game grid
        player: The player to check for
        connect_n: Run length that wins

    Returns:
        Positions of the first winning run found, or an empty list
    """
    if player == Player.EMPTY:
        return []

    for direction in Direction:
        for line in iter_lines(grid, direction, connect_n):
            span = find_run([grid[r, c] for r, c in line], player, connect_n)
            if span is not None:
                start, stop = span
                return line[start:stop]

    return []


def check_player_win(grid: np.ndarray, player: Player, connect_n: int = CONNECT_N) -> bool:
    """Check whether ``player`` has a winning run anywhere on the grid."""
    return bool(find_winning_line(grid, player, connect_n))


def find_winner(grid: np.ndarray, order: Iterable[Player] = (Player.RED, Player.BLACK),
                connect_n: int = CONNECT_N) -> Optional[Player]:
    """
    Return the first player in ``order`` that has a winning run.

    Each player is checked on all four axes before the next one, so when
    both colors hold a line the earlier player in ``order`` wins.
    """
    for player in order:
        if check_player_win(grid, player, connect_n):
            return player
    return None


def validate_grid(grid, rows: int = ROWS, cols: int = COLS, strict: bool = True) -> np.ndarray:
    """
    Check that ``grid`` is a well-formed position.

    Shape, integer cell type and cell values are always checked. With
    ``strict`` two more checks apply: no piece sits above an empty cell,
    and RED has as many pieces as BLACK or one more. Lines on the board
    are not inspected, so a strict grid may still hold lines for both
    colors.

    Returns:
        The grid as an integer numpy array

    Raises:
        InvalidBoardError: if any check fails
    """
    try:
        cells = np.asarray(grid)
    except (TypeError, ValueError) as e:
        raise InvalidBoardError(f"Grid is not a rectangular array: {e}") from e

    if not np.issubdtype(cells.dtype, np.integer):
        raise InvalidBoardError(f"Grid cells must be integers, got dtype {cells.dtype}")
    grid = cells.astype(int)

    if grid.shape != (rows, cols):
        raise InvalidBoardError(f"Grid must have shape {(rows, cols)}, got {grid.shape}")

    allowed = [player.value for player in Player]
    if not np.isin(grid, allowed).all():
        raise InvalidBoardError(f"Grid cells must be one of {allowed}")

    if not strict:
        return grid

    for col in range(cols):
        seen_empty = False
        for row in range(rows - 1, -1, -1):
            if grid[row, col] == Player.EMPTY.value:
                seen_empty = True
            elif seen_empty:
                raise InvalidBoardError(f"Piece at ({row}, {col}) is floating above an empty cell")

    red = int(np.count_nonzero(grid == Player.RED.value))
    black = int(np.count_nonzero(grid == Player.BLACK.value))
    if red - black not in (0, 1):
        raise InvalidBoardError(f"Piece counts do not follow turn order (red={red}, black={black})")

    return grid


def render_board_ascii(grid: np.ndarray, highlight: Iterable[Position] = ()) -> str:
    """
    Render the grid as ASCII art.

    Args:
        grid: The game grid
        highlight: Positions drawn in lower case (e.g. the winning line)

    Returns:
        ASCII representation of the board, column numbers underneath
    """
    rows, cols = grid.shape
    marked = set(highlight)
    border = "+" + "-" * (cols * 2 + 1) + "+"

    result = [border]
    for row in range(rows):
        cells = []
        for col in range(cols):
            symbol = str(Player(int(grid[row, col])))
            if (row, col) in marked:
                symbol = symbol.lower()
            cells.append(symbol)
        result.append("| " + " ".join(cells) + " |")
    result.append(border)
    result.append("  " + " ".join(str(col) for col in range(cols)))

    return "\n".join(result)
