import numpy as np
import pytest

from dropfour.debug import debug, DebugLevel
from dropfour.utils import Player

SYMBOLS = {'.': Player.EMPTY.value, 'R': Player.RED.value, 'B': Player.BLACK.value}

# Full board, 13 red and 12 black, no four in a row anywhere
DRAW_ROWS = (
    "RRBBR",
    "BBRRB",
    "RRBBR",
    "BBRRB",
    "RRBBR",
)


def build_grid(*rows: str) -> np.ndarray:
    """Grid from rows of '.', 'R', 'B', top row first."""
    return np.array([[SYMBOLS[symbol] for symbol in row] for row in rows], dtype=int)


@pytest.fixture
def grid_from():
    return build_grid


@pytest.fixture
def draw_grid():
    return build_grid(*DRAW_ROWS)


@pytest.fixture(autouse=True)
def quiet_debug():
    """Restore the shared debug manager after each test."""
    yield
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[], log_file="")
