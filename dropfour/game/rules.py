"""
rules.py - Game session management and Gymnasium environment for Drop Four

This module provides:
1. DropFourGame, a game session with move history, undo and replay
2. DropFourEnv, a gymnasium-compatible environment for agents
"""

from typing import Dict, Iterable, List, Optional, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from dropfour.debug import debug
from dropfour.game.board import Board
from dropfour.utils import ROWS, COLS, Player, GameResult

# RGB colors used by the rgb_array render mode
BOARD_COLOR = (255, 255, 255)
GRID_COLOR = (0, 0, 0)
PIECE_COLORS = {
    Player.RED: (220, 0, 0),
    Player.BLACK: (0, 0, 0),
}
CELL_SIZE = 50


class DropFourGame:
    """
    High-level Drop Four game session.

    Wraps a Board and keeps the list of accepted columns so moves can be
    undone and games replayed.
    """

    def __init__(self):
        """Initialize a new game."""
        debug.debug("Initializing DropFourGame", "game")
        self.board = Board()
        self.history: List[int] = []

    @classmethod
    def replay(cls, columns: Iterable[int]) -> 'DropFourGame':
        """
        Play a sequence of columns from an empty board.

        Drops that do not place a piece are skipped, as in live play.

        Returns:
            The game after the last column
        """
        game = cls()
        for column in columns:
            game.make_move(column)
        return game

    def reset(self) -> None:
        """Reset the game to its initial state."""
        debug.debug("Resetting game", "game")
        self.board.reset()
        self.history = []

    def make_move(self, column: int) -> bool:
        """
        Make a move in the game.

        Args:
            column: Column to drop into (0-indexed)

        Returns:
            True if a piece was placed, False otherwise
        """
        debug.debug(f"Game: {self.board.current_player.label} drops into column {column}", "game")

        if self.board.make_move(column):
            self.history.append(int(column))
            return True

        return False

    def undo_move(self) -> bool:
        """
        Undo the last move by replaying every earlier one.

        Returns:
            True if a move was undone, False if there was nothing to undo
        """
        if not self.history:
            debug.debug("No moves to undo", "game")
            return False

        columns = self.history[:-1]
        debug.debug(f"Undoing move in column {self.history[-1]}", "game")

        self.reset()
        for column in columns:
            self.make_move(column)

        return True

    def get_state(self) -> Board:
        return self.board

    def is_game_over(self) -> bool:
        return self.board.game_result.is_game_over()

    def get_winner(self) -> Optional[Player]:
        return self.board.has_winner()

    def get_current_player(self) -> Player:
        return self.board.current_player

    def get_valid_moves(self) -> List[int]:
        return self.board.get_valid_moves()

    def status_message(self) -> str:
        """
        Text for the turn indicator.

        Returns:
            "<Color> wins!", "Draw!" or "<Color> to Play"
        """
        winner = self.board.has_winner()
        if winner is not None:
            return f"{winner.label} wins!"
        if self.board.is_draw():
            return "Draw!"
        return f"{self.board.current_player.label} to Play"

    def render(self) -> str:
        return self.board.render()


# Reward for the position a drop leads to, scored for RED
RESULT_REWARDS = {
    GameResult.IN_PROGRESS: -0.01,
    GameResult.RED_WIN: 1.0,
    GameResult.BLACK_WIN: -1.0,
    GameResult.DRAW: 0.1,
}
INVALID_MOVE_REWARD = -0.5


class DropFourEnv(gym.Env):
    """
    Gymnasium view of a single Drop Four board.

    Each step drops a piece for whichever color is to move, so an agent
    playing RED alternates steps with its opponent. Rewards are scored
    for RED.
    """

    metadata = {'render_modes': ['ascii', 'human', 'rgb_array'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None,
                 rewards: Optional[Dict[GameResult, float]] = None):
        """
        Args:
            render_mode: One of the modes listed in ``metadata``, or None
            rewards: Overrides for entries of RESULT_REWARDS
        """
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.render_mode = render_mode
        self.board = Board()
        self.rewards = {**RESULT_REWARDS, **(rewards or {})}
        self.reward_invalid_move = INVALID_MOVE_REWARD

        # One action per column; each cell holds a Player value
        self.action_space = spaces.Discrete(COLS)
        self.observation_space = spaces.Box(
            low=Player.EMPTY.value, high=Player.BLACK.value,
            shape=(ROWS, COLS), dtype=np.int8
        )
        debug.debug(f"DropFourEnv ready (render_mode={render_mode})", "env")

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        super().reset(seed=seed)
        self.board.reset()
        debug.debug("Environment board cleared", "env")
        return self._observe()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Drop a piece for the color to move into column ``action``.

        A column that cannot take a piece (full, out of range, or the game
        already decided) leaves the board unchanged and truncates the
        episode with the invalid-move reward.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        mover = self.board.current_player

        if not self.board.is_valid_move(action):
            debug.warning(f"{mover.label} cannot drop into column {action}", "env")
            observation, info = self._observe()
            info['invalid_move'] = True
            return observation, self.reward_invalid_move, False, True, info

        result = self.board.place_piece(int(action)).game_result
        if result.is_game_over():
            debug.info(f"Episode over after {mover.label} drops into column {action}: {result.name}", "env")

        observation, info = self._observe()
        return observation, self.rewards[result], result.is_game_over(), False, info

    def _observe(self) -> Tuple[np.ndarray, Dict]:
        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def render(self) -> Optional[Union[str, np.ndarray]]:
        """
        Render the current board.

        Returns:
            A string for "ascii", an RGB array for "rgb_array", else None
        """
        if self.render_mode is None:
            return None

        if self.render_mode == "ascii":
            return self.board.render()

        if self.render_mode == "human":
            print(self.board.render())
            return None

        return self._render_rgb()

    def _render_rgb(self) -> np.ndarray:
        """Draw round pieces on a white board with black cell borders."""
        frame = np.empty((ROWS * CELL_SIZE, COLS * CELL_SIZE, 3), dtype=np.uint8)
        frame[:, :] = BOARD_COLOR

        # Cell borders
        frame[::CELL_SIZE, :] = GRID_COLOR
        frame[:, ::CELL_SIZE] = GRID_COLOR
        frame[-1, :] = GRID_COLOR
        frame[:, -1] = GRID_COLOR

        radius = CELL_SIZE // 2 - 5
        yy, xx = np.mgrid[0:CELL_SIZE, 0:CELL_SIZE]
        disc = (xx - CELL_SIZE // 2) ** 2 + (yy - CELL_SIZE // 2) ** 2 <= radius ** 2

        for row in range(ROWS):
            for col in range(COLS):
                player = Player(int(self.board.grid[row, col]))
                if player == Player.EMPTY:
                    continue
                cell = frame[row * CELL_SIZE:(row + 1) * CELL_SIZE,
                             col * CELL_SIZE:(col + 1) * CELL_SIZE]
                cell[disc] = PIECE_COLORS[player]

        return frame

    def _get_observation(self) -> np.ndarray:
        return self.board.get_state().astype(np.int8)

    def _get_info(self) -> Dict:
        valid_moves = self.board.get_valid_moves()

        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': self.board.current_player.value,
            'game_result': self.board.game_result.name,
            'moves_made': self.board.move_count,
            'winning_line': self.board.get_winning_line(),
            'last_move': self.board.last_move
        }

    def close(self):
        pass
