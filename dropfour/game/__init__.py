"""
dropfour.game - Core game mechanics for Drop Four

This package contains the board representation, the game session
manager and the Gymnasium environment.
"""

from dropfour.game.board import Board
from dropfour.game.rules import DropFourGame, DropFourEnv

__all__ = ['Board', 'DropFourGame', 'DropFourEnv']
