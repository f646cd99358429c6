"""
dropfour - Drop Four, a four-in-a-row game on a 5x5 board

This package provides the board state and win detection, a game session
manager, a Gymnasium environment and a command-line interface.
"""

# Version number
__version__ = '0.1.0'
