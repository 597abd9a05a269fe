"""
Domain entities for the terminal snake game.

This module contains the geometry of the snake and the wall together with
the game entities built on it. None of it knows about the terminal.
"""

from .constants import UP, DOWN, LEFT, RIGHT, VALID_MOVES, APPLE_SCORE, Difficulty
from .direction import Axis, Direction, Point, move_position
from .rectilinear import RectilinearLine, Segment, StraightRun
from .snake import Snake
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'APPLE_SCORE', 'Difficulty',
    'Axis', 'Direction', 'Point', 'move_position',
    'RectilinearLine', 'Segment', 'StraightRun',
    'Snake',
    'GameState',
]
