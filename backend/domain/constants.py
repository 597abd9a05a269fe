"""
Game constants for the terminal snake game.
"""

from enum import Enum

from .direction import Direction

# Movement directions
UP = Direction.UP
DOWN = Direction.DOWN
LEFT = Direction.LEFT
RIGHT = Direction.RIGHT
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}


class Difficulty(Enum):
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"


# Frames between two movement steps of the snake
MOVEMENT_PERIODS = {
    Difficulty.EASY: 8,
    Difficulty.NORMAL: 6,
    Difficulty.HARD: 4,
}

# Game settings
APPLE_SCORE = 100
INITIAL_SNAKE_LENGTH = 3
ROUND_START_FRAMES = 90
ROUND_END_FRAMES = 80
BLINK_PERIOD = 5
BLINK_COUNT = 8

# Snake colors
SNAKE_COLOR = "green"
DEAD_COLOR = "red"
