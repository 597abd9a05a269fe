"""
Keyboard player - turns the snake according to the last key pressed.
"""

import curses
from typing import Optional

from domain.direction import Direction
from domain.game_state import GameState
from .base import Player

KEY_BINDINGS = {
    curses.KEY_UP: Direction.UP,
    curses.KEY_DOWN: Direction.DOWN,
    curses.KEY_LEFT: Direction.LEFT,
    curses.KEY_RIGHT: Direction.RIGHT,
    ord("w"): Direction.UP,
    ord("s"): Direction.DOWN,
    ord("a"): Direction.LEFT,
    ord("d"): Direction.RIGHT,
    ord("k"): Direction.UP,
    ord("j"): Direction.DOWN,
    ord("h"): Direction.LEFT,
    ord("l"): Direction.RIGHT,
}


def direction_for_key(key: int) -> Optional[Direction]:
    """Get which direction a key code stands for, if any."""
    return KEY_BINDINGS.get(key)


class KeyboardPlayer(Player):
    """
    Holds the last direction key pressed until the engine asks for it.
    """

    def __init__(self):
        self.pending: Optional[Direction] = None

    def press(self, key: int) -> bool:
        direction = direction_for_key(key)
        if direction is None:
            return False
        self.pending = direction
        return True

    def get_move(self, game_state: GameState) -> Optional[Direction]:
        direction, self.pending = self.pending, None
        return direction
