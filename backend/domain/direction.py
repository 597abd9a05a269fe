"""
Directions, axes and points on the character-cell grid.

Coordinates follow the terminal: x grows to the right and y grows
downwards, so moving UP decreases y.
"""

from enum import Enum
from typing import NamedTuple


class Point(NamedTuple):
    """Integer grid coordinate. Compares equal to a plain (x, y) tuple."""
    x: int
    y: int


class Axis(Enum):
    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"


class Direction(Enum):
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"

    @property
    def axis(self) -> "Axis":
        return _DIRECTION_TABLE[self][0]

    @property
    def unit(self) -> Point:
        """Displacement of one step in this direction."""
        return _DIRECTION_TABLE[self][2]

    def opposite(self) -> "Direction":
        return _DIRECTION_TABLE[self][1]


# direction -> (axis, opposite, unit displacement)
_DIRECTION_TABLE = {
    Direction.UP:    (Axis.VERTICAL,   Direction.DOWN,  Point(0, -1)),
    Direction.DOWN:  (Axis.VERTICAL,   Direction.UP,    Point(0, 1)),
    Direction.LEFT:  (Axis.HORIZONTAL, Direction.RIGHT, Point(-1, 0)),
    Direction.RIGHT: (Axis.HORIZONTAL, Direction.LEFT,  Point(1, 0)),
}


def move_position(pos: Point, direction: Direction, length: int = 1) -> Point:
    """Return `pos` displaced by `length` steps in `direction`."""
    dx, dy = direction.unit
    return Point(pos[0] + dx * length, pos[1] + dy * length)
