"""
Snake entity for the game engine.
"""

from typing import Optional

from .constants import DOWN, INITIAL_SNAKE_LENGTH, SNAKE_COLOR
from .direction import Direction, Point, move_position
from .rectilinear import RectilinearLine, Segment


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        body: RectilinearLine from the tail (start) to the head
        direction: current heading, kept even while the body is too short
            to report one itself
        movement_period: frames between two movement steps
        movement_frames: frames elapsed since the last step
        turn_cooldown: frames left before another turn is accepted
        grow_pending: an apple was eaten and the next step keeps the tail
            in place
        color: current draw color
        alive: whether this snake is still alive
        death_reason: e.g., 'wall', 'self'
        death_round: The round number when the snake died
    """

    def __init__(
        self,
        body: RectilinearLine,
        direction: Optional[Direction] = None,
        movement_period: int = 6,
    ):
        self.body = body
        self.direction = body.direction() or direction
        if self.direction is None:
            self.direction = body.segments[-1].direction if body.segments else DOWN
        self.movement_period = movement_period
        self.movement_frames = 0
        self.turn_cooldown = 0
        self.grow_pending = False
        self.color = SNAKE_COLOR
        self.alive = True
        self.death_reason: Optional[str] = None
        self.death_round: Optional[int] = None

    @classmethod
    def spawn(
        cls,
        start,
        direction: Direction = DOWN,
        length: int = INITIAL_SNAKE_LENGTH,
        movement_period: int = 6,
    ) -> "Snake":
        """Create a straight snake whose tail sits at `start`."""
        body = RectilinearLine(start, [Segment(direction, length)])
        return cls(body, direction=direction, movement_period=movement_period)

    @property
    def head(self) -> Point:
        return self.body.head()

    def next_head(self) -> Point:
        """Where the head ends up after the next step."""
        return move_position(self.head, self.direction)

    def request_turn(self, new_direction: Direction) -> bool:
        """
        Turn towards `new_direction` if allowed.

        Reversing is never allowed, and after a turn the snake has to wait
        half a movement period before the next one, so holding two keys
        doesn't make it race diagonally.
        """
        if new_direction == self.direction.opposite() or self.turn_cooldown > 0:
            return False

        self.direction = new_direction
        self.movement_frames = self.movement_period
        self.turn_cooldown = self.movement_period // 2
        return True

    def tick_timers(self):
        self.movement_frames += 1
        self.turn_cooldown = max(0, self.turn_cooldown - 1)

    def movement_due(self) -> bool:
        return self.movement_frames >= self.movement_period

    def grow(self):
        """Grow by one unit on the next step."""
        self.grow_pending = True

    def advance(self):
        # the extra tail unit is consumed by the same step, so it never shows
        if self.grow_pending:
            self.body.grow()
            self.grow_pending = False
        self.body.move_forward(self.direction)
        self.movement_frames = 0

    def kill(self, reason: str, round_number: int):
        self.alive = False
        self.death_reason = reason
        self.death_round = round_number
