"""
GameState entity - a snapshot of the game at a point in time.
"""

from typing import Any, Dict, Optional, Tuple

from .direction import Direction
from .rectilinear import RectilinearLine


class GameState:
    """
    A snapshot of the round at a specific point in time.

    Attributes:
        round_number: movement steps taken so far in this round (0-based)
        snake_body: copy of the snake's body line
        heading: the snake's current heading
        wall: the line framing the play area
        apple: (x, y) position of the apple, if any
        score: points collected this round
        width, height: size of the play area inside the wall
        alive: whether the snake is still alive
    """

    def __init__(
        self,
        round_number: int,
        snake_body: RectilinearLine,
        heading: Direction,
        wall: RectilinearLine,
        apple: Optional[Tuple[int, int]],
        score: int,
        width: int,
        height: int,
        alive: bool = True,
    ):
        self.round_number = round_number
        self.snake_body = snake_body.copy()
        self.heading = heading
        self.wall = wall
        self.apple = apple
        self.score = score
        self.width = width
        self.height = height
        self.alive = alive

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        # = wall
        . = empty space
        A = apple
        o = snake body
        @ = snake head
        Rows run from the top of the screen down, wall included.
        """
        cols = self.width + 2
        rows = self.height + 2
        # offset by one so the wall at -1 lands on index 0
        board = [['.' for _ in range(cols)] for _ in range(rows)]

        def place(point, char):
            x, y = point
            if 0 <= x + 1 < cols and 0 <= y + 1 < rows:
                board[y + 1][x + 1] = char

        for point in self.wall.points():
            place(point, '#')

        if self.apple is not None:
            place(self.apple, 'A')

        for point in self.snake_body.points():
            place(point, 'o')
        place(self.snake_body.head(), '@')

        return "\n".join("".join(row) for row in board)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round_number": self.round_number,
            "snake": self.snake_body.to_dict(),
            "heading": self.heading.value,
            "apple": list(self.apple) if self.apple is not None else None,
            "score": self.score,
            "alive": self.alive,
        }

    def __repr__(self):
        return (
            f"<GameState round={self.round_number}, apple={self.apple}, "
            f"length={self.snake_body.length()}, score={self.score}>"
        )
