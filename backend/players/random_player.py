"""
Random player implementation - picks random safe moves.
"""

import random
from typing import List, Optional

from domain.constants import VALID_MOVES
from domain.direction import Direction, move_position
from domain.game_state import GameState
from .base import Player


class RandomPlayer(Player):
    """
    A random autopilot that picks a heading that avoids the wall and its own body.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def get_move(self, game_state: GameState) -> Optional[Direction]:
        body = game_state.snake_body
        head = body.head()
        tail = body.start

        # Filter out moves that:
        # 1. Reverse into the neck
        # 2. Hit the wall
        # 3. Hit own body (except tail, which will move)
        safe_moves: List[Direction] = []
        for move in sorted(VALID_MOVES, key=lambda d: d.value):
            if move == game_state.heading.opposite():
                continue

            new_head = move_position(head, move)
            if game_state.wall.collides_with_point(new_head):
                continue

            if new_head != tail and body.collides_with_point(new_head):
                continue

            safe_moves.append(move)

        # If nothing is safe, keep going (we'll die anyway)
        if not safe_moves:
            return None

        return self.rng.choice(safe_moves)
