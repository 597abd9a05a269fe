"""
Base player interface for the game engine.
"""

from typing import Optional

from domain.direction import Direction
from domain.game_state import GameState


class Player:
    """
    Base class/interface for player logic.

    A player is asked once per movement step for a heading given the
    current game state.
    """

    def get_move(self, game_state: GameState) -> Optional[Direction]:
        """
        Return a new heading given the current game state.

        Args:
            game_state: Current state of the round

        Returns:
            A Direction to turn to, or None to keep the current heading
        """
        raise NotImplementedError
