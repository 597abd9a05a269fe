"""
Player implementations for the snake game.

This module contains the player abstractions and implementations
that decide which way the snake turns.
"""

from .base import Player
from .random_player import RandomPlayer
from .keyboard_player import KeyboardPlayer, KEY_BINDINGS, direction_for_key

__all__ = [
    'Player',
    'RandomPlayer',
    'KeyboardPlayer',
    'KEY_BINDINGS',
    'direction_for_key',
]
