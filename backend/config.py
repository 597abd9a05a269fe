"""
Runtime settings for the snake game.

Values come from environment variables, optionally loaded from a .env file:
- SNAKE_BOARD_WIDTH / SNAKE_BOARD_HEIGHT: size of the play area inside the wall
- SNAKE_DIFFICULTY: easy, normal or hard
- SNAKE_SEED: seed for apple placement and the autopilot
- SNAKE_COMPLETED_GAMES_DIR: where replays are written
- SNAKE_LOG_LEVEL: logging level name
- SNAKE_LOG_FILE: log file used while curses owns the terminal
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from domain.constants import Difficulty

load_dotenv()

DEFAULT_BOARD_WIDTH = 40
DEFAULT_BOARD_HEIGHT = 20


@dataclass
class Settings:
    board_width: int = DEFAULT_BOARD_WIDTH
    board_height: int = DEFAULT_BOARD_HEIGHT
    difficulty: Difficulty = Difficulty.NORMAL
    seed: Optional[int] = None
    completed_games_dir: str = "completed_games"
    log_level: str = "INFO"
    log_file: str = "snake.log"


def _get_int(name: str, default: Optional[int], minimum: Optional[int] = None) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{raw}'")
    if minimum is not None and value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}")
    return value


def parse_difficulty(value: str) -> Difficulty:
    try:
        return Difficulty(value.strip().lower())
    except ValueError:
        available = ", ".join(d.value for d in Difficulty)
        raise ValueError(f"Unknown difficulty '{value}'. Available difficulties: {available}")


def get_settings() -> Settings:
    """Read the settings from the environment."""
    return Settings(
        board_width=_get_int("SNAKE_BOARD_WIDTH", DEFAULT_BOARD_WIDTH, minimum=3),
        board_height=_get_int("SNAKE_BOARD_HEIGHT", DEFAULT_BOARD_HEIGHT, minimum=5),
        difficulty=parse_difficulty(os.getenv("SNAKE_DIFFICULTY", "normal")),
        seed=_get_int("SNAKE_SEED", None),
        completed_games_dir=os.getenv("SNAKE_COMPLETED_GAMES_DIR", "completed_games").strip() or "completed_games",
        log_level=os.getenv("SNAKE_LOG_LEVEL", "INFO").strip().upper() or "INFO",
        log_file=os.getenv("SNAKE_LOG_FILE", "snake.log").strip() or "snake.log",
    )
