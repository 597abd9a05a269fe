#!/usr/bin/env python3
"""
Play the snake game in the terminal.

Usage:
    python play.py
    python play.py --difficulty hard --width 30 --height 15

Controls:
    arrow keys / WASD / HJKL  turn
    Enter                     restart on the game over screen
    q / Esc                   quit

Logs go to SNAKE_LOG_FILE (default snake.log) since curses owns the screen.
"""

import os
import sys
import argparse
import curses
import logging

# Add parent directory to path for imports
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import get_settings, parse_difficulty  # noqa: E402
from domain.constants import DEAD_COLOR, SNAKE_COLOR  # noqa: E402
from main import GamePhase, SnakeGame  # noqa: E402
from players import KeyboardPlayer  # noqa: E402

logger = logging.getLogger(__name__)

FRAME_MS = 1000 // 60
QUIT_KEYS = {27, ord("q")}
ENTER_KEYS = {curses.KEY_ENTER, 10, 13}

COLOR_PAIRS = {SNAKE_COLOR: 1, DEAD_COLOR: 2}

# score line and a blank row above the wall, one column left of it
BOARD_TOP, BOARD_LEFT = 2, 1
GAME_OVER_HINT = "Enter to restart, q to quit"


class TerminalTooSmall(Exception):
    pass


def required_size(game: SnakeGame):
    """Rows and columns needed to draw the board with its wall."""
    rows = BOARD_TOP + game.height + 2
    cols = max(BOARD_LEFT + game.width + 2, len(GAME_OVER_HINT))
    return rows, cols


def _init_colors():
    if not curses.has_colors():
        return
    curses.start_color()
    curses.use_default_colors()
    curses.init_pair(COLOR_PAIRS[SNAKE_COLOR], curses.COLOR_GREEN, -1)
    curses.init_pair(COLOR_PAIRS[DEAD_COLOR], curses.COLOR_RED, -1)


def _put(stdscr, y: int, x: int, text: str, attr: int = curses.A_NORMAL):
    try:
        stdscr.addstr(y, x, text, attr)
    except curses.error:
        # the cursor can't move past the bottom-right cell, the text is written anyway
        rows, cols = stdscr.getmaxyx()
        if (y, x + len(text)) != (rows - 1, cols):
            raise


def _centered(stdscr, y: int, text: str, attr: int = curses.A_NORMAL):
    _, cols = stdscr.getmaxyx()
    _put(stdscr, y, max(0, cols // 2 - len(text) // 2), text, attr)


def draw_round(stdscr, game: SnakeGame):
    # the wall sits at -1, so shift everything one cell right and down
    top, left = BOARD_TOP, BOARD_LEFT

    _put(stdscr, 0, left, f"score: {game.score}")

    for x, y in game.wall.points():
        _put(stdscr, top + y + 1, left + x + 1, "#")

    if game.apple is not None:
        _put(stdscr, top + game.apple.y + 1, left + game.apple.x + 1, "*", curses.color_pair(COLOR_PAIRS[DEAD_COLOR]))

    snake_attr = curses.color_pair(COLOR_PAIRS[game.snake.color])
    for x, y in game.snake.body.points():
        _put(stdscr, top + y + 1, left + x + 1, "o", snake_attr)
    head = game.snake.head
    _put(stdscr, top + head.y + 1, left + head.x + 1, "@", snake_attr | curses.A_BOLD)


def draw(stdscr, game: SnakeGame):
    stdscr.erase()
    rows, _ = stdscr.getmaxyx()
    middle = rows // 2

    if game.phase == GamePhase.ROUND_START:
        _centered(stdscr, middle, "Get Ready!", curses.A_BOLD)
    elif game.phase in (GamePhase.ONGOING, GamePhase.ROUND_END):
        draw_round(stdscr, game)
    elif game.phase == GamePhase.GAME_OVER:
        _centered(stdscr, middle - 3, "Game Over", curses.A_BOLD)
        _centered(stdscr, middle - 1, f"Final Score: {game.final_score}")
        _centered(stdscr, middle + 1, GAME_OVER_HINT, curses.A_DIM)

    stdscr.refresh()


def run(stdscr, game: SnakeGame):
    rows, cols = stdscr.getmaxyx()
    need_rows, need_cols = required_size(game)
    if rows < need_rows or cols < need_cols:
        raise TerminalTooSmall(
            f"Terminal is {cols}x{rows}, the board needs at least {need_cols}x{need_rows}"
        )

    curses.curs_set(0)
    _init_colors()
    stdscr.keypad(True)
    stdscr.timeout(FRAME_MS)

    player = KeyboardPlayer()

    while True:
        key = stdscr.getch()
        if key in QUIT_KEYS:
            logger.info("Quit requested")
            return

        if game.phase == GamePhase.GAME_OVER:
            if key in ENTER_KEYS:
                game.restart()
        else:
            if key != -1:
                player.press(key)
            game.update(player.get_move(game.get_current_state()))

        draw(stdscr, game)


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Play snake in the terminal.")
    parser.add_argument("--width", type=int, default=settings.board_width,
                        help="Width of the play area inside the wall")
    parser.add_argument("--height", type=int, default=settings.board_height,
                        help="Height of the play area inside the wall")
    parser.add_argument("--difficulty", type=parse_difficulty, default=settings.difficulty,
                        help="easy, normal or hard")
    parser.add_argument("--seed", type=int, default=settings.seed,
                        help="Seed for apple placement")
    args = parser.parse_args()

    logging.basicConfig(
        filename=settings.log_file,
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    game = SnakeGame(
        width=args.width,
        height=args.height,
        difficulty=args.difficulty,
        seed=args.seed,
        keep_history=False,
    )
    logger.info(f"Starting game {game.game_id}")

    try:
        curses.wrapper(run, game)
    except KeyboardInterrupt:
        pass
    except TerminalTooSmall as e:
        logger.error(str(e))
        print(e)
        sys.exit(1)

    print("Good Bye!")
    if game.final_score is not None:
        print(f"Final Score: {game.final_score}")


if __name__ == "__main__":
    main()
