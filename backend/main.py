import argparse
import json
import logging
import os
import random
import time
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from config import get_settings, parse_difficulty
from domain.constants import (
    APPLE_SCORE,
    BLINK_COUNT,
    BLINK_PERIOD,
    DEAD_COLOR,
    DOWN,
    MOVEMENT_PERIODS,
    ROUND_END_FRAMES,
    ROUND_START_FRAMES,
    SNAKE_COLOR,
    Difficulty,
)
from domain.direction import Direction, Point
from domain.game_state import GameState
from domain.rectilinear import RectilinearLine, Segment
from domain.snake import Snake
from players import RandomPlayer

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    ROUND_START = "round_start"
    ONGOING = "ongoing"
    ROUND_END = "round_end"
    GAME_OVER = "game_over"


class PointGenerator:
    """
    Used for generating the position of the apples.
    Points are uniform over the play area inside the wall.
    """

    def __init__(self, width: int, height: int, seed: Optional[int] = None):
        self.width = width
        self.height = height
        self.rng = random.Random(seed)

    def gen_point(self) -> Point:
        return Point(
            self.rng.randint(0, self.width - 1),
            self.rng.randint(0, self.height - 1),
        )


def generate_apple(
    generator: PointGenerator,
    snake_body: RectilinearLine,
    max_attempts: int = 10_000,
) -> Point:
    """
    Creates a new apple using `generator`, while avoiding having it overlapping
    with the `snake_body`.
    """
    for _ in range(max_attempts):
        point = generator.gen_point()
        if not snake_body.collides_with_point(point):
            return point
    raise RuntimeError(f"No free cell found for an apple after {max_attempts} attempts")


def build_play_area_wall(width: int, height: int) -> RectilinearLine:
    """
    Create the wall that surrounds a `width` x `height` play area.
    The wall runs one cell outside the area, so it starts at (-1, -1)
    and stops one cell short of closing the loop.
    """
    return RectilinearLine(
        (-1, -1),
        [
            Segment(Direction.RIGHT, width + 1),
            Segment(Direction.DOWN, height + 1),
            Segment(Direction.LEFT, width + 1),
            Segment(Direction.UP, height),
        ],
    )


class SnakeGame:
    """
    Manages:
      - Board (width, height) and the wall around it
      - The snake
      - The apple
      - Score
      - Phases: round start countdown, ongoing round, round end, game over
      - History for replay
    """

    def __init__(
        self,
        width: int,
        height: int,
        difficulty: Difficulty = Difficulty.NORMAL,
        seed: Optional[int] = None,
        game_id: Optional[str] = None,
        keep_history: bool = True,
    ):
        if width < 3 or height < 5:
            raise ValueError(f"Board of {width}x{height} is too small, need at least 3x5")

        self.width = width
        self.height = height
        self.difficulty = difficulty
        self.game_id = game_id or str(uuid.uuid4())
        self.start_time = time.time()

        self.generator = PointGenerator(width, height, seed)
        self.wall = build_play_area_wall(width, height)

        self.phase = GamePhase.ROUND_START
        self.frames = 0
        self.round_number = 0
        self.score = 0
        self.final_score: Optional[int] = None
        self.snake = self._new_snake()
        self.apple: Optional[Point] = None

        self.keep_history = keep_history
        self.history: List[GameState] = []

    def _new_snake(self) -> Snake:
        return Snake.spawn(
            (self.width // 2, 0),
            direction=DOWN,
            movement_period=MOVEMENT_PERIODS[self.difficulty],
        )

    def start_round(self):
        """Put a fresh snake and apple on the board and start moving."""
        self.snake = self._new_snake()
        self.apple = generate_apple(self.generator, self.snake.body)
        self.score = 0
        self.final_score = None
        self.round_number = 0
        self.frames = 0
        self.history = []
        self.phase = GamePhase.ONGOING
        self.record_history()
        logger.info(f"Round started on a {self.width}x{self.height} board ({self.difficulty.value})")

    def restart(self):
        self.start_round()

    def update(self, turn: Optional[Direction] = None) -> GamePhase:
        """Advance the game by one frame and return the phase it ends in."""
        if self.phase == GamePhase.ROUND_START:
            self.frames += 1
            if self.frames > ROUND_START_FRAMES:
                self.start_round()

        elif self.phase == GamePhase.ONGOING:
            self.run_tick(turn)

        elif self.phase == GamePhase.ROUND_END:
            self.run_round_ending()

        return self.phase

    def run_tick(self, turn: Optional[Direction] = None):
        """
        Execute one frame of an ongoing round:
          1) Count frames and accept a turn
          2) Nothing else happens until a step is due
          3) End the round when the next head would hit the wall, else move
          4) End the round if the snake now overlaps itself
          5) Eat the apple (grow + score) when the head reaches it

        Growth is applied by the next step, which keeps the tail where it is
        instead of moving it, so the extra unit is never on the board.
        """
        snake = self.snake
        snake.tick_timers()

        if turn is not None:
            snake.request_turn(turn)

        if not snake.movement_due():
            return

        if self.wall.collides_with_point(snake.next_head()):
            self.end_round("wall")
            return

        snake.advance()
        self.round_number += 1

        if snake.body.is_self_overlapping():
            self.end_round("self")
            return

        self.record_history()

        if snake.head == self.apple:
            snake.grow()
            self.score += APPLE_SCORE
            logger.debug(f"Apple eaten at {tuple(self.apple)}, score {self.score}")
            self.apple = generate_apple(self.generator, snake.body)

    def end_round(self, reason: str):
        self.snake.kill(reason, self.round_number)
        self.phase = GamePhase.ROUND_END
        self.frames = 0
        self.record_history()
        logger.info(f"Round over: {reason} after {self.round_number} steps, score {self.score}")

    def run_round_ending(self):
        """Blink the dead snake a few times, then move on to the game over screen."""
        self.frames += 1
        elapsed_periods = self.frames // BLINK_PERIOD

        if elapsed_periods < BLINK_COUNT and elapsed_periods % 2 == 1:
            self.snake.color = SNAKE_COLOR
        else:
            self.snake.color = DEAD_COLOR

        if self.frames >= ROUND_END_FRAMES:
            self.final_score = self.score
            self.phase = GamePhase.GAME_OVER

    def get_current_state(self) -> GameState:
        """
        Return a snapshot of the current board as a GameState.
        """
        return GameState(
            round_number=self.round_number,
            snake_body=self.snake.body,
            heading=self.snake.direction,
            wall=self.wall,
            apple=self.apple,
            score=self.score,
            width=self.width,
            height=self.height,
            alive=self.snake.alive,
        )

    def record_history(self):
        if not self.keep_history:
            return
        self.history.append(self.get_current_state())

    def print_board(self):
        """
        Prints a visual representation of the current board state.
        """
        print("\n" + self.get_current_state().print_board() + "\n")

    def serialize_history(self) -> List[Dict[str, Any]]:
        """
        Convert the list of GameState objects to a JSON-serializable list of dicts.
        """
        return [state.to_dict() for state in self.history]

    def save_history_to_json(self, directory: str = "completed_games", filename: Optional[str] = None) -> str:
        if filename is None:
            filename = f"snake_game_{self.game_id}.json"

        metadata = {
            "game_id": self.game_id,
            "start_time": datetime.fromtimestamp(self.start_time, tz=timezone.utc).isoformat(),
            "end_time": datetime.now(timezone.utc).isoformat(),
            "width": self.width,
            "height": self.height,
            "difficulty": self.difficulty.value,
            "wall": self.wall.to_dict(),
            "final_score": self.score,
            "death_reason": self.snake.death_reason,
            "death_round": self.snake.death_round,
            "actual_rounds": self.round_number,
        }

        data = {
            "metadata": metadata,
            "rounds": self.serialize_history(),
        }

        path = os.path.join(directory, filename)
        try:
            os.makedirs(directory, exist_ok=True)
            with open(path, "w") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.error(f"Failed to write replay {path}: {e}")
            raise

        logger.info(f"Saved replay to {path}")
        return path


# -------------------------------
# Simulation Function
# -------------------------------

def run_simulation(game_params: argparse.Namespace) -> Dict[str, Any]:
    """
    Runs a single headless round steered by the random autopilot.

    Args:
        game_params: An object (like argparse.Namespace) containing game settings
                     (width, height, difficulty, max_ticks, seed, and optionally
                     save, show_board, completed_games_dir).

    Returns:
        A dictionary summarizing the round (game_id, final_score, ticks, death_reason).
    """
    game = SnakeGame(
        width=game_params.width,
        height=game_params.height,
        difficulty=game_params.difficulty,
        seed=game_params.seed,
        game_id=getattr(game_params, 'game_id', None),
    )
    player = RandomPlayer(random.Random(game_params.seed))
    show_board = getattr(game_params, 'show_board', False)

    # No countdown without a screen to show it on
    game.start_round()

    while game.phase == GamePhase.ONGOING and game.round_number < game_params.max_ticks:
        snake = game.snake
        turn = None
        # Ask the player once per movement step
        if snake.movement_frames + 1 >= snake.movement_period:
            turn = player.get_move(game.get_current_state())

        steps_before = game.round_number
        game.update(turn)
        if show_board and game.round_number != steps_before:
            game.print_board()

    if getattr(game_params, 'save', False):
        game.save_history_to_json(getattr(game_params, 'completed_games_dir', 'completed_games'))

    return {
        "game_id": game.game_id,
        "final_score": game.score,
        "ticks": game.round_number,
        "death_reason": game.snake.death_reason,
    }


# -------------------------------
# Example Usage (Main Entry Point)
# -------------------------------
def main(argv=None):
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="Run a headless snake round steered by the random autopilot."
    )
    parser.add_argument("--width", type=int, required=False, default=settings.board_width,
                        help="Width of the play area inside the wall")
    parser.add_argument("--height", type=int, required=False, default=settings.board_height,
                        help="Height of the play area inside the wall")
    parser.add_argument("--difficulty", type=parse_difficulty, required=False, default=settings.difficulty,
                        help="easy, normal or hard")
    parser.add_argument("--max-ticks", dest="max_ticks", type=int, required=False, default=500,
                        help="Maximum number of movement steps")
    parser.add_argument("--seed", type=int, required=False, default=settings.seed,
                        help="Seed for apples and autopilot")
    parser.add_argument("--save", action="store_true",
                        help="Write the replay to the completed games directory")
    parser.add_argument("--show-board", dest="show_board", action="store_true",
                        help="Print the board after every step")

    args = parser.parse_args(argv)
    args.completed_games_dir = settings.completed_games_dir

    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    result = run_simulation(args)

    print("\nSimulation Result Summary:")
    print(json.dumps(result, indent=2))
    return result


if __name__ == "__main__":
    main()
