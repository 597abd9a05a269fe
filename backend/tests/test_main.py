"""
Tests for main.py - Snake game engine.

These tests drive the round engine frame by frame and check the events
that come out of the line geometry: wall hits, self overlap and apples.
"""

import argparse
import json
import os
import sys
from unittest.mock import Mock

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.constants import (  # noqa: E402
    APPLE_SCORE,
    DEAD_COLOR,
    ROUND_END_FRAMES,
    ROUND_START_FRAMES,
    SNAKE_COLOR,
    Difficulty,
)
from domain.direction import Direction, Point  # noqa: E402
from domain.rectilinear import RectilinearLine, Segment  # noqa: E402
from domain.snake import Snake  # noqa: E402
from main import (  # noqa: E402
    GamePhase,
    PointGenerator,
    SnakeGame,
    build_play_area_wall,
    generate_apple,
    main,
    run_simulation,
)


def started_game(width=10, height=10, **kwargs):
    game = SnakeGame(width, height, seed=1, **kwargs)
    game.start_round()
    # park the apple out of the way
    game.apple = Point(0, height - 1)
    return game


def step(game, turn=None):
    """Run frames until the snake moves once or the round ends."""
    steps_before = game.round_number
    game.update(turn)
    while game.phase == GamePhase.ONGOING and game.round_number == steps_before:
        game.update()


class TestPlayAreaWall:

    def test_wall_surrounds_play_area(self):
        wall = build_play_area_wall(6, 4)
        for x in range(-1, 7):
            assert wall.collides_with_point((x, -1))
            assert wall.collides_with_point((x, 4))
        for y in range(-1, 5):
            assert wall.collides_with_point((-1, y))
            assert wall.collides_with_point((6, y))

    def test_wall_leaves_play_area_free(self):
        wall = build_play_area_wall(6, 4)
        for x in range(6):
            for y in range(4):
                assert not wall.collides_with_point((x, y))

    def test_wall_is_not_self_overlapping(self):
        assert build_play_area_wall(40, 20).is_self_overlapping() is False


class TestAppleGeneration:

    def test_points_stay_inside_play_area(self):
        generator = PointGenerator(5, 3, seed=3)
        for _ in range(200):
            x, y = generator.gen_point()
            assert 0 <= x < 5
            assert 0 <= y < 3

    def test_same_seed_same_points(self):
        a = PointGenerator(20, 20, seed=9)
        b = PointGenerator(20, 20, seed=9)
        assert [a.gen_point() for _ in range(10)] == [b.gen_point() for _ in range(10)]

    def test_apple_avoids_snake_body(self):
        body = RectilinearLine((0, 0), [Segment(Direction.RIGHT, 3), Segment(Direction.DOWN, 2)])
        generator = PointGenerator(4, 3, seed=0)
        for _ in range(50):
            assert not body.collides_with_point(generate_apple(generator, body))

    def test_apple_generation_gives_up_eventually(self):
        generator = Mock()
        generator.gen_point.return_value = Point(0, 0)
        body = RectilinearLine((0, 0), [Segment(Direction.RIGHT, 1)])
        with pytest.raises(RuntimeError):
            generate_apple(generator, body, max_attempts=5)
        assert generator.gen_point.call_count == 5


class TestSnakeGameSetup:

    def test_board_too_small_raises(self):
        with pytest.raises(ValueError):
            SnakeGame(10, 4)

    def test_round_start_countdown(self):
        game = SnakeGame(10, 10, seed=1)
        for _ in range(ROUND_START_FRAMES):
            assert game.update() == GamePhase.ROUND_START
        assert game.update() == GamePhase.ONGOING
        assert game.apple is not None
        assert not game.snake.body.collides_with_point(game.apple)

    def test_snake_spawns_at_top_heading_down(self):
        game = started_game(width=10)
        assert game.snake.body.start == (5, 0)
        assert game.snake.direction == Direction.DOWN
        assert game.snake.body.length() == 4

    def test_difficulty_sets_movement_period(self):
        assert started_game(difficulty=Difficulty.EASY).snake.movement_period == 8
        assert started_game(difficulty=Difficulty.HARD).snake.movement_period == 4


class TestRunTick:

    def test_snake_moves_once_per_period(self):
        game = started_game(difficulty=Difficulty.NORMAL)
        for _ in range(5):
            game.update()
        assert game.round_number == 0
        game.update()
        assert game.round_number == 1
        assert game.snake.head == (5, 4)

    def test_turn_moves_immediately(self):
        game = started_game()
        game.update(Direction.LEFT)
        assert game.round_number == 1
        assert game.snake.head == (4, 3)
        assert game.snake.body.direction() == Direction.LEFT

    def test_reverse_turn_is_ignored(self):
        game = started_game()
        step(game, Direction.UP)
        assert game.snake.direction == Direction.DOWN
        assert game.snake.head == (5, 4)

    def test_hitting_wall_ends_round(self):
        game = started_game(height=5)
        step(game)  # head at the last row
        assert game.phase == GamePhase.ONGOING
        head_before = game.snake.head
        step(game)
        assert game.phase == GamePhase.ROUND_END
        assert game.snake.alive is False
        assert game.snake.death_reason == "wall"
        # the snake stops in front of the wall
        assert game.snake.head == head_before

    def test_running_into_own_body_ends_round(self):
        game = started_game()
        body = RectilinearLine(
            (2, 2),
            [Segment(Direction.RIGHT, 3), Segment(Direction.DOWN, 1), Segment(Direction.LEFT, 1)],
        )
        game.snake = Snake(body, movement_period=6)
        assert game.snake.direction == Direction.LEFT

        game.update(Direction.UP)

        assert game.phase == GamePhase.ROUND_END
        assert game.snake.death_reason == "self"
        assert game.snake.death_round == 1

    def test_eating_apple_grows_and_scores(self):
        game = started_game()
        game.apple = Point(5, 4)

        step(game)
        assert game.score == APPLE_SCORE
        assert game.apple != (5, 4)
        assert not game.snake.body.collides_with_point(game.apple)
        tail = (5, 1)

        game.apple = Point(0, 9)
        step(game)
        assert game.snake.body.length() == 5
        assert game.snake.body.start == tail
        assert game.snake.head == (5, 5)
        assert game.phase == GamePhase.ONGOING

    def test_apple_eaten_right_after_tail_corner(self):
        """The tail must not jump onto the wall when the last tail corner is gone."""
        game = started_game(width=6, height=6)
        body = RectilinearLine((4, 0), [Segment(Direction.RIGHT, 1), Segment(Direction.DOWN, 3)])
        game.snake = Snake(body, movement_period=6)
        game.apple = Point(5, 4)

        step(game)
        assert game.score == APPLE_SCORE
        assert game.snake.body.start == (5, 0)
        assert game.snake.body.length() == 5
        assert not any(game.wall.collides_with_point(p) for p in game.snake.body.points())
        board = game.get_current_state().print_board().splitlines()
        assert board[0] == "#" * 8

        game.apple = Point(0, 0)
        step(game)
        assert game.phase == GamePhase.ONGOING
        assert game.snake.body.start == (5, 0)
        assert game.snake.head == (5, 5)
        assert game.snake.body.length() == 6

    def test_history_records_each_step(self):
        game = started_game()
        step(game)
        step(game)
        assert len(game.history) == 3
        assert [s.round_number for s in game.history] == [0, 1, 2]

    def test_history_can_be_turned_off(self):
        game = started_game(keep_history=False)
        step(game)
        step(game)
        assert game.history == []
        assert game.round_number == 2


class TestRoundEnding:

    def finished_round(self):
        game = started_game(height=5)
        game.score = 300
        while game.phase == GamePhase.ONGOING:
            game.update()
        return game

    def test_snake_blinks_then_stays_dead_colored(self):
        game = self.finished_round()
        game.update()
        assert game.snake.color == DEAD_COLOR
        for _ in range(4):
            game.update()
        assert game.snake.color == SNAKE_COLOR

    def test_game_over_after_round_end_frames(self):
        game = self.finished_round()
        for _ in range(ROUND_END_FRAMES - 1):
            assert game.update() == GamePhase.ROUND_END
        assert game.update() == GamePhase.GAME_OVER
        assert game.final_score == 300
        assert game.snake.color == DEAD_COLOR

    def test_restart_begins_new_round(self):
        game = self.finished_round()
        for _ in range(ROUND_END_FRAMES):
            game.update()
        game.restart()
        assert game.phase == GamePhase.ONGOING
        assert game.score == 0
        assert game.snake.alive is True
        assert game.final_score is None

    def test_game_over_ignores_updates(self):
        game = self.finished_round()
        for _ in range(ROUND_END_FRAMES):
            game.update()
        assert game.update(Direction.LEFT) == GamePhase.GAME_OVER


class TestReplay:

    def test_save_history_to_json(self, tmp_path):
        game = started_game(game_id="replay-1")
        step(game)
        step(game)

        path = game.save_history_to_json(str(tmp_path))

        assert path == os.path.join(str(tmp_path), "snake_game_replay-1.json")
        with open(path) as f:
            data = json.load(f)

        assert data["metadata"]["game_id"] == "replay-1"
        assert data["metadata"]["width"] == 10
        assert data["metadata"]["difficulty"] == "normal"
        assert data["metadata"]["wall"]["start"] == [-1, -1]
        assert len(data["rounds"]) == 3
        assert data["rounds"][-1]["snake"]["segments"] == [["DOWN", 3]]

    def test_saved_snake_can_be_restored(self, tmp_path):
        game = started_game(game_id="replay-2")
        step(game, Direction.RIGHT)
        path = game.save_history_to_json(str(tmp_path))
        with open(path) as f:
            data = json.load(f)
        restored = RectilinearLine.from_dict(data["rounds"][-1]["snake"])
        assert restored == game.snake.body


class TestRunSimulation:

    def make_params(self, **overrides):
        params = dict(
            width=10,
            height=8,
            difficulty=Difficulty.HARD,
            max_ticks=30,
            seed=42,
            save=False,
        )
        params.update(overrides)
        return argparse.Namespace(**params)

    def test_simulation_summary(self):
        result = run_simulation(self.make_params())
        assert set(result) == {"game_id", "final_score", "ticks", "death_reason"}
        assert result["ticks"] <= 30
        if result["death_reason"] is None:
            assert result["ticks"] == 30
        assert result["final_score"] % APPLE_SCORE == 0

    def test_simulation_is_reproducible_with_seed(self):
        first = run_simulation(self.make_params())
        second = run_simulation(self.make_params())
        assert first["ticks"] == second["ticks"]
        assert first["final_score"] == second["final_score"]

    def test_simulation_can_save_replay(self, tmp_path):
        params = self.make_params(save=True, completed_games_dir=str(tmp_path), game_id="sim-1")
        run_simulation(params)
        assert (tmp_path / "snake_game_sim-1.json").exists()

    def test_main_prints_summary(self, capsys, monkeypatch):
        monkeypatch.delenv("SNAKE_DIFFICULTY", raising=False)
        result = main(["--width", "10", "--height", "8", "--max-ticks", "5", "--seed", "3"])
        out = capsys.readouterr().out
        assert "Simulation Result Summary" in out
        assert result["ticks"] <= 5
