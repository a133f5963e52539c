from collections import deque
import random

import pytest

from game_logic import (
    Direction,
    GameStatus,
    SnakeConfig,
    SnakeGame,
    validate_speed,
)


def _place_snake(game, cells, food=(0, 0)):
    game.snake = deque(cells)
    game.snake_set = set(cells)
    game.food = food


def _running_game(cells, direction, food=(0, 0), **config):
    game = SnakeGame(SnakeConfig(seed=7, **config))
    _place_snake(game, cells, food)
    game.start(direction)
    return game


def test_new_game_defaults():
    game = SnakeGame(SnakeConfig(seed=1))
    assert list(game.snake) == [(10, 10), (10, 11), (10, 12)]
    assert game.direction is Direction.UP
    assert game.direction.value == (0, -1)
    assert game.score == 0
    assert game.status is GameStatus.NOT_STARTED
    assert game.food not in game.snake_set


def test_opposite_directions():
    assert Direction.UP.opposite is Direction.DOWN
    assert Direction.LEFT.opposite is Direction.RIGHT
    assert Direction.RIGHT.opposite is Direction.LEFT


def test_step_ignored_until_started():
    game = SnakeGame(SnakeConfig(seed=1))
    before = list(game.snake)
    assert game.step() is False
    assert list(game.snake) == before
    assert game.status is GameStatus.NOT_STARTED


def test_start_only_from_not_started():
    game = SnakeGame(SnakeConfig(seed=1))
    assert game.start(Direction.LEFT) is True
    assert game.status is GameStatus.RUNNING
    assert game.direction is Direction.LEFT
    assert game.start(Direction.UP) is False
    assert game.direction is Direction.LEFT


def test_move_keeps_length():
    game = _running_game([(10, 10), (10, 11), (10, 12)], Direction.UP)
    assert game.step() is True
    assert list(game.snake) == [(10, 9), (10, 10), (10, 11)]
    assert game.score == 0


def test_reverse_direction_is_ignored():
    game = _running_game([(10, 10), (10, 11), (10, 12)], Direction.UP)
    assert game.request_direction(Direction.DOWN) is False
    assert game.direction is Direction.UP


def test_one_direction_change_per_tick():
    game = _running_game([(10, 10), (10, 11), (10, 12)], Direction.UP)
    assert game.request_direction(Direction.LEFT) is True
    assert game.request_direction(Direction.UP) is False
    assert game.direction is Direction.LEFT

    game.step()
    assert game.head == (9, 10)
    assert game.request_direction(Direction.UP) is True
    assert game.direction is Direction.UP


def test_direction_request_ignored_while_paused():
    game = _running_game([(10, 10), (10, 11), (10, 12)], Direction.UP)
    game.toggle_pause()
    assert game.status is GameStatus.PAUSED
    assert game.request_direction(Direction.LEFT) is False
    assert game.direction is Direction.UP
    assert game.step() is False


def test_toggle_pause_only_while_playing():
    game = SnakeGame(SnakeConfig(seed=1))
    assert game.toggle_pause() is False
    assert game.status is GameStatus.NOT_STARTED

    game.start()
    assert game.toggle_pause() is True
    assert game.status is GameStatus.PAUSED
    assert game.toggle_pause() is True
    assert game.status is GameStatus.RUNNING

    game.status = GameStatus.GAME_OVER
    assert game.toggle_pause() is False
    assert game.status is GameStatus.GAME_OVER


def test_eating_food_grows_and_scores():
    game = _running_game([(10, 10), (10, 11), (10, 12)], Direction.UP, food=(10, 9))
    assert game.step() is True
    assert game.score == 10
    assert list(game.snake) == [(10, 9), (10, 10), (10, 11), (10, 12)]
    assert game.food is not None
    assert game.food not in game.snake_set


@pytest.mark.parametrize(
    "cells, direction",
    [
        ([(0, 5), (1, 5), (2, 5)], Direction.LEFT),
        ([(19, 5), (18, 5), (17, 5)], Direction.RIGHT),
        ([(5, 0), (5, 1), (5, 2)], Direction.UP),
        ([(5, 19), (5, 18), (5, 17)], Direction.DOWN),
    ],
)
def test_wall_collision_ends_game_without_moving(cells, direction):
    game = _running_game(cells, direction)
    assert game.step() is False
    assert game.status is GameStatus.GAME_OVER
    assert list(game.snake) == cells
    assert game.score == 0


def test_self_collision_ends_game():
    cells = [(5, 5), (5, 6), (4, 6), (4, 5), (3, 5)]
    game = _running_game(cells, Direction.LEFT)
    assert game.step() is False
    assert game.status is GameStatus.GAME_OVER
    assert list(game.snake) == cells


def test_moving_into_current_tail_is_a_collision():
    cells = [(5, 5), (5, 6), (4, 6), (4, 5)]
    game = _running_game(cells, Direction.LEFT)
    game.step()
    assert game.status is GameStatus.GAME_OVER


def test_no_steps_after_game_over():
    game = _running_game([(0, 5), (1, 5), (2, 5)], Direction.LEFT)
    game.step()
    assert game.step() is False
    assert game.request_direction(Direction.UP) is False
    assert list(game.snake) == [(0, 5), (1, 5), (2, 5)]


def test_reset_after_game_over():
    game = _running_game([(0, 5), (1, 5), (2, 5)], Direction.LEFT)
    game.score = 40
    game.step()
    assert game.status is GameStatus.GAME_OVER

    game.reset()
    assert list(game.snake) == [(10, 10), (10, 11), (10, 12)]
    assert game.direction is Direction.UP
    assert game.score == 0
    assert game.status is GameStatus.NOT_STARTED
    assert game.food not in game.snake_set


def test_food_scan_fallback_picks_free_cell():
    for seed in range(10):
        game = SnakeGame(SnakeConfig(grid_size=3, max_food_attempts=0, seed=seed))
        assert len(game.snake) == 3
        assert game.food is not None
        assert game.food not in game.snake_set


def test_food_cleared_when_board_is_full():
    game = SnakeGame(SnakeConfig(grid_size=1, seed=3))
    assert list(game.snake) == [(0, 0)]
    assert game.free_cells() == []
    assert game.food is None


def test_occupancy_marks_only_snake_cells():
    game = SnakeGame(SnakeConfig(seed=1))
    game.food = (0, 0)
    occupied = game.occupancy()
    assert occupied.shape == (20, 20)
    assert occupied.dtype == bool
    assert occupied[10, 10] and occupied[11, 10] and occupied[12, 10]
    assert not occupied[0, 0]
    assert int(occupied.sum()) == 3
    assert len(game.free_cells()) == 400 - 3
    assert (0, 0) in game.free_cells()


def test_random_play_keeps_invariants():
    rng = random.Random(11)
    game = SnakeGame(SnakeConfig(seed=5))
    game.start()
    for _ in range(2000):
        if game.status is GameStatus.GAME_OVER:
            game.reset()
            game.start()
        length_before = len(game.snake)
        ate = game.food is not None
        game.request_direction(rng.choice(list(Direction)))
        head_x, head_y = game.head
        next_head = (head_x + game.direction.dx, head_y + game.direction.dy)
        ate = ate and next_head == game.food
        moved = game.step()

        assert len(set(game.snake)) == len(game.snake)
        assert game.snake_set == set(game.snake)
        assert game.food not in game.snake_set
        if moved:
            assert len(game.snake) == length_before + (1 if ate else 0)


def test_speed_validation():
    assert validate_speed(50) == 50
    assert validate_speed(500) == 500
    with pytest.raises(ValueError):
        validate_speed(25)
    with pytest.raises(ValueError):
        validate_speed(550)
    with pytest.raises(ValueError):
        validate_speed(125)


def test_config_rejects_bad_grid():
    with pytest.raises(ValueError):
        SnakeConfig(grid_size=0)
