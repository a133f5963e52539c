# Core Snake game state and rules, independent from GUI/scheduling code.
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
import logging
import random

import numpy as np


logger = logging.getLogger(__name__)

GRID_SIZE = 20
FOOD_VALUE = 10

# Tick period bounds (ms) shared by the GUI slider and the launcher.
MIN_SPEED_MS = 50
MAX_SPEED_MS = 500
SPEED_STEP_MS = 50
DEFAULT_SPEED_MS = 150


def validate_speed(speed_ms: int) -> int:
    """Check a tick period against the allowed range and step."""
    if not (MIN_SPEED_MS <= speed_ms <= MAX_SPEED_MS):
        raise ValueError(f"Speed must be between {MIN_SPEED_MS} and {MAX_SPEED_MS} ms.")
    if speed_ms % SPEED_STEP_MS:
        raise ValueError(f"Speed must be a multiple of {SPEED_STEP_MS} ms.")
    return speed_ms


@dataclass
class SnakeConfig:
    """Runtime settings shared between the logic layer and GUI."""
    grid_size: int = GRID_SIZE
    cell_size: int = 20
    speed_ms: int = DEFAULT_SPEED_MS
    initial_length: int = 3
    food_value: int = FOOD_VALUE
    max_food_attempts: int = 64
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.grid_size <= 0:
            raise ValueError("Grid size must be a positive integer.")
        validate_speed(self.speed_ms)


class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> Direction:
        return Direction((-self.dx, -self.dy))


class GameStatus(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class SnakeGame:
    """Pure game state + rules (no Tkinter/UI code).

    Illegal requests (turning while paused, reversing, a second turn in the
    same tick) are ignored rather than raised.
    """
    def __init__(self, config: SnakeConfig | None = None, rng: random.Random | None = None) -> None:
        self.config = config or SnakeConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.reset()

    def reset(self) -> SnakeGame:
        """Initialize a fresh board: centered snake heading up, new food, status NOT_STARTED."""
        self.snake: deque[tuple[int, int]] = deque()       # ordered body, head at index 0
        self.snake_set: set[tuple[int, int]] = set()       # O(1) body collision lookup
        self.food: tuple[int, int] | None = None
        self.direction = Direction.UP
        self.status = GameStatus.NOT_STARTED
        self.score = 0
        self.can_change_direction = True                    # one accepted turn per tick

        self.spawn_snake(self.config.initial_length)
        self.place_food()
        return self

    def spawn_snake(self, length: int) -> None:
        """Place snake so the head starts at the board center with the body below it."""
        size = self.config.grid_size
        head_x = size // 2
        head_y = size // 2

        # Fallback for tiny boards / long initial length.
        if head_y + length > size:
            head_y = max(0, size - length)

        for i in range(min(length, size)):
            pos = (head_x, head_y + i)
            self.snake.append(pos)
            self.snake_set.add(pos)

    @property
    def head(self) -> tuple[int, int]:
        return self.snake[0]

    def _in_bounds(self, x: int, y: int) -> bool:
        size = self.config.grid_size
        return 0 <= x < size and 0 <= y < size

    def occupancy(self) -> np.ndarray:
        """Boolean grid indexed [y, x]; True where a snake segment sits."""
        size = self.config.grid_size
        occupied = np.zeros((size, size), dtype=bool)
        for x, y in self.snake:
            occupied[y, x] = True
        return occupied

    def free_cells(self) -> list[tuple[int, int]]:
        """Cells not covered by the snake, in row-major order."""
        return [(int(x), int(y)) for y, x in np.argwhere(~self.occupancy())]

    def place_food(self) -> tuple[int, int] | None:
        """Put food on a uniformly random cell that the snake does not cover."""
        size = self.config.grid_size
        for _ in range(self.config.max_food_attempts):
            pos = (self.rng.randrange(size), self.rng.randrange(size))
            if pos not in self.snake_set:
                self.food = pos
                return pos

        # Rejection sampling kept hitting the body; scan what is left.
        free = self.free_cells()
        logger.debug("Food sampling exhausted, %d free cells remain", len(free))
        if not free:
            logger.info("No space for food - board is full")
            self.food = None
            return None
        self.food = self.rng.choice(free)
        return self.food

    def start(self, initial_direction: Direction = Direction.UP) -> bool:
        """Begin the run from NOT_STARTED; ignored in any other status."""
        if self.status is not GameStatus.NOT_STARTED:
            return False
        self.direction = initial_direction
        self.can_change_direction = True
        self.status = GameStatus.RUNNING
        logger.info("Run started heading %s", initial_direction.name.lower())
        return True

    def request_direction(self, new_direction: Direction) -> bool:
        """Apply a turn if running, not yet turned this tick, and not a reversal."""
        if self.status is not GameStatus.RUNNING:
            return False
        if not self.can_change_direction:
            return False
        if new_direction is self.direction.opposite:
            return False
        self.direction = new_direction
        self.can_change_direction = False
        return True

    def toggle_pause(self) -> bool:
        """Flip RUNNING <-> PAUSED; no-op before start and after game over."""
        if self.status is GameStatus.RUNNING:
            self.status = GameStatus.PAUSED
        elif self.status is GameStatus.PAUSED:
            self.status = GameStatus.RUNNING
        else:
            return False
        return True

    def step(self) -> bool:
        """Advance one tick. Returns False if not running or the snake dies this tick."""
        if self.status is not GameStatus.RUNNING:
            return False

        head_x, head_y = self.head
        new_head = (head_x + self.direction.dx, head_y + self.direction.dy)

        # Colliding moves only end the run; the body is left as it was.
        if not self._in_bounds(*new_head) or new_head in self.snake_set:
            self.status = GameStatus.GAME_OVER
            logger.info("Game over: score=%d length=%d", self.score, len(self.snake))
            return False

        self.snake.appendleft(new_head)
        self.snake_set.add(new_head)

        if new_head == self.food:
            self.score += self.config.food_value
            self.place_food()
        else:
            old_tail = self.snake.pop()
            self.snake_set.discard(old_tail)

        self.can_change_direction = True
        return True
