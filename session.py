# Event-driven glue between input, the tick timer, the game rules, and the high score store.
from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

try:
    from .game_logic import MAX_SPEED_MS, MIN_SPEED_MS, SPEED_STEP_MS, Direction, GameStatus, SnakeConfig, SnakeGame
    from .scheduler import TickScheduler, TimerHost, clamp_period
except ImportError:
    from game_logic import MAX_SPEED_MS, MIN_SPEED_MS, SPEED_STEP_MS, Direction, GameStatus, SnakeConfig, SnakeGame
    from scheduler import TickScheduler, TimerHost, clamp_period


logger = logging.getLogger(__name__)

# Tkinter keysyms.
KEY_DIRECTIONS = {
    "Up": Direction.UP,
    "Down": Direction.DOWN,
    "Left": Direction.LEFT,
    "Right": Direction.RIGHT,
}
PAUSE_KEY = "space"

# The slider shows "faster" to the right: value = MAX - period.
SLIDER_MIN = 0
SLIDER_MAX = MAX_SPEED_MS - MIN_SPEED_MS
SLIDER_STEP = SPEED_STEP_MS


def slider_to_speed(value: int | float | str) -> int:
    return clamp_period(MAX_SPEED_MS - int(float(value)))


def speed_to_slider(speed_ms: int) -> int:
    return MAX_SPEED_MS - clamp_period(speed_ms)


class ScoreStore(Protocol):
    def get(self) -> int | None: ...

    def set_async(self, value: int) -> Any: ...


class InputListener(Protocol):
    def attach(self) -> None: ...

    def detach(self) -> None: ...


class GameSession:
    """Owns one SnakeGame and keeps the timer and input listener in step with its status.

    The timer is armed exactly while the game is RUNNING. The input listener
    stays attached until GAME_OVER and is re-attached by restart().
    """
    def __init__(
        self,
        config: SnakeConfig,
        host: TimerHost,
        store: ScoreStore | None = None,
        listener_factory: Callable[[Callable[[Any], Any]], InputListener] | None = None,
        on_change: Callable[[GameSession], None] | None = None,
    ) -> None:
        self.config = config
        self.game = SnakeGame(config)
        self.store = store
        self.on_change = on_change
        self.scheduler = TickScheduler(host, self.tick, config.speed_ms)
        self.listener = listener_factory(self.on_key) if listener_factory is not None else None

        stored = store.get() if store is not None else None
        self.high_score = stored or 0

        if self.listener is not None:
            self.listener.attach()

    @property
    def status(self) -> GameStatus:
        return self.game.status

    def on_key(self, event: Any) -> None:
        """Tkinter event adapter for handle_key()."""
        self.handle_key(getattr(event, "keysym", ""))

    def handle_key(self, keysym: str) -> bool:
        """Translate one key press; returns True if the game state changed."""
        if self.game.status is GameStatus.GAME_OVER:
            return False

        if keysym == PAUSE_KEY:
            changed = self.game.toggle_pause()
        elif keysym in KEY_DIRECTIONS:
            direction = KEY_DIRECTIONS[keysym]
            # Any arrow starts the run heading up; the key itself is then a normal turn request.
            started = self.game.start(Direction.UP)
            changed = self.game.request_direction(direction) or started
        else:
            return False

        if changed:
            self._sync_timer()
            self._notify()
        return changed

    def tick(self) -> None:
        """Scheduler callback: one simulation step."""
        self.game.step()
        if self.game.status is GameStatus.GAME_OVER:
            self._finish_run()
        self._notify()

    def set_speed(self, speed_ms: int) -> int:
        """Change the tick period without restarting the run."""
        self.config.speed_ms = self.scheduler.set_period(speed_ms)
        return self.config.speed_ms

    def restart(self) -> None:
        """Return to NOT_STARTED with a fresh board and listen for input again."""
        self.scheduler.cancel()
        self.game.reset()
        if self.listener is not None:
            self.listener.attach()
        self._notify()

    def close(self) -> None:
        """Release the timer and the key binding."""
        self.scheduler.cancel()
        if self.listener is not None:
            self.listener.detach()

    def _sync_timer(self) -> None:
        if self.game.status is GameStatus.RUNNING:
            if not self.scheduler.armed:
                self.scheduler.arm()
        else:
            self.scheduler.cancel()

    def _finish_run(self) -> None:
        self.scheduler.cancel()
        if self.listener is not None:
            self.listener.detach()

        score = self.game.score
        if score > self.high_score:
            logger.info("New high score: %d (previous %d)", score, self.high_score)
            self.high_score = score
            if self.store is not None:
                self.store.set_async(score)

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self)
