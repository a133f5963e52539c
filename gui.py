# Launcher: landing page + game view in one Tk window.
from __future__ import annotations

import argparse
import logging
import tkinter as tk
from typing import Callable

try:
    from .game_logic import DEFAULT_SPEED_MS, MAX_SPEED_MS, MIN_SPEED_MS, SnakeConfig, validate_speed
    from .home import HomePage
    from .persistence import DEFAULT_HIGH_SCORE_PATH, HighScoreStore
    from .snake_gui import SnakeApp
except ImportError:
    from game_logic import DEFAULT_SPEED_MS, MAX_SPEED_MS, MIN_SPEED_MS, SnakeConfig, validate_speed
    from home import HomePage
    from persistence import DEFAULT_HIGH_SCORE_PATH, HighScoreStore
    from snake_gui import SnakeApp


logger = logging.getLogger(__name__)

HOME_ROUTE = "/"
GAME_ROUTE = "/game"


class SnakeShell:
    """Swaps between the landing page and the game view; only one view is alive at a time."""
    def __init__(self, root: tk.Tk, config: SnakeConfig | None = None, store: HighScoreStore | None = None) -> None:
        self.root = root
        self.root.title("Snake Game")
        self.root.configure(bg="#ffffff")
        self.config = config or SnakeConfig()
        self.store = store or HighScoreStore()
        self.view: HomePage | SnakeApp | None = None
        self.route: str | None = None
        self.routes: dict[str, Callable[[], HomePage | SnakeApp]] = {
            HOME_ROUTE: lambda: HomePage(self.root, on_start=lambda: self.navigate(GAME_ROUTE)),
            GAME_ROUTE: lambda: SnakeApp(self.root, self.root, config=self.config, store=self.store),
        }

    def navigate(self, route: str) -> None:
        """Tear down the current view (timer and key binding included) and build the next one."""
        if route not in self.routes:
            raise ValueError(f"Unknown route: {route}")
        if self.view is not None:
            self.view.destroy()
        logger.debug("Navigating to %s", route)
        self.route = route
        self.view = self.routes[route]()


def _speed_arg(raw: str) -> int:
    try:
        return validate_speed(int(raw))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Snake")
    parser.add_argument(
        "--speed",
        type=_speed_arg,
        default=DEFAULT_SPEED_MS,
        help=f"Tick period in ms ({MIN_SPEED_MS}-{MAX_SPEED_MS}, step 50). Lower is faster.",
    )
    parser.add_argument(
        "--high-score-file",
        type=str,
        default=DEFAULT_HIGH_SCORE_PATH,
        help="Where the high score is kept between sessions.",
    )
    parser.add_argument("--skip-home", action="store_true", help="Open the game view directly.")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    root = tk.Tk()
    shell = SnakeShell(root, config=SnakeConfig(speed_ms=args.speed), store=HighScoreStore(args.high_score_file))
    shell.navigate(GAME_ROUTE if args.skip_home else HOME_ROUTE)
    root.mainloop()


if __name__ == "__main__":
    main()
