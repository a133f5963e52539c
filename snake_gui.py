# Snake game view: canvas rendering, score line, speed slider, and keyboard wiring.
from __future__ import annotations

import tkinter as tk

# Support both package imports and running this file directly.
try:
    from .game_logic import GameStatus, SnakeConfig
    from .persistence import HighScoreStore
    from .scheduler import KeyListener
    from .session import SLIDER_MAX, SLIDER_MIN, SLIDER_STEP, GameSession, slider_to_speed, speed_to_slider
except ImportError:
    from game_logic import GameStatus, SnakeConfig
    from persistence import HighScoreStore
    from scheduler import KeyListener
    from session import SLIDER_MAX, SLIDER_MIN, SLIDER_STEP, GameSession, slider_to_speed, speed_to_slider


OVERLAY_TEXT = {
    GameStatus.NOT_STARTED: ("Press any arrow key to start", 20),
    GameStatus.PAUSED: ("Paused", 30),
    GameStatus.GAME_OVER: ("Game Over", 30),
}


class SnakeApp:
    """Tkinter presentation layer for GameSession."""
    BG = "#ffffff"
    TEXT_PRIMARY = "#000000"
    SNAKE_COLOR = "green"
    FOOD_COLOR = "red"
    OVERLAY_TEXT_COLOR = "white"
    SNAKE_SIZE = 15      # segment side, slightly under one cell
    FOOD_RADIUS = 7.5

    def __init__(
        self,
        parent: tk.Widget,
        root: tk.Tk,
        config: SnakeConfig | None = None,
        store: HighScoreStore | None = None,
    ) -> None:
        self.root = root
        self.config = config or SnakeConfig()
        self.frame = tk.Frame(parent, bg=self.BG)
        self.frame.pack(fill="both", expand=True)

        self._build_layout()
        self.session = GameSession(
            self.config,
            host=self.root,
            store=store,
            listener_factory=lambda handler: KeyListener(self.root, handler),
            on_change=lambda _session: self.draw(),
        )
        # Hooked up once the session exists; Scale.set() can fire the command.
        self.speed_scale.configure(command=self._on_speed_change)
        self.draw()

    def _build_layout(self) -> None:
        """Speed slider, score line, board canvas, then hint/restart row."""
        speed_row = tk.Frame(self.frame, bg=self.BG)
        speed_row.pack(pady=(20, 20))

        tk.Label(speed_row, text="Speed:", bg=self.BG, fg=self.TEXT_PRIMARY).pack(side="left")
        self.speed_scale = tk.Scale(
            speed_row,
            from_=SLIDER_MIN,
            to=SLIDER_MAX,
            resolution=SLIDER_STEP,
            orient="horizontal",
            showvalue=False,
            length=200,
            bg=self.BG,
            highlightthickness=0,
        )
        self.speed_scale.set(speed_to_slider(self.config.speed_ms))
        self.speed_scale.pack(side="left", padx=(10, 0))

        self.score_var = tk.StringVar(value="Score: 0 | High Score: 0")
        tk.Label(self.frame, textvariable=self.score_var, bg=self.BG, fg=self.TEXT_PRIMARY).pack(pady=(0, 20))

        side = self.config.grid_size * self.config.cell_size
        self.canvas = tk.Canvas(
            self.frame,
            width=side,
            height=side,
            bg=self.BG,
            highlightthickness=1,
            highlightbackground="black",
            bd=0,
        )
        self.canvas.pack()

        self.footer = tk.Frame(self.frame, bg=self.BG)
        self.footer.pack(pady=(20, 0))
        self.hint = tk.Label(
            self.footer,
            text="Press space to pause and unpause the game",
            bg=self.BG,
            fg=self.TEXT_PRIMARY,
        )
        self.restart_btn = tk.Button(self.footer, text="Restart", command=self.restart_game)

    def _on_speed_change(self, raw_value: str) -> None:
        self.session.set_speed(slider_to_speed(raw_value))

    def restart_game(self) -> None:
        self.session.restart()

    def destroy(self) -> None:
        """Release the timer and key binding, then remove the widgets."""
        self.session.close()
        self.frame.destroy()

    def draw(self) -> None:
        """Render snake, food, status overlay, score line, and footer controls."""
        game = self.session.game
        cell = self.config.cell_size
        self.canvas.delete("all")

        for x, y in game.snake:
            self.canvas.create_rectangle(
                x * cell,
                y * cell,
                x * cell + self.SNAKE_SIZE,
                y * cell + self.SNAKE_SIZE,
                fill=self.SNAKE_COLOR,
                outline="",
            )

        if game.food is not None:
            fx, fy = game.food
            cx, cy, r = fx * cell + self.FOOD_RADIUS, fy * cell + self.FOOD_RADIUS, self.FOOD_RADIUS
            self.canvas.create_oval(cx - r, cy - r, cx + r, cy + r, fill=self.FOOD_COLOR, outline="")

        overlay = OVERLAY_TEXT.get(game.status)
        if overlay is not None:
            text, font_size = overlay
            side = self.config.grid_size * cell
            self.canvas.create_rectangle(0, 0, side, side, fill="#000000", stipple="gray50", outline="")
            self.canvas.create_text(
                side / 2,
                side / 2,
                text=text,
                fill=self.OVERLAY_TEXT_COLOR,
                font=("Arial", font_size),
            )

        self.score_var.set(f"Score: {game.score} | High Score: {self.session.high_score}")

        if game.status is GameStatus.GAME_OVER:
            self.hint.pack_forget()
            self.restart_btn.pack()
        else:
            self.restart_btn.pack_forget()
            self.hint.pack()


def run_player_gui(config: SnakeConfig | None = None, store: HighScoreStore | None = None) -> None:
    """Launch the game view on its own, without the landing page."""
    root = tk.Tk()
    root.title("Snake Game")
    SnakeApp(root, root, config=config, store=store or HighScoreStore())
    root.mainloop()


if __name__ == "__main__":
    run_player_gui()
