# Landing page: a heading and a link into the game view.
from __future__ import annotations

import tkinter as tk
from typing import Callable


class HomePage:
    """Static entry view; it never touches game state."""
    BG = "#ffffff"
    TEXT_PRIMARY = "#000000"
    LINK_COLOR = "#0645ad"

    def __init__(self, parent: tk.Widget, on_start: Callable[[], None]) -> None:
        self.frame = tk.Frame(parent, bg=self.BG)
        self.frame.pack(fill="both", expand=True)

        tk.Label(
            self.frame,
            text="Welcome to the Snake Game",
            bg=self.BG,
            fg=self.TEXT_PRIMARY,
            font=("Helvetica", 24, "bold"),
        ).pack(anchor="w", padx=16, pady=(16, 8))

        link = tk.Label(
            self.frame,
            text="Start Game",
            bg=self.BG,
            fg=self.LINK_COLOR,
            cursor="hand2",
            font=("Helvetica", 12, "underline"),
        )
        link.pack(anchor="w", padx=16)
        link.bind("<Button-1>", lambda _e: on_start())

    def destroy(self) -> None:
        self.frame.destroy()
