# Best-effort high score storage: one integer in a small text file.
from __future__ import annotations

import logging
import os
import threading


logger = logging.getLogger(__name__)

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_HIGH_SCORE_PATH = os.path.join(BASE_DIR, "high_score.txt")

# Upper bound on waiting for a background write before a read.
WRITER_JOIN_TIMEOUT_S = 1.0


class HighScoreStore:
    """Reads and writes a single high score. Failures are logged, never raised."""
    def __init__(self, path: str = DEFAULT_HIGH_SCORE_PATH) -> None:
        self.path = path
        self._lock = threading.Lock()
        self._writer: threading.Thread | None = None  # last set_async() thread

    def get(self) -> int | None:
        """Stored value, or None when missing or unreadable."""
        # A read right after set_async() must see that write.
        writer = self._writer
        if writer is not None and writer is not threading.current_thread():
            writer.join(timeout=WRITER_JOIN_TIMEOUT_S)

        try:
            with open(self.path, encoding="utf-8") as fh:
                raw = fh.read().strip()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Unable to read high score from %s: %s", self.path, exc)
            return None

        try:
            value = int(raw)
        except ValueError:
            logger.warning("Ignoring malformed high score in %s: %r", self.path, raw)
            return None
        return value if value >= 0 else None

    def set(self, value: int) -> None:
        tmp_path = f"{self.path}.tmp"
        with self._lock:
            try:
                directory = os.path.dirname(self.path)
                if directory:
                    os.makedirs(directory, exist_ok=True)
                with open(tmp_path, "w", encoding="utf-8") as fh:
                    fh.write(f"{int(value)}\n")
                os.replace(tmp_path, self.path)
            except OSError as exc:
                logger.warning("Unable to save high score to %s: %s", self.path, exc)
                return
        logger.info("High score %d saved to %s", value, self.path)

    def set_async(self, value: int) -> threading.Thread:
        """Fire-and-forget write so the game loop never waits on disk."""
        worker = threading.Thread(target=self.set, args=(value,), name="high-score-writer", daemon=True)
        self._writer = worker
        worker.start()
        return worker
