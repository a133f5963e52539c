# Tick timer and key-binding resources built on Tkinter's after()/bind() surface.
from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

try:
    from .game_logic import MAX_SPEED_MS, MIN_SPEED_MS
except ImportError:
    from game_logic import MAX_SPEED_MS, MIN_SPEED_MS


logger = logging.getLogger(__name__)


class TimerHost(Protocol):
    def after(self, ms: int, func: Callable[[], None]) -> str: ...

    def after_cancel(self, id: str) -> None: ...


class BindingHost(Protocol):
    def bind(self, sequence: str, func: Callable[[Any], Any], add: str | None = None) -> str: ...

    def unbind(self, sequence: str, funcid: str | None = None) -> None: ...


def clamp_period(period_ms: int) -> int:
    return max(MIN_SPEED_MS, min(MAX_SPEED_MS, int(period_ms)))


class TickScheduler:
    """Fires a callback every `period_ms` while armed; never holds more than one pending timer."""
    def __init__(self, host: TimerHost, callback: Callable[[], None], period_ms: int) -> None:
        self.host = host
        self.callback = callback
        self.period_ms = clamp_period(period_ms)
        self.after_id: str | None = None  # Tkinter timer id for the pending tick
        self._armed = False

    @property
    def armed(self) -> bool:
        return self._armed

    def arm(self) -> None:
        """Start ticking; re-arming replaces any pending timer."""
        self._armed = True
        self._schedule()

    def cancel(self) -> None:
        """Stop ticking and drop the pending timer if one exists."""
        self._armed = False
        self._cancel_pending()

    def set_period(self, period_ms: int) -> int:
        """Change the period; an armed timer is torn down and rescheduled with it."""
        self.period_ms = clamp_period(period_ms)
        logger.debug("Tick period set to %d ms", self.period_ms)
        if self._armed:
            self._schedule()
        return self.period_ms

    def _cancel_pending(self) -> None:
        if self.after_id is not None:
            self.host.after_cancel(self.after_id)
            self.after_id = None

    def _schedule(self) -> None:
        self._cancel_pending()
        self.after_id = self.host.after(self.period_ms, self._fire)

    def _fire(self) -> None:
        self.after_id = None
        if not self._armed:
            return
        self.callback()
        # The callback may have cancelled or re-armed us.
        if self._armed and self.after_id is None:
            self._schedule()


class KeyListener:
    """Scoped key binding: attach()/detach() are idempotent and release the exact binding they made."""
    def __init__(self, widget: BindingHost, handler: Callable[[Any], Any], sequence: str = "<KeyPress>") -> None:
        self.widget = widget
        self.handler = handler
        self.sequence = sequence
        self.funcid: str | None = None

    @property
    def attached(self) -> bool:
        return self.funcid is not None

    def attach(self) -> None:
        if self.funcid is None:
            self.funcid = self.widget.bind(self.sequence, self.handler, "+")

    def detach(self) -> None:
        if self.funcid is not None:
            self.widget.unbind(self.sequence, self.funcid)
            self.funcid = None
