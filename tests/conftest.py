import os
import sys

import pytest

# Flat layout: make the top-level modules importable when running from a checkout.
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class FakeTimerHost:
    """Stands in for Tk's after()/after_cancel() and lets tests fire timers by hand."""
    def __init__(self):
        self.pending = {}
        self.cancelled = []
        self._counter = 0

    def after(self, ms, func):
        self._counter += 1
        after_id = f"after#{self._counter}"
        self.pending[after_id] = (ms, func)
        return after_id

    def after_cancel(self, after_id):
        self.pending.pop(after_id, None)
        self.cancelled.append(after_id)

    def periods(self):
        return [ms for ms, _ in self.pending.values()]

    def fire(self):
        assert len(self.pending) == 1, f"expected exactly one pending timer, got {len(self.pending)}"
        after_id = next(iter(self.pending))
        ms, func = self.pending.pop(after_id)
        func()
        return ms


class FakeBindingWidget:
    def __init__(self):
        self.bindings = {}
        self._counter = 0

    def bind(self, sequence, func, add=None):
        self._counter += 1
        funcid = f"bind#{self._counter}"
        self.bindings[funcid] = (sequence, func)
        return funcid

    def unbind(self, sequence, funcid=None):
        self.bindings.pop(funcid, None)


@pytest.fixture
def timer_host():
    return FakeTimerHost()


@pytest.fixture
def widget():
    return FakeBindingWidget()
