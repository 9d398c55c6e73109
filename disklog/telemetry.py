"""Counters and diagnostic reporting for the disk journal.

The journal never logs about itself; failures are only visible here, through
the counters and the optional ``on_error`` callback.
"""

from __future__ import annotations

import threading
from collections import defaultdict
from collections.abc import Callable
from dataclasses import fields

from disklog.contracts import DiskError, SinkStats

ErrorCallback = Callable[[DiskError], None]

_FAILURE_COUNTERS = {
    "mkdir": "open_failures",
    "open": "open_failures",
    "record": "write_failures",
    "write": "write_failures",
    "flush": "write_failures",
    "close": "close_failures",
}


class SinkCounters:
    """Monotonically increasing counters keyed by ``SinkStats`` field name.

    Safe to use from producer threads and the flush worker at once.
    """

    _NAMES = frozenset(f.name for f in fields(SinkStats))

    def __init__(self, on_error: ErrorCallback | None = None) -> None:
        self._values: dict[str, int] = defaultdict(int)
        self._lock = threading.Lock()
        self._on_error = on_error

    def inc(self, name: str, amount: int = 1) -> None:
        """Increment counter.

        Raises:
            ValueError: If ``name`` is not a SinkStats field or amount < 0
        """
        if name not in self._NAMES:
            raise ValueError(f"Unknown counter: {name}")
        if amount < 0:
            raise ValueError(f"Counter can only increase, got negative amount: {amount}")
        if amount == 0:
            return
        with self._lock:
            self._values[name] += amount

    def get(self, name: str) -> int:
        with self._lock:
            return self._values[name]

    def snapshot(self) -> SinkStats:
        with self._lock:
            return SinkStats(**{name: self._values[name] for name in self._NAMES})

    def report(self, error: DiskError) -> None:
        """Count a contained failure and hand it to the diagnostic callback."""

        self.inc(_FAILURE_COUNTERS[error.operation])
        if self._on_error is None:
            return
        try:
            self._on_error(error)
        except Exception:
            # A broken callback must not take the flush worker down
            pass
