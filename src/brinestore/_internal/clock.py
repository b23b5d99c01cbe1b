"""Clock abstraction for the periodic dump policy."""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Protocol for reading elapsed time in seconds.  Inject a fake in tests."""

    def now(self) -> float: ...


class MonotonicClock:
    """Default clock backed by ``time.monotonic``."""

    def now(self) -> float:
        return time.monotonic()
