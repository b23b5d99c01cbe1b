"""DumpPolicy — when a store writes itself back to disk."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum


class DumpMode(str, Enum):
    NEVER = "never"
    AUTO = "auto"
    UPON_REQUEST = "upon_request"
    PERIODIC = "periodic"


@dataclass(frozen=True)
class DumpPolicy:
    """Immutable dump policy attached to one store for its whole lifetime.

    Attributes:
        mode:     Which rule applies (see :class:`DumpMode`).
        interval: Minimum number of seconds between two automatic dumps.
                  Only meaningful for ``PERIODIC``.

    ``NEVER`` makes the store read-only on disk: even an explicit ``dump()``
    is a no-op.  ``UPON_REQUEST`` only writes on ``dump()`` and, unlike
    ``AUTO`` and ``PERIODIC``, does not write on ``close()``.
    """

    mode: DumpMode
    interval: float = 0.0

    def __post_init__(self) -> None:
        if self.mode is DumpMode.PERIODIC and self.interval <= 0:
            raise ValueError(f"Periodic dump interval must be positive, got {self.interval}")

    # ── Factory helpers ──────────────────────────────────────

    @staticmethod
    def never() -> DumpPolicy:
        return DumpPolicy(DumpMode.NEVER)

    @staticmethod
    def auto() -> DumpPolicy:
        return DumpPolicy(DumpMode.AUTO)

    @staticmethod
    def upon_request() -> DumpPolicy:
        return DumpPolicy(DumpMode.UPON_REQUEST)

    @staticmethod
    def periodic(interval: float | timedelta) -> DumpPolicy:
        if isinstance(interval, timedelta):
            interval = interval.total_seconds()
        return DumpPolicy(DumpMode.PERIODIC, float(interval))

    # ── Predicates ───────────────────────────────────────────

    @property
    def writes_on_close(self) -> bool:
        return self.mode in (DumpMode.AUTO, DumpMode.PERIODIC)
