"""Injectable source of the current time.

WHY: Some writers stamp their output with a creation time. Reading the
system clock directly would make that output impossible to test
deterministically, so components that need "now" receive a clock instead.

HOW: A clock is any object with a ``now()`` method returning an aware
datetime. SystemClock reads the UTC wall clock; FixedClock always returns
the instant it was built with.

RULES:
- The timing algebra never takes a clock
- Components accept ``clock=None`` and fall back to SystemClock()
"""

from __future__ import annotations

from datetime import datetime, timezone


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Clock frozen at one instant, for tests."""

    def __init__(self, instant: datetime) -> None:
        self.instant = instant

    def now(self) -> datetime:
        return self.instant
