"""
Bistro Core Time - Kitchen Clock
==================================
Booking stamps, order stamps and "what expires this week" all read
the same clock. Ledgers take one at construction; when they don't,
they fall back to the process-wide default set here.

A pinned clock makes expiry alerts deterministic:

    clock = FixedClock(datetime(2024, 1, 10, 9, 0, tzinfo=timezone.utc))
    ledger = default_inventory_ledger(clock=clock)
    ledger.expiring_within(7)        # only basilic, expiring 2024-01-15
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    def now_utc(self) -> datetime:
        ...  # pragma: no cover

    def today(self) -> date:
        ...  # pragma: no cover


class SystemClock:
    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)

    def today(self) -> date:
        return self.now_utc().date()


class FixedClock:
    """
    Clock frozen on one aware instant until advance() moves it.

    today() is the UTC calendar day of that instant, whatever
    offset the instant was given in.
    """

    def __init__(self, fixed_dt: datetime) -> None:
        if fixed_dt.tzinfo is None:
            raise ValueError("FixedClock requires timezone-aware datetime.")
        self._instant = fixed_dt

    def now_utc(self) -> datetime:
        return self._instant

    def today(self) -> date:
        return self._instant.astimezone(timezone.utc).date()

    def advance(self, seconds: float = 0, *, days: int = 0) -> None:
        self._instant += timedelta(days=days, seconds=seconds)


_default_clock: Clock = SystemClock()


def set_default_clock(clock: Clock) -> None:
    """Swap the fallback clock used by ledgers built without one."""
    global _default_clock
    _default_clock = clock


def get_default_clock() -> Clock:
    return _default_clock
