"""
Bistro Core Numbering - Monotonic Sequence
============================================
Order and reservation numbers come from a sequence owned by the
ledger that issues them. Two ledgers never share a counter, so
independent ledgers in tests do not interfere.

The sequence itself is not locked: the owning ledger advances it
inside the same critical section that stores the numbered record.
"""

from __future__ import annotations


class MonotonicSequence:
    """
    Strictly increasing, gap-free integer sequence.

    - next_value() returns start_at, start_at + 1, ...
    - Issued values are never reused, even if the caller later fails.
    """

    def __init__(self, start_at: int = 1) -> None:
        if not isinstance(start_at, int) or start_at < 1:
            raise ValueError(f"start_at must be int >= 1, got {start_at!r}.")
        self._next = start_at

    def next_value(self) -> int:
        value = self._next
        self._next += 1
        return value
