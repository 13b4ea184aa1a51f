"""
Bistro Reservation Engine - Policies
"""
from __future__ import annotations
from typing import Optional


def booked_covers(reservations) -> int:
    return sum(r.party_size for r in reservations)


def seating_capacity_policy(
    reservations, party_size: int, capacity: int
) -> Optional[str]:
    """Reject when existing covers plus the new party exceed capacity."""
    booked = booked_covers(reservations)
    if booked + party_size > capacity:
        return (f"{party_size} covers requested, {capacity - booked} "
                f"of {capacity} remaining.")
    return None


def party_size_policy(party_size) -> Optional[str]:
    if isinstance(party_size, bool) or not isinstance(party_size, int) or party_size <= 0:
        return f"party_size must be positive integer, got {party_size!r}."
    return None


def client_name_policy(client_name) -> Optional[str]:
    if not client_name or not isinstance(client_name, str):
        return "client_name must be non-empty string."
    return None
