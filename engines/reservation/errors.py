"""
Bistro Reservation Engine - Errors
====================================
Raised to the caller of book() / cancel(). A booking or a
cancellation has exactly one outcome, so these are never absorbed.
"""

from datetime import date


class ReservationError(Exception):
    """Base error for reservation operations."""
    pass


class CapacityExceeded(ReservationError):
    """The date cannot seat the requested party."""

    def __init__(self, reservation_date: date, party_size: int, remaining: int):
        self.reservation_date = reservation_date
        self.party_size = party_size
        self.remaining = remaining
        super().__init__(
            f"Capacité insuffisante pour cette date: {reservation_date.isoformat()} "
            f"({party_size} demandés, {remaining} places restantes)"
        )


class ReservationNotFound(ReservationError):
    """No active reservation carries this number."""

    def __init__(self, reservation_number: int):
        self.reservation_number = reservation_number
        super().__init__(f"Réservation non trouvée: {reservation_number}")
