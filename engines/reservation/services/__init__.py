"""
Bistro Reservation Engine - Reservation Ledger
================================================
Per-date booking lists with a seating-capacity ceiling.

- Reservations are partitioned by calendar day.
- check + number + append run under one lock, so two concurrent
  bookings cannot both pass the capacity check and overbook a date.
- cancel() searches every partition: callers know the number, not
  necessarily the date.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional, Union

from core.config.rules import DEFAULT_RULES, RestaurantRules
from core.numbering.sequence import MonotonicSequence
from core.time.clock import Clock, get_default_clock
from engines.inventory.ledger import to_date
from engines.reservation.advisory import MenuAdvisor, suggest_menu_or_default
from engines.reservation.errors import CapacityExceeded, ReservationNotFound
from engines.reservation.policies import (
    booked_covers,
    client_name_policy,
    party_size_policy,
    seating_capacity_policy,
)

logger = logging.getLogger("bistro.reservations")

DateLike = Union[date, str]


@dataclass(frozen=True)
class ReservationRecord:
    reservation_number: int
    date: date
    party_size: int
    client_name: str
    suggested_menu: str
    booked_at: datetime


@dataclass(frozen=True)
class ReservationStatistics:
    total_reservations: int
    total_guests: int
    average_party_size: float
    distinct_dates: int


class ReservationLedger:
    """
    In-memory reservation book for one restaurant.

    The menu advisor is optional; without one (or when it fails) every
    booking gets rules.default_menu.
    """

    def __init__(
        self,
        *,
        menu_advisor: Optional[MenuAdvisor] = None,
        rules: RestaurantRules = DEFAULT_RULES,
        clock: Optional[Clock] = None,
    ) -> None:
        self._menu_advisor = menu_advisor
        self._rules = rules
        self._clock = clock or get_default_clock()
        self._lock = threading.RLock()
        self._sequence = MonotonicSequence()
        self._by_date: Dict[date, List[ReservationRecord]] = {}

    @property
    def capacity(self) -> int:
        return self._rules.seating_capacity

    def check_capacity(self, day: DateLike, party_size: int) -> bool:
        with self._lock:
            existing = self._by_date.get(to_date(day), [])
            return seating_capacity_policy(existing, party_size, self.capacity) is None

    def remaining_capacity(self, day: DateLike) -> int:
        with self._lock:
            return self.capacity - booked_covers(self._by_date.get(to_date(day), []))

    def book(self, day: DateLike, party_size: int, client_name: str) -> ReservationRecord:
        """Book a table or raise CapacityExceeded."""
        for rejection in (party_size_policy(party_size), client_name_policy(client_name)):
            if rejection is not None:
                raise ValueError(rejection)
        booking_date = to_date(day)

        with self._lock:
            existing = self._by_date.get(booking_date, [])
            rejection = seating_capacity_policy(existing, party_size, self.capacity)
            if rejection is not None:
                logger.info(f"Booking for {client_name} on {booking_date} REJECTED: {rejection}")
                raise CapacityExceeded(
                    booking_date, party_size, self.remaining_capacity(booking_date)
                )

            reservation = ReservationRecord(
                reservation_number=self._sequence.next_value(),
                date=booking_date,
                party_size=party_size,
                client_name=client_name,
                suggested_menu=suggest_menu_or_default(
                    self._menu_advisor, booking_date, self._rules.default_menu
                ),
                booked_at=self._clock.now_utc(),
            )
            self._by_date.setdefault(booking_date, []).append(reservation)

        logger.info(
            f"Reservation {reservation.reservation_number} booked: "
            f"{party_size} covers on {booking_date} for {client_name}"
        )
        return reservation

    def get_reservations_for(self, day: DateLike) -> List[ReservationRecord]:
        with self._lock:
            return list(self._by_date.get(to_date(day), []))

    def find(self, reservation_number: int) -> Optional[ReservationRecord]:
        with self._lock:
            for reservations in self._by_date.values():
                for reservation in reservations:
                    if reservation.reservation_number == reservation_number:
                        return reservation
            return None

    def cancel(self, reservation_number: int) -> ReservationRecord:
        """Remove a reservation by number, whatever its date."""
        with self._lock:
            for booking_date, reservations in list(self._by_date.items()):
                for index, reservation in enumerate(reservations):
                    if reservation.reservation_number != reservation_number:
                        continue
                    del reservations[index]
                    if not reservations:
                        del self._by_date[booking_date]
                    logger.info(f"Reservation {reservation_number} on {booking_date} cancelled")
                    return reservation
        raise ReservationNotFound(reservation_number)

    def get_statistics(self) -> ReservationStatistics:
        with self._lock:
            total = sum(len(r) for r in self._by_date.values())
            guests = sum(booked_covers(r) for r in self._by_date.values())
            dates = len(self._by_date)
        average = 0.0
        if total:
            average = float(
                (Decimal(guests) / Decimal(total)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
            )
        return ReservationStatistics(
            total_reservations=total,
            total_guests=guests,
            average_party_size=average,
            distinct_dates=dates,
        )
