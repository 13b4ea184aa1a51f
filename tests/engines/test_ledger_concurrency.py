"""
Bistro Ledger Concurrency Tests
=================================
Concurrent callers must not overdraw stock, overbook a date, or
produce duplicate numbers.
"""

import threading
from datetime import date
from decimal import Decimal

from engines.inventory.defaults import default_inventory_ledger
from engines.reservation.errors import CapacityExceeded
from engines.reservation.services import ReservationLedger
from engines.restaurant.services import OrderManager, OrderStatus

FRIDAY = date(2024, 1, 12)


def run_concurrently(target, count):
    barrier = threading.Barrier(count)

    def worker():
        barrier.wait()
        target()

    threads = [threading.Thread(target=worker) for _ in range(count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()


class TestConcurrentOrders:
    def test_basil_is_never_overdrawn(self):
        ledger = default_inventory_ledger()
        manager = OrderManager(ledger)

        run_concurrently(lambda: manager.place_order([{"type": "margherita"}]), 12)

        history = manager.get_history()
        assert len(history) == 12
        assert sorted(o.order_number for o in history) == list(range(1, 13))
        assert sum(o.status == OrderStatus.SUCCEEDED for o in history) == 5
        assert ledger.get_stock("basilic").quantity == Decimal("0")
        assert ledger.get_stock("pate_pizza").quantity == Decimal("3")


class TestConcurrentBookings:
    def test_date_is_never_overbooked(self):
        ledger = ReservationLedger()
        outcomes = []
        lock = threading.Lock()

        def book():
            try:
                res = ledger.book(FRIDAY, 5, "Client")
            except CapacityExceeded:
                res = None
            with lock:
                outcomes.append(res)

        run_concurrently(book, 20)

        booked = [r for r in outcomes if r is not None]
        assert len(booked) == 10
        assert sorted(r.reservation_number for r in booked) == list(range(1, 11))
        assert sum(r.party_size for r in ledger.get_reservations_for(FRIDAY)) == 50
