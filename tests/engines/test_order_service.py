"""
Bistro Order Service Tests
============================
Order numbering, per-item batch semantics, status transitions,
history immutability and statistics.
"""

import threading
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.time.clock import FixedClock
from engines.inventory.defaults import default_inventory_ledger
from engines.restaurant.services import (
    ItemOutcome,
    OrderManager,
    OrderStatus,
    prepare_order,
)

NOW = datetime(2024, 1, 10, 19, 30, 0, tzinfo=timezone.utc)
MARGHERITA = {"type": "margherita"}
HAWAIIAN = {"type": "hawaienne"}


@pytest.fixture
def ledger():
    return default_inventory_ledger()


@pytest.fixture
def manager(ledger):
    return OrderManager(ledger, clock=FixedClock(NOW))


# ══════════════════════════════════════════════════════════════
# PREPARE ORDER (batch runner)
# ══════════════════════════════════════════════════════════════

class TestPrepareOrder:
    def test_items_are_independent(self, ledger):
        results = prepare_order(ledger, [MARGHERITA, HAWAIIAN, MARGHERITA])
        assert [r.outcome for r in results] == [
            ItemOutcome.SUCCESS, ItemOutcome.ERROR, ItemOutcome.SUCCESS,
        ]
        assert results[1].message == "Type de pizza non supporté"
        assert ledger.get_stock("pate_pizza").quantity == Decimal("6")

    def test_missing_ingredient_recorded_per_item(self, ledger):
        results = prepare_order(ledger, [MARGHERITA] * 6)
        assert [r.succeeded for r in results] == [True] * 5 + [False]
        assert results[5].message == "Ingrédient manquant : basilic"

    def test_empty_batch(self, ledger):
        assert prepare_order(ledger, []) == []

    @pytest.mark.parametrize("item", [{"size": "large"}, {"type": ""}, {"type": 7}])
    def test_untyped_item_is_a_per_item_error(self, ledger, item):
        results = prepare_order(ledger, [item, MARGHERITA])
        assert results[0].outcome == ItemOutcome.ERROR
        assert results[0].message == "Type de pizza non supporté"
        assert results[1].succeeded
        assert ledger.get_stock("pate_pizza").quantity == Decimal("7")


# ══════════════════════════════════════════════════════════════
# PLACE ORDER
# ══════════════════════════════════════════════════════════════

class TestPlaceOrder:
    def test_successful_order(self, manager, ledger):
        order = manager.place_order([MARGHERITA])
        assert manager.ledger is ledger
        assert order.order_number == 1
        assert order.status == OrderStatus.SUCCEEDED
        assert order.submitted_at == NOW
        assert order.error_message is None
        assert len(order.item_results) == 1
        assert order.item_results[0].item_type == "margherita"
        assert order.item_results[0].message == "Pizza Margherita prête !"
        assert ledger.get_stock("tomates").quantity == Decimal("9.8")

    def test_partially_failed_order(self, manager):
        order = manager.place_order([MARGHERITA, HAWAIIAN])
        assert order.status == OrderStatus.PARTIALLY_FAILED
        assert order.error_message is None

    def test_all_items_failing_is_partially_failed(self, manager):
        order = manager.place_order([HAWAIIAN, {"type": "calzone"}])
        assert order.status == OrderStatus.PARTIALLY_FAILED
        assert all(r.outcome == ItemOutcome.ERROR for r in order.item_results)

    def test_empty_order_succeeds(self, manager):
        order = manager.place_order([])
        assert order.status == OrderStatus.SUCCEEDED
        assert order.item_results == ()

    @pytest.mark.parametrize("items", [
        None,
        "margherita",
        42,
        [MARGHERITA, "margherita"],
        (item for item in [MARGHERITA]),
    ])
    def test_malformed_batch_fails_without_consuming(self, manager, ledger, items):
        before = ledger.snapshot()
        order = manager.place_order(items)
        assert order.status == OrderStatus.FAILED
        assert order.error_message.startswith("Commande invalide")
        assert order.item_results == ()
        assert ledger.snapshot() == before

    def test_untyped_item_does_not_abort_batch(self, manager):
        order = manager.place_order([MARGHERITA, {"size": "large"}])
        assert order.status == OrderStatus.PARTIALLY_FAILED
        assert [r.succeeded for r in order.item_results] == [True, False]
        assert order.item_results[1].item_type is None

    def test_generator_batch_is_recorded_as_failed(self, manager):
        order = manager.place_order(item for item in [MARGHERITA])
        assert order.status == OrderStatus.FAILED
        assert order.error_message.startswith("Commande invalide")
        assert isinstance(order.submitted_items[0], str)
        assert manager.place_order([]).order_number == 2
        assert [o.order_number for o in manager.get_history()] == [1, 2]

    def test_uncopyable_item_value_is_kept_by_reference(self, manager):
        token = threading.Lock()
        order = manager.place_order([{"type": "margherita", "token": token}])
        assert order.status == OrderStatus.SUCCEEDED
        assert order.submitted_items[0]["token"] is token
        with pytest.raises(TypeError):
            order.submitted_items[0]["type"] = "calzone"
        assert manager.get_history() == [order]

    def test_order_numbers_are_gap_free(self, manager):
        numbers = [
            manager.place_order(items).order_number
            for items in ([MARGHERITA], None, [HAWAIIAN], [MARGHERITA])
        ]
        assert numbers == [1, 2, 3, 4]

    def test_managers_number_independently(self, ledger):
        first = OrderManager(ledger)
        second = OrderManager(ledger)
        first.place_order([])
        first.place_order([])
        assert second.place_order([]).order_number == 1

    def test_submitted_items_are_copied(self, manager):
        items = [{"type": "margherita", "notes": ["sans basilic"]}]
        order = manager.place_order(items)
        items[0]["type"] = "calzone"
        items[0]["notes"].append("extra")
        assert order.submitted_items[0]["type"] == "margherita"
        assert order.submitted_items[0]["notes"] == ["sans basilic"]
        with pytest.raises(TypeError):
            order.submitted_items[0]["type"] = "calzone"

    def test_order_record_is_frozen(self, manager):
        order = manager.place_order([MARGHERITA])
        with pytest.raises(AttributeError):
            order.status = OrderStatus.FAILED


# ══════════════════════════════════════════════════════════════
# HISTORY + STATISTICS
# ══════════════════════════════════════════════════════════════

class TestHistory:
    def test_history_records_every_call(self, manager):
        manager.place_order([MARGHERITA])
        manager.place_order("bad")
        manager.place_order([HAWAIIAN])
        history = manager.get_history()
        assert len(history) == 3
        assert [o.order_number for o in history] == [1, 2, 3]

    def test_history_is_a_copy(self, manager):
        manager.place_order([MARGHERITA])
        history = manager.get_history()
        history.clear()
        assert len(manager.get_history()) == 1

    def test_get_order(self, manager):
        manager.place_order([MARGHERITA])
        second = manager.place_order([HAWAIIAN])
        assert manager.get_order(2) is second
        assert manager.get_order(99) is None


class TestStatistics:
    def test_empty(self, manager):
        stats = manager.get_statistics()
        assert (stats.total, stats.succeeded, stats.failed, stats.success_rate_percent) == (0, 0, 0, 0)

    def test_mixed(self, manager):
        manager.place_order([MARGHERITA])
        manager.place_order([HAWAIIAN])
        manager.place_order(None)
        stats = manager.get_statistics()
        assert stats.total == 3
        assert stats.succeeded == 1
        assert stats.failed == 1
        assert stats.success_rate_percent == 33

    def test_rate_rounds_half_up(self, manager):
        manager.place_order([MARGHERITA])
        for _ in range(7):
            manager.place_order([HAWAIIAN])
        assert manager.get_statistics().success_rate_percent == 13

    def test_all_succeeded(self, manager):
        manager.place_order([MARGHERITA])
        manager.place_order([])
        assert manager.get_statistics().success_rate_percent == 100
