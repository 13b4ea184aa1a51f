"""
Bistro Inventory Engine - Default Stock
=========================================
Opening stock of the pizza kitchen.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Tuple

from core.config.rules import DEFAULT_RULES, RestaurantRules
from core.time.clock import Clock
from engines.inventory.ledger import InventoryLedger, StockRecord


DEFAULT_STOCK: Tuple[StockRecord, ...] = (
    StockRecord("tomates", Decimal("10"), "kg", Decimal("2.5"), date(2024, 12, 31)),
    StockRecord("basilic", Decimal("5"), "bouquets", Decimal("1.8"), date(2024, 1, 15)),
    StockRecord("mozzarella", Decimal("3"), "kg", Decimal("12"), date(2024, 2, 1)),
    StockRecord("pate_pizza", Decimal("8"), "unités", Decimal("1.5"), date(2024, 1, 30)),
    StockRecord("huile_olive", Decimal("2"), "litres", Decimal("8"), date(2025, 6, 1)),
)


def default_inventory_ledger(
    *,
    clock: Optional[Clock] = None,
    rules: RestaurantRules = DEFAULT_RULES,
) -> InventoryLedger:
    """A ledger loaded with DEFAULT_STOCK; reset() returns to it."""
    return InventoryLedger(clock=clock, rules=rules, initial_stock=DEFAULT_STOCK)
