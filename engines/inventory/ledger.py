"""
Bistro Inventory Engine - Ingredient Ledger
=============================================
In-memory authoritative stock of every ingredient in the kitchen.

RULES:
- Quantities and prices are Decimal (0.15 kg of mozzarella stays 0.15)
- Quantity never goes negative: an oversized consume changes nothing
- Restocking an existing ingredient only adds quantity; the unit,
  price and expiry of the first arrival are kept
- Every operation runs under the ledger lock; locked() lets a caller
  hold the lock across several operations (recipe fulfillment)
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

from core.config.rules import DEFAULT_RULES, RestaurantRules
from core.time.clock import Clock, get_default_clock

logger = logging.getLogger("bistro.inventory")

Quantity = Union[Decimal, int, float, str]


def to_decimal(value: Quantity) -> Decimal:
    """Convert a quantity or price to Decimal without float noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Expected a number, got {value!r}.")
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def to_date(value: Union[date, str]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


# ══════════════════════════════════════════════════════════════
# DATA STRUCTURES
# ══════════════════════════════════════════════════════════════

@dataclass
class _StockEntry:
    """Internal mutable entry (not exposed externally)."""
    quantity: Decimal
    unit: str
    unit_price: Decimal
    expiry_date: date


@dataclass(frozen=True)
class StockRecord:
    """Immutable view of one ingredient's stock."""
    ingredient_name: str
    quantity: Decimal
    unit: str
    unit_price: Decimal
    expiry_date: date

    @property
    def value(self) -> Decimal:
        return self.quantity * self.unit_price


@dataclass(frozen=True)
class InventorySnapshot:
    """Opaque copy of ledger state, for restore() in test setup/teardown."""
    records: Tuple[StockRecord, ...]

    @property
    def ingredient_names(self) -> Tuple[str, ...]:
        return tuple(r.ingredient_name for r in self.records)


# ══════════════════════════════════════════════════════════════
# INVENTORY LEDGER
# ══════════════════════════════════════════════════════════════

class InventoryLedger:
    """
    Maps ingredient name to stock entry.

    Reads return frozen StockRecord copies, so callers can never
    mutate the ledger through a returned value.
    """

    def __init__(
        self,
        *,
        clock: Optional[Clock] = None,
        rules: RestaurantRules = DEFAULT_RULES,
        initial_stock: Sequence[StockRecord] = (),
    ) -> None:
        self._lock = threading.RLock()
        self._entries: Dict[str, _StockEntry] = {}
        self._clock = clock or get_default_clock()
        self._rules = rules
        self._initial = InventorySnapshot(records=tuple(initial_stock))
        self.restore(self._initial)

    @contextmanager
    def locked(self) -> Iterator["InventoryLedger"]:
        """Hold the ledger lock across several operations."""
        with self._lock:
            yield self

    # ── Queries ───────────────────────────────────────────────

    def check_available(self, ingredient: str, needed_qty: Quantity) -> bool:
        """True iff the ingredient exists with at least needed_qty in stock."""
        needed = to_decimal(needed_qty)
        with self._lock:
            entry = self._entries.get(ingredient)
            return entry is not None and entry.quantity >= needed

    def get_stock(self, ingredient: str) -> Optional[StockRecord]:
        with self._lock:
            entry = self._entries.get(ingredient)
            return self._record(ingredient, entry) if entry else None

    def list_all(self) -> List[StockRecord]:
        """All records in insertion order."""
        with self._lock:
            return [self._record(name, e) for name, e in self._entries.items()]

    def expiring_within(self, days: Optional[int] = None) -> List[StockRecord]:
        """Records whose expiry date is on or before today + days."""
        if days is None:
            days = self._rules.expiry_alert_days
        horizon = self._clock.today() + timedelta(days=days)
        return [r for r in self.list_all() if r.expiry_date <= horizon]

    def total_value(self) -> Decimal:
        """Sum of quantity x unit_price over all ingredients."""
        with self._lock:
            return sum(
                (e.quantity * e.unit_price for e in self._entries.values()),
                Decimal("0"),
            )

    # ── Mutations ─────────────────────────────────────────────

    def consume(self, ingredient: str, qty: Quantity) -> bool:
        """
        Decrement stock if enough is on hand.

        Returns False (and changes nothing) when the ingredient is
        unknown or the quantity is insufficient.
        """
        amount = to_decimal(qty)
        if amount < 0:
            raise ValueError(f"Consume quantity cannot be negative, got {qty}.")
        with self._lock:
            entry = self._entries.get(ingredient)
            if entry is None or entry.quantity < amount:
                logger.debug(
                    f"Consume refused: {ingredient} x {amount} "
                    f"(on hand: {entry.quantity if entry else 'none'})"
                )
                return False
            entry.quantity -= amount
            return True

    def restock(
        self,
        ingredient: str,
        qty: Quantity,
        unit: str,
        price: Quantity,
        expiry: Union[date, str, None] = None,
    ) -> StockRecord:
        """
        Receive a delivery.

        Existing ingredient: quantity is added, unit/price/expiry kept.
        New ingredient: a record is created from the arrival.
        """
        if not ingredient or not isinstance(ingredient, str):
            raise ValueError("ingredient must be non-empty string.")
        amount = to_decimal(qty)
        if amount <= 0:
            raise ValueError(f"Restock quantity must be positive, got {qty}.")
        unit_price = to_decimal(price)
        if unit_price < 0:
            raise ValueError(f"price cannot be negative, got {price}.")
        expiry_date = to_date(expiry) if expiry is not None else self._rules.default_expiry

        with self._lock:
            entry = self._entries.get(ingredient)
            if entry is not None:
                entry.quantity += amount
            else:
                entry = _StockEntry(
                    quantity=amount,
                    unit=unit,
                    unit_price=unit_price,
                    expiry_date=expiry_date,
                )
                self._entries[ingredient] = entry
            logger.info(f"Restocked {ingredient}: +{amount} {entry.unit} -> {entry.quantity}")
            return self._record(ingredient, entry)

    # ── Snapshot / restore (test utility) ─────────────────────

    def snapshot(self) -> InventorySnapshot:
        with self._lock:
            return InventorySnapshot(
                records=tuple(self._record(n, e) for n, e in self._entries.items())
            )

    def restore(self, snapshot: InventorySnapshot) -> None:
        """Replace the current state wholesale with a snapshot."""
        entries = {
            r.ingredient_name: _StockEntry(
                quantity=r.quantity,
                unit=r.unit,
                unit_price=r.unit_price,
                expiry_date=r.expiry_date,
            )
            for r in snapshot.records
        }
        with self._lock:
            self._entries = entries

    def reset(self) -> None:
        """Return to the stock the ledger was created with."""
        self.restore(self._initial)
        logger.info(f"Inventory reset to {len(self._initial.records)} initial ingredients")

    @staticmethod
    def _record(name: str, entry: _StockEntry) -> StockRecord:
        return StockRecord(
            ingredient_name=name,
            quantity=entry.quantity,
            unit=entry.unit,
            unit_price=entry.unit_price,
            expiry_date=entry.expiry_date,
        )
