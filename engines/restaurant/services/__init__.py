"""
Bistro Restaurant Engine - Order Service
==========================================
Runs batches of recipe orders against an inventory ledger and keeps
an append-only order history.

Lifecycle of one order:
    IN_PROGRESS → SUCCEEDED | PARTIALLY_FAILED | FAILED  (terminal)

- Items in a batch are independent: one failed pizza does not stop
  the next one.
- FAILED is reserved for batch-level errors (malformed input).
- Every place_order() call produces exactly one history entry.
"""

from __future__ import annotations

import copy
import logging
import threading
from dataclasses import dataclass, replace
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from core.numbering.sequence import MonotonicSequence
from core.time.clock import Clock, get_default_clock
from engines.inventory.ledger import InventoryLedger
from engines.restaurant.errors import FulfillmentError, MalformedOrder
from engines.restaurant.fulfillment import fulfill
from engines.restaurant.recipes import RecipeBook, default_recipe_book

logger = logging.getLogger("bistro.orders")


# ══════════════════════════════════════════════════════════════
# ENUMS
# ══════════════════════════════════════════════════════════════

class OrderStatus(Enum):
    IN_PROGRESS = "in_progress"
    SUCCEEDED = "succeeded"
    PARTIALLY_FAILED = "partially_failed"
    FAILED = "failed"


class ItemOutcome(Enum):
    SUCCESS = "success"
    ERROR = "error"


# ══════════════════════════════════════════════════════════════
# RECORDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ItemResult:
    item_type: Any
    outcome: ItemOutcome
    message: str

    @property
    def succeeded(self) -> bool:
        return self.outcome == ItemOutcome.SUCCESS


@dataclass(frozen=True)
class OrderRecord:
    """
    One place_order() call. Immutable once returned.

    error_message is set only when status is FAILED.
    """
    order_number: int
    submitted_items: Tuple[Any, ...]
    submitted_at: datetime
    status: OrderStatus = OrderStatus.IN_PROGRESS
    item_results: Tuple[ItemResult, ...] = ()
    error_message: Optional[str] = None


@dataclass(frozen=True)
class OrderStatistics:
    total: int
    succeeded: int
    failed: int
    success_rate_percent: int


# ══════════════════════════════════════════════════════════════
# BATCH RUNNER
# ══════════════════════════════════════════════════════════════

UNSUPPORTED_TYPE = "Type de pizza non supporté"


def _check_batch_shape(items: Any) -> None:
    if isinstance(items, (str, bytes)) or not isinstance(items, (list, tuple)):
        raise MalformedOrder(f"items must be a list of orders, got {type(items).__name__}")
    for position, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise MalformedOrder(f"item {position} is not a mapping")


def prepare_order(
    ledger: InventoryLedger,
    items: Sequence[Mapping[str, Any]],
    recipe_book: Optional[RecipeBook] = None,
) -> List[ItemResult]:
    """
    Fulfill each item independently and report per-item outcomes.

    Fulfillment errors become ERROR results; they are not raised.
    An item with a missing, empty or unknown type is one ERROR result,
    the rest of the batch still runs.
    """
    book = recipe_book if recipe_book is not None else default_recipe_book()
    _check_batch_shape(items)

    results: List[ItemResult] = []
    for item in items:
        item_type = item.get("type")
        recipe = book.find(item_type) if isinstance(item_type, str) and item_type else None
        if recipe is None:
            results.append(ItemResult(item_type, ItemOutcome.ERROR, UNSUPPORTED_TYPE))
            continue
        try:
            message = fulfill(recipe, ledger)
        except FulfillmentError as exc:
            results.append(ItemResult(item_type, ItemOutcome.ERROR, str(exc)))
        else:
            results.append(ItemResult(item_type, ItemOutcome.SUCCESS, message))
    return results


def _frozen_item(item: Any) -> Any:
    try:
        if isinstance(item, Mapping):
            return MappingProxyType(copy.deepcopy(dict(item)))
        return copy.deepcopy(item)
    except Exception as exc:
        # Generators, locks, sockets: keep what can be kept without copying.
        logger.debug(f"Submitted item not copyable ({exc}); storing a shallow view")
        if isinstance(item, Mapping):
            return MappingProxyType(dict(item))
        return repr(item)


def _frozen_items(items: Any) -> Tuple[Any, ...]:
    """Detached copy of the submitted batch; uncopyable values degrade to a shallow view."""
    if not isinstance(items, (list, tuple)):
        return (_frozen_item(items),)
    return tuple(_frozen_item(i) for i in items)


def _percent(part: int, whole: int) -> int:
    if whole == 0:
        return 0
    ratio = Decimal(part) * 100 / Decimal(whole)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


# ══════════════════════════════════════════════════════════════
# ORDER MANAGER
# ══════════════════════════════════════════════════════════════

class OrderManager:
    """
    Places orders against a ledger it does not own.

    Numbering and history append happen under one lock, so order
    numbers appear in history in strictly increasing order.
    """

    def __init__(
        self,
        ledger: InventoryLedger,
        *,
        recipe_book: Optional[RecipeBook] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self._ledger = ledger
        self._recipe_book = recipe_book if recipe_book is not None else default_recipe_book()
        self._clock = clock or get_default_clock()
        self._lock = threading.RLock()
        self._sequence = MonotonicSequence()
        self._history: List[OrderRecord] = []

    def place_order(self, items: Sequence[Mapping[str, Any]]) -> OrderRecord:
        with self._lock:
            order = OrderRecord(
                order_number=self._sequence.next_value(),
                submitted_items=(),
                submitted_at=self._clock.now_utc(),
            )
            try:
                order = replace(order, submitted_items=_frozen_items(items))
                results = prepare_order(self._ledger, items, self._recipe_book)
            except MalformedOrder as exc:
                order = replace(order, status=OrderStatus.FAILED, error_message=str(exc))
                logger.info(f"Order {order.order_number} FAILED: {exc}")
            except Exception as exc:
                # History must still record the call.
                order = replace(order, status=OrderStatus.FAILED, error_message=str(exc))
                logger.exception(f"Order {order.order_number} FAILED unexpectedly")
            else:
                all_ok = all(r.succeeded for r in results)
                order = replace(
                    order,
                    status=OrderStatus.SUCCEEDED if all_ok else OrderStatus.PARTIALLY_FAILED,
                    item_results=tuple(results),
                )
                logger.info(
                    f"Order {order.order_number} {order.status.value.upper()} "
                    f"({sum(r.succeeded for r in results)}/{len(results)} items)"
                )
            self._history.append(order)
            return order

    def get_history(self) -> List[OrderRecord]:
        with self._lock:
            return list(self._history)

    def get_order(self, order_number: int) -> Optional[OrderRecord]:
        with self._lock:
            for order in self._history:
                if order.order_number == order_number:
                    return order
            return None

    def get_statistics(self) -> OrderStatistics:
        with self._lock:
            total = len(self._history)
            succeeded = sum(1 for o in self._history if o.status == OrderStatus.SUCCEEDED)
            failed = sum(1 for o in self._history if o.status == OrderStatus.FAILED)
        return OrderStatistics(
            total=total,
            succeeded=succeeded,
            failed=failed,
            success_rate_percent=_percent(succeeded, total),
        )

    @property
    def ledger(self) -> InventoryLedger:
        return self._ledger
