"""
Bistro Restaurant Engine - Order Pricing
==========================================
Line totals with optional promo codes. Decimal throughout,
rounded half-up to the cent, never below zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Dict, Iterable, Optional

from engines.inventory.ledger import Quantity, to_decimal

CENT = Decimal("0.01")


@dataclass(frozen=True)
class OrderLine:
    unit_price: Decimal
    quantity: int

    def __post_init__(self):
        if self.unit_price < 0:
            raise ValueError("unit_price cannot be negative.")
        if not isinstance(self.quantity, int) or self.quantity < 0:
            raise ValueError("quantity must be non-negative integer.")

    @classmethod
    def of(cls, unit_price: Quantity, quantity: int) -> "OrderLine":
        return cls(unit_price=to_decimal(unit_price), quantity=quantity)

    @property
    def total(self) -> Decimal:
        return self.unit_price * self.quantity


PROMO_CODES: Dict[str, Callable[[Decimal], Decimal]] = {
    "ETUDIANT": lambda total: total * Decimal("0.9"),
    "FIDELITE": lambda total: total * Decimal("0.85"),
    "NOUVEAUCLIENT": lambda total: total - Decimal("5"),
}


def calculate_order_price(
    lines: Iterable[OrderLine],
    promo_code: Optional[str] = None,
) -> Decimal:
    """Sum of line totals after the promo code. Unknown codes are ignored."""
    total = sum((line.total for line in lines), Decimal("0"))
    discount = PROMO_CODES.get(promo_code) if promo_code else None
    if discount is not None:
        total = discount(total)
    return max(Decimal("0"), total).quantize(CENT, rounding=ROUND_HALF_UP)
