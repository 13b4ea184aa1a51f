"""
Bistro Core Config - Restaurant Rules
=======================================
Seating capacity, fallback menu text and expiry alerting are data,
not constants buried in the ledgers. Ledgers receive a
RestaurantRules instance; tests build their own.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


DEFAULT_SEATING_CAPACITY = 50
DEFAULT_MENU = "Menu du jour standard"
DEFAULT_EXPIRY_ALERT_DAYS = 7
DEFAULT_EXPIRY_DATE = date(2024, 12, 31)


# ══════════════════════════════════════════════════════════════
# RESTAURANT RULES
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RestaurantRules:
    """
    Operating rules for one restaurant.

    Fields:
        seating_capacity:   Max covers booked on a single date.
        default_menu:       Menu text used when the menu advisor fails.
        expiry_alert_days:  Default horizon for expiring_within().
        default_expiry:     Expiry assigned to restocks that carry none.
    """

    seating_capacity: int = DEFAULT_SEATING_CAPACITY
    default_menu: str = DEFAULT_MENU
    expiry_alert_days: int = DEFAULT_EXPIRY_ALERT_DAYS
    default_expiry: date = DEFAULT_EXPIRY_DATE

    def __post_init__(self) -> None:
        if not isinstance(self.seating_capacity, int) or self.seating_capacity <= 0:
            raise ValueError(
                f"seating_capacity must be positive integer, got {self.seating_capacity!r}."
            )
        if not self.default_menu or not isinstance(self.default_menu, str):
            raise ValueError("default_menu must be non-empty string.")
        if not isinstance(self.expiry_alert_days, int) or self.expiry_alert_days < 0:
            raise ValueError(
                f"expiry_alert_days must be non-negative integer, got {self.expiry_alert_days!r}."
            )
        if not isinstance(self.default_expiry, date):
            raise ValueError("default_expiry must be a date.")


DEFAULT_RULES = RestaurantRules()
