"""
Bistro Core Config - Public API
=================================
Restaurant operating rules (capacity, fallback menu, expiry alerts).
"""

from core.config.rules import DEFAULT_RULES, RestaurantRules

__all__ = [
    "RestaurantRules",
    "DEFAULT_RULES",
]
