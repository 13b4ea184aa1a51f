"""
Tests for core.config - restaurant rules.
"""

import pytest
from datetime import date

from core.config.rules import DEFAULT_RULES, RestaurantRules


class TestRestaurantRules:
    def test_defaults(self):
        assert DEFAULT_RULES.seating_capacity == 50
        assert DEFAULT_RULES.default_menu == "Menu du jour standard"
        assert DEFAULT_RULES.expiry_alert_days == 7
        assert DEFAULT_RULES.default_expiry == date(2024, 12, 31)

    @pytest.mark.parametrize("capacity", [0, -5, 12.5])
    def test_rejects_bad_capacity(self, capacity):
        with pytest.raises(ValueError, match="seating_capacity"):
            RestaurantRules(seating_capacity=capacity)

    def test_rejects_empty_default_menu(self):
        with pytest.raises(ValueError, match="default_menu"):
            RestaurantRules(default_menu="")

    def test_rejects_negative_alert_days(self):
        with pytest.raises(ValueError, match="expiry_alert_days"):
            RestaurantRules(expiry_alert_days=-1)

    def test_frozen_immutability(self):
        with pytest.raises(AttributeError):
            DEFAULT_RULES.seating_capacity = 80

