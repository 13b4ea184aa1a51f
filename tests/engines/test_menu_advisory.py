"""
Bistro Menu Advisory Tests
============================
Weather-driven menu rules, fallback on failure and week planning.
"""

import logging
from datetime import date

import pytest

from engines.reservation.advisory import (
    StaticMenuAdvisor,
    WeatherMenuAdvisor,
    plan_week,
    suggest_menu_or_default,
)

MONDAY = date(2024, 1, 15)
DEFAULT = "Menu du jour standard"


class StubWeather:
    def __init__(self, temperature, humidity=60):
        self._temperature = temperature
        self._humidity = humidity
        self.requested = []

    def temperature(self, day):
        self.requested.append(day)
        return self._temperature

    def humidity(self, day):
        return self._humidity


class TemperatureOnly:
    def __init__(self, temperature):
        self._temperature = temperature

    def temperature(self, day):
        return self._temperature


class BrokenWeather:
    def temperature(self, day):
        raise ConnectionError("Service météo temporairement indisponible")


class TestWeatherMenuAdvisor:
    @pytest.mark.parametrize("temperature, humidity, expected", [
        (30, 60, "Salade fraîche et gazpacho"),
        (30, 75, "Salade fraîche et gazpacho avec boissons glacées"),
        (5, 60, "Soupe chaude et pot-au-feu"),
        (5, 85, "Soupe chaude et pot-au-feu avec pain chaud"),
        (20, 60, "Plat du jour équilibré avec option fraîcheur"),
        (15, 60, "Plat du jour équilibré"),
        (25, 90, "Plat du jour équilibré avec option fraîcheur"),
        (10, 90, "Plat du jour équilibré"),
    ])
    def test_menu_rules(self, temperature, humidity, expected):
        advisor = WeatherMenuAdvisor(StubWeather(temperature, humidity))
        assert advisor.suggest_menu(MONDAY) == expected

    def test_queries_forecast_for_the_date(self):
        weather = StubWeather(20)
        WeatherMenuAdvisor(weather).suggest_menu(MONDAY)
        assert weather.requested == [MONDAY]

    def test_missing_humidity_defaults_to_50(self):
        assert WeatherMenuAdvisor(TemperatureOnly(30)).suggest_menu(MONDAY) == (
            "Salade fraîche et gazpacho"
        )

    def test_forecast_failure_propagates(self):
        with pytest.raises(ConnectionError):
            WeatherMenuAdvisor(BrokenWeather()).suggest_menu(MONDAY)


class TestSuggestMenuOrDefault:
    def test_uses_advisor(self):
        advisor = StaticMenuAdvisor("Couscous")
        assert suggest_menu_or_default(advisor, MONDAY, DEFAULT) == "Couscous"

    def test_failure_returns_default(self, caplog):
        advisor = WeatherMenuAdvisor(BrokenWeather())
        with caplog.at_level(logging.WARNING, logger="bistro.advisory"):
            assert suggest_menu_or_default(advisor, MONDAY, DEFAULT) == DEFAULT
        assert "2024-01-15" in caplog.text

    def test_no_advisor(self):
        assert suggest_menu_or_default(None, MONDAY, DEFAULT) == DEFAULT


class TestPlanWeek:
    def test_seven_days_from_start(self):
        plan = plan_week(MONDAY, WeatherMenuAdvisor(StubWeather(20)), DEFAULT)
        assert len(plan) == 7
        assert [d.day for d in plan][0] == MONDAY
        assert [d.day for d in plan][-1] == date(2024, 1, 21)
        assert [d.weekday for d in plan][:2] == ["lundi", "mardi"]
        assert plan[-1].weekday == "dimanche"
        assert {d.menu for d in plan} == {"Plat du jour équilibré avec option fraîcheur"}

    def test_failures_fall_back_per_day(self):
        plan = plan_week(MONDAY, WeatherMenuAdvisor(BrokenWeather()), DEFAULT)
        assert all(d.menu == DEFAULT for d in plan)
