"""
Bistro Reservation Engine - Menu Advisory
===========================================
Menu advisors suggest the menu of the day for a date. They are
external collaborators and may fail; callers go through
suggest_menu_or_default() so a failure never aborts a booking.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional, Protocol

logger = logging.getLogger("bistro.advisory")

DEFAULT_HUMIDITY = 50

WEEKDAYS_FR = ("lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi", "dimanche")


# ══════════════════════════════════════════════════════════════
# PROTOCOLS
# ══════════════════════════════════════════════════════════════

class MenuAdvisor(Protocol):
    def suggest_menu(self, day: date) -> str:
        ...  # pragma: no cover


class WeatherProvider(Protocol):
    """Forecast source. humidity() is optional on implementations."""

    def temperature(self, day: date) -> float:
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# ADVISORS
# ══════════════════════════════════════════════════════════════

class StaticMenuAdvisor:
    """Suggests the same menu every day."""

    def __init__(self, menu: str) -> None:
        self._menu = menu

    def suggest_menu(self, day: date) -> str:
        return self._menu


class WeatherMenuAdvisor:
    """
    Picks the menu from the forecast.

    Hot days (> 25°C) get salads, cold days (< 10°C) get soups,
    anything in between gets the balanced dish. Humidity refines
    the hot and cold menus. Forecast errors propagate.
    """

    def __init__(self, weather: WeatherProvider) -> None:
        self._weather = weather

    def suggest_menu(self, day: date) -> str:
        temperature = self._weather.temperature(day)
        humidity_of = getattr(self._weather, "humidity", None)
        humidity = humidity_of(day) if humidity_of is not None else DEFAULT_HUMIDITY

        if temperature > 25:
            if humidity > 70:
                return "Salade fraîche et gazpacho avec boissons glacées"
            return "Salade fraîche et gazpacho"
        if temperature < 10:
            if humidity > 80:
                return "Soupe chaude et pot-au-feu avec pain chaud"
            return "Soupe chaude et pot-au-feu"
        if temperature > 18:
            return "Plat du jour équilibré avec option fraîcheur"
        return "Plat du jour équilibré"


# ══════════════════════════════════════════════════════════════
# RECOVERY + WEEK PLAN
# ══════════════════════════════════════════════════════════════

def suggest_menu_or_default(
    advisor: Optional[MenuAdvisor],
    day: date,
    default_menu: str,
) -> str:
    """Ask the advisor; on any failure, log and fall back to default_menu."""
    if advisor is None:
        return default_menu
    try:
        return advisor.suggest_menu(day)
    except Exception as exc:
        logger.warning(f"Menu advisor unavailable for {day.isoformat()}, using default menu: {exc}")
        return default_menu


@dataclass(frozen=True)
class DayMenu:
    day: date
    weekday: str
    menu: str


def plan_week(
    start: date,
    advisor: Optional[MenuAdvisor],
    default_menu: str,
) -> List[DayMenu]:
    """Seven consecutive daily menus starting at `start`."""
    plan = []
    for offset in range(7):
        day = start + timedelta(days=offset)
        plan.append(DayMenu(
            day=day,
            weekday=WEEKDAYS_FR[day.weekday()],
            menu=suggest_menu_or_default(advisor, day, default_menu),
        ))
    return plan
