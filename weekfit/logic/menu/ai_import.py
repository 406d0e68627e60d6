"""Convert an AI weekly-menu reply into a WeeklyMenu."""
from typing import Any, Dict

from weekfit.domain.WeeklyMenu import WeeklyMenu
from weekfit.logic.shopping.list_builder import normalize_shopping_list, build_shopping_list
from weekfit.utilities.constants import DAYS


def _day_key(raw: Any, position: int) -> str:
    name = str(raw or "").strip().lower()
    for day in DAYS:
        if name.startswith(day[:3]):
            return day
    return DAYS[position % len(DAYS)]


def menu_from_ai(data: Dict[str, Any], user_id: str, week_start: str) -> WeeklyMenu:
    """Map weeklyMenu[].day to weekday keys and each slot object to its name.

    An AI shopping list is cleaned; if it is empty the list is rebuilt from the meals.
    """
    days = data.get("weeklyMenu") or []
    if not isinstance(days, list) or not days:
        raise ValueError("AI reply has no weeklyMenu")

    meals: Dict[str, Dict[str, str]] = {}
    for i, entry in enumerate(days):
        if not isinstance(entry, dict):
            continue
        day = _day_key(entry.get("day"), i)
        for slot, meal in (entry.get("meals") or {}).items():
            name = meal.get("name") if isinstance(meal, dict) else meal
            if isinstance(name, str) and name.strip():
                meals.setdefault(day, {})[str(slot)] = name.strip()
    if not meals:
        raise ValueError("AI reply has no meals")

    menu = WeeklyMenu(user_id=user_id, week_start=week_start, meals=meals,
                      ai_preferences={"source": "ai", "tips": data.get("tips") or []})
    shopping = normalize_shopping_list(data.get("shopping_list"))
    menu.shopping_list = shopping if any(shopping.values()) else build_shopping_list(menu)
    return menu
