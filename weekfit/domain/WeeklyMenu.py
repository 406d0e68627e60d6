"""WeeklyMenu domain entity: day -> slot -> meal name, plus the categorized shopping list."""
from typing import Any, Dict, List, Optional

from weekfit.utilities.constants import DAYS, SLOT_ORDER, SHOPPING_CATEGORIES


class WeeklyMenu:
    def __init__(self, id: Optional[str] = None, user_id: str = "", week_start: str = "",
                 meals: Optional[Dict[str, Dict[str, str]]] = None,
                 shopping_list: Optional[Dict[str, List[str]]] = None,
                 ai_preferences: Optional[Dict[str, Any]] = None, created_at: Optional[str] = None,
                 is_sample: bool = False):
        self.id = id
        self.user_id = user_id
        self.week_start = week_start
        self.meals = {day: dict(slots) for day, slots in (meals or {}).items()}
        self.shopping_list = {cat: list(items) for cat, items in (shopping_list or {}).items()}
        self.ai_preferences = dict(ai_preferences) if ai_preferences else {}
        self.created_at = created_at
        # True for the built-in example menu shown before the user has one
        self.is_sample = is_sample

    def __str__(self) -> str:
        return f"WeeklyMenu({self.week_start}, {len(self.meal_names())} meals)"

    __repr__ = __str__

    def days(self) -> List[str]:
        """Days present in the menu, Monday first."""
        return [d for d in DAYS if d in self.meals]

    def slots(self, day: str) -> List[str]:
        """Slots of a day in canonical order; unknown slots keep insertion order at the end."""
        present = self.meals.get(day, {})
        known = [s for s in SLOT_ORDER if s in present]
        return known + [s for s in present if s not in SLOT_ORDER]

    def get_meal(self, day: str, slot: str) -> Optional[str]:
        return self.meals.get(day, {}).get(slot)

    def set_meal(self, day: str, slot: str, name: str) -> None:
        if day not in DAYS:
            raise ValueError(f"Unknown day: {day}")
        if not name or not name.strip():
            raise ValueError("Meal name cannot be empty")
        self.meals.setdefault(day, {})[slot] = name.strip()

    def meal_names(self) -> List[str]:
        return [self.meals[d][s] for d in self.days() for s in self.slots(d) if self.meals[d][s]]

    def shopping_item_count(self) -> int:
        return sum(len(v) for v in self.shopping_list.values())

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        allowed = {"id", "user_id", "week_start", "meals", "shopping_list", "ai_preferences", "created_at",
                   "is_sample"}
        filtered = {k: v for k, v in d.items() if k in allowed}
        # Rows written by older clients may carry an empty/None list
        if not isinstance(filtered.get("shopping_list"), dict):
            filtered["shopping_list"] = {c: [] for c in SHOPPING_CATEGORIES}
        if not isinstance(filtered.get("meals"), dict):
            filtered["meals"] = {}
        return WeeklyMenu(**filtered)

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "week_start": self.week_start,
            "meals": self.meals,
            "shopping_list": self.shopping_list,
            "ai_preferences": self.ai_preferences,
            "created_at": self.created_at,
            "is_sample": self.is_sample,
        }

    def to_row(self) -> Dict[str, Any]:
        """Insert payload for the weekly_menus table (server fills id/created_at)."""
        return {
            "user_id": self.user_id,
            "week_start": self.week_start,
            "meals": self.meals,
            "shopping_list": self.shopping_list,
            "ai_preferences": self.ai_preferences,
        }
