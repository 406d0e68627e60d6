"""Recipe domain entity: meal name, ingredient lines, steps, timings and optional AI extras."""
from typing import Any, Dict, List, Optional


class Recipe:
    def __init__(self, meal_name: str = "", ingredients: Optional[List[str]] = None,
                 instructions: Optional[List[str]] = None, prep_time: int = 0, cook_time: int = 0,
                 servings: int = 1, description: str = "", difficulty: str = "",
                 nutrition: Optional[Dict[str, Any]] = None, tags: Optional[List[str]] = None):
        self.meal_name = meal_name
        self.ingredients = ingredients[:] if ingredients else []
        self.instructions = instructions[:] if instructions else []
        self.prep_time = int(prep_time or 0)
        self.cook_time = int(cook_time or 0)
        self.servings = int(servings or 1)
        self.description = description
        self.difficulty = difficulty
        self.nutrition = dict(nutrition) if nutrition else {}
        self.tags = tags[:] if tags else []

    def __str__(self) -> str:
        return f"{self.meal_name} - {self.servings} servings - {self.total_time} min"

    __repr__ = __str__

    @property
    def total_time(self) -> int:
        return self.prep_time + self.cook_time

    @staticmethod
    def _minutes(value) -> int:
        """Accept 15, '15' or '15 min' (AI replies use the latter)."""
        if isinstance(value, (int, float)):
            return int(value)
        digits = "".join(ch for ch in str(value or "") if ch.isdigit())
        return int(digits) if digits else 0

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        # AI recipe payloads use name/prepTime instead of meal_name/prep_time
        name = d.get("meal_name") or d.get("name") or ""
        prep = d.get("prep_time", d.get("prepTime", 0))
        return Recipe(
            meal_name=name,
            ingredients=[str(i) for i in d.get("ingredients") or []],
            instructions=[str(s) for s in d.get("instructions") or []],
            prep_time=Recipe._minutes(prep),
            cook_time=Recipe._minutes(d.get("cook_time", 0)),
            servings=d.get("servings") or 1,
            description=d.get("description", "") or "",
            difficulty=d.get("difficulty", "") or "",
            nutrition=d.get("nutrition") or {},
            tags=d.get("tags") or [],
        )

    def to_dict(self):
        return {
            "meal_name": self.meal_name,
            "ingredients": self.ingredients,
            "instructions": self.instructions,
            "prep_time": self.prep_time,
            "cook_time": self.cook_time,
            "total_time": self.total_time,
            "servings": self.servings,
            "description": self.description,
            "difficulty": self.difficulty,
            "nutrition": self.nutrition,
            "tags": self.tags,
        }
