"""Achievement catalog entry and the per-user unlock record."""
from typing import Optional

REQUIREMENT_TYPES = ("streak", "meals_logged")


class Achievement:
    def __init__(self, id: str = "", name: str = "", description: str = "", icon: str = "",
                 points: int = 0, requirement_type: str = "streak", requirement_value: int = 0):
        self.id = id
        self.name = name
        self.description = description
        self.icon = icon
        self.points = int(points or 0)
        self.requirement_type = requirement_type
        self.requirement_value = int(requirement_value or 0)

    def __str__(self) -> str:
        return f"{self.icon} {self.name} ({self.requirement_type} >= {self.requirement_value})"

    __repr__ = __str__

    def is_met(self, streak: int, meals_logged: int) -> bool:
        if self.requirement_type == "streak":
            return streak >= self.requirement_value
        if self.requirement_type == "meals_logged":
            return meals_logged >= self.requirement_value
        return False

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        allowed = {"id", "name", "description", "icon", "points", "requirement_type", "requirement_value"}
        return Achievement(**{k: v for k, v in d.items() if k in allowed})

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "points": self.points,
            "requirement_type": self.requirement_type,
            "requirement_value": self.requirement_value,
        }


class UserAchievement:
    def __init__(self, user_id: str = "", achievement_id: str = "", unlocked_at: Optional[str] = None):
        self.user_id = user_id
        self.achievement_id = achievement_id
        self.unlocked_at = unlocked_at

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return UserAchievement(d.get("user_id", ""), d.get("achievement_id", ""), d.get("unlocked_at"))

    def to_dict(self):
        return {"user_id": self.user_id, "achievement_id": self.achievement_id, "unlocked_at": self.unlocked_at}
