"""Profile domain entity: identity, gamification level/points/streaks and stored preferences."""
from typing import Any, Dict, Optional

from weekfit.utilities.constants import LEVELS, NEXT_LEVEL_POINTS, MAX_LEVEL_POINTS


class Profile:
    def __init__(self, id: str = "", email: str = "", full_name: str = "", avatar_url: Optional[str] = None,
                 level: str = "Bronze", points: int = 0, current_streak: int = 0, max_streak: int = 0,
                 preferences: Optional[Dict[str, Any]] = None):
        self.id = id
        self.email = email
        self.full_name = full_name
        self.avatar_url = avatar_url
        self.level = level if level in LEVELS else "Bronze"
        self.points = int(points or 0)
        self.current_streak = int(current_streak or 0)
        self.max_streak = int(max_streak or 0)
        self.preferences = dict(preferences) if preferences else {}

    def __str__(self) -> str:
        return f"{self.full_name or self.email} - {self.level} - {self.points} pts"

    __repr__ = __str__

    @staticmethod
    def default(user: Optional[Dict[str, Any]]) -> "Profile":
        """Fresh Bronze profile for a user that has no row yet."""
        user = user or {}
        metadata = user.get("user_metadata") or {}
        return Profile(
            id=user.get("id", ""),
            email=user.get("email", "") or "",
            full_name=metadata.get("full_name", "") or "",
        )

    def next_level_points(self) -> int:
        return NEXT_LEVEL_POINTS.get(self.level, MAX_LEVEL_POINTS)

    def points_to_next_level(self) -> int:
        return max(0, self.next_level_points() - self.points)

    def level_progress(self) -> float:
        """Percentage (0-100) of the way to the next level threshold."""
        target = self.next_level_points()
        if target <= 0:
            return 100.0
        return round(min(100.0, max(0.0, self.points / target * 100)), 1)

    def add_points(self, amount: int) -> bool:
        """Credit points and promote while the level threshold is reached.

        Returns True if the level changed.
        """
        if amount < 0:
            raise ValueError("Points to add cannot be negative")
        self.points += amount
        promoted = False
        while self.level in NEXT_LEVEL_POINTS and self.points >= NEXT_LEVEL_POINTS[self.level]:
            self.level = LEVELS[LEVELS.index(self.level) + 1]
            promoted = True
        return promoted

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        allowed = {"id", "email", "full_name", "avatar_url", "level", "points",
                   "current_streak", "max_streak", "preferences"}
        return Profile(**{k: v for k, v in d.items() if k in allowed})

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "full_name": self.full_name,
            "avatar_url": self.avatar_url,
            "level": self.level,
            "points": self.points,
            "current_streak": self.current_streak,
            "max_streak": self.max_streak,
            "preferences": self.preferences,
        }
