"""Challenge entities: long-running (weekly/monthly) challenges and per-day micro challenges."""
from datetime import datetime, timezone
from typing import Optional

CHALLENGE_TYPES = ("daily", "weekly", "monthly")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class Challenge:
    def __init__(self, id: Optional[str] = None, user_id: str = "", title: str = "", description: str = "",
                 points_reward: int = 0, completed: bool = False, completed_at: Optional[str] = None,
                 challenge_type: str = "weekly", created_at: Optional[str] = None):
        if challenge_type not in CHALLENGE_TYPES:
            raise ValueError(f"Unknown challenge type: {challenge_type}")
        self.id = id
        self.user_id = user_id
        self.title = title
        self.description = description
        self.points_reward = int(points_reward or 0)
        self.completed = bool(completed)
        self.completed_at = completed_at
        self.challenge_type = challenge_type
        self.created_at = created_at

    def __str__(self) -> str:
        mark = "x" if self.completed else " "
        return f"[{mark}] {self.title} (+{self.points_reward})"

    __repr__ = __str__

    def complete(self) -> int:
        """Mark as completed; returns the points earned (0 if it was already done)."""
        if self.completed:
            return 0
        self.completed = True
        self.completed_at = _now_iso()
        return self.points_reward

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        allowed = {"id", "user_id", "title", "description", "points_reward", "completed",
                   "completed_at", "challenge_type", "created_at"}
        return Challenge(**{k: v for k, v in d.items() if k in allowed})

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "description": self.description,
            "points_reward": self.points_reward,
            "completed": self.completed,
            "completed_at": self.completed_at,
            "challenge_type": self.challenge_type,
            "created_at": self.created_at,
        }


class DailyChallenge:
    def __init__(self, id: Optional[str] = None, user_id: str = "", challenge_date: str = "",
                 challenge_type: str = "", description: str = "", points: int = 0,
                 completed: bool = False, completed_at: Optional[str] = None):
        self.id = id
        self.user_id = user_id
        self.challenge_date = challenge_date
        self.challenge_type = challenge_type
        self.description = description
        self.points = int(points or 0)
        self.completed = bool(completed)
        self.completed_at = completed_at

    def __str__(self) -> str:
        return f"{self.challenge_date} {self.challenge_type} (+{self.points})"

    __repr__ = __str__

    @property
    def is_meal_log(self) -> bool:
        return self.challenge_type.startswith("log_")

    def complete(self) -> int:
        if self.completed:
            return 0
        self.completed = True
        self.completed_at = _now_iso()
        return self.points

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        allowed = {"id", "user_id", "challenge_date", "challenge_type", "description",
                   "points", "completed", "completed_at"}
        return DailyChallenge(**{k: v for k, v in d.items() if k in allowed})

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "challenge_date": self.challenge_date,
            "challenge_type": self.challenge_type,
            "description": self.description,
            "points": self.points,
            "completed": self.completed,
            "completed_at": self.completed_at,
        }
