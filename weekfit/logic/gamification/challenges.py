"""Challenge selection helpers."""
import random
from datetime import date
from typing import Dict, List, Optional

from weekfit.utilities.constants import DEFAULT_CHALLENGES, DAILY_CHALLENGE_TEMPLATES, DAILY_CHALLENGES_PER_DAY


def default_challenges(user_id: str) -> List[Dict]:
    """Starter weekly challenges every new user receives."""
    return [dict(c, user_id=user_id, completed=False) for c in DEFAULT_CHALLENGES]


def pick_daily_challenges(user_id: str, day: date, rng: Optional[random.Random] = None,
                          count: int = DAILY_CHALLENGES_PER_DAY) -> List[Dict]:
    """Pick `count` distinct templates at random and turn them into rows for `day`."""
    rng = rng or random.Random()
    picked = rng.sample(DAILY_CHALLENGE_TEMPLATES, min(count, len(DAILY_CHALLENGE_TEMPLATES)))
    return [
        {
            "user_id": user_id,
            "challenge_date": day.isoformat(),
            "challenge_type": t["type"],
            "description": t["description"],
            "points": t["points"],
            "completed": False,
        }
        for t in picked
    ]
