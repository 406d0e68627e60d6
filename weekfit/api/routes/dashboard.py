import logging
from typing import Any, Callable, Dict

from fastapi import APIRouter, Depends

from weekfit.api.dependencies import Backend, get_backend, require_user
from weekfit.utilities.statistics import ProgressStats

router = APIRouter(prefix="/api", tags=["dashboard"])
logger = logging.getLogger(__name__)


def _section(name: str, load: Callable[[], Any], default: Any) -> Any:
    """One dashboard panel; a failing panel degrades to its empty value."""
    try:
        return load()
    except Exception:
        logger.exception("Dashboard section %s failed", name)
        return default


def achievements_view(backend: Backend, user_id: str):
    unlocked = backend.achievements.unlocked(user_id)
    return [
        dict(a.to_dict(), unlocked=a.id in unlocked, unlocked_at=unlocked.get(a.id))
        for a in backend.achievements.catalog()
    ]


def level_view(profile) -> Dict[str, Any]:
    return {
        "level": profile.level,
        "points": profile.points,
        "next_level_points": profile.next_level_points(),
        "points_to_next_level": profile.points_to_next_level(),
        "progress": profile.level_progress(),
    }


@router.get("/dashboard")
def dashboard(user: Dict[str, Any] = Depends(require_user), backend: Backend = Depends(get_backend)):
    uid = user["id"]
    profile = backend.profiles.get_or_create(user)
    menu = _section("menu", lambda: backend.menus.latest(uid).to_dict(), None)
    challenges = _section("challenges", lambda: [c.to_dict() for c in backend.challenges.list(uid)], [])
    daily = _section("daily_challenges", lambda: [c.to_dict() for c in backend.daily_challenges.for_day(uid)], [])
    achievements = _section("achievements", lambda: achievements_view(backend, uid), [])
    entries = _section("progress", lambda: backend.progress.history(uid), [])

    return {
        "profile": profile.to_dict(),
        "level": level_view(profile),
        "menu": menu,
        "challenges": challenges,
        "daily_challenges": daily,
        "achievements": achievements,
        "progress": {
            "entries": [e.to_dict() for e in entries],
            "stats": ProgressStats(entries).generate_report(),
        },
    }
