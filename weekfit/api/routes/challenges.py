import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from weekfit.api.dependencies import Backend, get_backend, require_user
from weekfit.api.routes.dashboard import achievements_view, level_view
from weekfit.events.event_helpers import publish_challenge_completed

router = APIRouter(prefix="/api", tags=["challenges"])
logger = logging.getLogger(__name__)


@router.get("/challenges")
def list_challenges(user: Dict[str, Any] = Depends(require_user), backend: Backend = Depends(get_backend)):
    return {"challenges": [c.to_dict() for c in backend.challenges.list(user["id"])]}


@router.post("/challenges/{challenge_id}/complete")
def complete_challenge(challenge_id: str,
                       user: Dict[str, Any] = Depends(require_user),
                       backend: Backend = Depends(get_backend)):
    try:
        challenge, points = backend.challenges.complete(user["id"], challenge_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Challenge not found")
    profile = backend.profiles.add_points(user, points) if points else backend.profiles.get_or_create(user)
    if points:
        publish_challenge_completed(user["id"], challenge.title, points)
    return {"challenge": challenge.to_dict(), "points_earned": points, "level": level_view(profile)}


@router.get("/daily-challenges")
def list_daily_challenges(user: Dict[str, Any] = Depends(require_user), backend: Backend = Depends(get_backend)):
    return {"daily_challenges": [c.to_dict() for c in backend.daily_challenges.for_day(user["id"])]}


@router.post("/daily-challenges/{challenge_id}/complete")
def complete_daily_challenge(challenge_id: str,
                             user: Dict[str, Any] = Depends(require_user),
                             backend: Backend = Depends(get_backend)):
    """Complete today's challenge, credit its points, then unlock any achievement now reached."""
    try:
        challenge, points = backend.daily_challenges.complete(user["id"], challenge_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Daily challenge not found")

    unlocked = []
    if points:
        profile = backend.profiles.add_points(user, points)
        publish_challenge_completed(user["id"], challenge.description, points)
        meals_logged = backend.daily_challenges.count_meals_logged(user["id"])
        unlocked = backend.achievements.check_and_unlock(
            user, profile.current_streak, meals_logged, backend.profiles
        )
        if unlocked:
            logger.info("%d achievement(s) unlocked for %s", len(unlocked), user["id"])
    profile = backend.profiles.get_or_create(user)
    return {
        "challenge": challenge.to_dict(),
        "points_earned": points,
        "achievements_unlocked": [a.to_dict() for a in unlocked],
        "level": level_view(profile),
    }


@router.get("/achievements")
def list_achievements(user: Dict[str, Any] = Depends(require_user), backend: Backend = Depends(get_backend)):
    return {"achievements": achievements_view(backend, user["id"])}
