import logging
from typing import Any, Dict, Optional

from weekfit.domain.Profile import Profile
from weekfit.infra.Base_Repository import BaseRepository, MissingTableError
from weekfit.events.event_helpers import publish_level_up

logger = logging.getLogger(__name__)


def _profile_key(user_id: str) -> str:
    return f"profile_{user_id}"


def _preferences_key(user_id: str) -> str:
    return f"preferences_{user_id}"


class ProfileRepository(BaseRepository):
    table = "profiles"

    def get_or_create(self, user: Dict[str, Any]) -> Profile:
        """Fetch the user's profile, inserting the default Bronze profile when there is none."""
        user_id = user["id"]
        try:
            rows = self._rows(self._run(self._table().select("*").eq("id", user_id).limit(1)))
            if rows:
                return Profile.from_dict(rows[0])
            profile = Profile.default(user)
            try:
                self._run(self._table().insert(profile.to_dict()))
                logger.info("Created profile for %s", user_id)
            except MissingTableError:
                raise
            except Exception:
                logger.exception("Failed to create profile for %s; using defaults", user_id)
            return profile
        except MissingTableError:
            pass
        except Exception:
            logger.exception("Failed to load profile for %s; using defaults", user_id)
        local = self.store.get(_profile_key(user_id))
        return Profile.from_dict(local) if local else Profile.default(user)

    def save(self, profile: Profile) -> Profile:
        changes = {
            "full_name": profile.full_name,
            "level": profile.level,
            "points": profile.points,
            "current_streak": profile.current_streak,
            "max_streak": profile.max_streak,
            "preferences": profile.preferences,
        }
        try:
            self._run(self._table().update(changes).eq("id", profile.id))
        except MissingTableError:
            self.store.set(_profile_key(profile.id), profile.to_dict())
        return profile

    def add_points(self, user: Dict[str, Any], amount: int) -> Profile:
        profile = self.get_or_create(user)
        if profile.add_points(amount):
            publish_level_up(profile.id, profile.level)
        return self.save(profile)

    def save_preferences(self, user: Dict[str, Any], answers: Dict[str, Any]) -> Profile:
        """Questionnaire answers go to the profile and to the local copy used by the dashboard."""
        self.store.set(_preferences_key(user["id"]), answers)
        profile = self.get_or_create(user)
        profile.preferences = dict(answers)
        try:
            return self.save(profile)
        except Exception:
            logger.exception("Failed to store preferences on profile %s", user["id"])
            return profile

    def get_preferences(self, user_id: str) -> Optional[Dict[str, Any]]:
        local = self.store.get(_preferences_key(user_id))
        if local:
            return local
        try:
            rows = self._rows(self._run(self._table().select("preferences").eq("id", user_id).limit(1)))
        except MissingTableError:
            return None
        if rows and rows[0].get("preferences"):
            return rows[0]["preferences"]
        return None
