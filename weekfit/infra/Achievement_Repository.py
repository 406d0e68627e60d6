import logging
from datetime import datetime, timezone
from typing import Dict, List

from weekfit.domain.Achievement import Achievement, UserAchievement
from weekfit.infra.Base_Repository import BaseRepository, MissingTableError
from weekfit.infra.Profile_Repository import ProfileRepository
from weekfit.logic.gamification.achievements import achievements_to_unlock
from weekfit.events.event_helpers import publish_achievement_unlocked
from weekfit.utilities.constants import DEFAULT_ACHIEVEMENTS

logger = logging.getLogger(__name__)

USER_ACHIEVEMENTS_TABLE = "user_achievements"


class AchievementRepository(BaseRepository):
    table = "achievements"

    def _unlocked_key(self, user_id: str) -> str:
        return f"user_achievements_{user_id}"

    def catalog(self) -> List[Achievement]:
        try:
            rows = self._rows(self._run(self._table().select("*")))
            if rows:
                return sorted((Achievement.from_dict(r) for r in rows),
                              key=lambda a: (a.requirement_type, a.requirement_value))
        except MissingTableError:
            pass
        return [Achievement.from_dict(a) for a in DEFAULT_ACHIEVEMENTS]

    def unlocked(self, user_id: str) -> Dict[str, str]:
        """achievement_id -> unlocked_at for the user."""
        try:
            rows = self._rows(self._run(
                self._table(USER_ACHIEVEMENTS_TABLE).select("*").eq("user_id", user_id),
                table=USER_ACHIEVEMENTS_TABLE,
            ))
            return {str(r["achievement_id"]): r.get("unlocked_at") or "" for r in rows}
        except MissingTableError:
            return dict(self.store.get(self._unlocked_key(user_id)) or {})

    def unlock(self, user_id: str, achievement: Achievement) -> UserAchievement:
        record = UserAchievement(user_id, achievement.id, datetime.now(timezone.utc).isoformat())
        try:
            self._run(self._table(USER_ACHIEVEMENTS_TABLE).insert(record.to_dict()), table=USER_ACHIEVEMENTS_TABLE)
        except MissingTableError:
            state = self.store.get(self._unlocked_key(user_id)) or {}
            state[achievement.id] = record.unlocked_at
            self.store.set(self._unlocked_key(user_id), state)
        logger.info("Unlocked achievement %s for %s", achievement.id, user_id)
        return record

    def check_and_unlock(self, user: Dict, streak: int, meals_logged: int,
                         profiles: ProfileRepository) -> List[Achievement]:
        """Unlock every locked achievement whose requirement is met and credit its points."""
        newly = achievements_to_unlock(self.catalog(), self.unlocked(user["id"]), streak, meals_logged)
        for achievement in newly:
            self.unlock(user["id"], achievement)
            if achievement.points:
                profiles.add_points(user, achievement.points)
            publish_achievement_unlocked(user["id"], achievement.name, achievement.icon, achievement.points)
        return newly
