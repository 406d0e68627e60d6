import logging
import random
from datetime import date
from typing import Dict, List, Optional, Tuple

from weekfit.domain.Challenge import Challenge, DailyChallenge
from weekfit.infra.Base_Repository import BaseRepository, MissingTableError
from weekfit.logic.gamification.challenges import default_challenges, pick_daily_challenges

logger = logging.getLogger(__name__)


class ChallengeRepository(BaseRepository):
    """Weekly/monthly challenges. Local mode keeps only completion state per default challenge."""
    table = "challenges"

    def _state_key(self, user_id: str) -> str:
        return f"challenges_{user_id}"

    def _local(self, user_id: str) -> List[Challenge]:
        state: Dict[str, str] = self.store.get(self._state_key(user_id)) or {}
        out = []
        for i, row in enumerate(default_challenges(user_id)):
            cid = f"default-{i + 1}"
            out.append(Challenge.from_dict(dict(row, id=cid, completed=cid in state, completed_at=state.get(cid))))
        return out

    def list(self, user_id: str) -> List[Challenge]:
        """User challenges newest first; the default set is inserted the first time."""
        try:
            rows = self._rows(self._run(
                self._table().select("*").eq("user_id", user_id).order("created_at", desc=True)
            ))
            if rows:
                return [Challenge.from_dict(r) for r in rows]
            defaults = default_challenges(user_id)
            inserted = self._rows(self._run(self._table().insert(defaults)))
            logger.info("Created %d default challenges for %s", len(defaults), user_id)
            return [Challenge.from_dict(r) for r in (inserted or defaults)]
        except MissingTableError:
            return self._local(user_id)
        except Exception:
            logger.exception("Failed to load challenges for %s", user_id)
            return []

    def complete(self, user_id: str, challenge_id: str) -> Tuple[Challenge, int]:
        """Mark a challenge done. Returns (challenge, points earned); KeyError if unknown."""
        target = next((c for c in self.list(user_id) if str(c.id) == str(challenge_id)), None)
        if target is None:
            raise KeyError(challenge_id)
        points = target.complete()
        if not points:
            return target, 0
        try:
            self._run(self._table().update(
                {"completed": True, "completed_at": target.completed_at}
            ).eq("id", target.id).eq("user_id", user_id))
        except MissingTableError:
            state = self.store.get(self._state_key(user_id)) or {}
            state[str(target.id)] = target.completed_at
            self.store.set(self._state_key(user_id), state)
        return target, points


class DailyChallengeRepository(BaseRepository):
    table = "daily_challenges"

    def __init__(self, client=None, store=None, rng: Optional[random.Random] = None):
        super().__init__(client, store)
        self.rng = rng

    def _day_key(self, user_id: str, day: date) -> str:
        return f"daily_challenges_{user_id}_{day.isoformat()}"

    def for_day(self, user_id: str, day: Optional[date] = None) -> List[DailyChallenge]:
        """Challenges for `day` (today by default); three random templates are created on first access."""
        day = day or date.today()
        try:
            rows = self._rows(self._run(
                self._table().select("*").eq("user_id", user_id).eq("challenge_date", day.isoformat())
            ))
            if rows:
                return [DailyChallenge.from_dict(r) for r in rows]
            new_rows = pick_daily_challenges(user_id, day, self.rng)
            inserted = self._rows(self._run(self._table().insert(new_rows)))
            return [DailyChallenge.from_dict(r) for r in (inserted or new_rows)]
        except MissingTableError:
            key = self._day_key(user_id, day)
            local = self.store.get(key)
            if local:
                return [DailyChallenge.from_dict(r) for r in local]
            new_rows = [dict(r, id=f"{day.isoformat()}-{r['challenge_type']}")
                        for r in pick_daily_challenges(user_id, day, self.rng)]
            self.store.set(key, new_rows)
            return [DailyChallenge.from_dict(r) for r in new_rows]

    def complete(self, user_id: str, challenge_id: str, day: Optional[date] = None) -> Tuple[DailyChallenge, int]:
        day = day or date.today()
        items = self.for_day(user_id, day)
        target = next((c for c in items if str(c.id) == str(challenge_id)), None)
        if target is None:
            raise KeyError(challenge_id)
        points = target.complete()
        if not points:
            return target, 0
        try:
            self._run(self._table().update(
                {"completed": True, "completed_at": target.completed_at}
            ).eq("id", target.id))
        except MissingTableError:
            self.store.set(self._day_key(user_id, day), [c.to_dict() for c in items])
        return target, points

    def count_meals_logged(self, user_id: str) -> int:
        """Completed log_* daily challenges, across all days."""
        try:
            rows = self._rows(self._run(
                self._table().select("*").eq("user_id", user_id).eq("completed", True)
            ))
            return sum(1 for r in rows if DailyChallenge.from_dict(r).is_meal_log)
        except MissingTableError:
            prefix = f"daily_challenges_{user_id}_"
            total = 0
            for key in self.store.keys():
                if key.startswith(prefix):
                    total += sum(1 for r in self.store.get(key) or []
                                 if r.get("completed") and str(r.get("challenge_type", "")).startswith("log_"))
            return total
