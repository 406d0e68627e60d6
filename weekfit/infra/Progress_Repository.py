import logging
from typing import List
from uuid import uuid4

from weekfit.domain.ProgressEntry import ProgressEntry
from weekfit.infra.Base_Repository import BaseRepository, MissingTableError
from weekfit.utilities.constants import PROGRESS_HISTORY_LIMIT

logger = logging.getLogger(__name__)


class ProgressRepository(BaseRepository):
    table = "user_progress"

    def _key(self, user_id: str) -> str:
        return f"progress_{user_id}"

    def add(self, entry: ProgressEntry) -> ProgressEntry:
        row = entry.to_dict()
        row.pop("id")
        try:
            rows = self._rows(self._run(self._table().insert(row)))
            if rows:
                entry.id = rows[0].get("id", entry.id)
        except MissingTableError:
            entry.id = entry.id or str(uuid4())
            items = self.store.get(self._key(entry.user_id)) or []
            items.append(entry.to_dict())
            self.store.set(self._key(entry.user_id), items)
        return entry

    def history(self, user_id: str, limit: int = PROGRESS_HISTORY_LIMIT) -> List[ProgressEntry]:
        """Most recent `limit` entries, oldest first."""
        try:
            rows = self._rows(self._run(
                self._table().select("*").eq("user_id", user_id).order("recorded_date", desc=True).limit(limit)
            ))
        except MissingTableError:
            rows = self.store.get(self._key(user_id)) or []
        entries = sorted((ProgressEntry.from_dict(r) for r in rows), key=lambda e: e.recorded_date)
        return entries[-limit:] if limit else entries
