import logging
from typing import Any, Optional

from weekfit.infra.Local_Store import LocalStore

logger = logging.getLogger(__name__)

MISSING_TABLE_CODE = "42P01"


class MissingTableError(Exception):
    """The hosted backend is unavailable for a table: not configured, or the relation does not exist."""

    def __init__(self, table: str, reason: str = "relation does not exist"):
        super().__init__(f"{table}: {reason}")
        self.table = table
        self.reason = reason


def is_missing_table(error: BaseException) -> bool:
    """Postgres 'undefined_table' as reported by PostgREST (code 42P01 or a 'does not exist' message)."""
    code = getattr(error, "code", None)
    message = getattr(error, "message", None) or str(error)
    return code == MISSING_TABLE_CODE or "does not exist" in str(message)


class BaseRepository:
    """Common plumbing for repositories backed by a Supabase table with a local-store fallback.

    Every remote call goes through `_run`, which turns missing-table errors (and
    the no-client local mode) into MissingTableError so subclasses only handle
    one fallback path.
    """
    table: str = ""

    def __init__(self, client: Any = None, store: Optional[LocalStore] = None):
        self.client = client
        self.store = store or LocalStore()

    @property
    def remote(self) -> bool:
        return self.client is not None

    def _table(self, name: Optional[str] = None):
        name = name or self.table
        if self.client is None:
            raise MissingTableError(name, "backend not configured")
        return self.client.table(name)

    def _run(self, query, table: Optional[str] = None):
        try:
            return query.execute()
        except Exception as e:
            if is_missing_table(e):
                logger.warning("Table %s not available, using local store: %s", table or self.table, e)
                raise MissingTableError(table or self.table) from e
            raise

    @staticmethod
    def _rows(response) -> list:
        data = getattr(response, "data", None) if response is not None else None
        if data is None:
            return []
        return data if isinstance(data, list) else [data]
