import copy
import logging
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from weekfit.domain.WeeklyMenu import WeeklyMenu
from weekfit.infra.Base_Repository import BaseRepository, MissingTableError
from weekfit.utilities.constants import SAMPLE_MENU

logger = logging.getLogger(__name__)


def _menu_key(user_id: str) -> str:
    return f"menu_{user_id}"


def current_week_start(today: Optional[date] = None) -> str:
    """ISO date of the Monday of the current week."""
    today = today or date.today()
    return (today - timedelta(days=today.weekday())).isoformat()


def sample_menu(user_id: str) -> WeeklyMenu:
    data = copy.deepcopy(SAMPLE_MENU)
    return WeeklyMenu(user_id=user_id, week_start=current_week_start(), meals=data["meals"],
                      shopping_list=data["shopping_list"], is_sample=True)


class MenuRepository(BaseRepository):
    table = "weekly_menus"

    def latest(self, user_id: str) -> WeeklyMenu:
        """Newest menu by created_at; local copy when the table is unavailable; sample menu otherwise."""
        try:
            rows = self._rows(self._run(
                self._table().select("*").eq("user_id", user_id).order("created_at", desc=True).limit(1)
            ))
            if rows:
                return WeeklyMenu.from_dict(rows[0])
        except MissingTableError:
            pass
        except Exception:
            logger.exception("Failed to load menu for %s; using local copy or sample", user_id)
        local = self.store.get(_menu_key(user_id))
        if local:
            logger.info("Loaded menu for %s from local store", user_id)
            return WeeklyMenu.from_dict(local)
        return sample_menu(user_id)

    def save(self, menu: WeeklyMenu) -> WeeklyMenu:
        """Insert a new row (or update the existing one); local copy when the table is unavailable."""
        menu.is_sample = False
        try:
            if menu.id and not str(menu.id).startswith("local-"):
                self._run(self._table().update(menu.to_row()).eq("id", menu.id))
                return menu
            rows = self._rows(self._run(self._table().insert(menu.to_row())))
            if rows:
                menu.id = rows[0].get("id", menu.id)
                menu.created_at = rows[0].get("created_at", menu.created_at)
        except MissingTableError:
            menu.id = menu.id or f"local-{menu.user_id}"
            menu.created_at = menu.created_at or datetime.now(timezone.utc).isoformat()
            self.store.set(_menu_key(menu.user_id), menu.to_dict())
        return menu
