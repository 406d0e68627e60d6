"""Web-facing observers for WeekFit events.

Subscribes to the GLOBAL_EVENT_BUS and keeps an in-memory ring buffer of
toast-style notifications that the dashboard polls through
GET /api/notifications?since=<cursor>.

  * Every notification gets an auto-increment id (cursor); clients ask only
    for ids greater than the last one they saw.
  * A Lock guards the buffer; with several worker processes each keeps its own.
  * MAX_EVENTS caps memory.
"""
from __future__ import annotations
from typing import List, Dict, Any, Optional
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import (
    GLOBAL_EVENT_BUS, CHALLENGE_COMPLETED, ACHIEVEMENT_UNLOCKED, MENU_GENERATED, PROGRESS_RECORDED, LEVEL_UP
)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 300
_started = False


def _toast(event_name: str, payload: Dict[str, Any]) -> Dict[str, str]:
    """Title/description shown by the client for an event."""
    if event_name == CHALLENGE_COMPLETED:
        return {'title': 'Challenge completed! 🎉',
                'description': f"+{payload.get('points', 0)} points: {payload.get('title', '')}"}
    if event_name == ACHIEVEMENT_UNLOCKED:
        return {'title': f"{payload.get('icon', '')} Achievement unlocked!".strip(),
                'description': f"{payload.get('name', '')} (+{payload.get('points', 0)} points)"}
    if event_name == MENU_GENERATED:
        return {'title': 'Menu ready! 🥗',
                'description': f"Your menu for the week of {payload.get('week_start', '')} is ready."}
    if event_name == PROGRESS_RECORDED:
        return {'title': 'Progress saved! 📈', 'description': 'Your measurements were recorded.'}
    if event_name == LEVEL_UP:
        return {'title': 'Level up! 🏆', 'description': f"You reached {payload.get('level', '')}."}
    return {'title': event_name, 'description': ''}


def _record(event_name: str, payload: Any):
    global _next_id
    payload = payload if isinstance(payload, dict) else {}
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat(),
            'user_id': payload.get('user_id'),
        }
        evt.update(_toast(event_name, payload))
        _events.append(evt)
        _next_id += 1
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    for name in (CHALLENGE_COMPLETED, ACHIEVEMENT_UNLOCKED, MENU_GENERATED, PROGRESS_RECORDED, LEVEL_UP):
        GLOBAL_EVENT_BUS.subscribe(name, _record)
    _started = True


def get_events(since: Optional[int] = None, user_id: Optional[str] = None) -> Dict[str, Any]:
    """Return notifications newer than 'since' (exclusive), optionally for one user.

    next_cursor is the largest id in the buffer so the client can poll with since=next_cursor.
    """
    with _lock:
        data = list(_events) if since is None else [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    if user_id is not None:
        data = [e for e in data if e.get('user_id') in (None, user_id)]
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events']
