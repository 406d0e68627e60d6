"""Simple Event Bus / Observer implementation for gamification and menu events.

Event names:
  challenge.completed -> payload {"user_id": str, "title": str, "points": int}
  achievement.unlocked -> payload {"user_id": str, "name": str, "icon": str, "points": int}
  menu.generated -> payload {"user_id": str, "week_start": str, "source": "heuristic" | "ai"}
  progress.recorded -> payload {"user_id": str, "recorded_date": str, "weight": float | None}
  level.up -> payload {"user_id": str, "level": str}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
from collections import defaultdict
from typing import Callable, Any, Dict, List
import logging

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
CHALLENGE_COMPLETED = "challenge.completed"
ACHIEVEMENT_UNLOCKED = "achievement.unlocked"
MENU_GENERATED = "menu.generated"
PROGRESS_RECORDED = "progress.recorded"
LEVEL_UP = "level.up"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback in self._subscribers.get(event_name, []):
			self._subscribers[event_name].remove(callback)

	def publish(self, event_name: str, payload: Any):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %s", event_name, cb)


GLOBAL_EVENT_BUS = EventBus()


def create_event(event_name: str, payload: Any = None) -> None:
	"""Publish an event on the global bus (sugar function)."""
	GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'create_event',
	'CHALLENGE_COMPLETED', 'ACHIEVEMENT_UNLOCKED', 'MENU_GENERATED', 'PROGRESS_RECORDED', 'LEVEL_UP'
]
