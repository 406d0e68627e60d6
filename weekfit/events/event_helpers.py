"""Event helper utilities.

Thin publishing wrappers so routes and repositories do not build payload
dicts by hand.

Quick import:
    from weekfit.events.event_helpers import (
        publish_challenge_completed, publish_achievement_unlocked,
        publish_menu_generated, publish_progress_recorded, publish_level_up
    )
"""
from __future__ import annotations
from typing import Optional

from .Event_Bus import (
    create_event,
    CHALLENGE_COMPLETED, ACHIEVEMENT_UNLOCKED, MENU_GENERATED, PROGRESS_RECORDED, LEVEL_UP
)

__all__ = [
    'publish_challenge_completed', 'publish_achievement_unlocked', 'publish_menu_generated',
    'publish_progress_recorded', 'publish_level_up'
]


def publish_challenge_completed(user_id: str, title: str, points: int):
    create_event(CHALLENGE_COMPLETED, {'user_id': user_id, 'title': title, 'points': points})


def publish_achievement_unlocked(user_id: str, name: str, icon: str, points: int):
    create_event(ACHIEVEMENT_UNLOCKED, {'user_id': user_id, 'name': name, 'icon': icon, 'points': points})


def publish_menu_generated(user_id: str, week_start: str, source: str = 'heuristic'):
    """source is 'heuristic' for questionnaire/regenerate menus, 'ai' for gateway menus."""
    create_event(MENU_GENERATED, {'user_id': user_id, 'week_start': week_start, 'source': source})


def publish_progress_recorded(user_id: str, recorded_date: str, weight: Optional[float]):
    create_event(PROGRESS_RECORDED, {'user_id': user_id, 'recorded_date': recorded_date, 'weight': weight})


def publish_level_up(user_id: str, level: str):
    create_event(LEVEL_UP, {'user_id': user_id, 'level': level})
