"""Per-user tracker registry.

Holds one WeeklyTracker/DailyTracker pair per user so that every write
for a user goes through the same tracker lock.
"""
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from fastapi import Depends, Header

from plant_tracker.store import RecordStore
from plant_tracker.tracker import DailyTracker, WeeklyTracker

from ..config import get_settings
from ..database import get_record_store


@dataclass
class UserTrackers:
    """The weekly and daily trackers of one user."""

    weekly: WeeklyTracker
    daily: DailyTracker

    def refresh(self, now: Optional[datetime] = None) -> None:
        """Apply any pending week rollover or day reset."""
        self.weekly.check_for_week_rollover(now)
        self.daily.check_for_day_reset(now)


class TrackerRegistry:
    """Thread-safe map of user id to that user's trackers."""

    def __init__(self, store: RecordStore):
        self.store = store
        self._trackers: dict[str, UserTrackers] = {}
        self._lock = threading.Lock()

    def get(self, user_id: str) -> UserTrackers:
        with self._lock:
            trackers = self._trackers.get(user_id)
            if trackers is None:
                trackers = UserTrackers(
                    weekly=WeeklyTracker(self.store, user_id),
                    daily=DailyTracker(self.store, user_id),
                )
                self._trackers[user_id] = trackers
        return trackers

    def reset(self) -> None:
        with self._lock:
            self._trackers.clear()


_registry: Optional[TrackerRegistry] = None
_registry_lock = threading.Lock()


def get_registry() -> TrackerRegistry:
    global _registry
    with _registry_lock:
        if _registry is None:
            _registry = TrackerRegistry(get_record_store())
        return _registry


def get_user_trackers(
    x_user_id: Optional[str] = Header(default=None),
    registry: TrackerRegistry = Depends(get_registry),
) -> UserTrackers:
    """FastAPI dependency resolving the caller's trackers."""
    user_id = x_user_id or get_settings().default_user_id
    trackers = registry.get(user_id)
    trackers.refresh()
    return trackers
