"""
Plant Tracker Module.

Tracks unique plant foods per week for a diversity points goal, daily
water and color variety, and the streak of weeks the goal was met.
"""

from .errors import OutsideCurrentWeekError, PlantTrackerError, RecordStoreError
from .store import RecordStore
from .tracker import DailyTracker, WeeklyTracker
from .types import (
    AddFoodResult,
    ArchivedWeek,
    DailyAggregate,
    FoodCandidate,
    FoodCategory,
    FoodColor,
    FoodInstance,
    WeeklyAggregate,
)

__all__ = [
    "OutsideCurrentWeekError",
    "PlantTrackerError",
    "RecordStoreError",
    "RecordStore",
    "DailyTracker",
    "WeeklyTracker",
    "AddFoodResult",
    "ArchivedWeek",
    "DailyAggregate",
    "FoodCandidate",
    "FoodCategory",
    "FoodColor",
    "FoodInstance",
    "WeeklyAggregate",
]
