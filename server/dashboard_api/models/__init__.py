"""Pydantic models for plant tracker API requests and responses."""
from .weekly import FoodInstanceOut, AddFoodRequest, AddFoodResponse, UpdateFoodRequest, WeeklySummary
from .daily import DailySummary, WaterRequest, ColorRequest
from .streak import ArchivedWeekOut, StreakSummary

__all__ = [
    "FoodInstanceOut",
    "AddFoodRequest",
    "AddFoodResponse",
    "UpdateFoodRequest",
    "WeeklySummary",
    "DailySummary",
    "WaterRequest",
    "ColorRequest",
    "ArchivedWeekOut",
    "StreakSummary",
]
