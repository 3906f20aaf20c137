"""Streak models."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ArchivedWeekOut(BaseModel):
    """A closed-out week."""

    model_config = ConfigDict(from_attributes=True)

    week_start: datetime
    week_end: datetime
    total_points: float
    goal_achieved: bool


class StreakSummary(BaseModel):
    current_streak: int
    history: list[ArchivedWeekOut]
