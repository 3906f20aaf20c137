"""Streak API routes."""
from fastapi import APIRouter, Depends

from ..models.streak import ArchivedWeekOut, StreakSummary
from ..services.trackers import UserTrackers, get_user_trackers

router = APIRouter(prefix="/api/streak", tags=["Streak"])


@router.get("", response_model=StreakSummary)
async def get_streak(trackers: UserTrackers = Depends(get_user_trackers)):
    """Get the current streak and the archived weeks behind it, most recent first."""
    weekly = trackers.weekly
    history = [
        ArchivedWeekOut.model_validate(week.to_record(weekly.user_id))
        for week in weekly.archived_weeks()
    ]
    return StreakSummary(current_streak=weekly.week.current_streak, history=history)
