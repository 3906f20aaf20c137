"""Daily water and color API routes."""
from fastapi import APIRouter, Depends

from plant_tracker.types import DailyAggregate

from ..models.daily import ColorRequest, DailySummary, WaterRequest
from ..services.trackers import UserTrackers, get_user_trackers

router = APIRouter(prefix="/api/daily", tags=["Daily"])


def _daily_summary(day: DailyAggregate) -> DailySummary:
    return DailySummary(
        user_id=day.user_id,
        date=day.date,
        water_glasses=day.water_glasses,
        water_goal_achieved=day.water_goal_achieved,
        colors_eaten=day.colors_eaten,
        colors_count=day.colors_count,
        all_colors_achieved=day.all_colors_achieved,
        fermented_food_eaten=day.fermented_food_eaten,
    )


@router.get("", response_model=DailySummary)
async def get_today(trackers: UserTrackers = Depends(get_user_trackers)):
    """Get today's water count, colors and fermented flag."""
    return _daily_summary(trackers.daily.day)


@router.post("/water/increment", response_model=DailySummary)
async def increment_water(trackers: UserTrackers = Depends(get_user_trackers)):
    """Add one glass of water (capped at 20)."""
    return _daily_summary(trackers.daily.increment_water())


@router.post("/water/decrement", response_model=DailySummary)
async def decrement_water(trackers: UserTrackers = Depends(get_user_trackers)):
    """Remove one glass of water (floored at 0)."""
    return _daily_summary(trackers.daily.decrement_water())


@router.put("/water", response_model=DailySummary)
async def set_water(request: WaterRequest, trackers: UserTrackers = Depends(get_user_trackers)):
    """Set the glass count; out-of-range counts leave it unchanged."""
    return _daily_summary(trackers.daily.set_water_glasses(request.count))


@router.post("/colors", response_model=DailySummary)
async def add_color(request: ColorRequest, trackers: UserTrackers = Depends(get_user_trackers)):
    return _daily_summary(trackers.daily.add_color(request.color))


@router.post("/fermented", response_model=DailySummary)
async def mark_fermented(trackers: UserTrackers = Depends(get_user_trackers)):
    return _daily_summary(trackers.daily.mark_fermented_food())
