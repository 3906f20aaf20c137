"""Weekly food log API routes."""
from fastapi import APIRouter, Depends, HTTPException, Response, status

from plant_tracker.colors import missing_colors
from plant_tracker.errors import OutsideCurrentWeekError
from plant_tracker.types import FoodColor

from ..models.weekly import AddFoodRequest, AddFoodResponse, UpdateFoodRequest, WeeklySummary, FoodInstanceOut
from ..services.trackers import UserTrackers, get_user_trackers

router = APIRouter(prefix="/api/weekly", tags=["Weekly"])


def _weekly_summary(trackers: UserTrackers) -> WeeklySummary:
    """Build the weekly response from the tracker's serialized state."""
    summary = trackers.weekly.summary()
    summary["missing_colors"] = missing_colors(FoodColor(c) for c in summary["colors_achieved"])
    return WeeklySummary.model_validate(summary)


@router.get("", response_model=WeeklySummary)
async def get_week(trackers: UserTrackers = Depends(get_user_trackers)):
    """Get the current week's foods, points, breakdown and colors."""
    return _weekly_summary(trackers)


@router.post("/foods", response_model=AddFoodResponse, status_code=status.HTTP_201_CREATED)
async def add_food(request: AddFoodRequest, trackers: UserTrackers = Depends(get_user_trackers)):
    """
    Log a food for this week.

    An exact repeat of food, color and fermentation is answered with 409
    and changes nothing. A logged date outside the current week is a 422.
    """
    try:
        result = trackers.weekly.add_food(
            food_id=request.food_id,
            food_name=request.food_name,
            category=request.category,
            color=request.color,
            is_fermented=request.is_fermented,
            logged_date=request.logged_date,
        )
    except OutsideCurrentWeekError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    if result.is_duplicate_instance:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"{request.food_name} is already logged this week with that color and preparation",
        )

    # Keep today's colors and fermented flag in step with the week
    trackers.daily.update_from_food_instances(result.foods)

    return AddFoodResponse(
        instance=FoodInstanceOut.model_validate(result.added.to_record()),
        is_new_food=result.is_new_food,
        total_points=float(trackers.weekly.week.total_points),
    )


@router.patch("/foods/{instance_id}", response_model=FoodInstanceOut)
async def update_food(
    instance_id: str,
    request: UpdateFoodRequest,
    trackers: UserTrackers = Depends(get_user_trackers),
):
    """Change the color or fermentation flag of a logged instance."""
    updated = trackers.weekly.update_food(
        instance_id, color=request.color, is_fermented=request.is_fermented
    )
    if updated is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No such instance, or the change would duplicate another one",
        )
    trackers.daily.update_from_food_instances(trackers.weekly.food_instances)
    return FoodInstanceOut.model_validate(updated.to_record())


@router.delete("/foods/{instance_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_food(instance_id: str, trackers: UserTrackers = Depends(get_user_trackers)):
    """Remove a logged instance; unknown ids are ignored."""
    trackers.weekly.remove_food(instance_id)
    trackers.daily.update_from_food_instances(trackers.weekly.food_instances)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/reset", response_model=WeeklySummary)
async def reset_week(trackers: UserTrackers = Depends(get_user_trackers)):
    """Clear all foods logged this week."""
    trackers.weekly.reset_week()
    return _weekly_summary(trackers)
