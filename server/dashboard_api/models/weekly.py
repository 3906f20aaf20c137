"""Weekly food log models."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from plant_tracker.types import FoodCategory, FoodColor


class FoodInstanceOut(BaseModel):
    """One logged food instance."""

    model_config = ConfigDict(from_attributes=True)

    instance_id: str
    food_id: str
    food_name: str
    category: FoodCategory
    color: FoodColor
    is_fermented: bool
    logged_date: datetime
    point_value: float
    first_logged_date: datetime


class AddFoodRequest(BaseModel):
    """Food to log for the current week."""

    food_id: str = Field(..., min_length=1)
    food_name: str = Field(..., min_length=1)
    category: FoodCategory
    color: FoodColor
    is_fermented: bool = False
    logged_date: Optional[datetime] = Field(
        None, description="Defaults to now; must fall in the current week. Aware times are converted to local time"
    )


class AddFoodResponse(BaseModel):
    """Result of logging a food."""

    instance: FoodInstanceOut
    is_new_food: bool
    total_points: float


class UpdateFoodRequest(BaseModel):
    """Changes to an existing instance."""

    color: Optional[FoodColor] = None
    is_fermented: Optional[bool] = None


class WeeklySummary(BaseModel):
    """Current week with derived totals."""

    user_id: str
    week_start: datetime
    week_end: datetime
    food_instances: list[FoodInstanceOut]
    unique_foods: list[str]
    total_points: float
    category_breakdown: dict[FoodCategory, float]
    colors_achieved: list[FoodColor]
    missing_colors: list[FoodColor]
    current_streak: int
    goal_achieved: bool
