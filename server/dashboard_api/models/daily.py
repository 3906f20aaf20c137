"""Daily tracking models."""
import datetime

from pydantic import BaseModel

from plant_tracker.types import FoodColor


class DailySummary(BaseModel):
    """Today's water, colors and fermented food."""

    user_id: str
    date: datetime.date
    water_glasses: int
    water_goal_achieved: bool
    colors_eaten: list[FoodColor]
    colors_count: int
    all_colors_achieved: bool
    fermented_food_eaten: bool


class WaterRequest(BaseModel):
    """Glass count to set; values outside 0-20 are ignored."""

    count: int


class ColorRequest(BaseModel):
    color: FoodColor
