"""Rainbow color aggregation across a week or a single day."""

from datetime import datetime
from typing import Iterable, List

from .dates import is_same_day
from .types import ALL_COLORS, FoodColor


def weekly_colors(foods: Iterable) -> List[FoodColor]:
    """Distinct colors across all foods, in first-seen order."""
    return list(dict.fromkeys(food.color for food in foods))


def daily_colors(foods: Iterable, day: datetime) -> List[FoodColor]:
    """
    Distinct colors of foods logged on the same calendar day as ``day``.

    Time of day is ignored on both sides.
    """
    return weekly_colors(food for food in foods if is_same_day(food.logged_date, day))


def has_all_colors(colors: Iterable[FoodColor]) -> bool:
    """True when six distinct colors are present.

    Counts only; callers must keep out-of-domain values out of ``colors``.
    """
    return len(set(colors)) == len(ALL_COLORS)


def missing_colors(achieved: Iterable[FoodColor]) -> List[FoodColor]:
    """Colors not yet achieved, in rainbow order."""
    achieved_set = set(achieved)
    return [color for color in ALL_COLORS if color not in achieved_set]
