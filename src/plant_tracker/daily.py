"""
Daily water, color and fermented-food transitions.

Each function takes a DailyAggregate and returns the next one. Requests
that fall outside the allowed water range return the aggregate unchanged
rather than raising.
"""

from dataclasses import replace
from datetime import date, datetime
from typing import Iterable

from .colors import daily_colors
from .dates import is_same_day
from .types import WATER_MAX, WATER_MIN, DailyAggregate, FoodColor


def new_day(user_id: str, day: date) -> DailyAggregate:
    return DailyAggregate(user_id=user_id, date=day)


def increment_water(daily: DailyAggregate) -> DailyAggregate:
    if daily.water_glasses >= WATER_MAX:
        return daily
    return replace(daily, water_glasses=daily.water_glasses + 1)


def decrement_water(daily: DailyAggregate) -> DailyAggregate:
    if daily.water_glasses <= WATER_MIN:
        return daily
    return replace(daily, water_glasses=daily.water_glasses - 1)


def set_water_glasses(daily: DailyAggregate, count: int) -> DailyAggregate:
    """Set the glass count; counts outside 0-20 are ignored."""
    if not WATER_MIN <= count <= WATER_MAX:
        return daily
    return replace(daily, water_glasses=count)


def add_color(daily: DailyAggregate, color: FoodColor) -> DailyAggregate:
    if color in daily.colors_eaten:
        return daily
    return replace(daily, colors_eaten=[*daily.colors_eaten, color])


def mark_fermented_food(daily: DailyAggregate) -> DailyAggregate:
    if daily.fermented_food_eaten:
        return daily
    return replace(daily, fermented_food_eaten=True)


def recompute_from_instances(daily: DailyAggregate, instances: Iterable) -> DailyAggregate:
    """
    Rebuild today's colors from the week's food instances.

    Only instances logged on the aggregate's date count. The fermented
    flag is sticky: it is never cleared here once set for the day.
    """
    day = datetime.combine(daily.date, datetime.min.time())
    today = [i for i in instances if is_same_day(i.logged_date, day)]
    return replace(
        daily,
        colors_eaten=daily_colors(today, day),
        fermented_food_eaten=daily.fermented_food_eaten or any(i.is_fermented for i in today),
    )
