"""
Weekly food log.

Enforces the uniqueness rules for one week's food instances:

- a food id contributes points once per week;
- the same food id may be logged again with a different color or
  fermentation status, for color-variety credit only;
- an exact repeat of (food id, color, fermentation) is rejected.

Every function is pure: input lists and instances are never mutated.
"""

import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import List, Optional, Tuple

from .points import point_value
from .types import AddFoodResult, FoodCandidate, FoodColor, FoodInstance

logger = logging.getLogger(__name__)


def _matches(instance: FoodInstance, food_id: str, color: FoodColor, is_fermented: bool) -> bool:
    return (
        instance.food_id == food_id
        and instance.color == color
        and instance.is_fermented == is_fermented
    )


def is_duplicate_instance(existing: List[FoodInstance], candidate: FoodCandidate) -> bool:
    """True if an instance with the same food id, color and fermentation exists."""
    return any(
        _matches(i, candidate.food_id, candidate.color, candidate.is_fermented)
        for i in existing
    )


def first_logged_date(existing: List[FoodInstance], food_id: str) -> Optional[datetime]:
    """Earliest first-logged date recorded for ``food_id`` this week, if any."""
    dates = [i.first_logged_date for i in existing if i.food_id == food_id]
    return min(dates) if dates else None


def add_food(existing: List[FoodInstance], candidate: FoodCandidate) -> AddFoodResult:
    """
    Add a candidate food to the week's instance list.

    Args:
        existing: Current instances for the week
        candidate: The food being logged

    Returns:
        AddFoodResult. On a duplicate instance, ``foods`` is ``existing``
        itself (not a copy). Otherwise it is a new list with the new
        instance appended at the end.
    """
    if is_duplicate_instance(existing, candidate):
        logger.debug(
            f"[WEEKLY] Duplicate instance rejected: {candidate.food_id} "
            f"({candidate.color.value}, fermented={candidate.is_fermented})"
        )
        return AddFoodResult(foods=existing, is_new_food=False, is_duplicate_instance=True)

    first_logged = first_logged_date(existing, candidate.food_id)
    is_new_food = first_logged is None

    instance = FoodInstance(
        instance_id=str(uuid.uuid4()),
        food_id=candidate.food_id,
        food_name=candidate.food_name,
        category=candidate.category,
        color=candidate.color,
        is_fermented=candidate.is_fermented,
        logged_date=candidate.logged_date,
        point_value=point_value(candidate.category),
        first_logged_date=first_logged or candidate.logged_date,
    )

    return AddFoodResult(
        foods=[*existing, instance],
        is_new_food=is_new_food,
        is_duplicate_instance=False,
        added=instance,
    )


def remove_food(instances: List[FoodInstance], instance_id: str) -> List[FoodInstance]:
    """Return a new list without ``instance_id``; unknown ids are ignored."""
    return [i for i in instances if i.instance_id != instance_id]


def update_food(
    instances: List[FoodInstance],
    instance_id: str,
    color: Optional[FoodColor] = None,
    is_fermented: Optional[bool] = None,
) -> Tuple[List[FoodInstance], Optional[FoodInstance]]:
    """
    Change the color and/or fermentation flag of one instance.

    Returns:
        (new list, updated instance). The input list and None are
        returned when the id is unknown or the change would duplicate
        another instance.
    """
    target = next((i for i in instances if i.instance_id == instance_id), None)
    if target is None:
        return instances, None

    updated = replace(
        target,
        color=target.color if color is None else color,
        is_fermented=target.is_fermented if is_fermented is None else is_fermented,
    )
    collides = any(
        _matches(i, updated.food_id, updated.color, updated.is_fermented)
        for i in instances
        if i.instance_id != instance_id
    )
    if collides:
        logger.debug(f"[WEEKLY] Update of {instance_id} would duplicate another instance")
        return instances, None

    return [updated if i.instance_id == instance_id else i for i in instances], updated


def unique_food_ids(instances: List[FoodInstance]) -> List[str]:
    """Distinct food ids across the instances."""
    return list(dict.fromkeys(i.food_id for i in instances))


def unique_foods(instances: List[FoodInstance]) -> List[FoodInstance]:
    """First instance of each food id, the input to point totals."""
    seen = {}
    for instance in instances:
        seen.setdefault(instance.food_id, instance)
    return list(seen.values())


def has_food_been_logged(instances: List[FoodInstance], food_id: str) -> bool:
    return any(i.food_id == food_id for i in instances)
