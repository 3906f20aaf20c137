"""Diversity point values and aggregation."""

from decimal import Decimal
from typing import Dict, Iterable

from .types import CATEGORY_POINT_VALUES, FoodCategory


def point_value(category: FoodCategory) -> Decimal:
    """
    Get the point value for a food category.

    Returns:
        1 for standard categories, 0.25 for herbs/spices
    """
    return CATEGORY_POINT_VALUES[FoodCategory(category)]


def weekly_points(foods: Iterable) -> Decimal:
    """
    Sum the point values of foods already reduced to one per food id.

    Args:
        foods: Objects with a ``category`` attribute

    Returns:
        Exact total; Decimal("0") for no foods
    """
    return sum((point_value(food.category) for food in foods), Decimal("0"))


def category_breakdown(foods: Iterable) -> Dict[FoodCategory, Decimal]:
    """Sum point values per category, with every category present."""
    breakdown = {category: Decimal("0") for category in FoodCategory}
    for food in foods:
        category = FoodCategory(food.category)
        breakdown[category] += point_value(category)
    return breakdown
