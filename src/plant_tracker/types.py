"""
Core types for plant-diversity tracking.

Defines the closed category and color enums, the exact point values
attached to each category, and the value objects exchanged between the
weekly-log, points, colors, streak and daily modules.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional


class FoodCategory(str, Enum):
    """Plant food category."""

    WHOLE_GRAINS = "whole_grains"
    NUTS_SEEDS = "nuts_seeds"
    FRUITS = "fruits"
    VEGETABLES = "vegetables"
    LEGUMES = "legumes"
    HERBS_SPICES = "herbs_spices"


class FoodColor(str, Enum):
    """The six rainbow colors, in display order."""

    RED = "red"
    ORANGE = "orange"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE_PURPLE = "blue_purple"
    WHITE_TAN = "white_tan"


ALL_COLORS: List[FoodColor] = list(FoodColor)

# Decimal keeps sums of quarter points exact
CATEGORY_POINT_VALUES: Dict[FoodCategory, Decimal] = {
    FoodCategory.WHOLE_GRAINS: Decimal("1"),
    FoodCategory.NUTS_SEEDS: Decimal("1"),
    FoodCategory.FRUITS: Decimal("1"),
    FoodCategory.VEGETABLES: Decimal("1"),
    FoodCategory.LEGUMES: Decimal("1"),
    FoodCategory.HERBS_SPICES: Decimal("0.25"),
}

WEEKLY_POINT_GOAL = Decimal("30")

WATER_MIN = 0
WATER_MAX = 20
WATER_TARGET = 8


def _iso(value: datetime) -> str:
    return value.isoformat()


def _points_out(value: Decimal) -> float:
    # Quarter points are exactly representable as floats
    return float(value)


def _points_in(value) -> Decimal:
    return Decimal(str(value))


@dataclass(frozen=True)
class FoodCandidate:
    """A food the user wants to log, before it becomes an instance."""

    food_id: str
    food_name: str
    category: FoodCategory
    color: FoodColor
    is_fermented: bool
    logged_date: datetime


@dataclass(frozen=True)
class FoodInstance:
    """One logged occurrence of a food with a color/fermentation combination."""

    instance_id: str
    food_id: str
    food_name: str
    category: FoodCategory
    color: FoodColor
    is_fermented: bool
    logged_date: datetime
    point_value: Decimal
    first_logged_date: datetime

    def to_record(self) -> dict:
        """Convert to a plain dict for storage."""
        return {
            "instance_id": self.instance_id,
            "food_id": self.food_id,
            "food_name": self.food_name,
            "category": self.category.value,
            "color": self.color.value,
            "is_fermented": self.is_fermented,
            "logged_date": _iso(self.logged_date),
            "point_value": _points_out(self.point_value),
            "first_logged_date": _iso(self.first_logged_date),
        }

    @classmethod
    def from_record(cls, record: dict) -> "FoodInstance":
        return cls(
            instance_id=record["instance_id"],
            food_id=record["food_id"],
            food_name=record["food_name"],
            category=FoodCategory(record["category"]),
            color=FoodColor(record["color"]),
            is_fermented=bool(record["is_fermented"]),
            logged_date=datetime.fromisoformat(record["logged_date"]),
            point_value=_points_in(record["point_value"]),
            first_logged_date=datetime.fromisoformat(record["first_logged_date"]),
        )


@dataclass(frozen=True)
class AddFoodResult:
    """Outcome of adding a candidate to a week's instance list.

    On a duplicate, ``foods`` is the very list that was passed in and
    ``added`` is None.
    """

    foods: List[FoodInstance]
    is_new_food: bool
    is_duplicate_instance: bool
    added: Optional[FoodInstance] = None


@dataclass(frozen=True)
class ArchivedWeek:
    """Final outcome of a past week, used for streak history."""

    week_start: datetime
    week_end: datetime
    total_points: Decimal
    goal_achieved: bool

    def to_record(self, user_id: str) -> dict:
        return {
            "id": f"{user_id}-{self.week_start.date().isoformat()}",
            "user_id": user_id,
            "week_start": _iso(self.week_start),
            "week_end": _iso(self.week_end),
            "total_points": _points_out(self.total_points),
            "goal_achieved": self.goal_achieved,
        }

    @classmethod
    def from_record(cls, record: dict) -> "ArchivedWeek":
        return cls(
            week_start=datetime.fromisoformat(record["week_start"]),
            week_end=datetime.fromisoformat(record["week_end"]),
            total_points=_points_in(record["total_points"]),
            goal_achieved=bool(record["goal_achieved"]),
        )


@dataclass
class WeeklyAggregate:
    """
    One user's tracked week.

    Only the instance list and the carried-over streak are stored state;
    unique foods, points, breakdown and colors are derived on access.
    """

    user_id: str
    week_start: datetime
    week_end: datetime
    food_instances: List[FoodInstance] = field(default_factory=list)
    current_streak: int = 0

    @property
    def unique_food_ids(self) -> List[str]:
        from .weekly import unique_food_ids

        return unique_food_ids(self.food_instances)

    @property
    def total_points(self) -> Decimal:
        from .points import weekly_points
        from .weekly import unique_foods

        return weekly_points(unique_foods(self.food_instances))

    @property
    def category_breakdown(self) -> Dict[FoodCategory, Decimal]:
        from .points import category_breakdown
        from .weekly import unique_foods

        return category_breakdown(unique_foods(self.food_instances))

    @property
    def colors_achieved(self) -> List[FoodColor]:
        from .colors import weekly_colors

        return weekly_colors(self.food_instances)

    @property
    def goal_achieved(self) -> bool:
        return self.total_points >= WEEKLY_POINT_GOAL

    def to_record(self) -> dict:
        """Serialize with derived fields included, keyed by user id."""
        return {
            "id": self.user_id,
            "user_id": self.user_id,
            "week_start": _iso(self.week_start),
            "week_end": _iso(self.week_end),
            "food_instances": [i.to_record() for i in self.food_instances],
            "unique_foods": self.unique_food_ids,
            "total_points": _points_out(self.total_points),
            "category_breakdown": {
                category.value: _points_out(points)
                for category, points in self.category_breakdown.items()
            },
            "colors_achieved": [c.value for c in self.colors_achieved],
            "current_streak": self.current_streak,
        }

    @classmethod
    def from_record(cls, record: dict) -> "WeeklyAggregate":
        # Derived fields in the record are ignored and recomputed
        return cls(
            user_id=record["user_id"],
            week_start=datetime.fromisoformat(record["week_start"]),
            week_end=datetime.fromisoformat(record["week_end"]),
            food_instances=[
                FoodInstance.from_record(r) for r in record.get("food_instances", [])
            ],
            current_streak=int(record.get("current_streak", 0)),
        )


@dataclass(frozen=True)
class DailyAggregate:
    """One user's tracked day."""

    user_id: str
    date: date
    water_glasses: int = 0
    colors_eaten: List[FoodColor] = field(default_factory=list)
    fermented_food_eaten: bool = False

    @property
    def record_id(self) -> str:
        return f"{self.user_id}-{self.date.isoformat()}"

    @property
    def water_goal_achieved(self) -> bool:
        return self.water_glasses >= WATER_TARGET

    @property
    def colors_count(self) -> int:
        return len(self.colors_eaten)

    @property
    def all_colors_achieved(self) -> bool:
        from .colors import has_all_colors

        return has_all_colors(self.colors_eaten)

    def to_record(self) -> dict:
        return {
            "id": self.record_id,
            "user_id": self.user_id,
            "date": self.date.isoformat(),
            "water_glasses": self.water_glasses,
            "colors_eaten": [c.value for c in self.colors_eaten],
            "fermented_food_eaten": self.fermented_food_eaten,
        }

    @classmethod
    def from_record(cls, record: dict) -> "DailyAggregate":
        return cls(
            user_id=record["user_id"],
            date=date.fromisoformat(record["date"]),
            water_glasses=int(record["water_glasses"]),
            colors_eaten=[FoodColor(c) for c in record.get("colors_eaten", [])],
            fermented_food_eaten=bool(record.get("fermented_food_eaten", False)),
        )
