"""
Weekly goal streak.

A streak is the number of most-recent archived weeks that all met the
point goal and sit exactly one week apart. A failed week or a missing
week ends the streak, and the week that breaks it is never counted.
"""

from datetime import timedelta
from decimal import Decimal
from typing import List, Union

from .types import WEEKLY_POINT_GOAL, ArchivedWeek, WeeklyAggregate

ONE_WEEK = timedelta(days=7)


def did_achieve_goal(total_points: Union[Decimal, float, int]) -> bool:
    """True if ``total_points`` reaches the weekly goal of 30."""
    return total_points >= WEEKLY_POINT_GOAL


def _are_consecutive(recent: ArchivedWeek, older: ArchivedWeek) -> bool:
    # Calendar dates, so a DST shift between the two Mondays does not matter
    return recent.week_start.date() - older.week_start.date() == ONE_WEEK


def calculate_streak(weeks: List[ArchivedWeek]) -> int:
    """
    Count consecutive goal-achieving weeks, most recent first.

    Args:
        weeks: Archived weeks sorted most recent first. The list is
            not re-sorted; use sort_weeks_by_most_recent beforehand.

    Returns:
        Length of the streak, 0 for no weeks
    """
    streak = 0
    for index, week in enumerate(weeks):
        if not week.goal_achieved:
            break
        if index > 0 and not _are_consecutive(weeks[index - 1], week):
            break
        streak += 1
    return streak


def sort_weeks_by_most_recent(weeks: List[ArchivedWeek]) -> List[ArchivedWeek]:
    """Return a new list ordered by descending week start."""
    return sorted(weeks, key=lambda w: w.week_start, reverse=True)


def archive_week(aggregate: WeeklyAggregate) -> ArchivedWeek:
    """Freeze a closing week's outcome for the streak history."""
    total = aggregate.total_points
    return ArchivedWeek(
        week_start=aggregate.week_start,
        week_end=aggregate.week_end,
        total_points=total,
        goal_achieved=did_achieve_goal(total),
    )
