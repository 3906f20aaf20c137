"""
Weekly and daily trackers.

Each tracker owns one user's current aggregate, applies the pure domain
transitions to it and persists the result through a RecordStore after
every change. Mutations are serialised per tracker with a lock, and the
aggregate is only read inside that lock, so two add-food calls for the
same user never race on the uniqueness check and a rollover never
swallows a concurrent write.

The week rolls over when the wall clock crosses into a new Monday: the
closing week is archived, every Monday skipped since then is archived
as a missed week, the streak is recomputed from the archive history
and a fresh week begins. The day resets at local midnight.
"""

import logging
import threading
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from . import daily as daily_log
from . import weekly as weekly_log
from .dates import (
    format_date_key,
    is_same_week,
    should_archive_week,
    should_reset_daily,
    to_local,
    week_end,
    week_start,
)
from .errors import OutsideCurrentWeekError, RecordStoreError
from .store import RecordStore
from .streak import ONE_WEEK, archive_week, calculate_streak, sort_weeks_by_most_recent
from .types import (
    AddFoodResult,
    ArchivedWeek,
    DailyAggregate,
    FoodCandidate,
    FoodCategory,
    FoodColor,
    FoodInstance,
    WeeklyAggregate,
)

logger = logging.getLogger(__name__)


def _now(now: Optional[datetime]) -> datetime:
    return to_local(now) if now is not None else datetime.now()


class WeeklyTracker:
    """
    Tracks one user's food log for the current week.

    Goals reset every Monday at local midnight; the closing week is kept
    only as an ArchivedWeek for the streak.
    """

    def __init__(self, store: RecordStore, user_id: str):
        """
        Initialize the weekly tracker.

        Args:
            store: Record store used for persistence
            user_id: Owner of the tracked week
        """
        self.store = store
        self.user_id = user_id
        self._lock = threading.Lock()
        self._week: Optional[WeeklyAggregate] = None

    @property
    def week(self) -> WeeklyAggregate:
        self._ensure_loaded()
        return self._week

    @property
    def food_instances(self) -> List[FoodInstance]:
        return self.week.food_instances

    def _ensure_loaded(self) -> None:
        if self._week is None:
            self.initialize()

    def initialize(self, now: Optional[datetime] = None) -> None:
        """Load the stored week, or start an empty one, then check rollover."""
        now = _now(now)
        with self._lock:
            if self._week is None:
                record = self.store.load_weekly_data(self.user_id)
                if record:
                    self._week = WeeklyAggregate.from_record(record)
                    logger.info(
                        f"[WEEKLY] Loaded week of {self._week.week_start.date()} for "
                        f"{self.user_id} ({len(self._week.food_instances)} instances)"
                    )
                else:
                    self._week = self._empty_week(now, current_streak=0)
                    logger.info(f"[WEEKLY] Started new week {self._week.week_start.date()} for {self.user_id}")
        self.check_for_week_rollover(now)

    def _empty_week(self, now: datetime, current_streak: int) -> WeeklyAggregate:
        return WeeklyAggregate(
            user_id=self.user_id,
            week_start=week_start(now),
            week_end=week_end(now),
            current_streak=current_streak,
        )

    def _persist(self, week: WeeklyAggregate) -> None:
        self.store.save_weekly_data(week.to_record())

    def _commit(self, week: WeeklyAggregate, foods: List[FoodInstance]) -> None:
        """Swap in a new instance list, restoring the old one if saving fails."""
        previous = week.food_instances
        week.food_instances = foods
        try:
            self._persist(week)
        except RecordStoreError:
            week.food_instances = previous
            raise

    def add_food(
        self,
        food_id: str,
        food_name: str,
        category: FoodCategory,
        color: FoodColor,
        is_fermented: bool = False,
        logged_date: Optional[datetime] = None,
    ) -> AddFoodResult:
        """
        Log a food for this week.

        Returns:
            AddFoodResult; duplicates are reported, not raised, and
            nothing is persisted for them.

        Raises:
            OutsideCurrentWeekError: If ``logged_date`` falls outside the
                tracked week
        """
        candidate = FoodCandidate(
            food_id=food_id,
            food_name=food_name,
            category=FoodCategory(category),
            color=FoodColor(color),
            is_fermented=is_fermented,
            logged_date=_now(logged_date),
        )
        self._ensure_loaded()
        with self._lock:
            week = self._week
            if not is_same_week(candidate.logged_date, week.week_start):
                raise OutsideCurrentWeekError(candidate.logged_date, week.week_start)
            result = weekly_log.add_food(week.food_instances, candidate)
            if result.is_duplicate_instance:
                return result
            self._commit(week, result.foods)
            total = week.total_points

        logger.info(
            f"[WEEKLY] {self.user_id} logged {food_name} ({candidate.color.value}"
            f"{', fermented' if is_fermented else ''}) - "
            f"{'new food' if result.is_new_food else 'repeat food'}, "
            f"{total} points"
        )
        return result

    def remove_food(self, instance_id: str) -> None:
        self._ensure_loaded()
        with self._lock:
            week = self._week
            self._commit(week, weekly_log.remove_food(week.food_instances, instance_id))
        logger.info(f"[WEEKLY] {self.user_id} removed instance {instance_id}")

    def update_food(
        self,
        instance_id: str,
        color: Optional[FoodColor] = None,
        is_fermented: Optional[bool] = None,
    ) -> Optional[FoodInstance]:
        """
        Change an instance's color and/or fermentation flag.

        Returns:
            The updated instance, or None if the id is unknown or the
            change would duplicate another instance
        """
        self._ensure_loaded()
        with self._lock:
            week = self._week
            foods, updated = weekly_log.update_food(
                week.food_instances,
                instance_id,
                color=FoodColor(color) if color is not None else None,
                is_fermented=is_fermented,
            )
            if updated is None:
                return None
            self._commit(week, foods)
        logger.info(f"[WEEKLY] {self.user_id} updated instance {instance_id}")
        return updated

    def reset_week(self, now: Optional[datetime] = None) -> None:
        """Clear all food instances and move to the week containing ``now``."""
        now = _now(now)
        with self._lock:
            streak = self._week.current_streak if self._week else 0
            fresh = self._empty_week(now, current_streak=streak)
            self._persist(fresh)
            self._week = fresh
        logger.info(f"[WEEKLY] Reset week for {self.user_id} to {fresh.week_start.date()}")

    def set_streak(self, streak: int) -> None:
        self._ensure_loaded()
        with self._lock:
            week = self._week
            previous = week.current_streak
            week.current_streak = streak
            try:
                self._persist(week)
            except RecordStoreError:
                week.current_streak = previous
                raise

    def archived_weeks(self) -> List[ArchivedWeek]:
        """Archive history for this user, most recent first."""
        weeks = [ArchivedWeek.from_record(r) for r in self.store.list_archived_weeks(self.user_id)]
        return sort_weeks_by_most_recent(weeks)

    def _archive_missed_weeks(self, closed: WeeklyAggregate, now: datetime) -> List[ArchivedWeek]:
        """Archive a zero-point week for every Monday between ``closed`` and ``now``'s week."""
        current = week_start(now).date()
        known = {w.week_start.date() for w in self.archived_weeks()}
        missed = []
        monday = week_start(closed.week_start + ONE_WEEK)
        while monday.date() < current:
            if monday.date() not in known:
                skipped = ArchivedWeek(
                    week_start=monday,
                    week_end=week_end(monday),
                    total_points=Decimal("0"),
                    goal_achieved=False,
                )
                self.store.save_archived_week(skipped.to_record(self.user_id))
                missed.append(skipped)
            monday = week_start(monday + ONE_WEEK)
        return missed

    def check_for_week_rollover(self, now: Optional[datetime] = None) -> bool:
        """
        Archive and reset the week if ``now`` is past its end.

        Weeks with no activity at all are archived as missed, so a gap
        in use always ends the streak.

        Returns:
            True if the week rolled over
        """
        now = _now(now)
        self._ensure_loaded()
        with self._lock:
            week = self._week
            if not should_archive_week(now, week.week_start):
                return False

            archived = archive_week(week)
            self.store.save_archived_week(archived.to_record(self.user_id))
            logger.info(
                f"[STREAK] Archived week {archived.week_start.date()} for {self.user_id}: "
                f"{archived.total_points} points, goal {'met' if archived.goal_achieved else 'missed'}"
            )
            missed = self._archive_missed_weeks(week, now)
            if missed:
                logger.info(f"[STREAK] {self.user_id} skipped {len(missed)} week(s) without logging")

            streak = calculate_streak(self.archived_weeks())
            fresh = self._empty_week(now, current_streak=streak)
            self._persist(fresh)
            self._week = fresh
        logger.info(f"[STREAK] {self.user_id} streak is now {streak} week(s)")
        return True

    def summary(self) -> dict:
        """Current week state, including derived totals."""
        week = self.week
        record = week.to_record()
        record["goal_achieved"] = week.goal_achieved
        return record


class DailyTracker:
    """Tracks one user's water, colors and fermented food for today."""

    def __init__(self, store: RecordStore, user_id: str):
        self.store = store
        self.user_id = user_id
        self._lock = threading.Lock()
        self._day: Optional[DailyAggregate] = None

    @property
    def day(self) -> DailyAggregate:
        if self._day is None:
            self.initialize()
        return self._day

    def initialize(self, now: Optional[datetime] = None) -> None:
        """Load today's stored record, or start an empty day."""
        now = _now(now)
        with self._lock:
            self._day = self._load_or_new(now)

    def _load_or_new(self, now: datetime) -> DailyAggregate:
        record = self.store.load_daily_data(self.user_id, format_date_key(now.date()))
        if record:
            logger.info(f"[DAILY] Loaded {record['id']}")
            return DailyAggregate.from_record(record)
        return daily_log.new_day(self.user_id, now.date())

    def _apply(self, transition, *args) -> DailyAggregate:
        day = self.day
        with self._lock:
            updated = transition(day, *args)
            if updated is day:
                logger.debug(f"[DAILY] {transition.__name__} was a no-op for {day.record_id}")
                return day
            self._day = updated
            self.store.save_daily_data(updated.to_record())
        return updated

    def check_for_day_reset(self, now: Optional[datetime] = None) -> bool:
        """
        Start a new day if ``now`` has crossed local midnight.

        Returns:
            True if the day was reset
        """
        now = _now(now)
        current = datetime.combine(self.day.date, datetime.min.time())
        if not should_reset_daily(now, current):
            return False
        with self._lock:
            self._day = self._load_or_new(now)
            self.store.save_daily_data(self._day.to_record())
        logger.info(f"[DAILY] Moved daily tracking to {self._day.record_id}")
        return True

    def increment_water(self) -> DailyAggregate:
        return self._apply(daily_log.increment_water)

    def decrement_water(self) -> DailyAggregate:
        return self._apply(daily_log.decrement_water)

    def set_water_glasses(self, count: int) -> DailyAggregate:
        return self._apply(daily_log.set_water_glasses, count)

    def add_color(self, color: FoodColor) -> DailyAggregate:
        return self._apply(daily_log.add_color, FoodColor(color))

    def mark_fermented_food(self) -> DailyAggregate:
        return self._apply(daily_log.mark_fermented_food)

    def update_from_food_instances(self, instances: List[FoodInstance]) -> DailyAggregate:
        """Recompute today's colors and fermented flag from the week's instances."""
        return self._apply(daily_log.recompute_from_instances, instances)

    def reset_daily(self) -> DailyAggregate:
        day = self.day
        with self._lock:
            self._day = daily_log.new_day(self.user_id, day.date)
            self.store.save_daily_data(self._day.to_record())
        logger.info(f"[DAILY] Manually reset {self._day.record_id}")
        return self._day

    def summary(self) -> dict:
        day = self.day
        record = day.to_record()
        record.update(
            water_goal_achieved=day.water_goal_achieved,
            colors_count=day.colors_count,
            all_colors_achieved=day.all_colors_achieved,
        )
        return record
