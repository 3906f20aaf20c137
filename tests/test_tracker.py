"""
Unit tests for the weekly and daily trackers.

These tests verify:
1. Trackers load and persist through the record store
2. Week rollover archives the closing week and recomputes the streak
3. Day reset starts a fresh day at local midnight
4. Food logging keeps daily colors in step with the week

Usage:
    pytest tests/test_tracker.py -v
"""
import threading
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from plant_tracker.errors import OutsideCurrentWeekError, RecordStoreError
from plant_tracker.tracker import DailyTracker, WeeklyTracker
from plant_tracker.types import ArchivedWeek, FoodCategory, FoodColor

from conftest import MONDAY


@pytest.fixture
def weekly(store):
    tracker = WeeklyTracker(store, "user123")
    tracker.initialize(now=MONDAY)
    return tracker


@pytest.fixture
def daily(store):
    tracker = DailyTracker(store, "user123")
    tracker.initialize(now=MONDAY)
    return tracker


def log_points(tracker, count: int, start: datetime = MONDAY, prefix: str = "veg"):
    for i in range(count):
        tracker.add_food(f"{prefix}_{i}", f"Veg {i}", FoodCategory.VEGETABLES, FoodColor.GREEN, logged_date=start)


# ============================================================================
# Weekly Tracker Tests
# ============================================================================


class TestWeeklyTracker:
    """Test weekly tracker state and persistence."""

    def test_new_week(self, weekly):
        week = weekly.week

        assert week.week_start == datetime(2025, 1, 6)
        assert week.week_end == datetime(2025, 1, 12, 23, 59, 59, 999000)
        assert week.food_instances == []
        assert week.total_points == 0
        assert week.current_streak == 0

    def test_add_food_persists(self, weekly, store):
        result = weekly.add_food("kale", "Kale", FoodCategory.VEGETABLES, FoodColor.GREEN, logged_date=MONDAY)

        assert result.is_new_food
        record = store.load_weekly_data("user123")
        assert record["food_instances"][0]["instance_id"] == result.added.instance_id
        assert record["total_points"] == 1.0

    def test_accepts_raw_enum_values(self, weekly):
        result = weekly.add_food("oats", "Oats", "whole_grains", "white_tan", logged_date=MONDAY)

        assert result.added.category is FoodCategory.WHOLE_GRAINS
        assert result.added.color is FoodColor.WHITE_TAN

    def test_duplicate_not_persisted(self, weekly, store):
        weekly.add_food("kale", "Kale", FoodCategory.VEGETABLES, FoodColor.GREEN, logged_date=MONDAY)
        store.save_weekly_data = MagicMock()

        result = weekly.add_food("kale", "Kale", FoodCategory.VEGETABLES, FoodColor.GREEN, logged_date=MONDAY)

        assert result.is_duplicate_instance
        store.save_weekly_data.assert_not_called()
        assert len(weekly.food_instances) == 1

    def test_points_and_breakdown(self, weekly):
        weekly.add_food("kale", "Kale", FoodCategory.VEGETABLES, FoodColor.GREEN, logged_date=MONDAY)
        weekly.add_food("kale", "Kale", FoodCategory.VEGETABLES, FoodColor.BLUE_PURPLE, logged_date=MONDAY)
        for herb in ["basil", "thyme", "cumin"]:
            weekly.add_food(herb, herb.title(), FoodCategory.HERBS_SPICES, FoodColor.GREEN, logged_date=MONDAY)

        week = weekly.week
        assert week.total_points == 1.75
        assert week.category_breakdown[FoodCategory.HERBS_SPICES] == 0.75
        assert set(week.colors_achieved) == {FoodColor.GREEN, FoodColor.BLUE_PURPLE}
        assert not week.goal_achieved

    def test_reload_from_store(self, weekly, store):
        weekly.add_food("kale", "Kale", FoodCategory.VEGETABLES, FoodColor.GREEN, logged_date=MONDAY)

        reloaded = WeeklyTracker(store, "user123")
        reloaded.initialize(now=MONDAY + timedelta(days=2))

        assert [i.food_id for i in reloaded.food_instances] == ["kale"]

    def test_remove_and_update(self, weekly):
        added = weekly.add_food("pepper", "Pepper", FoodCategory.VEGETABLES, FoodColor.RED, logged_date=MONDAY).added

        updated = weekly.update_food(added.instance_id, color=FoodColor.YELLOW)
        assert updated.color == FoodColor.YELLOW
        assert weekly.update_food("missing", color=FoodColor.RED) is None

        weekly.remove_food(added.instance_id)
        assert weekly.food_instances == []

    def test_reset_week_keeps_streak(self, weekly):
        weekly.set_streak(4)
        log_points(weekly, 3)

        weekly.reset_week(now=MONDAY + timedelta(days=1))

        assert weekly.food_instances == []
        assert weekly.week.current_streak == 4

    def test_storage_fault_propagates(self, weekly, store):
        store.save_weekly_data = MagicMock(side_effect=RecordStoreError("disk full"))

        with pytest.raises(RecordStoreError):
            weekly.add_food("kale", "Kale", FoodCategory.VEGETABLES, FoodColor.GREEN, logged_date=MONDAY)


class TestWeekRollover:
    """Test archiving and streak recomputation at the week boundary."""

    def test_no_rollover_within_week(self, weekly):
        assert not weekly.check_for_week_rollover(now=datetime(2025, 1, 12, 23, 59))

    def test_rollover_archives_and_resets(self, weekly, store):
        log_points(weekly, 30)

        rolled = weekly.check_for_week_rollover(now=datetime(2025, 1, 13, 0, 1))

        assert rolled
        assert weekly.week.week_start == datetime(2025, 1, 13)
        assert weekly.food_instances == []
        assert weekly.week.current_streak == 1
        history = weekly.archived_weeks()
        assert len(history) == 1
        assert history[0].total_points == 30
        assert history[0].goal_achieved

    def test_streak_builds_over_weeks(self, weekly):
        for offset in range(3):
            start = MONDAY + timedelta(weeks=offset)
            log_points(weekly, 31, start=start, prefix=f"w{offset}")
            weekly.check_for_week_rollover(now=start + timedelta(weeks=1))

        assert weekly.week.current_streak == 3

    def test_missed_goal_resets_streak(self, weekly):
        log_points(weekly, 30)
        weekly.check_for_week_rollover(now=MONDAY + timedelta(weeks=1))
        log_points(weekly, 5, start=MONDAY + timedelta(weeks=1), prefix="w1")

        weekly.check_for_week_rollover(now=MONDAY + timedelta(weeks=2))

        assert weekly.week.current_streak == 0

    def test_skipped_week_breaks_streak(self, weekly, store):
        store.save_archived_week(
            ArchivedWeek(
                week_start=datetime(2024, 12, 23),
                week_end=datetime(2024, 12, 29, 23, 59, 59, 999000),
                total_points=40,
                goal_achieved=True,
            ).to_record("user123")
        )
        log_points(weekly, 30)

        weekly.check_for_week_rollover(now=MONDAY + timedelta(weeks=1))

        assert weekly.week.current_streak == 1

    def test_initialize_rolls_stale_week(self, weekly, store):
        log_points(weekly, 30)

        later = WeeklyTracker(store, "user123")
        later.initialize(now=MONDAY + timedelta(weeks=1, days=2))

        assert later.week.week_start == datetime(2025, 1, 13)
        assert later.week.current_streak == 1


# ============================================================================
# Daily Tracker Tests
# ============================================================================


class TestDailyTracker:
    """Test daily tracker state and persistence."""

    def test_water_actions(self, daily, store):
        daily.increment_water()
        daily.increment_water()
        daily.decrement_water()

        assert daily.day.water_glasses == 1
        assert store.load_daily_data("user123", "2025-01-06")["water_glasses"] == 1

    def test_set_water_out_of_range_ignored(self, daily):
        daily.set_water_glasses(8)
        daily.set_water_glasses(25)

        assert daily.day.water_glasses == 8
        assert daily.day.water_goal_achieved

    def test_add_color_and_fermented(self, daily):
        daily.add_color("red")
        daily.add_color(FoodColor.RED)
        daily.mark_fermented_food()

        assert daily.day.colors_eaten == [FoodColor.RED]
        assert daily.day.fermented_food_eaten

    def test_reload_same_day(self, daily, store):
        daily.set_water_glasses(6)

        reloaded = DailyTracker(store, "user123")
        reloaded.initialize(now=MONDAY + timedelta(hours=10))

        assert reloaded.day.water_glasses == 6

    def test_day_reset_at_midnight(self, daily):
        daily.set_water_glasses(6)
        daily.mark_fermented_food()

        assert not daily.check_for_day_reset(now=datetime(2025, 1, 6, 23, 59))
        assert daily.check_for_day_reset(now=datetime(2025, 1, 7, 0, 0))

        assert daily.day.date == datetime(2025, 1, 7).date()
        assert daily.day.water_glasses == 0
        assert not daily.day.fermented_food_eaten

    def test_manual_reset(self, daily):
        daily.set_water_glasses(3)

        daily.reset_daily()

        assert daily.day.water_glasses == 0
        assert daily.day.colors_eaten == []

    def test_summary(self, daily):
        daily.set_water_glasses(9)

        summary = daily.summary()

        assert summary["id"] == "user123-2025-01-06"
        assert summary["water_goal_achieved"]
        assert summary["colors_count"] == 0
        assert not summary["all_colors_achieved"]


class TestFoodLoggingFlow:
    """Test the add-food flow across both trackers."""

    def test_logged_foods_update_daily_colors(self, weekly, daily):
        noon = datetime(2025, 1, 6, 12, 0)
        kimchi = weekly.add_food(
            "kimchi", "Kimchi", FoodCategory.VEGETABLES, FoodColor.RED, is_fermented=True, logged_date=noon
        )
        weekly.add_food("carrot", "Carrot", FoodCategory.VEGETABLES, FoodColor.ORANGE, logged_date=noon)
        weekly.add_food("carrot", "Carrot", FoodCategory.VEGETABLES, FoodColor.ORANGE, logged_date=noon)

        daily.update_from_food_instances(weekly.food_instances)

        assert kimchi.is_new_food
        assert set(daily.day.colors_eaten) == {FoodColor.RED, FoodColor.ORANGE}
        assert daily.day.fermented_food_eaten
        assert weekly.week.total_points == 2


class TestTrackerEdges:
    """Test week membership, missed weeks and concurrent writers."""

    def test_food_from_another_week_rejected(self, weekly, store):
        with pytest.raises(OutsideCurrentWeekError):
            weekly.add_food(
                "kale", "Kale", FoodCategory.VEGETABLES, FoodColor.GREEN, logged_date=MONDAY - timedelta(days=30)
            )

        assert weekly.food_instances == []
        assert weekly.week.total_points == 0
        assert store.load_weekly_data("user123")["food_instances"] == []

    def test_sunday_night_is_same_week(self, weekly):
        result = weekly.add_food(
            "kale", "Kale", FoodCategory.VEGETABLES, FoodColor.GREEN, logged_date=datetime(2025, 1, 12, 23, 59)
        )

        assert result.is_new_food

    def test_aware_logged_date_stored_as_local(self, weekly):
        moment = datetime(2025, 1, 8, 12, 0, tzinfo=timezone.utc)

        added = weekly.add_food("kale", "Kale", FoodCategory.VEGETABLES, FoodColor.GREEN, logged_date=moment).added

        assert added.logged_date.tzinfo is None
        assert added.logged_date == datetime.fromtimestamp(moment.timestamp())

    def test_reload_after_absence_ends_streak(self, weekly, store):
        log_points(weekly, 30)
        weekly.check_for_week_rollover(now=MONDAY + timedelta(weeks=1))
        log_points(weekly, 30, start=MONDAY + timedelta(weeks=1), prefix="w1")
        assert weekly.week.current_streak == 1

        # Nothing logged in the weeks of 20 and 27 January
        later = WeeklyTracker(store, "user123")
        later.initialize(now=MONDAY + timedelta(weeks=4, days=1))

        assert later.week.week_start == datetime(2025, 2, 3)
        assert later.week.current_streak == 0
        history = later.archived_weeks()
        assert [w.week_start for w in history] == [
            datetime(2025, 1, 27),
            datetime(2025, 1, 20),
            datetime(2025, 1, 13),
            datetime(2025, 1, 6),
        ]
        assert [w.goal_achieved for w in history] == [False, False, True, True]
        assert history[0].total_points == 0

    def test_missed_week_does_not_overwrite_archive(self, weekly, store):
        kept = ArchivedWeek(
            week_start=datetime(2025, 1, 13),
            week_end=datetime(2025, 1, 19, 23, 59, 59, 999000),
            total_points=35,
            goal_achieved=True,
        )
        store.save_archived_week(kept.to_record("user123"))

        weekly.check_for_week_rollover(now=MONDAY + timedelta(weeks=3))

        history = {w.week_start: w for w in weekly.archived_weeks()}
        assert history[datetime(2025, 1, 13)].goal_achieved
        assert not history[datetime(2025, 1, 20)].goal_achieved

    def test_add_during_rollover_lands_in_new_week(self, weekly, store):
        next_monday = MONDAY + timedelta(weeks=1)
        real_save = store.save_archived_week
        adder = {}

        def save_then_race(record):
            # Another request logs a food while the rollover holds the lock
            if not adder:
                adder["thread"] = threading.Thread(
                    target=weekly.add_food,
                    args=("kale", "Kale", FoodCategory.VEGETABLES, FoodColor.GREEN),
                    kwargs={"logged_date": next_monday},
                )
                adder["thread"].start()
            real_save(record)

        store.save_archived_week = save_then_race
        weekly.check_for_week_rollover(now=next_monday)
        adder["thread"].join(timeout=5)

        assert [i.food_id for i in weekly.food_instances] == ["kale"]
        assert weekly.week.week_start == datetime(2025, 1, 13)
        stored = store.load_weekly_data("user123")
        assert [i["food_id"] for i in stored["food_instances"]] == ["kale"]
