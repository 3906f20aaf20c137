#!/usr/bin/env python3
"""
Seed the record store with archived weeks for a user.

Writes a run of consecutive past weeks ending last week, so the streak
and history endpoints have something to show in a demo.

Usage:
    python scripts/seed_history.py --weeks 6 --points 32 --missed 4
"""
import argparse
import os
import sys
from datetime import datetime, timedelta
from decimal import Decimal
from pathlib import Path

from dotenv import load_dotenv

# Base directory (project root)
BASE_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(BASE_DIR / "src"))

from plant_tracker.dates import week_end, week_start  # noqa: E402
from plant_tracker.store import RecordStore  # noqa: E402
from plant_tracker.streak import calculate_streak, did_achieve_goal, sort_weeks_by_most_recent  # noqa: E402
from plant_tracker.types import ArchivedWeek  # noqa: E402


def build_weeks(count: int, points: Decimal, missed: set, now: datetime) -> list:
    """
    Build ``count`` archived weeks ending with the week before ``now``.

    Args:
        count: Number of weeks to create
        points: Points scored in a successful week
        missed: 1-based week offsets (1 = last week) that fall short of the goal
        now: Reference time

    Returns:
        Archived weeks, most recent first
    """
    this_monday = week_start(now)
    weeks = []
    for offset in range(1, count + 1):
        start = this_monday - timedelta(weeks=offset)
        total = Decimal("12.5") if offset in missed else points
        weeks.append(
            ArchivedWeek(
                week_start=start,
                week_end=week_end(start),
                total_points=total,
                goal_achieved=did_achieve_goal(total),
            )
        )
    return weeks


def main():
    """Seed archived weeks into the configured record store."""
    load_dotenv()

    parser = argparse.ArgumentParser(description="Seed archived plant tracker weeks")
    parser.add_argument("--user", default=os.getenv("PLANT_TRACKER_DEFAULT_USER_ID", "default-user"))
    parser.add_argument(
        "--db",
        default=os.path.join(os.getenv("PLANT_TRACKER_DATA_PATH", str(BASE_DIR)), "plant_tracker.db"),
    )
    parser.add_argument("--weeks", type=int, default=6)
    parser.add_argument("--points", type=Decimal, default=Decimal("31.25"))
    parser.add_argument("--missed", type=int, nargs="*", default=[], help="Week offsets that miss the goal")
    args = parser.parse_args()

    print("=" * 60)
    print("Plant Tracker History Seed Script")
    print("=" * 60)
    print(f"\nRecord store: {args.db}\n")

    store = RecordStore(args.db)
    weeks = build_weeks(args.weeks, args.points, set(args.missed), datetime.now())
    for week in weeks:
        store.save_archived_week(week.to_record(args.user))
        status = "goal met" if week.goal_achieved else "goal missed"
        print(f"  {week.week_start.date()}  {week.total_points:>6} points  {status}")

    history = [ArchivedWeek.from_record(r) for r in store.list_archived_weeks(args.user)]
    streak = calculate_streak(sort_weeks_by_most_recent(history))
    store.close()

    print()
    print("=" * 60)
    print(f"Complete! {len(weeks)} weeks written for {args.user}, current streak {streak}")
    print("=" * 60)


if __name__ == "__main__":
    main()
