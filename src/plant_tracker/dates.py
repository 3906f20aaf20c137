"""
Calendar helpers for week and day boundaries.

Weeks run Monday to Sunday. All arithmetic is done on local wall-clock
time: naive datetimes are treated as local, aware datetimes keep their
own offset, so a user's "day" matches their physical calendar. Callers
that accept aware moments from outside (the trackers, the API) pass them
through to_local first so every stored moment is naive local time.
"""

from datetime import date, datetime, time, timedelta


def to_local(dt: datetime) -> datetime:
    """Convert an aware datetime to naive local wall-clock time; naive ones pass through."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone().replace(tzinfo=None)


def start_of_day(dt: datetime) -> datetime:
    """Return a new datetime at 00:00:00 on the same day."""
    return datetime.combine(dt.date(), time.min, tzinfo=dt.tzinfo)


def end_of_day(dt: datetime) -> datetime:
    """Return a new datetime at 23:59:59.999 on the same day."""
    return datetime.combine(dt.date(), time(23, 59, 59, 999000), tzinfo=dt.tzinfo)


def week_start(dt: datetime) -> datetime:
    """
    Get local midnight of the Monday on or before ``dt``.

    Args:
        dt: Any moment within the week

    Returns:
        Monday at 00:00:00 for that week
    """
    # weekday(): Monday=0 ... Sunday=6, so Sunday goes back six days
    monday = dt.date() - timedelta(days=dt.weekday())
    return datetime.combine(monday, time.min, tzinfo=dt.tzinfo)


def week_end(dt: datetime) -> datetime:
    """Get Sunday 23:59:59.999 of the week containing ``dt``."""
    return end_of_day(week_start(dt) + timedelta(days=6))


def is_same_day(a: datetime, b: datetime) -> bool:
    """True if both moments fall on the same calendar day, time ignored."""
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


def is_same_week(a: datetime, b: datetime) -> bool:
    """True if both moments fall within the same Monday-Sunday week."""
    return is_same_day(week_start(a), week_start(b))


def should_archive_week(now: datetime, current_week_start: datetime) -> bool:
    """True once ``now`` has crossed into a week after ``current_week_start``."""
    return not is_same_week(now, current_week_start)


def should_reset_daily(now: datetime, last_reset_date: datetime) -> bool:
    """True once ``now`` is on a different day than ``last_reset_date``."""
    return not is_same_day(now, last_reset_date)


def format_date_key(d: date) -> str:
    """Format a date as ``YYYY-MM-DD`` for record keys."""
    return d.strftime("%Y-%m-%d")


def parse_date_key(value: str) -> date:
    return datetime.strptime(value, "%Y-%m-%d").date()
