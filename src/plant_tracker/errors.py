"""Exceptions raised by the plant tracker."""


class PlantTrackerError(Exception):
    """Base class for plant tracker errors."""


class RecordStoreError(PlantTrackerError):
    """A record could not be read or written (I/O failure or corrupt data)."""


class OutsideCurrentWeekError(PlantTrackerError):
    """A food was logged for a moment outside the tracked week."""

    def __init__(self, logged_date, week_start):
        super().__init__(
            f"{logged_date.isoformat()} is not in the week of {week_start.date().isoformat()}"
        )
        self.logged_date = logged_date
        self.week_start = week_start
