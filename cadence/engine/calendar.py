"""Calendar helpers and clock for cadence.

All weekday arithmetic uses a fixed Sunday-first week (Sunday=1 ... Saturday=7)
on the proleptic Gregorian calendar of `datetime.date`, independent of locale.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta
from typing import Iterable, List

from cadence.models.constants import MONTH_GRID_DAYS
from cadence.models.recurrence import Weekday

FIRST_WEEKDAY = Weekday.SUNDAY


class Clock(ABC):
    """Source of the current date and time."""

    @abstractmethod
    def now(self) -> datetime:
        ...

    def today(self) -> date:
        return self.now().date()


class SystemClock(Clock):
    """Local wall-clock time of the host."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock(Clock):
    """Always returns the same instant (tests, replays)."""

    def __init__(self, instant: datetime):
        self.instant = instant

    def now(self) -> datetime:
        return self.instant


def weekday_number(day: date) -> int:
    """Sunday=1 ... Saturday=7."""
    # isoweekday: Monday=1 ... Sunday=7
    return day.isoweekday() % 7 + 1


def daterange(start: date, end: date) -> Iterable[date]:
    """Every date from start to end, both inclusive."""
    cur = start
    while cur <= end:
        yield cur
        cur = cur + timedelta(days=1)


def week_start(day: date) -> date:
    """The Sunday on or before `day`."""
    return day - timedelta(days=weekday_number(day) - FIRST_WEEKDAY)


def week_days(day: date) -> List[date]:
    """The seven days of the Sunday-first week containing `day`."""
    start = week_start(day)
    return [start + timedelta(days=i) for i in range(7)]


def month_grid(day: date) -> List[date]:
    """Six calendar rows for the month containing `day`, starting on a Sunday."""
    start = week_start(day.replace(day=1))
    return [start + timedelta(days=i) for i in range(MONTH_GRID_DAYS)]
