"""Recurrence models for cadence.

Canonical representation of when a tracked record (e.g. a medication) is due.
Weekday numbers follow a fixed Sunday=1 ... Saturday=7 convention that does not
depend on the host locale.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Iterable, List, Optional

from pydantic import BaseModel, Field, model_validator

from cadence.models.constants import TIME_FORMAT
from cadence.models.errors import InvalidScheduleError


class RecurrenceFrequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    CUSTOM = "custom"


class Weekday(int, Enum):
    """Weekday numbers, Sunday first."""

    SUNDAY = 1
    MONDAY = 2
    TUESDAY = 3
    WEDNESDAY = 4
    THURSDAY = 5
    FRIDAY = 6
    SATURDAY = 7


class DaySchedulePreset(str, Enum):
    """Day selections offered when a medication is added."""

    EVERYDAY = "everyday"
    WEEKDAYS = "weekdays"
    WEEKENDS = "weekends"
    CUSTOM = "custom"


_PRESET_DAYS = {
    DaySchedulePreset.EVERYDAY: list(Weekday),
    DaySchedulePreset.WEEKDAYS: [
        Weekday.MONDAY,
        Weekday.TUESDAY,
        Weekday.WEDNESDAY,
        Weekday.THURSDAY,
        Weekday.FRIDAY,
    ],
    DaySchedulePreset.WEEKENDS: [Weekday.SUNDAY, Weekday.SATURDAY],
}


def normalize_time(value: str) -> str:
    """Parse a time-of-day string and return it as zero-padded HH:MM."""
    try:
        return datetime.strptime(str(value).strip(), TIME_FORMAT).strftime(TIME_FORMAT)
    except ValueError:
        raise InvalidScheduleError(f"Invalid time of day: {value!r}")


def _dedupe(values: Iterable) -> list:
    # Deduplicate but preserve order
    seen = set()
    out = []
    for v in values:
        if v not in seen:
            seen.add(v)
            out.append(v)
    return out


class RecurrenceRule(BaseModel):
    """When a recurring record is due.

    Notes:
    - DAILY rules ignore `weekdays`.
    - WEEKLY rules carry exactly one weekday; CUSTOM rules one or more.
    - `active_until`, when present, is inclusive.
    """

    frequency: RecurrenceFrequency
    weekdays: List[Weekday] = Field(default_factory=list, description="Sunday=1 ... Saturday=7")
    active_from: date
    active_until: Optional[date] = None
    times: List[str] = Field(..., description="Times of day (HH:MM), in display order")

    @model_validator(mode="after")
    def _validate_rule(self) -> "RecurrenceRule":
        if not self.times:
            raise InvalidScheduleError("A schedule needs at least one time of day")
        self.times = _dedupe(normalize_time(t) for t in self.times)
        self.weekdays = _dedupe(self.weekdays)

        if self.frequency == RecurrenceFrequency.WEEKLY and len(self.weekdays) != 1:
            raise InvalidScheduleError("A weekly schedule needs exactly one weekday")
        if self.frequency == RecurrenceFrequency.CUSTOM and not self.weekdays:
            raise InvalidScheduleError("A custom schedule needs at least one weekday")

        if self.active_until is not None and self.active_until < self.active_from:
            raise InvalidScheduleError("active_until must be >= active_from")
        return self

    @classmethod
    def from_preset(
        cls,
        preset: DaySchedulePreset,
        *,
        active_from: date,
        times: List[str],
        active_until: Optional[date] = None,
        weekdays: Optional[List[Weekday]] = None,
    ) -> "RecurrenceRule":
        """Build a CUSTOM rule from a day-schedule preset.

        `weekdays` is only read for the CUSTOM preset.
        """
        preset = DaySchedulePreset(preset)
        days = list(weekdays or []) if preset == DaySchedulePreset.CUSTOM else _PRESET_DAYS[preset]
        return cls(
            frequency=RecurrenceFrequency.CUSTOM,
            weekdays=days,
            active_from=active_from,
            active_until=active_until,
            times=times,
        )
