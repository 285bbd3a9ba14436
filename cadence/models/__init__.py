"""Data models for cadence."""

from cadence.models.errors import InvalidScheduleError, CorruptOverrideWarning
from cadence.models.recurrence import RecurrenceRule, RecurrenceFrequency, Weekday, DaySchedulePreset
from cadence.models.instance import Instance, InstanceStatus, StatusOverride, RawStatusOverride
from cadence.models.period import DateRange
from cadence.models.analytics import (
    ActivityLevel,
    ActivityPoint,
    ActivitySeries,
    ActivitySummary,
    AdherenceTier,
    DayStatus,
    DayStatusEntry,
    PeriodStatistics,
    RecordStatistics,
    WeekBucket,
)
from cadence.models.record import TrackedRecord

__all__ = [
    "InvalidScheduleError",
    "CorruptOverrideWarning",
    "RecurrenceRule",
    "RecurrenceFrequency",
    "Weekday",
    "DaySchedulePreset",
    "Instance",
    "InstanceStatus",
    "StatusOverride",
    "RawStatusOverride",
    "DateRange",
    "ActivityLevel",
    "ActivityPoint",
    "ActivitySeries",
    "ActivitySummary",
    "AdherenceTier",
    "DayStatus",
    "DayStatusEntry",
    "PeriodStatistics",
    "RecordStatistics",
    "WeekBucket",
    "TrackedRecord",
]
