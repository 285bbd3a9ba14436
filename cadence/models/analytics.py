"""Derived analytics models for cadence.

None of these are stored; they are recomputed from records and overrides on demand.
"""

from datetime import date
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, computed_field, model_validator

from cadence.models.constants import TIER_EXCELLENT_MIN, TIER_FAIR_MIN, TIER_GOOD_MIN


class DayStatus(str, Enum):
    """Aggregate status of all instances due on one day."""
    NO_INSTANCES = "no_instances"
    ALL_COMPLETED = "all_completed"
    HAS_MISSED = "has_missed"
    UNMARKED = "unmarked"


class AdherenceTier(str, Enum):
    """Qualitative adherence level."""
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"

    @classmethod
    def for_percentage(cls, percentage: int) -> "AdherenceTier":
        if percentage >= TIER_EXCELLENT_MIN:
            return cls.EXCELLENT
        if percentage >= TIER_GOOD_MIN:
            return cls.GOOD
        if percentage >= TIER_FAIR_MIN:
            return cls.FAIR
        return cls.POOR


def adherence_percentage(completed: int, scheduled: int) -> int:
    """Percentage of scheduled instances completed, rounded half-up.

    Args:
        completed: Completed instance count
        scheduled: Scheduled instance count

    Returns:
        Integer 0-100; 0 when nothing was scheduled
    """
    if scheduled <= 0:
        return 0
    # Integer half-up rounding of 100 * completed / scheduled
    return (200 * completed + scheduled) // (2 * scheduled)


class PeriodStatistics(BaseModel):
    """Instance counts and adherence over a date range."""

    completed: int = Field(0, ge=0)
    missed: int = Field(0, ge=0)
    unmarked: int = Field(0, ge=0)

    @computed_field
    @property
    def scheduled(self) -> int:
        return self.completed + self.missed + self.unmarked

    @computed_field
    @property
    def adherence_percentage(self) -> int:
        return adherence_percentage(self.completed, self.scheduled)

    @computed_field
    @property
    def adherence_tier(self) -> Optional[AdherenceTier]:
        # A tier means nothing without scheduled instances
        if self.scheduled == 0:
            return None
        return AdherenceTier.for_percentage(self.adherence_percentage)


class RecordStatistics(BaseModel):
    """Period statistics for one recurring record."""

    record_id: str
    statistics: PeriodStatistics


class DayStatusEntry(BaseModel):
    date: date
    status: DayStatus


class ActivityPoint(BaseModel):
    date: date
    count: int = Field(..., ge=0)


class ActivitySeries(BaseModel):
    """Per-day activity counts; dates strictly increasing, gaps mean zero."""

    points: List[ActivityPoint] = Field(default_factory=list)

    @model_validator(mode="after")
    def _validate_points(self) -> "ActivitySeries":
        for prev, cur in zip(self.points, self.points[1:]):
            if cur.date <= prev.date:
                raise ValueError("activity dates must be strictly increasing")
        return self

    @classmethod
    def from_dates(cls, dates) -> "ActivitySeries":
        """Count occurrences per day (one entry per occurrence, any order)."""
        counts: Dict[date, int] = {}
        for d in dates:
            counts[d] = counts.get(d, 0) + 1
        return cls(points=[ActivityPoint(date=d, count=counts[d]) for d in sorted(counts)])

    @classmethod
    def from_counts(cls, counts: Dict[date, int]) -> "ActivitySeries":
        return cls(points=[ActivityPoint(date=d, count=counts[d]) for d in sorted(counts)])

    def count_on(self, day: date) -> int:
        for p in self.points:
            if p.date == day:
                return p.count
        return 0

    def active_dates(self) -> List[date]:
        return [p.date for p in self.points if p.count > 0]


class ActivityLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NONE = "none"


class ActivitySummary(BaseModel):
    """Activity rollup over a period (journal-style statistics)."""

    total_entries: int
    active_days: int
    elapsed_days: int
    average_per_day: float
    success_rate: int = Field(..., description="Active days over elapsed days, percent")
    longest_streak: int
    most_active_day: Optional[date] = None
    level_counts: Dict[ActivityLevel, int] = Field(default_factory=dict)


class WeekBucket(BaseModel):
    """Instance count and average duration for one Sunday-start week."""

    week_start: date
    week_end: date
    count: int = 0
    avg_duration: int = 0
