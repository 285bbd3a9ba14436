"""Streak and trend calculations for cadence.

Works on sparse per-day activity series: a date missing from a series counts as
a day without activity.
"""

from datetime import date, timedelta
from typing import Iterable, List, Optional

from cadence.engine.calendar import daterange, week_start
from cadence.models.analytics import (
    ActivityLevel,
    ActivitySeries,
    ActivitySummary,
    WeekBucket,
    adherence_percentage,
)
from cadence.models.constants import ACTIVITY_HIGH_MIN, ACTIVITY_LOW, ACTIVITY_MEDIUM
from cadence.models.instance import Instance, InstanceStatus
from cadence.models.period import DateRange


def longest_streak(series: ActivitySeries) -> int:
    """Longest run of calendar-consecutive days with count > 0.

    Args:
        series: Activity series (dates strictly increasing)

    Returns:
        Length of the longest run, 0 for a series without activity
    """
    active = series.active_dates()
    if not active:
        return 0

    longest = 1
    current = 1
    for prev, cur in zip(active, active[1:]):
        if (cur - prev).days == 1:
            current += 1
            longest = max(longest, current)
        else:
            current = 1
    return longest


def current_streak(series: ActivitySeries, today: date) -> int:
    """Run of active days ending today.

    A run ending yesterday still counts while today has no activity yet.
    """
    active = set(series.active_dates())
    cursor = today if today in active else today - timedelta(days=1)
    streak = 0
    while cursor in active:
        streak += 1
        cursor = cursor - timedelta(days=1)
    return streak


def activity_series_from_instances(
    instances: Iterable[Instance],
    status: InstanceStatus = InstanceStatus.COMPLETED,
) -> ActivitySeries:
    """Per-day count of instances with the given status."""
    return ActivitySeries.from_dates(i.date for i in instances if i.status == status)


def weekly_buckets(items: Iterable, weeks_back: int, reference_date: date) -> List[WeekBucket]:
    """Per-week counts and average durations, oldest week first.

    The newest bucket is the Sunday-first week containing `reference_date`;
    items dated after `reference_date` are ignored. Items need a `date` and may
    carry a `duration_min`; the average is total duration over item count,
    floored, and 0 for an empty week.

    Args:
        items: Instances or sessions
        weeks_back: Number of weeks to report
        reference_date: Usually today

    Returns:
        `weeks_back` WeekBucket objects
    """
    if weeks_back <= 0:
        return []
    newest_start = week_start(reference_date)
    oldest_start = newest_start - timedelta(weeks=weeks_back - 1)

    counts = [0] * weeks_back
    durations = [0] * weeks_back
    for item in items:
        d = item.date
        if d > reference_date or d < oldest_start:
            continue
        idx = (d - oldest_start).days // 7
        counts[idx] += 1
        duration = getattr(item, "duration_min", None)
        if duration:
            durations[idx] += duration

    buckets: List[WeekBucket] = []
    for idx in range(weeks_back):
        start = oldest_start + timedelta(weeks=idx)
        count = counts[idx]
        buckets.append(
            WeekBucket(
                week_start=start,
                week_end=start + timedelta(days=6),
                count=count,
                avg_duration=durations[idx] // count if count > 0 else 0,
            )
        )
    return buckets


def activity_level(count: int) -> ActivityLevel:
    if count >= ACTIVITY_HIGH_MIN:
        return ActivityLevel.HIGH
    if count == ACTIVITY_MEDIUM:
        return ActivityLevel.MEDIUM
    if count == ACTIVITY_LOW:
        return ActivityLevel.LOW
    return ActivityLevel.NONE


def activity_summary(
    series: ActivitySeries,
    date_range: DateRange,
    today: Optional[date] = None,
) -> ActivitySummary:
    """Totals, success rate and streak for a period.

    Success rate is active days over elapsed days in the period. With `today`,
    days after today are not counted as elapsed.
    """
    end = date_range.end if today is None else min(date_range.end, today)
    days = list(daterange(date_range.start, end))
    elapsed = len(days)

    counts = {p.date: p.count for p in series.points if date_range.start <= p.date <= end}
    total_entries = sum(counts.values())
    active_days = sum(1 for c in counts.values() if c > 0)

    level_counts = {level: 0 for level in ActivityLevel}
    for day in days:
        level_counts[activity_level(counts.get(day, 0))] += 1

    most_active_day = None
    if active_days:
        # Earliest day wins ties
        most_active_day = max(sorted(counts), key=lambda d: counts[d])

    return ActivitySummary(
        total_entries=total_entries,
        active_days=active_days,
        elapsed_days=elapsed,
        average_per_day=round(total_entries / elapsed, 1) if elapsed else 0.0,
        success_rate=adherence_percentage(active_days, elapsed),
        longest_streak=longest_streak(ActivitySeries.from_counts(counts)),
        most_active_day=most_active_day,
        level_counts=level_counts,
    )
