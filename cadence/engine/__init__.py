"""Schedule and analytics engine for cadence."""

from cadence.engine.calendar import Clock, SystemClock, FixedClock, weekday_number, week_days, month_grid
from cadence.engine.overrides import OverrideIndex, parse_override
from cadence.engine.schedule import is_due, instances_for_date, expand_record, expand_records, upcoming_instances
from cadence.engine.status import day_status, cycle_status, day_statuses, bulk_status_writes
from cadence.engine.analytics import statistics, per_record_breakdown, rank_breakdown, adherence_tier
from cadence.engine.streaks import longest_streak, current_streak, weekly_buckets, activity_summary

__all__ = [
    "Clock",
    "SystemClock",
    "FixedClock",
    "weekday_number",
    "week_days",
    "month_grid",
    "OverrideIndex",
    "parse_override",
    "is_due",
    "instances_for_date",
    "expand_record",
    "expand_records",
    "upcoming_instances",
    "day_status",
    "cycle_status",
    "day_statuses",
    "bulk_status_writes",
    "statistics",
    "per_record_breakdown",
    "rank_breakdown",
    "adherence_tier",
    "longest_streak",
    "current_streak",
    "weekly_buckets",
    "activity_summary",
]
