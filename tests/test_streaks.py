"""Tests for streaks, weekly buckets and activity summaries."""

import pytest
from datetime import date

from cadence.engine.streaks import (
    activity_level,
    activity_series_from_instances,
    activity_summary,
    current_streak,
    longest_streak,
    weekly_buckets,
)
from cadence.models.analytics import ActivityLevel, ActivityPoint, ActivitySeries
from cadence.models.instance import InstanceStatus
from cadence.models.period import DateRange


def _series(counts):
    return ActivitySeries.from_counts(counts)


class TestLongestStreak:
    """Longest run of consecutive active days."""

    def test_run_with_gap(self):
        series = _series({
            date(2024, 1, 1): 1,
            date(2024, 1, 2): 2,
            date(2024, 1, 3): 1,
            date(2024, 1, 5): 1,
        })
        assert longest_streak(series) == 3

    def test_empty(self):
        assert longest_streak(ActivitySeries()) == 0

    def test_zero_counts_break_runs(self):
        series = _series({
            date(2024, 1, 1): 1,
            date(2024, 1, 2): 0,
            date(2024, 1, 3): 1,
        })
        assert longest_streak(series) == 1

    def test_zero_day_splits_six_day_series(self):
        """Six consecutive days with a zero on day three: longest run is the last three."""
        series = _series({
            date(2024, 3, 1): 1,
            date(2024, 3, 2): 1,
            date(2024, 3, 3): 0,
            date(2024, 3, 4): 1,
            date(2024, 3, 5): 1,
            date(2024, 3, 6): 1,
        })
        assert longest_streak(series) == 3

    def test_only_zero_counts(self):
        assert longest_streak(_series({date(2024, 1, 1): 0})) == 0

    def test_crosses_month_boundary(self):
        series = _series({date(2024, 1, 31): 1, date(2024, 2, 1): 1, date(2024, 2, 2): 1})
        assert longest_streak(series) == 3

    def test_dates_must_increase(self):
        with pytest.raises(ValueError):
            ActivitySeries(points=[
                ActivityPoint(date=date(2024, 1, 2), count=1),
                ActivityPoint(date=date(2024, 1, 1), count=1),
            ])


class TestCurrentStreak:
    """Run of active days ending today (or yesterday)."""

    def test_ending_today(self):
        series = _series({date(2024, 1, 8): 1, date(2024, 1, 9): 1, date(2024, 1, 10): 2})
        assert current_streak(series, date(2024, 1, 10)) == 3

    def test_ending_yesterday(self):
        series = _series({date(2024, 1, 8): 1, date(2024, 1, 9): 1})
        assert current_streak(series, date(2024, 1, 10)) == 2

    def test_broken(self):
        series = _series({date(2024, 1, 7): 1, date(2024, 1, 8): 1})
        assert current_streak(series, date(2024, 1, 10)) == 0


class TestActivitySeries:
    def test_from_instances_counts_completed(self, make_instance):
        instances = [
            make_instance(InstanceStatus.COMPLETED, day=date(2024, 1, 2)),
            make_instance(InstanceStatus.COMPLETED, day=date(2024, 1, 1)),
            make_instance(InstanceStatus.COMPLETED, day=date(2024, 1, 2), time="20:00"),
            make_instance(InstanceStatus.MISSED, day=date(2024, 1, 3)),
        ]
        series = activity_series_from_instances(instances)
        assert [(p.date, p.count) for p in series.points] == [(date(2024, 1, 1), 1), (date(2024, 1, 2), 2)]
        assert series.count_on(date(2024, 1, 3)) == 0


class TestWeeklyBuckets:
    """Sunday-first weekly counts."""

    def test_buckets_oldest_first(self, make_instance):
        items = [
            make_instance(day=date(2024, 1, 2), duration_min=30),
            make_instance(day=date(2024, 1, 7), duration_min=40),
            make_instance(day=date(2024, 1, 10), duration_min=50),
            make_instance(day=date(2024, 1, 11), duration_min=999),  # after reference date
            make_instance(day=date(2023, 12, 1), duration_min=999),  # before oldest week
        ]
        buckets = weekly_buckets(items, weeks_back=3, reference_date=date(2024, 1, 10))
        assert [b.week_start for b in buckets] == [date(2023, 12, 24), date(2023, 12, 31), date(2024, 1, 7)]
        assert [b.week_end for b in buckets] == [date(2023, 12, 30), date(2024, 1, 6), date(2024, 1, 13)]
        assert [b.count for b in buckets] == [0, 1, 2]
        assert [b.avg_duration for b in buckets] == [0, 30, 45]

    def test_missing_duration_counts_as_zero(self, make_instance):
        items = [make_instance(day=date(2024, 1, 8), duration_min=60), make_instance(day=date(2024, 1, 9))]
        buckets = weekly_buckets(items, weeks_back=1, reference_date=date(2024, 1, 10))
        assert buckets[0].count == 2
        assert buckets[0].avg_duration == 30

    def test_no_weeks(self):
        assert weekly_buckets([], weeks_back=0, reference_date=date(2024, 1, 10)) == []


class TestActivitySummary:
    """Totals, success rate and levels over a period."""

    COUNTS = {
        date(2024, 1, 1): 1,
        date(2024, 1, 2): 2,
        date(2024, 1, 3): 3,
        date(2024, 1, 5): 1,
    }
    PERIOD = DateRange(start=date(2024, 1, 1), end=date(2024, 1, 10))

    def test_full_period(self):
        summary = activity_summary(_series(self.COUNTS), self.PERIOD)
        assert summary.total_entries == 7
        assert summary.active_days == 4
        assert summary.elapsed_days == 10
        assert summary.average_per_day == 0.7
        assert summary.success_rate == 40
        assert summary.longest_streak == 3
        assert summary.most_active_day == date(2024, 1, 3)
        assert summary.level_counts == {
            ActivityLevel.HIGH: 1,
            ActivityLevel.MEDIUM: 1,
            ActivityLevel.LOW: 2,
            ActivityLevel.NONE: 6,
        }

    def test_days_after_today_not_elapsed(self):
        summary = activity_summary(_series(self.COUNTS), self.PERIOD, today=date(2024, 1, 5))
        assert summary.elapsed_days == 5
        assert summary.success_rate == 80

    def test_no_activity(self):
        summary = activity_summary(ActivitySeries(), self.PERIOD)
        assert summary.total_entries == 0
        assert summary.most_active_day is None
        assert summary.success_rate == 0

    def test_most_active_tie_goes_to_earliest(self):
        summary = activity_summary(_series({date(2024, 1, 4): 2, date(2024, 1, 2): 2}), self.PERIOD)
        assert summary.most_active_day == date(2024, 1, 2)

    @pytest.mark.parametrize("count,level", [
        (0, ActivityLevel.NONE),
        (1, ActivityLevel.LOW),
        (2, ActivityLevel.MEDIUM),
        (3, ActivityLevel.HIGH),
        (10, ActivityLevel.HIGH),
    ])
    def test_activity_level(self, count, level):
        assert activity_level(count) == level
