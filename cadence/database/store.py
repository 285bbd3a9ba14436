"""Record store for cadence.

`TrackerStore` is the one object callers use to read records and overrides and
to write statuses. It is constructed explicitly around a session (one per
request or per process) and passed to whoever needs it; there is no global
instance. Every read recomputes from the database: nothing is cached.
"""

import logging
import uuid
from datetime import date, datetime, timedelta
from typing import List, Optional

from sqlalchemy.orm import Session

from cadence.database.status_override_repository import StatusOverrideRepository
from cadence.database.tracked_record_repository import TrackedRecordRepository
from cadence.engine import analytics, schedule, status as status_engine, streaks
from cadence.engine.calendar import Clock, SystemClock
from cadence.engine.overrides import OverrideIndex
from cadence.models.analytics import ActivitySeries, DayStatus, PeriodStatistics
from cadence.models.constants import STREAK_HISTORY_DAYS, UPCOMING_WINDOW_HOURS
from cadence.models.instance import Instance, InstanceStatus, RawStatusOverride
from cadence.models.period import DateRange
from cadence.models.record import TrackedRecord
from cadence.models.recurrence import RecurrenceRule, normalize_time

logger = logging.getLogger(__name__)


class TrackerStore:
    """Reads snapshots for the engine and applies status writes."""

    def __init__(self, db: Session, clock: Optional[Clock] = None):
        self.db = db
        self.clock = clock or SystemClock()
        self.records = TrackedRecordRepository(db)
        self.overrides = StatusOverrideRepository(db)

    # Record store contract

    def list_recurring_definitions(self) -> List[TrackedRecord]:
        return self.records.list_active()

    def list_status_overrides(self, date_range: Optional[DateRange] = None) -> List[RawStatusOverride]:
        if date_range is None:
            return self.overrides.list_raw()
        return self.overrides.list_raw(start=date_range.start, end=date_range.end)

    def upsert_status_override(self, parent_id: str, day: date, time: str, status: InstanceStatus) -> None:
        self.overrides.upsert(parent_id, day, normalize_time(time), status)

    # Records

    def create_record(
        self,
        *,
        name: str,
        rule: RecurrenceRule,
        dosage: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> TrackedRecord:
        now = datetime.utcnow()
        record = TrackedRecord(
            id=str(uuid.uuid4()),
            name=name,
            dosage=dosage,
            notes=notes,
            rule=rule,
            created_at=now,
            updated_at=now,
        )
        return self.records.create(record)

    def get_record(self, record_id: str) -> Optional[TrackedRecord]:
        return self.records.get(record_id)

    def update_record(
        self,
        record_id: str,
        *,
        name: str,
        rule: RecurrenceRule,
        dosage: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Optional[TrackedRecord]:
        """Replace a record's details and schedule.

        Stored statuses stay keyed by (record, date, time); times dropped from
        the schedule simply stop producing instances.
        """
        record = self.get_record(record_id)
        if record is None:
            return None
        updated = record.model_copy(update={"name": name, "rule": rule, "dosage": dosage, "notes": notes})
        return self.records.update(updated)

    def soft_delete_record(self, record_id: str) -> bool:
        return self.records.soft_delete(record_id)

    # Engine reads

    def override_index(self, date_range: Optional[DateRange] = None) -> OverrideIndex:
        index = OverrideIndex.from_rows(self.list_status_overrides(date_range))
        if index.warnings:
            logger.warning(f"Skipped {len(index.warnings)} corrupt status override(s)")
        return index

    def instances_in_range(self, date_range: DateRange, record_id: Optional[str] = None) -> List[Instance]:
        records = self.list_recurring_definitions()
        if record_id is not None:
            records = [r for r in records if r.id == record_id]
        return schedule.expand_records(records, date_range, self.override_index(date_range))

    def instances_on(self, day: date) -> List[Instance]:
        index = self.override_index(DateRange.single(day))
        return schedule.instances_on(self.list_recurring_definitions(), day, index)

    def find_instance(self, parent_id: str, day: date, time: str) -> Optional[Instance]:
        record = self.get_record(parent_id)
        if record is None:
            return None
        time = normalize_time(time)
        index = self.override_index(DateRange.single(day))
        for instance in schedule.instances_for_date(record.rule, day, record.id, index):
            if instance.time == time:
                return instance
        return None

    def day_status(self, day: date) -> DayStatus:
        return status_engine.day_status(self.instances_on(day))

    def period_statistics(self, date_range: DateRange) -> PeriodStatistics:
        return analytics.statistics(self.instances_in_range(date_range), date_range)

    def completed_series(self, date_range: DateRange) -> ActivitySeries:
        """Per-day count of completed instances in the range."""
        return streaks.activity_series_from_instances(self.instances_in_range(date_range))

    def current_streak(self, today: Optional[date] = None) -> int:
        """Run of days with a completed instance, ending today (or yesterday).

        History is loaded in growing windows until the run breaks or the
        oldest schedule begins.
        """
        today = today or self.clock.today()
        records = self.list_recurring_definitions()
        if not records:
            return 0
        earliest = min(r.rule.active_from for r in records)
        if earliest > today:
            return 0

        window = STREAK_HISTORY_DAYS
        while True:
            start = max(today - timedelta(days=window - 1), earliest)
            series = self.completed_series(DateRange(start=start, end=today))
            streak = streaks.current_streak(series, today)
            # An inactive first day means the run started inside the window
            if streak == 0 or start == earliest or series.count_on(start) == 0:
                return streak
            window *= 2

    def upcoming(self, hours: Optional[int] = None) -> List[Instance]:
        hours = UPCOMING_WINDOW_HOURS if hours is None else hours
        now = self.clock.now()
        # The window usually crosses midnight
        window = DateRange(start=now.date(), end=(now + timedelta(hours=hours)).date())
        return schedule.upcoming_instances(
            self.list_recurring_definitions(), now, self.override_index(window), hours=hours
        )

    # Writes

    def cycle_instance(self, parent_id: str, day: date, time: str) -> Optional[Instance]:
        """Advance one instance to its next status and persist it."""
        instance = self.find_instance(parent_id, day, time)
        if instance is None:
            return None
        next_status = status_engine.cycle_status(instance.status)
        self.upsert_status_override(instance.parent_id, instance.date, instance.time, next_status)
        return instance.model_copy(update={"status": next_status})

    def set_instance_status(
        self, parent_id: str, day: date, time: str, status: InstanceStatus
    ) -> Optional[Instance]:
        instance = self.find_instance(parent_id, day, time)
        if instance is None:
            return None
        self.upsert_status_override(instance.parent_id, instance.date, instance.time, status)
        return instance.model_copy(update={"status": InstanceStatus(status)})

    def mark_all_for_day(self, day: date, status: InstanceStatus, record_id: Optional[str] = None) -> int:
        """Set every instance due on `day` to `status` (UNMARKED resets the day).

        Returns the number of instances written.
        """
        instances = self.instances_in_range(DateRange.single(day), record_id=record_id)
        writes = status_engine.bulk_status_writes(instances, InstanceStatus(status))
        return self.overrides.upsert_many(writes)
