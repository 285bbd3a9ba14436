"""Schedule expansion for cadence.

Turns recurrence rules into concrete Instance objects for given dates.
Instances are never stored; only status overrides are.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

from cadence.engine.calendar import daterange, weekday_number
from cadence.engine.overrides import OverrideIndex
from cadence.models.constants import UPCOMING_WINDOW_HOURS
from cadence.models.instance import Instance, InstanceStatus
from cadence.models.period import DateRange
from cadence.models.record import TrackedRecord
from cadence.models.recurrence import RecurrenceFrequency, RecurrenceRule


def is_due(rule: RecurrenceRule, day: date) -> bool:
    """Whether the rule has instances on `day`.

    Args:
        rule: Recurrence rule to evaluate
        day: Calendar date

    Returns:
        True if `day` is inside the active range and matches the rule's weekdays
    """
    # Respect active range bounds
    if day < rule.active_from:
        return False
    if rule.active_until is not None and day > rule.active_until:
        return False

    if rule.frequency == RecurrenceFrequency.DAILY:
        return True
    return weekday_number(day) in rule.weekdays


def instances_for_date(
    rule: RecurrenceRule,
    day: date,
    parent_id: str,
    overrides: Optional[OverrideIndex] = None,
) -> List[Instance]:
    """One Instance per scheduled time on `day`, in the rule's time order."""
    if not is_due(rule, day):
        return []
    out: List[Instance] = []
    for t in rule.times:
        status = overrides.status_for(parent_id, day, t) if overrides is not None else None
        out.append(
            Instance(
                parent_id=parent_id,
                date=day,
                time=t,
                status=status or InstanceStatus.UNMARKED,
            )
        )
    return out


def expand_record(
    record: TrackedRecord,
    date_range: DateRange,
    overrides: Optional[OverrideIndex] = None,
) -> List[Instance]:
    """All instances of one record within the range, ordered by date then time."""
    # Clip to the active range to skip dates that cannot be due
    start = max(date_range.start, record.rule.active_from)
    end = date_range.end
    if record.rule.active_until is not None:
        end = min(end, record.rule.active_until)

    out: List[Instance] = []
    for day in daterange(start, end):
        out.extend(instances_for_date(record.rule, day, record.id, overrides))
    return out


def expand_records(
    records: Iterable[TrackedRecord],
    date_range: DateRange,
    overrides: Optional[OverrideIndex] = None,
) -> List[Instance]:
    """Instances of all records, ordered by date, then record order, then time order."""
    records = [r for r in records if r.deleted_at is None]
    out: List[Instance] = []
    for day in date_range.days():
        for record in records:
            out.extend(instances_for_date(record.rule, day, record.id, overrides))
    return out


def instances_on(
    records: Iterable[TrackedRecord],
    day: date,
    overrides: Optional[OverrideIndex] = None,
) -> List[Instance]:
    return expand_records(records, DateRange.single(day), overrides)


def upcoming_instances(
    records: Iterable[TrackedRecord],
    now: datetime,
    overrides: Optional[OverrideIndex] = None,
    hours: int = UPCOMING_WINDOW_HOURS,
) -> List[Instance]:
    """Unmarked instances starting in [now, now + hours), soonest first."""
    window_end = now + timedelta(hours=hours)
    date_range = DateRange(start=now.date(), end=window_end.date())
    candidates = expand_records(records, date_range, overrides)
    upcoming = [
        i
        for i in candidates
        if i.status == InstanceStatus.UNMARKED and now <= i.starts_at < window_end
    ]
    # Stable: equal start times keep record order
    return sorted(upcoming, key=lambda i: i.starts_at)
