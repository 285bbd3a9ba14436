"""Status aggregation for cadence.

Reduces instance statuses to one day-level status using a fixed precedence:
HAS_MISSED > UNMARKED > ALL_COMPLETED > NO_INSTANCES.
"""

from datetime import datetime
from typing import Iterable, List

from cadence.models.analytics import DayStatus, DayStatusEntry
from cadence.models.instance import Instance, InstanceStatus, StatusOverride
from cadence.models.period import DateRange

_NEXT_STATUS = {
    InstanceStatus.UNMARKED: InstanceStatus.COMPLETED,
    InstanceStatus.COMPLETED: InstanceStatus.MISSED,
    InstanceStatus.MISSED: InstanceStatus.UNMARKED,
}


def day_status(instances: Iterable[Instance]) -> DayStatus:
    """Aggregate status for the instances due on one day.

    Every instance is scanned: a late MISSED must override an apparent
    all-completed day.

    Args:
        instances: Instances for a single date

    Returns:
        DayStatus following the fixed precedence
    """
    seen_any = False
    has_missed = False
    has_unmarked = False
    for instance in instances:
        seen_any = True
        if instance.status == InstanceStatus.MISSED:
            has_missed = True
        elif instance.status == InstanceStatus.UNMARKED:
            has_unmarked = True

    if not seen_any:
        return DayStatus.NO_INSTANCES
    if has_missed:
        return DayStatus.HAS_MISSED
    if has_unmarked:
        return DayStatus.UNMARKED
    return DayStatus.ALL_COMPLETED


def cycle_status(current: InstanceStatus) -> InstanceStatus:
    """Next status for a single-instance toggle: unmarked -> completed -> missed -> unmarked."""
    return _NEXT_STATUS[InstanceStatus(current)]


def day_statuses(instances: Iterable[Instance], date_range: DateRange) -> List[DayStatusEntry]:
    """Day status for every date in the range (days without instances included)."""
    by_day = {day: [] for day in date_range.days()}
    for instance in instances:
        if instance.date in by_day:
            by_day[instance.date].append(instance)
    return [DayStatusEntry(date=day, status=day_status(items)) for day, items in by_day.items()]


def bulk_status_writes(instances: Iterable[Instance], status: InstanceStatus) -> List[StatusOverride]:
    """Override writes that set every given instance to `status`.

    Used for "mark all as taken/missed" and, with UNMARKED, "reset day".
    """
    now = datetime.utcnow()
    return [
        StatusOverride(parent_id=i.parent_id, date=i.date, time=i.time, status=status, updated_at=now)
        for i in instances
    ]
