"""Period analytics for cadence.

Counts completed/missed/unmarked instances over a date range and derives
adherence. `scheduled` is always the sum of the three counts.
"""

from typing import Dict, Iterable, List, Mapping, Optional

from cadence.models.analytics import AdherenceTier, PeriodStatistics, RecordStatistics, adherence_percentage
from cadence.models.instance import Instance, InstanceStatus
from cadence.models.period import DateRange


def _count(instances: Iterable[Instance]) -> PeriodStatistics:
    completed = missed = unmarked = 0
    for instance in instances:
        if instance.status == InstanceStatus.COMPLETED:
            completed += 1
        elif instance.status == InstanceStatus.MISSED:
            missed += 1
        else:
            unmarked += 1
    return PeriodStatistics(completed=completed, missed=missed, unmarked=unmarked)


def statistics(instances: Iterable[Instance], date_range: DateRange) -> PeriodStatistics:
    """Counts and adherence for instances dated inside the range (both ends inclusive).

    Args:
        instances: Instances to count (any order, any dates)
        date_range: Inclusive date range

    Returns:
        PeriodStatistics for the instances in range
    """
    return _count(i for i in instances if i.date in date_range)


def per_record_breakdown(
    instances: Iterable[Instance],
    date_range: DateRange,
    record_ids: Optional[Iterable[str]] = None,
) -> List[RecordStatistics]:
    """Statistics per parent record.

    Without `record_ids`, groups appear in order of first appearance and only
    records with instances in range are listed. With `record_ids`, every listed
    record appears in that order (scheduled == 0 when nothing was due).
    """
    groups: Dict[str, List[Instance]] = {rid: [] for rid in (record_ids or [])}
    for instance in instances:
        if instance.date in date_range:
            groups.setdefault(instance.parent_id, []).append(instance)
    return [RecordStatistics(record_id=rid, statistics=_count(items)) for rid, items in groups.items()]


def rank_breakdown(breakdown: Iterable[RecordStatistics], names: Mapping[str, str]) -> List[RecordStatistics]:
    """Order a breakdown for display: best adherence first, name as tie-break.

    Groups with nothing scheduled are dropped.
    """
    ranked = [r for r in breakdown if r.statistics.scheduled > 0]
    return sorted(
        ranked,
        key=lambda r: (-r.statistics.adherence_percentage, names.get(r.record_id, r.record_id)),
    )


def adherence_tier(percentage: int) -> AdherenceTier:
    """Tier for an adherence percentage (90/70/50 thresholds)."""
    return AdherenceTier.for_percentage(percentage)


__all__ = [
    "statistics",
    "per_record_breakdown",
    "rank_breakdown",
    "adherence_percentage",
    "adherence_tier",
]
