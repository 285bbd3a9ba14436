"""Status override lookup for schedule expansion.

Overrides arrive from the record store as raw rows. Rows that cannot be parsed
are skipped with a CorruptOverrideWarning so one bad row never blocks analytics
for the others.
"""

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple, Union

from cadence.models.errors import CorruptOverrideWarning, InvalidScheduleError
from cadence.models.instance import InstanceStatus, RawStatusOverride, StatusOverride
from cadence.models.recurrence import normalize_time

logger = logging.getLogger(__name__)

OverrideKey = Tuple[str, date, str]


def parse_override(row: RawStatusOverride) -> StatusOverride:
    """Parse one raw override row.

    Raises:
        CorruptOverrideWarning: If the date, time or status is unparseable
    """
    parent_id, raw_date, raw_time, raw_status = row
    if not parent_id:
        raise CorruptOverrideWarning(row, "missing parent id")
    try:
        day = raw_date if isinstance(raw_date, date) else date.fromisoformat(str(raw_date))
    except ValueError:
        raise CorruptOverrideWarning(row, f"unparseable date {raw_date!r}")
    try:
        time = normalize_time(raw_time)
    except InvalidScheduleError:
        raise CorruptOverrideWarning(row, f"unparseable time {raw_time!r}")
    try:
        status = InstanceStatus(str(raw_status).lower())
    except ValueError:
        raise CorruptOverrideWarning(row, f"unknown status {raw_status!r}")
    return StatusOverride(parent_id=str(parent_id), date=day, time=time, status=status)


class OverrideIndex:
    """Overrides keyed by (parent_id, date, time); later rows win."""

    def __init__(self):
        self._by_key: Dict[OverrideKey, InstanceStatus] = {}
        self.warnings: List[CorruptOverrideWarning] = []

    @classmethod
    def from_rows(cls, rows: Iterable[Union[RawStatusOverride, StatusOverride]]) -> "OverrideIndex":
        index = cls()
        for row in rows:
            if isinstance(row, StatusOverride):
                index.add(row)
                continue
            try:
                index.add(parse_override(RawStatusOverride(*row)))
            except CorruptOverrideWarning as warning:
                logger.warning(str(warning))
                index.warnings.append(warning)
        return index

    def add(self, override: StatusOverride) -> None:
        self._by_key[override.key] = InstanceStatus(override.status)

    def status_for(self, parent_id: str, day: date, time: str) -> Optional[InstanceStatus]:
        return self._by_key.get((parent_id, day, time))

    def __len__(self) -> int:
        return len(self._by_key)
