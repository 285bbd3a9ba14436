"""Repository for status override database operations."""

import logging
from datetime import date, datetime
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from cadence.database.models import StatusOverrideDB
from cadence.models.instance import InstanceStatus, RawStatusOverride, StatusOverride

logger = logging.getLogger(__name__)


class StatusOverrideRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_raw(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None,
        parent_id: Optional[str] = None,
    ) -> List[RawStatusOverride]:
        """Raw override rows, optionally limited to an inclusive date range.

        ISO date strings sort chronologically, so the range is a string comparison.
        """
        query = self.db.query(StatusOverrideDB)
        if start is not None:
            query = query.filter(StatusOverrideDB.date >= start.isoformat())
        if end is not None:
            query = query.filter(StatusOverrideDB.date <= end.isoformat())
        if parent_id is not None:
            query = query.filter(StatusOverrideDB.parent_id == parent_id)
        rows = query.order_by(StatusOverrideDB.updated_at.asc()).all()
        return [row.to_raw() for row in rows]

    def _find(self, parent_id: str, day: date, time: str) -> Optional[StatusOverrideDB]:
        return (
            self.db.query(StatusOverrideDB)
            .filter(
                StatusOverrideDB.parent_id == parent_id,
                StatusOverrideDB.date == day.isoformat(),
                StatusOverrideDB.time == time,
            )
            .first()
        )

    def _stage(self, parent_id: str, day: date, time: str, status: InstanceStatus) -> None:
        # UNMARKED is the default status, so it removes the stored row instead
        status = InstanceStatus(status)
        row = self._find(parent_id, day, time)
        if status == InstanceStatus.UNMARKED:
            if row is not None:
                self.db.delete(row)
        elif row is None:
            self.db.add(
                StatusOverrideDB(
                    parent_id=parent_id,
                    date=day.isoformat(),
                    time=time,
                    status=status.value,
                    updated_at=datetime.utcnow(),
                )
            )
        else:
            row.status = status.value
            row.updated_at = datetime.utcnow()

    def upsert(self, parent_id: str, day: date, time: str, status: InstanceStatus) -> None:
        """Set the status for one occurrence; last write wins."""
        status = InstanceStatus(status)
        try:
            self._stage(parent_id, day, time, status)
            self.db.commit()
            logger.debug(f"Set status {status.value} for {parent_id} {day.isoformat()} {time}")
        except Exception as e:
            self.db.rollback()
            logger.error(
                f"Failed to upsert status override for {parent_id} {day.isoformat()} {time}: "
                f"{type(e).__name__}: {str(e)}"
            )
            raise

    def upsert_many(self, writes: Iterable[StatusOverride]) -> int:
        """Apply several status writes in one transaction.

        Either every write is stored or none is.
        """
        count = 0
        try:
            for write in writes:
                self._stage(write.parent_id, write.date, write.time, write.status)
                # Later writes may touch rows staged by earlier ones
                self.db.flush()
                count += 1
            self.db.commit()
            logger.debug(f"Applied {count} status override write(s)")
            return count
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to apply status override writes: {type(e).__name__}: {str(e)}")
            raise
