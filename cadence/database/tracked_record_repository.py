"""Repository for TrackedRecord database operations."""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from cadence.database.models import TrackedRecordDB
from cadence.models.record import TrackedRecord

logger = logging.getLogger(__name__)


class TrackedRecordRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, record: TrackedRecord) -> TrackedRecord:
        row = TrackedRecordDB.from_pydantic(record)
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            logger.debug(f"Created tracked record {record.id}: {record.name[:50]}")
            return row.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create tracked record {record.id}: {type(e).__name__}: {str(e)}")
            raise

    def get(self, record_id: str) -> Optional[TrackedRecord]:
        row = (
            self.db.query(TrackedRecordDB)
            .filter(
                TrackedRecordDB.id == record_id,
                TrackedRecordDB.deleted_at.is_(None),
            )
            .first()
        )
        return row.to_pydantic() if row else None

    def list_active(self) -> List[TrackedRecord]:
        """Active records, oldest first (stable display and expansion order)."""
        rows = (
            self.db.query(TrackedRecordDB)
            .filter(TrackedRecordDB.deleted_at.is_(None))
            .order_by(TrackedRecordDB.created_at.asc(), TrackedRecordDB.id.asc())
            .all()
        )
        return [row.to_pydantic() for row in rows]

    def update(self, record: TrackedRecord) -> TrackedRecord:
        row = (
            self.db.query(TrackedRecordDB)
            .filter(
                TrackedRecordDB.id == record.id,
                TrackedRecordDB.deleted_at.is_(None),
            )
            .first()
        )
        if row is None:
            raise ValueError(f"Tracked record {record.id} not found")
        row.name = record.name
        row.dosage = record.dosage
        row.notes = record.notes
        row.rule = record.rule.model_dump(mode="json")
        row.updated_at = datetime.utcnow()
        try:
            self.db.commit()
            self.db.refresh(row)
            return row.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update tracked record {record.id}: {type(e).__name__}: {str(e)}")
            raise

    def soft_delete(self, record_id: str) -> bool:
        row = self.db.query(TrackedRecordDB).filter(TrackedRecordDB.id == record_id).first()
        if row is None or row.deleted_at is not None:
            return False
        row.deleted_at = datetime.utcnow()
        try:
            self.db.commit()
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to soft delete tracked record {record_id}: {type(e).__name__}: {str(e)}")
            raise
