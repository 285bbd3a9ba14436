"""SQLAlchemy database models for cadence."""

from datetime import datetime
import uuid
from sqlalchemy import Column, String, DateTime, JSON, ForeignKey, UniqueConstraint

from cadence.database.database import Base
from cadence.models.instance import InstanceStatus, RawStatusOverride


class TrackedRecordDB(Base):
    """Database model for TrackedRecord."""

    __tablename__ = "tracked_records"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    dosage = Column(String, nullable=True)
    notes = Column(String, nullable=True)

    # RecurrenceRule as JSON (pydantic model_dump(mode="json"))
    rule = Column(JSON, nullable=False)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
    deleted_at = Column(DateTime, nullable=True, index=True)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from cadence.models.record import TrackedRecord
        from cadence.models.recurrence import RecurrenceRule

        return TrackedRecord(
            id=self.id,
            name=self.name,
            dosage=self.dosage,
            notes=self.notes,
            rule=RecurrenceRule.model_validate(self.rule),
            created_at=self.created_at,
            updated_at=self.updated_at,
            deleted_at=self.deleted_at,
        )

    @classmethod
    def from_pydantic(cls, record):
        """Create database model from Pydantic model."""
        return cls(
            id=record.id,
            name=record.name,
            dosage=record.dosage,
            notes=record.notes,
            rule=record.rule.model_dump(mode="json"),
            created_at=record.created_at,
            updated_at=record.updated_at,
            deleted_at=record.deleted_at,
        )


class StatusOverrideDB(Base):
    """Database model for a persisted instance status.

    Dates and times are stored as ISO text and parsed by the engine, which
    skips rows it cannot read.
    """

    __tablename__ = "status_overrides"
    __table_args__ = (
        # One status per occurrence key; upserts overwrite.
        UniqueConstraint("parent_id", "date", "time", name="uq_status_override_key"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    parent_id = Column(String, ForeignKey("tracked_records.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(String(10), nullable=False, index=True)  # YYYY-MM-DD
    time = Column(String(5), nullable=False)  # HH:MM
    status = Column(String, nullable=False, default=InstanceStatus.COMPLETED.value)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_raw(self) -> RawStatusOverride:
        return RawStatusOverride(parent_id=self.parent_id, date=self.date, time=self.time, status=self.status)
