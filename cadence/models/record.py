"""Tracked record (recurring definition) model for cadence."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from cadence.models.recurrence import RecurrenceRule


class TrackedRecord(BaseModel):
    """A recurring record whose occurrences are tracked (e.g. a medication)."""

    id: str = Field(..., description="Unique record identifier (UUID v4)")
    name: str = Field(..., min_length=1, description="Display name")
    dosage: Optional[str] = Field(None, description="Free-text dosage, e.g. '500 mg'")
    notes: Optional[str] = Field(None, description="Record notes")
    rule: RecurrenceRule = Field(..., description="When the record is due")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
    deleted_at: Optional[datetime] = Field(None, description="Soft-delete timestamp (null if active)")
