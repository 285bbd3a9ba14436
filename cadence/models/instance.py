"""Instance (dose) and status override models for cadence."""

from datetime import date, datetime
from enum import Enum
from typing import NamedTuple, Optional

from pydantic import BaseModel, Field


class InstanceStatus(str, Enum):
    """Status of one scheduled occurrence."""
    UNMARKED = "unmarked"
    COMPLETED = "completed"
    MISSED = "missed"


class Instance(BaseModel):
    """One concrete occurrence of a recurring record on a date and time."""

    parent_id: str = Field(..., description="ID of the owning recurring record")
    date: date
    time: str = Field(..., description="Time of day (HH:MM) from the parent's schedule")
    status: InstanceStatus = Field(InstanceStatus.UNMARKED, description="Marked status")
    duration_min: Optional[int] = Field(None, ge=0, description="Optional duration in minutes")

    @property
    def key(self) -> tuple:
        return (self.parent_id, self.date, self.time)

    @property
    def starts_at(self) -> datetime:
        hours, minutes = self.time.split(":")
        return datetime(self.date.year, self.date.month, self.date.day, int(hours), int(minutes))


class StatusOverride(BaseModel):
    """A persisted, user-set status for one (parent_id, date, time) key."""

    parent_id: str
    date: date
    time: str
    status: InstanceStatus
    updated_at: Optional[datetime] = None

    @property
    def key(self) -> tuple:
        return (self.parent_id, self.date, self.time)


class RawStatusOverride(NamedTuple):
    """Status override exactly as stored (strings, not yet validated)."""
    parent_id: str
    date: str
    time: str
    status: str
