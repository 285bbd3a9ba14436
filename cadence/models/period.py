"""Date range model for cadence."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterator

from pydantic import BaseModel, field_validator


class DateRange(BaseModel):
    """Inclusive calendar date range."""

    start: date
    end: date

    @field_validator("end")
    @classmethod
    def _validate_end(cls, v, info):
        start = info.data.get("start")
        if start is not None and v < start:
            raise ValueError("end must be >= start")
        return v

    @classmethod
    def single(cls, day: date) -> "DateRange":
        return cls(start=day, end=day)

    @classmethod
    def last_n_days(cls, days: int, today: date) -> "DateRange":
        """The `days` calendar days ending with (and including) `today`."""
        if days < 1:
            raise ValueError("days must be >= 1")
        return cls(start=today - timedelta(days=days - 1), end=today)

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end

    def __len__(self) -> int:
        return (self.end - self.start).days + 1

    def days(self) -> Iterator[date]:
        cur = self.start
        while cur <= self.end:
            yield cur
            cur = cur + timedelta(days=1)
