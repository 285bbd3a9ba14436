"""Domain errors and warnings for cadence."""


class InvalidScheduleError(Exception):
    """Raised when a recurrence rule cannot be constructed.

    Deliberately not a ValueError: pydantic re-raises it unchanged from
    validators instead of folding it into a ValidationError.
    """


class CorruptOverrideWarning(UserWarning):
    """A persisted status override could not be parsed and was skipped."""

    def __init__(self, row, reason: str):
        self.row = row
        self.reason = reason
        super().__init__(f"Skipping corrupt status override {row!r}: {reason}")
