"""Tests for status override parsing."""

import logging
import pytest
from datetime import date

from cadence.engine.overrides import OverrideIndex, parse_override
from cadence.models.errors import CorruptOverrideWarning
from cadence.models.instance import InstanceStatus, RawStatusOverride, StatusOverride


class TestParseOverride:
    """One raw row at a time."""

    def test_valid_row(self):
        override = parse_override(RawStatusOverride("rec-1", "2024-01-02", "8:00", "COMPLETED"))
        assert override.key == ("rec-1", date(2024, 1, 2), "08:00")
        assert override.status == InstanceStatus.COMPLETED

    @pytest.mark.parametrize("row", [
        RawStatusOverride("rec-1", "not-a-date", "08:00", "completed"),
        RawStatusOverride("rec-1", "2024-02-30", "08:00", "completed"),
        RawStatusOverride("rec-1", "2024-01-02", "25:99", "completed"),
        RawStatusOverride("rec-1", "2024-01-02", "08:00", "taken"),
        RawStatusOverride("", "2024-01-02", "08:00", "completed"),
    ])
    def test_corrupt_rows(self, row):
        with pytest.raises(CorruptOverrideWarning) as exc_info:
            parse_override(row)
        assert exc_info.value.row == row


class TestOverrideIndex:
    """Keyed lookup; corrupt rows skipped with a warning."""

    def test_corrupt_rows_skipped(self, caplog):
        rows = [
            RawStatusOverride("rec-1", "2024-01-02", "08:00", "completed"),
            RawStatusOverride("rec-1", "2024-02-30", "08:00", "completed"),
            RawStatusOverride("rec-1", "2024-01-02", "20:00", "taken"),
        ]
        with caplog.at_level(logging.WARNING):
            index = OverrideIndex.from_rows(rows)
        assert len(index) == 1
        assert len(index.warnings) == 2
        assert index.status_for("rec-1", date(2024, 1, 2), "08:00") == InstanceStatus.COMPLETED
        assert index.status_for("rec-1", date(2024, 1, 2), "20:00") is None
        assert "2024-02-30" in caplog.text

    def test_later_rows_win(self):
        index = OverrideIndex.from_rows([
            RawStatusOverride("rec-1", "2024-01-02", "08:00", "completed"),
            RawStatusOverride("rec-1", "2024-01-02", "08:00", "missed"),
        ])
        assert len(index) == 1
        assert index.status_for("rec-1", date(2024, 1, 2), "08:00") == InstanceStatus.MISSED

    def test_accepts_parsed_overrides(self):
        index = OverrideIndex.from_rows([
            StatusOverride(parent_id="rec-1", date=date(2024, 1, 2), time="08:00", status=InstanceStatus.MISSED),
        ])
        assert index.status_for("rec-1", date(2024, 1, 2), "08:00") == InstanceStatus.MISSED
        assert index.warnings == []
