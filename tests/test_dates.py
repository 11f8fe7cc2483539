"""Tests for reading-date parsing."""

from datetime import date

import pytest

from goodbooks.utils.dates import parse_iso_date


class TestParseIsoDate:
    """Tests for parse_iso_date."""

    def test_calendar_date(self):
        assert parse_iso_date("2024-02-29") == date(2024, 2, 29)

    @pytest.mark.parametrize(
        "value",
        ["20240101", "2024-W01-1", "2024-001", "2024-1-5", "2024-02-30", "2024-01-01T00:00", ""],
    )
    def test_rejects_other_shapes(self, value):
        with pytest.raises(ValueError):
            parse_iso_date(value)
