"""
Tests for invoice date helpers
"""
import pytest
from datetime import date, datetime
from invoicer.utils.date_utils import (
    parse_date,
    calculate_eta_date,
    format_date_range,
    format_eta_description,
    to_iso_date
)

class TestDateUtils:

    def test_parse_date_passthrough(self):
        """Test that date objects are returned unchanged"""
        d = date(2024, 2, 29)
        assert parse_date(d) is d

    def test_parse_date_from_datetime(self):
        """Test that datetimes are truncated to their date"""
        assert parse_date(datetime(2024, 5, 15, 23, 59)) == date(2024, 5, 15)

    def test_parse_date_iso_strings(self):
        """Test parsing plain and full ISO strings"""
        assert parse_date("2024-05-15") == date(2024, 5, 15)
        assert parse_date("2024-05-15T10:30:00") == date(2024, 5, 15)
        # JavaScript toISOString() output
        assert parse_date("2024-05-15T10:30:00.000Z") == date(2024, 5, 15)

    def test_parse_date_invalid(self):
        """Test invalid strings raise ValueError"""
        with pytest.raises(ValueError):
            parse_date("15/05/2024")

    def test_calculate_eta_date(self):
        assert calculate_eta_date("2024-01-01", 90) == date(2024, 3, 31)
        assert calculate_eta_date(date(2024, 12, 25), 14) == date(2025, 1, 8)

    def test_format_date_range(self):
        """Test the start to ETA span shown on invoices"""
        assert format_date_range("2024-01-05", 30) == "Jan 05 – Feb 04"

    @pytest.mark.parametrize("days,expected", [
        (7, "1 week"),
        (14, "2 weeks"),
        (30, "1 month"),
        (60, "2 months"),
        (90, "3 months"),
        (45, "45 days"),
    ])
    def test_format_eta_description(self, days, expected):
        assert format_eta_description(days) == expected

    def test_to_iso_date(self):
        assert to_iso_date(datetime(2024, 7, 4, 8, 0)) == "2024-07-04"
