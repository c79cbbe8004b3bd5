"""
Tests for parsing and formatting stored dates and times.
"""

from datetime import date, datetime, time

import pendulum

from doctorslots.domain.timeofday import (
    format_time_of_day,
    format_time_to_two_digits,
    parse_slot_date,
    parse_time_of_day,
)


class TestFormatTimeOfDay:
    """Tests for 12-hour formatting."""

    def test_formats_afternoon(self):
        assert format_time_of_day("14:30") == "02:30 PM"

    def test_formats_single_digit_hour(self):
        assert format_time_of_day("9:05") == "09:05 AM"

    def test_formats_midnight_and_noon(self):
        assert format_time_of_day("0:05") == "12:05 AM"
        assert format_time_of_day("12:00") == "12:00 PM"

    def test_tolerates_surrounding_whitespace(self):
        assert format_time_of_day(" 14:30 ") == "02:30 PM"

    def test_invalid_input_yields_empty_string(self):
        """Missing or malformed values never raise."""
        assert format_time_of_day("invalid-time") == ""
        assert format_time_of_day(None) == ""
        assert format_time_of_day("") == ""
        assert format_time_of_day("   ") == ""
        assert format_time_of_day("24:00") == ""
        assert format_time_of_day("10:60") == ""
        assert format_time_of_day("9:5") == ""
        assert format_time_of_day("10:00 AM") == ""


class TestFormatTimeToTwoDigits:
    """Tests for 24-hour normalisation."""

    def test_pads_hour(self):
        assert format_time_to_two_digits("9:05") == "09:05"

    def test_keeps_padded_value(self):
        assert format_time_to_two_digits(" 18:45") == "18:45"

    def test_invalid_input_yields_empty_string(self):
        assert format_time_to_two_digits("soon") == ""
        assert format_time_to_two_digits(None) == ""


class TestParseTimeOfDay:
    """Tests for time parsing."""

    def test_parses_valid_time(self):
        assert parse_time_of_day("7:15") == time(7, 15)

    def test_rejects_out_of_range(self):
        assert parse_time_of_day("25:00") is None

    def test_rejects_non_ascii_digits(self):
        """Only ASCII digits make a time."""
        assert parse_time_of_day("１４:30") is None
        assert format_time_of_day("１４:30") == ""
        assert format_time_to_two_digits("9:０5") == ""


class TestParseSlotDate:
    """Tests for stored date parsing."""

    def test_plain_date_string(self):
        assert parse_slot_date("2024-09-04") == date(2024, 9, 4)

    def test_impossible_calendar_date(self):
        assert parse_slot_date("2024-02-30") is None

    def test_iso_timestamp_is_read_in_utc(self):
        assert parse_slot_date("2024-09-04T10:00:00.000Z") == date(2024, 9, 4)
        assert parse_slot_date("2024-09-04T23:30:00-02:00") == date(2024, 9, 5)

    def test_date_and_datetime_objects(self):
        assert parse_slot_date(date(2024, 9, 4)) == date(2024, 9, 4)
        assert parse_slot_date(datetime(2024, 9, 4, 18, 0)) == date(2024, 9, 4)
        assert parse_slot_date(pendulum.datetime(2024, 9, 4, 22, 0, tz="America/New_York")) == date(2024, 9, 5)

    def test_garbage_is_rejected(self):
        assert parse_slot_date("invalid-date") is None
        assert parse_slot_date("14:30") is None
        assert parse_slot_date("") is None
        assert parse_slot_date(None) is None
        assert parse_slot_date(20240904) is None

    def test_non_ascii_digits_are_rejected(self):
        """Full-width digits don't pass for a calendar date."""
        assert parse_slot_date("２０２４-09-05") is None
        assert parse_slot_date("２０２４-09-05T00:00:00Z") is None
