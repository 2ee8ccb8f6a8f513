"""Tests for duration formatters, date rendering and number formatting."""

from datetime import date, datetime, timezone

import pytest
from unitprefs.core.formula.durations import (
    format_duration_compact,
    format_duration_dhms,
    format_duration_hms,
    format_duration_hms_millis,
    format_duration_ms,
    format_duration_ms_millis,
    format_duration_verbose,
)
from unitprefs.core.formula.dates import (
    epoch_seconds,
    format_instant,
    from_epoch,
    parse_instant,
    render_pattern,
    to_iso_string,
)
from unitprefs.errors import DateFormatError, InvalidInputError
from unitprefs.utils.formatting import decimal_places, format_number, join_symbol

ISO = "2025-10-08T14:30:45.000Z"
EPOCH = 1759933845


class TestDurations:
    def test_hms(self):
        assert format_duration_hms(3725) == "01:02:05"

    def test_hms_does_not_wrap_days(self):
        assert format_duration_hms(90000) == "25:00:00"

    def test_dhms(self):
        assert format_duration_dhms(3725) == "00:01:02:05"
        assert format_duration_dhms(90061) == "01:01:01:01"

    def test_millis(self):
        assert format_duration_hms_millis(3725.25) == "01:02:05.250"
        assert format_duration_ms_millis(65.5) == "01:05.500"

    def test_millis_clamped(self):
        assert format_duration_hms_millis(1.9996) == "00:00:01.999"

    def test_ms(self):
        assert format_duration_ms(3725) == "62:05"

    def test_verbose(self):
        assert format_duration_verbose(90061) == "1 day 1 hour 1 minute 1 second"
        assert format_duration_verbose(7320) == "2 hours 2 minutes"
        assert format_duration_verbose(0) == ""

    @pytest.mark.parametrize("seconds,expected", [
        (3725, "1h 2m"),
        (2 * 86400 + 3 * 3600, "2d 3h"),
        (945, "15m 45s"),
        (5, "5s"),
        (0, "0s"),
    ])
    def test_compact(self, seconds, expected):
        assert format_duration_compact(seconds) == expected

    @pytest.mark.parametrize("value", [-1, float("nan"), float("inf"), "10", None])
    def test_invalid(self, value):
        with pytest.raises(InvalidInputError):
            format_duration_hms(value)


class TestParseInstant:
    def test_zulu(self):
        dt = parse_instant(ISO)
        assert dt == datetime(2025, 10, 8, 14, 30, 45, tzinfo=timezone.utc)

    def test_offset_normalized_to_utc(self):
        assert to_iso_string(parse_instant("2025-10-08T16:30:45+02:00")) == ISO

    def test_naive_is_utc(self):
        assert to_iso_string(parse_instant("2025-10-08T14:30:45")) == ISO

    def test_date_object(self):
        assert to_iso_string(parse_instant(date(2025, 10, 8))) == "2025-10-08T00:00:00.000Z"

    @pytest.mark.parametrize("value", ["", "yesterday", "2025-13-45", 12345, None])
    def test_unparseable(self, value):
        with pytest.raises(DateFormatError):
            parse_instant(value)

    def test_epoch(self):
        assert to_iso_string(from_epoch(EPOCH)) == ISO
        assert to_iso_string(from_epoch(EPOCH * 1000 + 123, millis=True)) == "2025-10-08T14:30:45.123Z"

    def test_epoch_seconds_floors(self):
        assert epoch_seconds(ISO) == EPOCH
        assert epoch_seconds("2025-10-08T14:30:45.999Z") == EPOCH

    @pytest.mark.parametrize("value", [float("nan"), True, "1"])
    def test_bad_epoch(self, value):
        with pytest.raises(DateFormatError):
            from_epoch(value)


class TestRenderPattern:
    def setup_method(self):
        self.dt = parse_instant(ISO)

    @pytest.mark.parametrize("pattern,expected", [
        ("MMM d, yyyy", "Oct 8, 2025"),
        ("EEEE, MMMM d, yyyy", "Wednesday, October 8, 2025"),
        ("dd/MM/yyyy", "08/10/2025"),
        ("MM/yyyy", "10/2025"),
        ("HH:mm:ss", "14:30:45"),
        ("hh:mm:ss a", "02:30:45 PM"),
        ("yyyy-MM-dd'T'HH:mm:ss", "2025-10-08T14:30:45"),
        ("EEE yy", "Wed 25"),
        ("HH:mm:ss.SSS", "14:30:45.000"),
    ])
    def test_patterns(self, pattern, expected):
        assert render_pattern(self.dt, pattern) == expected

    def test_quoted_literals(self):
        assert render_pattern(self.dt, "'at' HH") == "at 14"
        assert render_pattern(self.dt, "h 'o''clock'") == "2 o'clock"
        assert render_pattern(self.dt, "''") == "'"

    def test_unknown_letter(self):
        with pytest.raises(DateFormatError):
            render_pattern(self.dt, "yyyy Q")

    def test_unterminated_quote(self):
        with pytest.raises(DateFormatError):
            render_pattern(self.dt, "HH 'oops")


class TestFormatInstant:
    def test_utc_by_default(self):
        assert format_instant(ISO, "HH:mm") == "14:30"

    def test_named_zone(self):
        assert format_instant(ISO, "HH:mm", use_local_time=True, tz_name="Asia/Tokyo") == "23:30"

    def test_zone_ignored_without_local(self):
        assert format_instant(ISO, "HH:mm", use_local_time=False, tz_name="Asia/Tokyo") == "14:30"

    def test_unknown_zone(self):
        with pytest.raises(DateFormatError):
            format_instant(ISO, "HH:mm", use_local_time=True, tz_name="Mars/Olympus_Mons")

    def test_never_defaults_to_now(self):
        with pytest.raises(DateFormatError):
            format_instant("not a date", "HH:mm")


class TestNumberFormatting:
    @pytest.mark.parametrize("fmt,places", [("0", 0), ("0.0", 1), ("0.00", 2), (None, 0), ("", 0)])
    def test_decimal_places(self, fmt, places):
        assert decimal_places(fmt) == places

    def test_fixed_point(self):
        assert format_number(9.7192, "0.0") == "9.7"
        assert format_number(1e-7, "0.00") == "0.00"
        assert format_number(123456789.0, "0") == "123456789"

    def test_no_negative_zero(self):
        assert format_number(-0.0001, "0.00") == "0.00"
        assert format_number(-0.0, "0.0") == "0.0"

    def test_join_symbol(self):
        assert join_symbol("9.7", "kn") == "9.7 kn"
        assert join_symbol("9.7", "") == "9.7"
        assert join_symbol("01:02:05", None) == "01:02:05"
