"""Unit tests for the duration codec.

WHY: Every text adapter parses and writes cue times through this codec.
An off-by-one-digit fraction or a rounding slip shifts every cue in a file.

HOW: Tests cover both timecode shapes, fractional padding, the error
paths, truncating output, and the parse/format round-trip law.
"""

from datetime import timedelta

import pytest

from subtitle_core.core.duration import (
    format_duration,
    format_signed_duration,
    parse_duration,
    parse_signed_duration,
)
from subtitle_core.core.errors import FormatError


class TestParseDuration:
    """parse_duration accepts HH:MM:SS<sep>fff and MM:SS<sep>fff."""

    def test_hours_minutes_seconds(self):
        assert parse_duration("01:02:03,456") == timedelta(
            hours=1, minutes=2, seconds=3, milliseconds=456
        )

    def test_minutes_seconds(self):
        assert parse_duration("02:03.456", ".") == timedelta(
            minutes=2, seconds=3, milliseconds=456
        )

    def test_no_fraction(self):
        assert parse_duration("00:00:07") == timedelta(seconds=7)

    def test_short_fraction_is_scaled_up(self):
        assert parse_duration("00:00:01,5") == timedelta(seconds=1, milliseconds=500)
        assert parse_duration("00:00:01,05") == timedelta(seconds=1, milliseconds=50)

    def test_two_digit_fraction(self):
        assert parse_duration("00:00:01.12", ".", 2) == timedelta(seconds=1, milliseconds=120)

    def test_fraction_read_as_decimal_for_any_digit_count(self):
        assert parse_duration("00:00:01.5", ".", 2) == timedelta(seconds=1, milliseconds=500)
        assert parse_duration("00:00:01.123", ".", 4) == timedelta(seconds=1, milliseconds=123)

    def test_surrounding_whitespace(self):
        assert parse_duration(" 00:00:01,000 ") == timedelta(seconds=1)

    def test_hours_beyond_two_digits(self):
        assert parse_duration("123:00:00,000") == timedelta(hours=123)


class TestParseDurationErrors:
    """Malformed timecodes raise FormatError carrying the offending token."""

    def test_too_many_fraction_digits(self):
        with pytest.raises(FormatError) as info:
            parse_duration("00:00:01,1234")
        assert info.value.text == "1234"

    def test_single_part(self):
        with pytest.raises(FormatError):
            parse_duration("12,000")

    def test_four_parts(self):
        with pytest.raises(FormatError):
            parse_duration("0:00:00:00,000")

    def test_non_numeric_segment(self):
        with pytest.raises(FormatError) as info:
            parse_duration("00:xx:01,000")
        assert info.value.text == "xx"
        assert info.value.context == "00:xx:01,000"

    def test_negative_segment(self):
        with pytest.raises(FormatError):
            parse_duration("00:-1:01,000")

    def test_empty_fraction(self):
        with pytest.raises(FormatError):
            parse_duration("00:00:01,")

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_duration("garbage")


class TestFormatDuration:
    """format_duration renders zero-padded fields and truncates the fraction."""

    def test_basic(self):
        value = timedelta(hours=1, minutes=2, seconds=3, milliseconds=4)
        assert format_duration(value) == "01:02:03,004"

    def test_separator(self):
        assert format_duration(timedelta(seconds=1), ".") == "00:00:01.000"

    def test_fewer_digits_truncate(self):
        value = timedelta(seconds=1, milliseconds=999)
        assert format_duration(value, ",", 2) == "00:00:01,99"
        assert format_duration(value, ",", 1) == "00:00:01,9"

    def test_more_digits_pad(self):
        value = timedelta(seconds=1, milliseconds=5)
        assert format_duration(value, ",", 4) == "00:00:01,0050"

    def test_sub_millisecond_dropped(self):
        value = timedelta(seconds=1, microseconds=1999)
        assert format_duration(value) == "00:00:01,001"

    def test_large_hours(self):
        assert format_duration(timedelta(hours=100)) == "100:00:00,000"

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            format_duration(timedelta(milliseconds=-1))


class TestRoundTrip:
    """parse(format(d)) == d for millisecond-exact durations with >= 3 digits."""

    @pytest.mark.parametrize("value", [
        timedelta(0),
        timedelta(milliseconds=1),
        timedelta(seconds=59, milliseconds=999),
        timedelta(hours=27, minutes=46, seconds=40, milliseconds=120),
    ])
    @pytest.mark.parametrize("separator", [",", "."])
    def test_exact_round_trip(self, value, separator):
        assert parse_duration(format_duration(value, separator, 3), separator, 3) == value

    def test_two_digits_loses_only_truncated_precision(self):
        value = timedelta(seconds=4, milliseconds=567)
        parsed = parse_duration(format_duration(value, ".", 2), ".", 2)
        assert parsed == timedelta(seconds=4, milliseconds=560)


class TestSignedDuration:
    """The signed helpers add an explicit sign around the codec."""

    def test_parse_negative(self):
        assert parse_signed_duration("-00:00:01.500") == -timedelta(seconds=1, milliseconds=500)

    def test_parse_explicit_plus(self):
        assert parse_signed_duration("+01:00.000") == timedelta(minutes=1)

    def test_format_negative(self):
        assert format_signed_duration(-timedelta(milliseconds=250)) == "-00:00:00.250"

    def test_round_trip_negative(self):
        value = -timedelta(minutes=3, milliseconds=7)
        assert parse_signed_duration(format_signed_duration(value)) == value
