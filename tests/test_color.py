"""Unit tests for the packed colour codec.

WHY: SSA-style adapters depend on the exact alpha/blue/green/red packing.
A swapped channel turns white text blue on screen.
"""

import pytest

from subtitle_core.core.color import (
    COLOR_BLUE,
    COLOR_RED,
    COLOR_WHITE,
    COLOR_YELLOW,
    Color,
)
from subtitle_core.core.errors import FormatError


class TestPacking:
    """The packed word is alpha<<24 | blue<<16 | green<<8 | red."""

    def test_word_layout(self):
        color = Color(alpha=0x11, blue=0x22, green=0x33, red=0x44)
        assert color.word == 0x11223344

    def test_red_is_low_byte(self):
        assert COLOR_RED.to_string(16) == "000000ff"

    def test_blue_is_third_byte(self):
        assert COLOR_BLUE.to_string(16) == "00ff0000"

    def test_yellow(self):
        assert COLOR_YELLOW.to_string(16) == "0000ffff"


class TestChannelRange:
    """Each channel must fit in 8 bits."""

    @pytest.mark.parametrize("channels", [
        {"red": 256},
        {"alpha": -1},
        {"blue": 0x100},
        {"green": 1000},
    ])
    def test_out_of_range_rejected(self, channels):
        with pytest.raises(ValueError):
            Color(**channels)

    def test_bounds_accepted(self):
        assert Color(alpha=255, red=0).word == 0xFF000000


class TestToString:
    def test_hex_is_eight_lowercase_digits(self):
        assert Color(alpha=0xAB, blue=0xCD).to_string(16) == "abcd0000"

    def test_decimal_is_unsigned(self):
        color = Color(alpha=255, blue=255, green=255, red=255)
        assert color.to_string(10) == "4294967295"

    def test_decimal_white(self):
        assert COLOR_WHITE.to_string(10) == str(0x00FFFFFF)


class TestFromString:
    def test_hex(self):
        assert Color.from_string("80ff0000", 16) == Color(alpha=0x80, blue=0xFF)

    def test_decimal(self):
        assert Color.from_string("255", 10) == COLOR_RED

    def test_bits_above_32_are_ignored(self):
        assert Color.from_string("1000000ff", 16) == COLOR_RED

    def test_negative_value_uses_twos_complement(self):
        assert Color.from_string("-1", 10) == Color(alpha=255, blue=255, green=255, red=255)

    @pytest.mark.parametrize("text,base", [
        ("", 16),
        ("zz", 16),
        ("12.5", 10),
        ("0xff", 16),
        ("ff", 10),
        ("9223372036854775808", 10),
    ])
    def test_invalid(self, text, base):
        with pytest.raises(FormatError) as info:
            Color.from_string(text, base)
        assert info.value.text == text
        assert info.value.context == "base {}".format(base)


class TestRoundTrip:
    """Both textual bases reconstruct every channel exactly."""

    @pytest.mark.parametrize("color", [
        Color(),
        Color(alpha=1, blue=2, green=3, red=4),
        Color(alpha=255, blue=0, green=128, red=7),
        Color(alpha=255, blue=255, green=255, red=255),
    ])
    @pytest.mark.parametrize("base", [16, 10])
    def test_round_trip(self, color, base):
        assert Color.from_string(color.to_string(base), base) == color
