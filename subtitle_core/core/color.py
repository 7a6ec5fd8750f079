"""Packed 32-bit colour value and its text codec.

WHY: SSA/ASS and Teletext store colours as one integer word, written either
as hex or as decimal depending on the field. Adapters need an exact,
lossless conversion between that word and four 8-bit channels.

HOW: The word packs the channels as ``alpha<<24 | blue<<16 | green<<8 | red``.
Color.from_string() parses a signed 64-bit integer in the given base and
unpacks its low 32 bits; Color.to_string() packs and renders.

RULES:
- Channel order in the packed word is alpha, blue, green, red (not ARGB)
- Base 16 output is exactly 8 lowercase hex digits, zero-padded
- Any other base renders the packed word as an unsigned decimal
- Input must fit a signed 64-bit integer; bits above 32 are ignored
"""

from __future__ import annotations

from dataclasses import dataclass

from subtitle_core.core.errors import FormatError

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


@dataclass(frozen=True)
class Color:
    """Four independent 8-bit channels."""

    alpha: int = 0
    blue: int = 0
    green: int = 0
    red: int = 0

    def __post_init__(self) -> None:
        for name in ("alpha", "blue", "green", "red"):
            value = getattr(self, name)
            if not 0 <= value <= 0xFF:
                raise ValueError(
                    "Color channel {} must be within 0..255, got {}".format(name, value)
                )

    @classmethod
    def from_word(cls, word: int) -> Color:
        """Unpack the low 32 bits of an integer word."""
        return cls(
            alpha=(word >> 24) & 0xFF,
            blue=(word >> 16) & 0xFF,
            green=(word >> 8) & 0xFF,
            red=word & 0xFF,
        )

    @classmethod
    def from_string(cls, text: str, base: int) -> Color:
        """Parse ``text`` as an integer in ``base`` and unpack it.

        Raises:
            FormatError: If the text is not a valid signed 64-bit integer
                in the given base.
        """
        body = text[1:] if text.startswith(("+", "-")) else text
        if not body or any(c not in _DIGITS[:base] for c in body.lower()):
            raise FormatError(
                "Parsing int {!r} with base {} failed".format(text, base),
                text=text,
                context="base {}".format(base),
            )
        try:
            value = int(text, base)
        except ValueError as exc:
            raise FormatError(
                "Parsing int {!r} with base {} failed".format(text, base),
                text=text,
                context="base {}".format(base),
            ) from exc
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise FormatError(
                "Integer {!r} with base {} is out of range".format(text, base),
                text=text,
                context="base {}".format(base),
            )
        return cls.from_word(value)

    @property
    def word(self) -> int:
        """The packed 32-bit word, interpreted as unsigned."""
        return (
            (self.alpha & 0xFF) << 24
            | (self.blue & 0xFF) << 16
            | (self.green & 0xFF) << 8
            | (self.red & 0xFF)
        )

    def to_string(self, base: int = 16) -> str:
        if base == 16:
            return "{:08x}".format(self.word)
        return str(self.word)


COLOR_BLACK = Color()
COLOR_BLUE = Color(blue=255)
COLOR_CYAN = Color(blue=255, green=255)
COLOR_GREEN = Color(green=255)
COLOR_MAGENTA = Color(blue=255, red=255)
COLOR_RED = Color(red=255)
COLOR_YELLOW = Color(green=255, red=255)
COLOR_WHITE = Color(blue=255, green=255, red=255)
