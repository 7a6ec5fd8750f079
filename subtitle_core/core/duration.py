"""Duration codec: human-readable timecodes to and from timedelta.

WHY: Every text-based container writes cue times as ``HH:MM:SS<sep>fff``
with a format-specific separator ("," for SRT, "." for WebVTT) and a
format-specific number of fractional digits. One exact codec keeps
millisecond round-trips lossless across all adapters.

HOW: parse_duration() splits off the fractional segment on the separator,
then counts ":"-separated parts to decide between MM:SS and HH:MM:SS.
format_duration() works on integer milliseconds so no float rounding can
creep in.

RULES:
- Exactly 2 ":" parts → minutes:seconds; exactly 3 → hours:minutes:seconds
- The fractional segment is a decimal fraction of a second, right-padded to
  ``millisecond_digits`` ("5" with 3 digits → 500 ms)
- For ``millisecond_digits`` other than 3 the fraction is still read as a
  decimal fraction ("5" with 2 digits → 500 ms) on purpose, never scaled by
  a power of ten
- More than 3 fractional digits is a FormatError
- Every numeric segment must be a non-negative decimal integer
- format_duration() truncates the fraction to ``millisecond_digits`` digits
  and zero-pads beyond 3; it never rounds
- Negative durations cannot be formatted by format_duration(); the
  *_signed_duration() helpers add an explicit sign for CLI and JSON use
"""

from __future__ import annotations

from datetime import timedelta

from subtitle_core.core.errors import FormatError

MILLISECOND = timedelta(milliseconds=1)
_HOUR = timedelta(hours=1)
_MINUTE = timedelta(minutes=1)
_SECOND = timedelta(seconds=1)


def _parse_segment(token: str, timestamp: str) -> int:
    """Parse one numeric timecode segment as a non-negative integer."""
    token = token.strip()
    if not token.isdigit() or not token.isascii():
        raise FormatError(
            "Invalid timecode segment {!r} in {!r}".format(token, timestamp),
            text=token,
            context=timestamp,
        )
    return int(token)


def parse_duration(
    text: str,
    millisecond_separator: str = ",",
    millisecond_digits: int = 3,
) -> timedelta:
    """Parse ``H:MM:SS<sep>fff`` or ``MM:SS<sep>fff`` into a timedelta.

    Args:
        text: The timecode text, e.g. ``"00:01:02,500"``.
        millisecond_separator: Separator before the fractional segment.
        millisecond_digits: Expected width of the fractional segment.

    Returns:
        The duration the timecode denotes.

    Raises:
        FormatError: If any segment is malformed, the fraction has more
            than 3 digits, or the number of ":" parts is not 2 or 3.
    """
    fraction = timedelta(0)
    clock = text
    parts = text.split(millisecond_separator)
    if len(parts) >= 2:
        digits = parts[-1].strip()
        if len(digits) > 3:
            raise FormatError(
                "Invalid number of millisecond digits in {!r}".format(text),
                text=digits,
                context=text,
            )
        _parse_segment(digits, text)
        padded = digits.ljust(millisecond_digits, "0")
        fraction = timedelta(
            microseconds=int(padded) * 1_000_000 // 10 ** len(padded)
        )
        clock = millisecond_separator.join(parts[:-1])

    segments = clock.strip().split(":")
    if len(segments) == 2:
        hours = 0
        minutes, seconds = segments
    elif len(segments) == 3:
        hours = _parse_segment(segments[0], text)
        minutes, seconds = segments[1], segments[2]
    else:
        raise FormatError(
            "No hours, minutes or seconds detected in {!r}".format(text),
            text=clock,
            context=text,
        )

    return (
        hours * _HOUR
        + _parse_segment(minutes, text) * _MINUTE
        + _parse_segment(seconds, text) * _SECOND
        + fraction
    )


def format_duration(
    value: timedelta,
    millisecond_separator: str = ",",
    millisecond_digits: int = 3,
) -> str:
    """Render a timedelta as ``HH:MM:SS<sep>fff``.

    Sub-millisecond precision is dropped. Hours grow beyond two digits when
    needed.

    Raises:
        ValueError: If ``value`` is negative.
    """
    if value < timedelta(0):
        raise ValueError("Cannot format negative duration {!r}".format(value))

    total_ms = value // MILLISECOND
    hours, rest = divmod(total_ms, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    seconds, milliseconds = divmod(rest, 1000)

    fraction = "{:03d}".format(milliseconds)
    if millisecond_digits <= 3:
        fraction = fraction[:millisecond_digits]
    else:
        fraction = fraction.ljust(millisecond_digits, "0")

    return "{:02d}:{:02d}:{:02d}{}{}".format(
        hours, minutes, seconds, millisecond_separator, fraction
    )


def parse_signed_duration(
    text: str,
    millisecond_separator: str = ".",
    millisecond_digits: int = 3,
) -> timedelta:
    """Parse a timecode that may carry a leading "-" or "+" sign."""
    stripped = text.strip()
    if stripped.startswith("-"):
        return -parse_duration(stripped[1:], millisecond_separator, millisecond_digits)
    if stripped.startswith("+"):
        stripped = stripped[1:]
    return parse_duration(stripped, millisecond_separator, millisecond_digits)


def format_signed_duration(
    value: timedelta,
    millisecond_separator: str = ".",
    millisecond_digits: int = 3,
) -> str:
    """Like format_duration(), but renders negative values with a "-" prefix."""
    if value < timedelta(0):
        return "-" + format_duration(-value, millisecond_separator, millisecond_digits)
    return format_duration(value, millisecond_separator, millisecond_digits)
