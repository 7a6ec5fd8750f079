"""SubRip (.srt) adapter.

WHY: SRT is the lowest common denominator of subtitle formats; every
player and editor reads it. It only carries timing and plain text lines,
which makes it the simplest end-to-end exercise of the Document model.

HOW: parse() scans lines; a line containing "-->" opens a new item, and
the numeric counter line right before it is dropped. Every other non-blank
line is a text line of the current item. serialize() emits numbered blocks
separated by a blank line.

RULES:
- Timing line: ``HH:MM:SS,mmm --> HH:MM:SS,mmm`` (hours optional on input)
- Anything after the end timestamp (X1:/Y1: coordinates) is ignored
- Text before the first timing line is ignored
- Block counters are regenerated on output, starting at 1
- A UTF-8 BOM is accepted on input and written when SRT_WRITE_BOM is set
- Line fragments are joined by a single space on output (SRT has no spans)
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, BinaryIO, Dict, List, Optional, Tuple

from subtitle_core import config
from subtitle_core.adapters.base import BaseAdapter, read_text
from subtitle_core.core.duration import format_duration, parse_duration
from subtitle_core.core.errors import FormatError
from subtitle_core.core.model import Document, Item, Line, LineItem

logger = logging.getLogger(__name__)

_ARROW = "-->"


def parse_timing_line(line: str, line_number: int) -> Tuple[timedelta, timedelta]:
    """Parse ``start --> end [coordinates]`` into two timedeltas."""
    left, _, right = line.partition(_ARROW)
    end_tokens = right.split()
    if not end_tokens:
        raise FormatError(
            "Missing end time on line {}".format(line_number),
            text=line,
            context="line {}".format(line_number),
        )
    try:
        start_at = parse_duration(
            left.strip(), config.SRT_MILLISECOND_SEPARATOR, config.MILLISECOND_DIGITS
        )
        end_at = parse_duration(
            end_tokens[0], config.SRT_MILLISECOND_SEPARATOR, config.MILLISECOND_DIGITS
        )
    except FormatError as exc:
        raise FormatError(
            "Invalid timing on line {}: {}".format(line_number, exc),
            text=exc.text,
            context="line {}".format(line_number),
        ) from exc
    return start_at, end_at


class SRTAdapter(BaseAdapter):
    """Reads and writes SubRip subtitle files."""

    @property
    def name(self) -> str:
        return "SubRip"

    def parse(
        self,
        stream: BinaryIO,
        options: Optional[Dict[str, Any]] = None,
    ) -> Document:
        document = Document()
        current: Optional[Item] = None

        for line_number, raw in enumerate(read_text(stream, options).splitlines(), 1):
            line = raw.strip()
            if _ARROW in line:
                # The counter line belongs to the new block, not the old one
                if current is not None and current.lines and str(current.lines[-1]).isdigit():
                    current.lines.pop()
                start_at, end_at = parse_timing_line(line, line_number)
                current = Item(start_at=start_at, end_at=end_at)
                document.items.append(current)
            elif line and current is not None:
                current.lines.append(Line(items=[LineItem(text=line)]))

        logger.debug("Parsed %d SRT items", len(document.items))
        return document

    def serialize(self, document: Document, stream: BinaryIO) -> None:
        blocks: List[str] = []
        for index, item in enumerate(document.items, 1):
            block = [
                str(index),
                "{} --> {}".format(
                    format_duration(
                        item.start_at,
                        config.SRT_MILLISECOND_SEPARATOR,
                        config.MILLISECOND_DIGITS,
                    ),
                    format_duration(
                        item.end_at,
                        config.SRT_MILLISECOND_SEPARATOR,
                        config.MILLISECOND_DIGITS,
                    ),
                ),
            ]
            block.extend(str(line) for line in item.lines)
            blocks.append("\n".join(block))

        if config.SRT_WRITE_BOM:
            stream.write(config.BOM)
        stream.write(("\n\n".join(blocks) + "\n").encode(config.DEFAULT_ENCODING))
