"""WebVTT (.vtt) adapter.

WHY: WebVTT is the subtitle format of HTML5 video. Beyond timing and text
it carries cue placement settings, named regions, speaker voices and
comments, which all map onto the Document model.

HOW: The content is split into blank-line separated blocks after the
mandatory ``WEBVTT`` header. Each block is a NOTE (comments), a STYLE
(skipped, CSS is not modelled), a REGION definition or a cue. serialize()
writes regions first, then each cue preceded by its comments.

RULES:
- First non-empty line must start with "WEBVTT", else FormatError; a
  "Language:" header line fills Metadata.language
- Timestamps use "." as separator; the hour field is optional on input
- NOTE text is attached as comments to the next cue
- Cue settings align/line/position/size/vertical map to webvtt_* inline
  attributes; ``region:<id>`` must name a REGION defined earlier
- ``<v Name>text`` sets Line.voice_name; other markup is kept verbatim
- Cue identifiers are not kept; output numbers cues from 1
"""

from __future__ import annotations

import logging
import re
from datetime import timedelta
from typing import Any, BinaryIO, Dict, Iterator, List, Optional, Tuple

from subtitle_core import config
from subtitle_core.adapters.base import BaseAdapter, read_text
from subtitle_core.core.duration import format_duration, parse_duration
from subtitle_core.core.errors import FormatError
from subtitle_core.core.model import (
    Document,
    Item,
    Line,
    LineItem,
    Region,
    StyleAttributes,
)

logger = logging.getLogger(__name__)

_HEADER = "WEBVTT"
_ARROW = "-->"
_VOICE_RE = re.compile(r"^<v(?:\.[^\s>]+)?\s+([^>]+)>(.*?)(?:</v>)?$")

# Cue setting keyword → StyleAttributes field
_CUE_SETTINGS = {
    "align": "webvtt_align",
    "line": "webvtt_line",
    "position": "webvtt_position",
    "size": "webvtt_size",
    "vertical": "webvtt_vertical",
}

# REGION setting keyword → StyleAttributes field
_REGION_SETTINGS = {
    "width": "webvtt_width",
    "lines": "webvtt_lines",
    "regionanchor": "webvtt_region_anchor",
    "viewportanchor": "webvtt_viewport_anchor",
    "scroll": "webvtt_scroll",
}


def _split_setting(token: str, context: str) -> Tuple[str, str]:
    key, sep, value = token.partition(":")
    if not sep or not key or not value:
        raise FormatError(
            "Invalid setting {!r}".format(token), text=token, context=context
        )
    return key, value


def _parse_timestamp(text: str, context: str) -> timedelta:
    try:
        return parse_duration(
            text, config.WEBVTT_MILLISECOND_SEPARATOR, config.MILLISECOND_DIGITS
        )
    except FormatError as exc:
        raise FormatError(
            "Invalid timestamp in {}: {}".format(context, exc),
            text=exc.text,
            context=context,
        ) from exc


def _format_timestamp(value: timedelta) -> str:
    return format_duration(
        value, config.WEBVTT_MILLISECOND_SEPARATOR, config.MILLISECOND_DIGITS
    )


def _parse_region(lines: List[str], context: str) -> Region:
    """Build a Region from the setting lines of a REGION block."""
    region_id = None
    attributes = StyleAttributes()
    for token in " ".join(lines).split():
        key, value = _split_setting(token, context)
        if key == "id":
            region_id = value
        elif key == "lines":
            if not value.isdigit():
                raise FormatError(
                    "Invalid region lines {!r}".format(value), text=value, context=context
                )
            attributes.webvtt_lines = int(value)
        elif key in _REGION_SETTINGS:
            setattr(attributes, _REGION_SETTINGS[key], value)
        else:
            logger.warning("Ignoring unknown region setting %s in %s", key, context)
    if region_id is None:
        raise FormatError("Region without id", text=" ".join(lines), context=context)
    return Region(id=region_id, inline_style=attributes)


def _parse_text_line(text: str) -> Line:
    match = _VOICE_RE.match(text)
    if match:
        return Line(
            items=[LineItem(text=match.group(2).strip())],
            voice_name=match.group(1).strip(),
        )
    return Line(items=[LineItem(text=text)])


class WebVTTAdapter(BaseAdapter):
    """Reads and writes WebVTT subtitle files."""

    @property
    def name(self) -> str:
        return "WebVTT"

    def parse(
        self,
        stream: BinaryIO,
        options: Optional[Dict[str, Any]] = None,
    ) -> Document:
        lines = read_text(stream, options).splitlines()

        # Skip leading blank lines, then require the header
        position = 0
        while position < len(lines) and not lines[position].strip():
            position += 1
        if position == len(lines) or not lines[position].strip().startswith(_HEADER):
            raise FormatError(
                "Missing WEBVTT header",
                text=lines[position] if position < len(lines) else "",
                context="line {}".format(position + 1),
            )

        document = Document()
        pending_comments: List[str] = []
        blocks = self._blocks(lines, position)
        _, header = next(blocks)
        for text in header[1:]:
            key, _, value = text.partition(":")
            if key.strip().lower() == "language" and value.strip():
                document.metadata.language = value.strip()

        for first_line, block in blocks:
            context = "block at line {}".format(first_line)
            head = block[0]
            if head.startswith("NOTE"):
                note = [head[len("NOTE"):].strip()] + block[1:]
                pending_comments.extend(text for text in note if text)
            elif head == "STYLE":
                logger.debug("Skipping STYLE %s", context)
            elif head.startswith("REGION"):
                settings = [head[len("REGION"):].strip()] + block[1:]
                document.add_region(_parse_region(settings, context))
            elif any(_ARROW in text for text in block[:2]):
                item = self._parse_cue(document, block, context)
                item.comments.extend(pending_comments)
                pending_comments = []
                document.items.append(item)
            else:
                logger.warning("Ignoring unrecognized %s", context)

        logger.debug("Parsed %d WebVTT items", len(document.items))
        return document

    @staticmethod
    def _blocks(lines: List[str], start: int) -> Iterator[Tuple[int, List[str]]]:
        """Yield (first line number, stripped lines) per blank-separated block."""
        block: List[str] = []
        first_line = start + 1
        for number, raw in enumerate(lines[start:], start + 1):
            text = raw.strip()
            if text:
                if not block:
                    first_line = number
                block.append(text)
            elif block:
                yield first_line, block
                block = []
        if block:
            yield first_line, block

    def _parse_cue(self, document: Document, block: List[str], context: str) -> Item:
        # An optional identifier line precedes the timing line
        timing_index = 0 if _ARROW in block[0] else 1
        left, _, right = block[timing_index].partition(_ARROW)
        tokens = right.split()
        if not tokens:
            raise FormatError(
                "Missing end time", text=block[timing_index], context=context
            )

        item = Item(
            start_at=_parse_timestamp(left.strip(), context),
            end_at=_parse_timestamp(tokens[0], context),
        )
        attributes = StyleAttributes()
        for token in tokens[1:]:
            key, value = _split_setting(token, context)
            if key == "region":
                if value not in document.regions:
                    raise FormatError(
                        "Unknown region {!r}".format(value), text=value, context=context
                    )
                item.region = document.regions[value]
            elif key in _CUE_SETTINGS:
                setattr(attributes, _CUE_SETTINGS[key], value)
            else:
                logger.warning("Ignoring unknown cue setting %s in %s", key, context)
        if attributes.as_dict():
            item.inline_style = attributes

        item.lines = [_parse_text_line(text) for text in block[timing_index + 1:]]
        return item

    def serialize(self, document: Document, stream: BinaryIO) -> None:
        header = _HEADER
        if document.metadata.language:
            header += "\nLanguage: {}".format(document.metadata.language)
        blocks: List[str] = [header]

        for region_id in sorted(document.regions):
            region = document.regions[region_id]
            settings = ["id:{}".format(region.id)]
            attributes = region.inline_style or StyleAttributes()
            for key, name in _REGION_SETTINGS.items():
                value = getattr(attributes, name)
                if value is not None:
                    settings.append("{}:{}".format(key, value))
            blocks.append("REGION\n" + " ".join(settings))

        for index, item in enumerate(document.items, 1):
            for comment in item.comments:
                blocks.append("NOTE " + comment)

            timing = "{} --> {}".format(
                _format_timestamp(item.start_at), _format_timestamp(item.end_at)
            )
            settings = []
            if item.region is not None:
                settings.append("region:{}".format(item.region.id))
            attributes = item.inline_style or StyleAttributes()
            for key, name in _CUE_SETTINGS.items():
                value = getattr(attributes, name)
                if value is not None:
                    settings.append("{}:{}".format(key, value))
            if settings:
                timing += " " + " ".join(settings)

            cue = [str(index), timing]
            for line in item.lines:
                if line.voice_name:
                    cue.append("<v {}>{}".format(line.voice_name, line))
                else:
                    cue.append(str(line))
            blocks.append("\n".join(cue))

        stream.write(("\n\n".join(blocks) + "\n").encode(config.DEFAULT_ENCODING))
