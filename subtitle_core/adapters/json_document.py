"""Lossless JSON (.json) adapter for the whole Document model.

WHY: Text containers like SRT drop most of the model (styles, regions,
inline attributes, metadata). A JSON rendering that keeps everything lets
tools snapshot a Document, diff it, and feed it back in unchanged. The
output is validated against a bundled JSON schema so consumers can rely
on its shape.

HOW: Styles and regions are written as objects keyed by ID; items, lines
and fragments reference them by ID. Times go through the Duration Codec
with a "." separator and an explicit sign; colours go through the Color
Codec as 8-digit hex. The document is stamped with ``generated_at`` from the
injected clock.

RULES:
- Schema validation runs on both read and write
- Only attributes that are set are written
- A style or region reference to an unknown ID is a FormatError on read
- ``generated_at`` is informational and ignored on read
"""

from __future__ import annotations

import json
from dataclasses import fields
from datetime import timedelta
from pathlib import Path
from typing import Any, BinaryIO, Dict, Optional

import jsonschema

from subtitle_core import config
from subtitle_core.adapters.base import BaseAdapter, read_text
from subtitle_core.core.clock import SystemClock
from subtitle_core.core.color import Color
from subtitle_core.core.duration import format_signed_duration, parse_signed_duration
from subtitle_core.core.errors import FormatError
from subtitle_core.core.model import (
    COLOR_ATTRIBUTES,
    Document,
    Item,
    Line,
    LineItem,
    Metadata,
    Region,
    Style,
    StyleAttributes,
)

_SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "document.schema.json"

# Attribute name → declared scalar type, e.g. "ssa_bold" → "bool".
# Field annotations are strings of the form "Optional[<type>]".
_ATTRIBUTE_TYPES = {
    f.name: str(f.type)[len("Optional["):-1] for f in fields(StyleAttributes)
}

# JSON value types accepted per declared type; bool is excluded from numbers.
_JSON_TYPES = {
    "bool": (bool,),
    "int": (int,),
    "float": (int, float),
    "str": (str,),
    "Color": (str,),
}

_CACHED_SCHEMA: Optional[Dict[str, Any]] = None


def _get_schema() -> Dict[str, Any]:
    """Load the document schema, cached after the first call."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def _dump_attributes(attributes: Optional[StyleAttributes]) -> Dict[str, Any]:
    if attributes is None:
        return {}
    return {
        name: value.to_string(16) if name in COLOR_ATTRIBUTES else value
        for name, value in attributes.as_dict().items()
    }


def _load_attributes(data: Optional[Dict[str, Any]]) -> Optional[StyleAttributes]:
    if not data:
        return None
    attributes = StyleAttributes()
    for name, value in data.items():
        if name not in _ATTRIBUTE_TYPES:
            raise FormatError("Unknown attribute {!r}".format(name), text=name)
        expected = _ATTRIBUTE_TYPES[name]
        is_bool = isinstance(value, bool)
        if not isinstance(value, _JSON_TYPES[expected]) or (is_bool and expected != "bool"):
            raise FormatError(
                "Attribute {!r} expects {}, got {!r}".format(name, expected, value),
                text=json.dumps(value),
                context=name,
            )
        if name in COLOR_ATTRIBUTES:
            value = Color.from_string(value, 16)
        setattr(attributes, name, value)
    return attributes


def _reference(registry: Dict[str, Any], key: Optional[str], kind: str) -> Any:
    if key is None:
        return None
    if key not in registry:
        raise FormatError("Unknown {} {!r}".format(kind, key), text=key, context=kind)
    return registry[key]


def _dump_time(value: timedelta) -> str:
    return format_signed_duration(value, config.WEBVTT_MILLISECOND_SEPARATOR)


def _load_time(text: str) -> timedelta:
    return parse_signed_duration(text, config.WEBVTT_MILLISECOND_SEPARATOR)


class JSONAdapter(BaseAdapter):
    """Reads and writes the JSON rendering of a Document.

    Args:
        clock: Source of the ``generated_at`` stamp. Defaults to the
            system clock.
    """

    def __init__(self, clock: Any = None) -> None:
        self.clock = clock if clock is not None else SystemClock()

    @property
    def name(self) -> str:
        return "Subtitle JSON"

    def to_dict(self, document: Document) -> Dict[str, Any]:
        """Build the JSON-ready dict for ``document``.

        Raises:
            jsonschema.ValidationError: If the result does not conform to
                the document schema.
        """
        metadata = document.metadata
        output: Dict[str, Any] = {
            "generated_at": self.clock.now().isoformat(),
            "metadata": {
                "title": metadata.title,
                "language": metadata.language,
                "copyright": metadata.copyright,
                "framerate": metadata.framerate,
                "comments": list(metadata.comments),
            },
            "styles": {
                style_id: {
                    "parent": style.parent_id,
                    "attributes": _dump_attributes(style.inline_style),
                }
                for style_id, style in document.styles.items()
            },
            "regions": {
                region_id: {
                    "style": region.style.id if region.style else None,
                    "attributes": _dump_attributes(region.inline_style),
                }
                for region_id, region in document.regions.items()
            },
            "items": [
                {
                    "start": _dump_time(item.start_at),
                    "end": _dump_time(item.end_at),
                    "style": item.style.id if item.style else None,
                    "region": item.region.id if item.region else None,
                    "comments": list(item.comments),
                    "attributes": _dump_attributes(item.inline_style),
                    "lines": [
                        {
                            "voice": line.voice_name,
                            "items": [
                                {
                                    "text": line_item.text,
                                    "style": line_item.style.id if line_item.style else None,
                                    "attributes": _dump_attributes(line_item.inline_style),
                                }
                                for line_item in line.items
                            ],
                        }
                        for line in item.lines
                    ],
                }
                for item in document.items
            ],
        }
        jsonschema.validate(instance=output, schema=_get_schema())
        return output

    def from_dict(self, data: Dict[str, Any]) -> Document:
        """Rebuild a Document from its JSON rendering.

        Raises:
            FormatError: If the data violates the schema, or references an
                unknown style or region.
        """
        try:
            jsonschema.validate(instance=data, schema=_get_schema())
        except jsonschema.ValidationError as exc:
            raise FormatError(
                "Invalid subtitle JSON: {}".format(exc.message),
                text=json.dumps(exc.instance)[:80],
                context="/".join(str(part) for part in exc.absolute_path),
            ) from exc

        meta = data["metadata"]
        document = Document(metadata=Metadata(
            title=meta.get("title"),
            language=meta.get("language"),
            copyright=meta.get("copyright"),
            framerate=meta.get("framerate"),
            comments=list(meta.get("comments", [])),
        ))

        for style_id, entry in data["styles"].items():
            document.add_style(Style(
                id=style_id,
                inline_style=_load_attributes(entry.get("attributes")),
                parent_id=entry.get("parent"),
            ))

        for region_id, entry in data["regions"].items():
            document.add_region(Region(
                id=region_id,
                inline_style=_load_attributes(entry.get("attributes")),
                style=_reference(document.styles, entry.get("style"), "style"),
            ))

        for entry in data["items"]:
            document.items.append(Item(
                start_at=_load_time(entry["start"]),
                end_at=_load_time(entry["end"]),
                lines=[
                    Line(
                        items=[
                            LineItem(
                                text=fragment["text"],
                                inline_style=_load_attributes(fragment.get("attributes")),
                                style=_reference(document.styles, fragment.get("style"), "style"),
                            )
                            for fragment in line["items"]
                        ],
                        voice_name=line.get("voice"),
                    )
                    for line in entry["lines"]
                ],
                comments=list(entry.get("comments", [])),
                inline_style=_load_attributes(entry.get("attributes")),
                region=_reference(document.regions, entry.get("region"), "region"),
                style=_reference(document.styles, entry.get("style"), "style"),
            ))

        return document

    def parse(
        self,
        stream: BinaryIO,
        options: Optional[Dict[str, Any]] = None,
    ) -> Document:
        text = read_text(stream, options)
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise FormatError(
                "Invalid JSON: {}".format(exc.msg),
                text=text[exc.pos:exc.pos + 20],
                context="line {}".format(exc.lineno),
            ) from exc
        return self.from_dict(data)

    def serialize(self, document: Document, stream: BinaryIO) -> None:
        content = json.dumps(self.to_dict(document), indent=2, ensure_ascii=False)
        stream.write((content + "\n").encode(config.DEFAULT_ENCODING))
