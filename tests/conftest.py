"""Shared test fixtures for the subtitle_core test suite.

WHY: Algebra, adapter and CLI tests all need small, fully known documents.
Centralizing them here keeps the expected timings in one place.

HOW: Module-level constants hold sample file contents; pytest fixtures
expose them along with a styled sample document.

RULES:
- Times are built with the ``s()`` helper for readability
- The styled document uses deterministic IDs ("s1", "base", "top")
"""

from datetime import timedelta

import pytest

from subtitle_core.core.color import COLOR_RED, COLOR_WHITE
from subtitle_core.core.model import (
    Document,
    Item,
    Line,
    LineItem,
    Metadata,
    Region,
    Style,
    StyleAttributes,
    text_item,
)


def s(seconds: float) -> timedelta:
    return timedelta(seconds=seconds)


SAMPLE_SRT = (
    "1\n"
    "00:00:01,000 --> 00:00:02,500\n"
    "Hello there.\n"
    "\n"
    "2\n"
    "00:00:03,000 --> 00:00:05,250 X1:40 X2:600 Y1:20 Y2:50\n"
    "How are you\n"
    "doing today?\n"
    "\n"
    "3\n"
    "00:01:00,100 --> 00:01:02,000\n"
    "42\n"
)

SAMPLE_VTT = (
    "WEBVTT\n"
    "Language: en\n"
    "\n"
    "REGION\n"
    "id:fred width:40% lines:3 regionanchor:0%,100% viewportanchor:10%,90% scroll:up\n"
    "\n"
    "STYLE\n"
    "::cue { color: yellow }\n"
    "\n"
    "NOTE this is a comment\n"
    "\n"
    "intro\n"
    "00:01.000 --> 00:02.500 region:fred align:start position:10%\n"
    "<v Bob>Hello there.\n"
    "\n"
    "00:00:03.000 --> 00:00:05.250\n"
    "How are you\n"
    "<v.loud Alice>doing today?</v>\n"
)


@pytest.fixture
def sample_srt():
    return SAMPLE_SRT


@pytest.fixture
def sample_vtt():
    return SAMPLE_VTT


@pytest.fixture
def styled_document():
    """A document exercising styles, inheritance, regions and metadata."""
    document = Document(metadata=Metadata(
        title="Sample",
        language="en",
        copyright="ACME",
        framerate=25,
        comments=["first draft"],
    ))
    base = document.add_style(Style(
        id="base",
        inline_style=StyleAttributes(ssa_font_name="Arial", ssa_font_size=20.0),
    ))
    s1 = document.add_style(Style(
        id="s1",
        inline_style=StyleAttributes(ssa_primary_colour=COLOR_RED, ssa_bold=True),
        parent_id=base.id,
    ))
    top = document.add_region(Region(
        id="top",
        inline_style=StyleAttributes(webvtt_line="0", ttml_origin="10% 10%"),
        style=base,
    ))
    document.items.append(Item(
        start_at=s(1),
        end_at=s(2.5),
        lines=[
            Line(
                items=[
                    LineItem(text="Hello"),
                    LineItem(
                        text="world",
                        style=s1,
                        inline_style=StyleAttributes(ssa_italic=True),
                    ),
                ],
                voice_name="Bob",
            ),
        ],
        comments=["greeting"],
        inline_style=StyleAttributes(ssa_outline_colour=COLOR_WHITE, ssa_margin_left=12),
        region=top,
        style=s1,
    ))
    document.items.append(text_item(s(3), s(4), "Second", "cue"))
    return document
