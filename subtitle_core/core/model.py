"""Format-agnostic subtitle document model.

WHY: Each container format has its own syntax, but the content is always
the same shape: timed cues made of lines of styled text, shared named styles,
on-screen regions and a few document-level descriptive fields. Adapters read
into and write out of this one model, and the timing algebra mutates it.

HOW: Plain dataclasses form the entity graph:
  Document        — aggregate root owning items, styles, regions, metadata
  Item            — one cue: start/end offsets, lines, comments, references
  Line / LineItem — a displayed row and its styled text fragments
  Style / Region  — named, shared, inheritable attribute bags
  StyleAttributes — flat bag of optional, per-format-namespaced attributes
  Metadata        — title, language, copyright, framerate, comments

RULES:
- Times are ``datetime.timedelta``; start <= end is expected, not enforced
- Item order is only meaningful after algebra.order() has run
- Styles and Regions are owned by the Document maps, keyed by their ID;
  items, lines and regions hold non-owning references to them
- Style.parent_id names another style in the same Document; parent chains
  are resolved with styles.resolve_style(), never followed blindly
- Every StyleAttributes field defaults to None ("inherit / format default")
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import timedelta
from typing import Any, Dict, List, Optional

from subtitle_core.core.color import Color


@dataclass
class StyleAttributes:
    """Optional presentation attributes, namespaced by container format.

    Only the adapter for a given format interprets its own namespace; the
    model never fills in defaults.
    """

    ssa_alignment: Optional[int] = None
    ssa_alpha_level: Optional[float] = None
    ssa_angle: Optional[float] = None  # degrees
    ssa_back_colour: Optional[Color] = None
    ssa_bold: Optional[bool] = None
    ssa_border_style: Optional[int] = None
    ssa_effect: Optional[str] = None
    ssa_encoding: Optional[int] = None
    ssa_font_name: Optional[str] = None
    ssa_font_size: Optional[float] = None
    ssa_italic: Optional[bool] = None
    ssa_layer: Optional[int] = None
    ssa_margin_left: Optional[int] = None  # pixels
    ssa_margin_right: Optional[int] = None  # pixels
    ssa_margin_vertical: Optional[int] = None  # pixels
    ssa_marked: Optional[bool] = None
    ssa_outline: Optional[int] = None  # pixels
    ssa_outline_colour: Optional[Color] = None
    ssa_primary_colour: Optional[Color] = None
    ssa_scale_x: Optional[float] = None  # %
    ssa_scale_y: Optional[float] = None  # %
    ssa_secondary_colour: Optional[Color] = None
    ssa_shadow: Optional[int] = None  # pixels
    ssa_spacing: Optional[int] = None  # pixels
    ssa_strikeout: Optional[bool] = None
    ssa_underline: Optional[bool] = None
    teletext_color: Optional[Color] = None
    teletext_double_height: Optional[bool] = None
    teletext_double_size: Optional[bool] = None
    teletext_double_width: Optional[bool] = None
    teletext_spaces_after: Optional[int] = None
    teletext_spaces_before: Optional[int] = None
    ttml_background_color: Optional[str] = None
    ttml_color: Optional[str] = None
    ttml_direction: Optional[str] = None
    ttml_display: Optional[str] = None
    ttml_display_align: Optional[str] = None
    ttml_extent: Optional[str] = None
    ttml_font_family: Optional[str] = None
    ttml_font_size: Optional[str] = None
    ttml_font_style: Optional[str] = None
    ttml_font_weight: Optional[str] = None
    ttml_line_height: Optional[str] = None
    ttml_opacity: Optional[str] = None
    ttml_origin: Optional[str] = None
    ttml_overflow: Optional[str] = None
    ttml_padding: Optional[str] = None
    ttml_show_background: Optional[str] = None
    ttml_text_align: Optional[str] = None
    ttml_text_decoration: Optional[str] = None
    ttml_text_outline: Optional[str] = None
    ttml_unicode_bidi: Optional[str] = None
    ttml_visibility: Optional[str] = None
    ttml_wrap_option: Optional[str] = None
    ttml_writing_mode: Optional[str] = None
    ttml_z_index: Optional[int] = None
    webvtt_align: Optional[str] = None
    webvtt_line: Optional[str] = None
    webvtt_lines: Optional[int] = None
    webvtt_position: Optional[str] = None
    webvtt_region_anchor: Optional[str] = None
    webvtt_scroll: Optional[str] = None
    webvtt_size: Optional[str] = None
    webvtt_vertical: Optional[str] = None
    webvtt_viewport_anchor: Optional[str] = None
    webvtt_width: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        """Return only the attributes that are set."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    def overlay(self, other: Optional[StyleAttributes]) -> StyleAttributes:
        """Return a copy where every attribute set on ``other`` wins."""
        merged = StyleAttributes(**self.as_dict())
        if other is not None:
            for name, value in other.as_dict().items():
                setattr(merged, name, value)
        return merged


# Attributes holding a packed Color rather than a scalar.
COLOR_ATTRIBUTES = frozenset({
    "ssa_back_colour",
    "ssa_outline_colour",
    "ssa_primary_colour",
    "ssa_secondary_colour",
    "teletext_color",
})


@dataclass
class Style:
    """A named attribute bag that may inherit from a parent style."""

    id: str
    inline_style: Optional[StyleAttributes] = None
    parent_id: Optional[str] = None


@dataclass
class Region:
    """A named on-screen placement, optionally styled."""

    id: str
    inline_style: Optional[StyleAttributes] = None
    style: Optional[Style] = None


@dataclass
class LineItem:
    text: str
    inline_style: Optional[StyleAttributes] = None
    style: Optional[Style] = None


@dataclass
class Line:
    """A displayed row of text, optionally attributed to a speaker."""

    items: List[LineItem] = field(default_factory=list)
    voice_name: Optional[str] = None

    def __str__(self) -> str:
        return " ".join(item.text for item in self.items)


@dataclass
class Item:
    """One cue shown between two time offsets.

    RULES:
    - start_at / end_at: signed offsets from the start of the media
    - inline_style overrides the referenced style when rendering
    - str(item) joins lines with " - "; the algebra compares items by it
    """

    start_at: timedelta
    end_at: timedelta
    lines: List[Line] = field(default_factory=list)
    comments: List[str] = field(default_factory=list)
    inline_style: Optional[StyleAttributes] = None
    region: Optional[Region] = None
    style: Optional[Style] = None

    def __str__(self) -> str:
        return " - ".join(str(line) for line in self.lines)


@dataclass
class Metadata:
    title: Optional[str] = None
    language: Optional[str] = None
    copyright: Optional[str] = None
    framerate: Optional[int] = None
    comments: List[str] = field(default_factory=list)


@dataclass
class Document:
    """The aggregate root that adapters populate and the algebra mutates."""

    items: List[Item] = field(default_factory=list)
    regions: Dict[str, Region] = field(default_factory=dict)
    styles: Dict[str, Style] = field(default_factory=dict)
    metadata: Metadata = field(default_factory=Metadata)

    def add_style(self, style: Style) -> Style:
        """Register a style under its ID, replacing any previous one."""
        self.styles[style.id] = style
        return style

    def add_region(self, region: Region) -> Region:
        """Register a region under its ID, replacing any previous one."""
        self.regions[region.id] = region
        return region


def text_item(
    start_at: timedelta,
    end_at: timedelta,
    *texts: str,
) -> Item:
    """Build an unstyled item with one single-fragment line per text."""
    return Item(
        start_at=start_at,
        end_at=end_at,
        lines=[Line(items=[LineItem(text=text)]) for text in texts],
    )
