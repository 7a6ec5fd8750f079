"""Document-level timing operations: order, shift, force duration,
fragment, unfragment and merge.

WHY: Re-timing, splitting cues on fixed boundaries and re-assembling them
are needed by every container adapter and by the CLI, and their naive
versions are easy to get subtly wrong (unstable ordering, index shifts while
inserting, off-by-one boundaries). This module gives them one exact,
reproducible definition.

HOW: Each operation takes a Document and mutates its item list and, where
stated, item timing fields. fragment() never inserts into the list it is
scanning: every boundary pass builds a fresh list and swaps it in.

RULES:
- order() is a stable ascending sort on start_at
- duration() is the end of the *last* item; call order() first if needed
- force_duration() truncates with a single left-to-right scan, then pads
  with a one-millisecond "..." placeholder item if still too short
- fragment() splits at every multiple of the fragment size strictly inside
  a cue, up to the last item's end, then orders
- unfragment() merges consecutive items with equal text whose times touch,
  then orders; styles, regions and comments are ignored for equality
- merge() appends the other document's items, orders, and unions its
  styles and regions first-write-wins
- Nothing here reads the clock or performs I/O
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import List

from subtitle_core.core.duration import MILLISECOND
from subtitle_core.core.model import Document, Item, Line, LineItem

logger = logging.getLogger(__name__)

# Text of the filler item force_duration() appends.
PLACEHOLDER_TEXT = "..."


def is_empty(document: Document) -> bool:
    return not document.items


def order(document: Document) -> None:
    """Sort items by start offset, keeping equal-start items in place."""
    document.items.sort(key=lambda item: item.start_at)


def add(document: Document, delta: timedelta) -> None:
    """Shift every item by ``delta``. Negative results are allowed."""
    for item in document.items:
        item.start_at += delta
        item.end_at += delta


def duration(document: Document) -> timedelta:
    """End offset of the last item, or zero for an empty document."""
    if not document.items:
        return timedelta(0)
    return document.items[-1].end_at


def force_duration(document: Document, target: timedelta) -> None:
    """Make ``duration(document) == target``.

    RULES:
    - No-op when the duration already matches
    - Too long: drop the first item starting at or after ``target`` and
      everything after it; clamp the end of earlier items that straddle it
    - Still too short: append a placeholder item spanning
      ``[target - 1ms, target]`` with the text "..."
    - With ``target == 0`` the placeholder starts at -1ms; an emptied
      document already has zero duration and gets no placeholder
    """
    if duration(document) == target:
        return

    if duration(document) > target:
        for index, item in enumerate(document.items):
            if item.start_at >= target:
                logger.debug(
                    "Dropping %d items starting at or after %s",
                    len(document.items) - index, target,
                )
                del document.items[index:]
                break
            if item.end_at > target:
                item.end_at = target

    if duration(document) < target:
        document.items.append(Item(
            start_at=target - MILLISECOND,
            end_at=target,
            lines=[Line(items=[LineItem(text=PLACEHOLDER_TEXT)])],
        ))


def _split_at(item: Item, boundary: timedelta) -> List[Item]:
    """Split ``item`` into ``[start, boundary)`` and ``[boundary, end)``."""
    def half(start_at: timedelta, end_at: timedelta) -> Item:
        return Item(
            start_at=start_at,
            end_at=end_at,
            lines=list(item.lines),
            comments=list(item.comments),
            inline_style=item.inline_style,
            region=item.region,
            style=item.style,
        )

    return [half(item.start_at, boundary), half(boundary, item.end_at)]


def fragment(document: Document, fragment_size: timedelta) -> None:
    """Split items that straddle a multiple of ``fragment_size``.

    Boundaries are ``fragment_size, 2 * fragment_size, ...`` while below the
    last item's end offset. An item strictly containing a boundary is
    replaced in place by its earlier half followed by its later half, both
    sharing the split item's lines, comments, style and region.

    Raises:
        ValueError: If ``fragment_size`` is not positive.
    """
    if fragment_size <= timedelta(0):
        raise ValueError("Fragment size must be positive, got {}".format(fragment_size))
    if not document.items:
        return

    count = len(document.items)
    boundary = fragment_size
    while boundary < document.items[-1].end_at:
        fragmented: List[Item] = []
        for item in document.items:
            if item.start_at < boundary < item.end_at:
                fragmented.extend(_split_at(item, boundary))
            else:
                fragmented.append(item)
        document.items = fragmented
        boundary += fragment_size

    logger.debug("Fragmented %d items into %d", count, len(document.items))
    order(document)


def unfragment(document: Document) -> None:
    """Merge runs of consecutive, time-adjacent items with identical text."""
    if len(document.items) <= 1:
        return

    count = len(document.items)
    items = document.items
    index = 0
    while index < len(items) - 1:
        current, following = items[index], items[index + 1]
        if str(current) == str(following) and current.end_at == following.start_at:
            current.end_at = following.end_at
            del items[index + 1]
        else:
            index += 1

    logger.debug("Unfragmented %d items into %d", count, len(items))
    order(document)


def merge(document: Document, other: Document) -> None:
    """Append ``other``'s items and adopt its styles and regions.

    Styles and regions already present in ``document`` win over those of
    ``other`` with the same ID.
    """
    document.items.extend(other.items)
    order(document)

    for region_id, region in other.regions.items():
        document.regions.setdefault(region_id, region)
    for style_id, style in other.styles.items():
        document.styles.setdefault(style_id, style)
