"""Style and region inheritance resolution.

WHY: Styles may name a parent style, and adapters or merged documents can
produce parent chains that loop. Rendering code needs the effective
attributes of a style, region, item or text fragment without risking an
endless walk.

HOW: style_chain() follows ``parent_id`` through the Document's style
registry, tracking visited IDs. The resolve_* helpers overlay attribute bags
from the most generic (root ancestor) to the most specific (inline
overrides).

RULES:
- A parent ID that is not registered ends the chain
- Revisiting an ID raises StyleCycleError with the chain walked so far
- Precedence: ancestors < style < region/item inline < line item
"""

from __future__ import annotations

import logging
from typing import List, Optional

from subtitle_core.core.errors import StyleCycleError
from subtitle_core.core.model import (
    Document,
    Item,
    LineItem,
    Region,
    Style,
    StyleAttributes,
)

logger = logging.getLogger(__name__)


def style_chain(document: Document, style: Style) -> List[Style]:
    """Return ``style`` followed by its ancestors, nearest first.

    Raises:
        StyleCycleError: If the parent chain revisits a style ID.
    """
    chain = [style]
    visited = [style.id]
    current = style
    while current.parent_id is not None:
        if current.parent_id in visited:
            raise StyleCycleError(visited + [current.parent_id])
        parent = document.styles.get(current.parent_id)
        if parent is None:
            logger.warning(
                "Style %s references unknown parent %s", current.id, current.parent_id
            )
            break
        chain.append(parent)
        visited.append(parent.id)
        current = parent
    return chain


def resolve_style(document: Document, style: Optional[Style]) -> StyleAttributes:
    """Flatten a style and its ancestors into one attribute bag."""
    attributes = StyleAttributes()
    if style is None:
        return attributes
    for ancestor in reversed(style_chain(document, style)):
        attributes = attributes.overlay(ancestor.inline_style)
    return attributes


def resolve_region(document: Document, region: Region) -> StyleAttributes:
    return resolve_style(document, region.style).overlay(region.inline_style)


def resolve_item(document: Document, item: Item) -> StyleAttributes:
    """Effective attributes of a cue: its style, then its inline overrides."""
    return resolve_style(document, item.style).overlay(item.inline_style)


def resolve_line_item(
    document: Document,
    item: Item,
    line_item: LineItem,
) -> StyleAttributes:
    """Effective attributes of one text fragment inside ``item``."""
    return (
        resolve_item(document, item)
        .overlay(resolve_style(document, line_item.style))
        .overlay(line_item.inline_style)
    )
