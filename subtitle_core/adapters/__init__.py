"""Adapter registry and file dispatch for pluggable container formats.

WHY: The CLI and library callers open and write subtitle files by path.
A registry keyed by file extension picks the right adapter, so adding a
format means registering one class rather than growing a conditional.

HOW: ADAPTERS maps lowercase extensions (with the dot) to adapter
*classes*. get_adapter() instantiates one; open_document() and
write_document() wrap file I/O around it, and read() / write() do the same
for already-open binary streams.

RULES:
- An unknown extension raises UnsupportedFormatError before any file is
  touched or any adapter runs
- open/create failures are wrapped in DocumentIOError with the path
- write_document() serializes in memory first, so an EmptyDocumentError or
  a format error never leaves a half-written file behind
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, BinaryIO, Dict, Optional, Type, Union

from subtitle_core.adapters.base import BaseAdapter
from subtitle_core.adapters.json_document import JSONAdapter
from subtitle_core.adapters.srt import SRTAdapter
from subtitle_core.adapters.webvtt import WebVTTAdapter
from subtitle_core.core.errors import DocumentIOError, UnsupportedFormatError
from subtitle_core.core.model import Document

logger = logging.getLogger(__name__)

ADAPTERS: Dict[str, Type[BaseAdapter]] = {
    ".srt": SRTAdapter,
    ".vtt": WebVTTAdapter,
    ".json": JSONAdapter,
}

PathLike = Union[str, Path]


def register_adapter(extension: str, adapter_class: Type[BaseAdapter]) -> None:
    """Register ``adapter_class`` for ``extension``, replacing any previous one."""
    ADAPTERS[extension.lower()] = adapter_class


def get_adapter(extension: str) -> BaseAdapter:
    """Instantiate the adapter registered for ``extension`` (e.g. ``".srt"``).

    Raises:
        UnsupportedFormatError: If no adapter is registered for it.
    """
    adapter_class = ADAPTERS.get(extension.lower())
    if adapter_class is None:
        raise UnsupportedFormatError(extension)
    return adapter_class()


def read(
    stream: BinaryIO,
    extension: str,
    options: Optional[Dict[str, Any]] = None,
) -> Document:
    return get_adapter(extension).parse(stream, options)


def write(document: Document, stream: BinaryIO, extension: str) -> None:
    get_adapter(extension).write(document, stream)


def open_document(
    path: PathLike,
    options: Optional[Dict[str, Any]] = None,
) -> Document:
    """Parse the subtitle file at ``path``, picking the adapter by extension.

    Raises:
        UnsupportedFormatError: If the extension is not registered.
        DocumentIOError: If the file cannot be opened.
        FormatError: If the content is malformed.
    """
    path = Path(path)
    adapter = get_adapter(path.suffix)
    try:
        f = open(path, "rb")
    except OSError as exc:
        raise DocumentIOError("Opening subtitle file failed", str(path)) from exc
    with f:
        document = adapter.parse(f, options)
    logger.info("Opened %s (%s, %d items)", path, adapter.name, len(document.items))
    return document


def write_document(document: Document, path: PathLike) -> None:
    """Serialize ``document`` to ``path``, picking the adapter by extension.

    Raises:
        UnsupportedFormatError: If the extension is not registered.
        EmptyDocumentError: If the document has no items.
        DocumentIOError: If the file cannot be created or written.
    """
    path = Path(path)
    adapter = get_adapter(path.suffix)
    content = adapter.dumps(document)
    try:
        with open(path, "wb") as f:
            f.write(content)
    except OSError as exc:
        raise DocumentIOError("Creating subtitle file failed", str(path)) from exc
    logger.info("Wrote %s (%s, %d items)", path, adapter.name, len(document.items))
