"""Abstract base adapter for subtitle container formats.

WHY: The dispatcher, the CLI and the tests need to read and write any
container format through one interface, whatever its syntax. Each adapter
translates between one format's byte stream and the Document model.

HOW: BaseAdapter is an ABC with a ``name`` property, ``parse()`` and
``serialize()``. The concrete ``write()``, ``loads()`` and ``dumps()``
helpers wrap them with the empty-document guard and in-memory streams.

RULES:
- parse() reads a binary stream and returns a complete Document, or raises;
  there is no partial-document recovery
- serialize() writes to a binary stream and is only reached through
  write() / dumps(), which refuse empty documents
- ``options`` is a plain dict of format-specific settings; every text
  adapter honours ``"encoding"``

To add a new container format:
1. Create a new module in adapters/
2. Subclass BaseAdapter and implement name, parse() and serialize()
3. Register its extensions in ADAPTERS in adapters/__init__.py
"""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Dict, Optional

from subtitle_core.config import BOM, DEFAULT_ENCODING
from subtitle_core.core.errors import EmptyDocumentError, FormatError
from subtitle_core.core.model import Document


class BaseAdapter(ABC):
    """Abstract base for all container format adapters."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'SubRip'."""

    @abstractmethod
    def parse(
        self,
        stream: BinaryIO,
        options: Optional[Dict[str, Any]] = None,
    ) -> Document:
        """Read a whole container from ``stream`` into a new Document.

        Raises:
            FormatError: If the content is malformed.
        """

    @abstractmethod
    def serialize(self, document: Document, stream: BinaryIO) -> None:
        """Write ``document`` to ``stream`` in this adapter's format."""

    def write(self, document: Document, stream: BinaryIO) -> None:
        """Serialize ``document``, refusing to emit an empty container.

        Raises:
            EmptyDocumentError: If the document has no items.
        """
        if not document.items:
            raise EmptyDocumentError()
        self.serialize(document, stream)

    def loads(self, data: bytes, options: Optional[Dict[str, Any]] = None) -> Document:
        return self.parse(io.BytesIO(data), options)

    def dumps(self, document: Document) -> bytes:
        buffer = io.BytesIO()
        self.write(document, buffer)
        return buffer.getvalue()


def read_text(stream: BinaryIO, options: Optional[Dict[str, Any]] = None) -> str:
    """Read and decode a whole text stream, dropping a UTF-8 BOM.

    Raises:
        FormatError: If the bytes are not valid in the chosen encoding.
    """
    encoding = (options or {}).get("encoding", DEFAULT_ENCODING)
    data = stream.read()
    if data.startswith(BOM):
        data = data[len(BOM):]
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as exc:
        raise FormatError(
            "Content is not valid {}".format(encoding),
            text=data[exc.start:exc.end].hex(),
            context=encoding,
        ) from exc
