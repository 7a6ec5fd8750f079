"""Error taxonomy shared by the codecs, the algebra and the adapters.

WHY: Callers need typed exceptions to tell a malformed timestamp apart from
an unknown file extension or a failed file open, without parsing messages.

HOW: Every error derives from SubtitleError. Errors that describe bad input
values also derive from ValueError so generic ``except ValueError`` handlers
keep working.

RULES:
- Context (offending token, base, path) is stored on the exception
- Underlying exceptions are chained with ``raise ... from``
- No error is retried or recovered from inside the library
"""

from __future__ import annotations

from typing import Sequence


class SubtitleError(Exception):
    """Base class for all subtitle_core errors."""


class FormatError(SubtitleError, ValueError):
    """Raised when a duration, colour or container text is malformed.

    RULES:
    - text: the offending token or substring
    - context: where it came from (numeric base, full timestamp, line number)
    """

    def __init__(self, message: str, text: str = "", context: str = "") -> None:
        self.text = text
        self.context = context
        super().__init__(message)


class UnsupportedFormatError(SubtitleError):
    """Raised when no adapter is registered for a file extension."""

    def __init__(self, extension: str) -> None:
        self.extension = extension
        super().__init__("Unsupported subtitle format: {!r}".format(extension))


class DocumentIOError(SubtitleError):
    """Raised when a subtitle file cannot be opened or created.

    The original OSError is available as ``__cause__``.
    """

    def __init__(self, message: str, path: str) -> None:
        self.path = path
        super().__init__("{}: {}".format(message, path))


class EmptyDocumentError(SubtitleError):
    """Raised when serializing a Document that has no items."""

    def __init__(self) -> None:
        super().__init__("No subtitles to write")


class StyleCycleError(SubtitleError, ValueError):
    """Raised when a style or region inheritance chain loops back on itself."""

    def __init__(self, chain: Sequence[str]) -> None:
        self.chain = list(chain)
        super().__init__(
            "Style inheritance cycle: {}".format(" -> ".join(self.chain))
        )
