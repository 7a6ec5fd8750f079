"""Configuration constants and .env loading.

WHY: Centralizes the values adapters and the CLI share (timecode
separators, text encoding, log level) so they are easy to find and
override without touching logic.

HOW: python-dotenv loads a .env file on import. Constants are plain
module-level values; the few that are environment-driven are read with
os.getenv() and a default.

RULES:
- Environment variables are prefixed with SUBTITLE_CORE_
- Format constants (separators, digit counts) are not overridable
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Timecode format constants
# ---------------------------------------------------------------------------

SRT_MILLISECOND_SEPARATOR = ","
WEBVTT_MILLISECOND_SEPARATOR = "."
MILLISECOND_DIGITS = 3

# ---------------------------------------------------------------------------
# Runtime defaults
# ---------------------------------------------------------------------------

DEFAULT_ENCODING = os.getenv("SUBTITLE_CORE_ENCODING", "utf-8")
LOG_LEVEL = os.getenv("SUBTITLE_CORE_LOG_LEVEL", "WARNING").upper()
SRT_WRITE_BOM = os.getenv("SUBTITLE_CORE_SRT_BOM", "false").lower() == "true"

BOM = b"\xef\xbb\xbf"
"""UTF-8 byte order mark some SRT producers prepend."""
