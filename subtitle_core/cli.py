"""Command-line interface for converting and re-timing subtitle files.

WHY: The most common jobs (converting between formats, shifting a whole
file, trimming or padding it to a media length, cutting cues into fixed
segments and stitching them back) should not need any Python code.

HOW: Uses argparse to accept an input and an output path plus optional
timing operations. The input (and any --merge files) are opened through
the adapter registry, the operations run on the Document in a fixed order,
and the result is written through the registry again.

RULES:
- Operation order: merge, add, fragment, unfragment, order + force-duration
- Durations are timecodes like ``00:00:02.500`` or ``01:30.000`` with an
  optional leading "-"
- Status output goes to stderr; errors print "Error: ..." and exit 1
- Logging is configured here only, from config.LOG_LEVEL or --verbose
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import timedelta
from typing import List, Optional

from subtitle_core import config
from subtitle_core.adapters import ADAPTERS, open_document, write_document
from subtitle_core.core import algebra
from subtitle_core.core.duration import parse_signed_duration
from subtitle_core.core.errors import FormatError, SubtitleError


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _duration_arg(text: str) -> timedelta:
    """argparse type for signed timecode arguments."""
    try:
        return parse_signed_duration(
            text, config.WEBVTT_MILLISECOND_SEPARATOR, config.MILLISECOND_DIGITS
        )
    except FormatError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable: tests can inspect the parser without touching files.
    """
    parser = argparse.ArgumentParser(
        prog="subtitle-core",
        description="Convert and re-time subtitle files. "
                    "Supported extensions: {}.".format(", ".join(sorted(ADAPTERS))),
    )

    parser.add_argument("input_file", help="Subtitle file to read.")
    parser.add_argument(
        "output_file",
        help="Subtitle file to write; the format follows its extension.",
    )

    parser.add_argument(
        "--merge",
        action="append",
        default=None,
        metavar="FILE",
        help="Merge another subtitle file into the input. Can be repeated.",
    )
    parser.add_argument(
        "--add",
        type=_duration_arg,
        default=None,
        metavar="DURATION",
        help="Shift every cue by DURATION. Pass negative values with \"=\", "
             "e.g. --add=-00:00:01.500.",
    )
    parser.add_argument(
        "--fragment",
        type=_duration_arg,
        default=None,
        metavar="DURATION",
        help="Split cues at every multiple of DURATION.",
    )
    parser.add_argument(
        "--unfragment",
        action="store_true",
        help="Merge adjacent cues that carry identical text.",
    )
    parser.add_argument(
        "--force-duration",
        type=_duration_arg,
        default=None,
        metavar="DURATION",
        help="Trim or pad the subtitles so they end exactly at DURATION.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser


def run(args: argparse.Namespace) -> None:
    """Apply the requested operations and write the output file.

    Raises:
        SubtitleError: On unreadable, malformed or unwritable files.
        ValueError: On an invalid operation argument.
    """
    document = open_document(args.input_file)
    _status("Read {} cues from {}".format(len(document.items), args.input_file))

    for path in args.merge or []:
        other = open_document(path)
        algebra.merge(document, other)
        _status("  Merged {} cues from {}".format(len(other.items), path))

    if args.add is not None:
        algebra.add(document, args.add)
    if args.fragment is not None:
        algebra.fragment(document, args.fragment)
    if args.unfragment:
        algebra.unfragment(document)
    if args.force_duration is not None:
        algebra.order(document)
        algebra.force_duration(document, args.force_duration)

    write_document(document, args.output_file)
    _status("Wrote {} cues to {}".format(len(document.items), args.output_file))


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        run(args)
    except (SubtitleError, ValueError) as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
