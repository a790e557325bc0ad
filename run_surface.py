#!/usr/bin/env python3
"""
Print the public API surface of a Kotlin library.

Walks every .kt file under the given path, keeps public declarations only,
and prints one canonical signature per line, nested by lexical scope.
Files that are empty or fail to parse are reported inline and skipped.

Usage:
    python run_surface.py /path/to/library
    python run_surface.py src/main/kotlin > api.txt
"""

import argparse
import logging
import sys
from typing import List, Optional

from core.errors import NoInputFoundError, UsageError
from core.structured_logging import configure_structured_logging, set_run_id
from surface.driver import SurfaceStats, iter_extract_directory

logger = logging.getLogger(__name__)

USAGE_MESSAGE = "Usage: <path-to-library>"


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the command-line parser.

    The path is collected with ``nargs="*"`` so that a wrong argument count
    reaches ``main`` as a UsageError instead of an argparse exit.
    """
    parser = argparse.ArgumentParser(
        description="Kotlin public API surface extractor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_surface.py ./src/main/kotlin\n"
        ),
    )
    parser.add_argument(
        "paths",
        nargs="*",
        metavar="path",
        help="Root directory (or single .kt file) to scan.",
    )
    return parser


def parse_args(argv: Optional[List[str]] = None) -> str:
    """Parse command-line arguments into the single root path.

    Raises:
        UsageError: If zero or more than one path is given.
    """
    args = build_arg_parser().parse_args(argv)
    if len(args.paths) != 1:
        raise UsageError(USAGE_MESSAGE)
    return args.paths[0]


def run(root: str) -> SurfaceStats:
    """Print the surface of every Kotlin file under ``root`` to stdout.

    Raises:
        NoInputFoundError: If no Kotlin files exist under the path.
    """
    stats = SurfaceStats()
    for report in iter_extract_directory(root):
        stats.record(report)
        for line in report.output_lines():
            print(line)
    logger.info(f"Surface extraction finished: {stats}")
    return stats


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point.

    Usage errors and an empty source tree print a message and still return
    status 0.
    """
    configure_structured_logging(logging.WARNING)
    set_run_id()

    try:
        root = parse_args(argv)
    except UsageError as e:
        print(e.message)
        return 0

    try:
        run(root)
    except NoInputFoundError as e:
        print(e.message)
        return 0

    return 0


if __name__ == "__main__":
    sys.exit(main())
