"""
High-level orchestrator for Kotlin API surface extraction.

This module provides the main entry points for rendering the public surface
of single files or entire directory trees. Every per-file failure becomes a
diagnostic in that file's report; it never aborts the batch.
"""

import logging
import os
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from tree_sitter import Parser

from core.errors import (
    EmptyInputError,
    ErrorKind,
    NoInputFoundError,
    ParseFailureError,
    SurfaceError,
)
from core.structured_logging import source_scope
from surface.builder import build_declarations
from surface.config import KOTLIN_EXTENSIONS
from surface.models import ExtractionOptions, FileDiagnostic, FileReport
from surface.parser import open_front_end, parse_source
from surface.walker import render_declarations

logger = logging.getLogger(__name__)


class SurfaceStats:
    """Statistics for an extraction run."""

    def __init__(self):
        self.files_processed = 0
        self.files_failed = 0
        self.empty_inputs = 0
        self.parse_failures = 0
        self.read_failures = 0
        self.internal_errors = 0
        self.lines_rendered = 0

    def record(self, report: FileReport) -> None:
        """Fold one file report into the totals."""
        if report.ok:
            self.files_processed += 1
            self.lines_rendered += len(report.lines)
            return
        self.files_failed += 1
        kind = report.diagnostic.kind
        if kind is ErrorKind.EMPTY_INPUT:
            self.empty_inputs += 1
        elif kind is ErrorKind.READ_FAILURE:
            self.read_failures += 1
        elif kind is ErrorKind.INTERNAL_ERROR:
            self.internal_errors += 1
        else:
            self.parse_failures += 1

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary."""
        return {
            "files_processed": self.files_processed,
            "files_failed": self.files_failed,
            "empty_inputs": self.empty_inputs,
            "parse_failures": self.parse_failures,
            "read_failures": self.read_failures,
            "internal_errors": self.internal_errors,
            "lines_rendered": self.lines_rendered,
        }

    def __str__(self) -> str:
        """String representation of stats."""
        return (
            f"SurfaceStats(processed={self.files_processed}, "
            f"failed={self.files_failed}, empty={self.empty_inputs}, "
            f"parse_failures={self.parse_failures}, read_failures={self.read_failures}, "
            f"internal_errors={self.internal_errors}, lines={self.lines_rendered})"
        )


def _is_kotlin_file(path: str) -> bool:
    return os.path.splitext(path)[1] in KOTLIN_EXTENSIONS


def _walk(directory: str) -> Iterator[str]:
    try:
        entries = sorted(os.scandir(directory), key=lambda entry: entry.name)
    except OSError as e:
        logger.warning(f"Cannot list directory {directory}: {e}")
        return
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            yield from _walk(entry.path)
        elif entry.is_file() and _is_kotlin_file(entry.name):
            yield entry.path


def discover_kotlin_files(root: str) -> List[str]:
    """Recursively discover all Kotlin source files under a path.

    Entries of each directory are visited in name order and a subdirectory
    is descended into where it is met, so the result is a stable pre-order
    walk. A root that is itself a Kotlin file yields just that file.

    Args:
        root: File or directory to search.

    Returns:
        List of paths to Kotlin files, empty if the root does not exist.

    Example:
        >>> files = discover_kotlin_files("/path/to/library")
        >>> len(files)
        42
    """
    logger.info(f"Discovering Kotlin files in {root}")

    if os.path.isfile(root):
        kotlin_files = [root] if _is_kotlin_file(root) else []
    elif os.path.isdir(root):
        kotlin_files = list(_walk(root))
    else:
        logger.warning(f"Path not found: {root}")
        kotlin_files = []

    logger.info(f"Found {len(kotlin_files)} Kotlin files")
    return kotlin_files


def read_source(file_path: str) -> bytes:
    """Read a Kotlin source file and reject blank or undecodable contents.

    Raises:
        EmptyInputError: If the file is blank.
        ParseFailureError: If the file is not valid UTF-8.
        OSError: If the file cannot be read.
    """
    with open(file_path, "rb") as f:
        source_bytes = f.read()

    try:
        text = source_bytes.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseFailureError(f"invalid UTF-8: {e}", path=file_path) from e

    if not text.strip():
        raise EmptyInputError(
            f"File '{os.path.basename(file_path)}' is empty.",
            path=file_path,
        )
    return source_bytes


def render_file(
    file_path: str,
    parser: Optional[Parser] = None,
    options: Optional[ExtractionOptions] = None,
) -> Tuple[str, ...]:
    """Render the public surface of a single file.

    Raises:
        EmptyInputError: If the file is blank.
        ParseFailureError: If the file cannot be decoded or has syntax errors.
        OSError: If the file cannot be read.
    """
    source_bytes = read_source(file_path)
    tree, source_bytes = parse_source(source_bytes, file_path, parser)

    declarations = build_declarations(tree, source_bytes, options)
    lines = tuple(render_declarations(declarations))
    logger.info("Rendered %d surface lines from %s", len(lines), file_path)
    return lines


def extract_file(
    file_path: str,
    parser: Optional[Parser] = None,
    options: Optional[ExtractionOptions] = None,
) -> FileReport:
    """Process one file into a report without raising for per-file failures.

    Args:
        file_path: Path to the Kotlin file.
        parser: Parser to reuse across files. A fresh one is created when
            omitted.
        options: Extraction options.

    Returns:
        A FileReport holding either the rendered lines or a diagnostic.

    Example:
        >>> report = extract_file("src/Api.kt")
        >>> print("\\n".join(report.output_lines()))
    """
    with source_scope(file_path):
        try:
            lines = render_file(file_path, parser, options)
            return FileReport(path=file_path, lines=lines)

        except SurfaceError as e:
            logger.error(f"{e.kind.value} in {file_path}: {e.message}")
            return FileReport(
                path=file_path,
                diagnostic=FileDiagnostic(file_path, e.kind, e.message),
            )

        except OSError as e:
            logger.error(f"Cannot read {file_path}: {e}")
            return FileReport(
                path=file_path,
                diagnostic=FileDiagnostic(file_path, ErrorKind.READ_FAILURE, str(e)),
            )

        except Exception as e:
            logger.error(f"Unexpected error processing {file_path}: {e}", exc_info=True)
            return FileReport(
                path=file_path,
                diagnostic=FileDiagnostic(file_path, ErrorKind.INTERNAL_ERROR, str(e)),
            )


def iter_extract_files(
    file_paths: Iterable[str],
    options: Optional[ExtractionOptions] = None,
) -> Iterator[FileReport]:
    """Stream reports for the given files using one front end for the batch."""
    with open_front_end() as parser:
        for file_path in file_paths:
            yield extract_file(file_path, parser, options)


def iter_extract_directory(
    root: str,
    options: Optional[ExtractionOptions] = None,
) -> Iterator[FileReport]:
    """Stream reports for every Kotlin file under a path, in walk order.

    Raises:
        NoInputFoundError: If no Kotlin files exist under the path.
    """
    kotlin_files = discover_kotlin_files(root)
    if not kotlin_files:
        raise NoInputFoundError("No Kotlin source files found.", path=root)
    return iter_extract_files(kotlin_files, options)


def extract_directory(
    root: str,
    options: Optional[ExtractionOptions] = None,
) -> Tuple[List[FileReport], SurfaceStats]:
    """Process all Kotlin files under a path.

    Args:
        root: File or directory to process.
        options: Extraction options.

    Returns:
        A tuple of (reports, stats) where:
        - reports: One FileReport per discovered file, in walk order
        - stats: SurfaceStats object with processing statistics

    Raises:
        NoInputFoundError: If no Kotlin files exist under the path.

    Example:
        >>> reports, stats = extract_directory("/path/to/library")
        >>> print(f"Rendered {stats.lines_rendered} lines from {stats.files_processed} files")
    """
    stats = SurfaceStats()
    reports = []
    for report in iter_extract_directory(root, options):
        stats.record(report)
        reports.append(report)

    logger.info(f"Extraction complete: {stats}")
    return reports, stats


def render_reports(reports: Iterable[FileReport]) -> List[str]:
    """Concatenate every report's output lines in order."""
    lines: List[str] = []
    for report in reports:
        lines.extend(report.output_lines())
    return lines
