"""Error kinds raised while extracting a public API surface.

Per-file errors (empty input, parse failure) are converted into diagnostics
by the file driver, which also reports read failures and internal errors by
kind; run-level errors (usage, no input) end the run.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Stable names for each failure category."""

    EMPTY_INPUT = "EmptyInput"
    PARSE_FAILURE = "ParseFailure"
    USAGE_ERROR = "UsageError"
    NO_INPUT_FOUND = "NoInputFound"
    READ_FAILURE = "ReadFailure"
    INTERNAL_ERROR = "InternalError"


class SurfaceError(Exception):
    """Base class for all API surface extraction errors."""

    kind: ErrorKind = ErrorKind.PARSE_FAILURE

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path


class EmptyInputError(SurfaceError):
    """Raised when a source file has blank contents."""

    kind = ErrorKind.EMPTY_INPUT


class ParseFailureError(SurfaceError):
    """Raised when the front end cannot produce a clean syntax tree."""

    kind = ErrorKind.PARSE_FAILURE


class UsageError(SurfaceError):
    """Raised for a wrong command-line argument count."""

    kind = ErrorKind.USAGE_ERROR


class NoInputFoundError(SurfaceError):
    """Raised when no Kotlin source files exist under the scanned root."""

    kind = ErrorKind.NO_INPUT_FOUND
