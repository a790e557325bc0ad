"""Core shared contracts and utilities."""

from core.errors import (
    EmptyInputError,
    ErrorKind,
    NoInputFoundError,
    ParseFailureError,
    SurfaceError,
    UsageError,
)
from core.structured_logging import (
    configure_structured_logging,
    get_run_id,
    get_source,
    set_run_id,
    source_scope,
)

__all__ = [
    "EmptyInputError",
    "ErrorKind",
    "NoInputFoundError",
    "ParseFailureError",
    "SurfaceError",
    "UsageError",
    "configure_structured_logging",
    "get_run_id",
    "get_source",
    "set_run_id",
    "source_scope",
]
