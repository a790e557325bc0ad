"""
Kotlin public API surface extraction.

Tree-sitter-based Kotlin parser, declaration builder, visibility classifier,
signature formatter, and surface walker.
"""

from surface.models import (
    Declaration,
    DeclarationKind,
    ExtractionOptions,
    FileDiagnostic,
    FileReport,
    Parameter,
    Visibility,
)
from surface.parser import create_parser, open_front_end, parse_bytes, parse_source, count_error_nodes
from surface.builder import build_declarations
from surface.visibility import is_exported, resolve_visibility
from surface.formatter import format_declaration
from surface.walker import render_declarations
from surface.driver import (
    discover_kotlin_files,
    extract_file,
    extract_directory,
    iter_extract_directory,
    render_reports,
    SurfaceStats,
)

__all__ = [
    # Data models
    "Declaration",
    "DeclarationKind",
    "ExtractionOptions",
    "FileDiagnostic",
    "FileReport",
    "Parameter",
    "Visibility",
    "SurfaceStats",
    # Low-level parsing
    "create_parser",
    "open_front_end",
    "parse_bytes",
    "parse_source",
    "count_error_nodes",
    # Mid-level extraction
    "build_declarations",
    "is_exported",
    "resolve_visibility",
    "format_declaration",
    "render_declarations",
    # High-level orchestration
    "discover_kotlin_files",
    "extract_file",
    "extract_directory",
    "iter_extract_directory",
    "render_reports",
]
