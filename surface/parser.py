"""
Tree-sitter parser initialization and file parsing utilities.

This module provides functions to initialize the Kotlin parser, parse source
bytes, and reject trees that contain syntax errors. Single-line class and
object bodies the grammar cannot handle are split onto separate lines and
parsed again.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple

import tree_sitter_kotlin as tskotlin
from tree_sitter import Language, Node, Parser, Tree

from core.errors import ParseFailureError
from surface.config import GRAMMAR_ARTIFACT_TYPES, OPAQUE_TOKEN_TYPES

# Configure logging
logger = logging.getLogger(__name__)

# Module-level language constant
KOTLIN_LANGUAGE = Language(tskotlin.language())


def create_parser() -> Parser:
    """Create and configure a tree-sitter parser for Kotlin.

    Returns:
        A Parser instance configured with the Kotlin language.

    Example:
        >>> parser = create_parser()
        >>> tree = parser.parse(b"fun main() {}")
    """
    parser = Parser(KOTLIN_LANGUAGE)
    logger.debug("Created tree-sitter Kotlin parser")
    return parser


@contextmanager
def open_front_end() -> Iterator[Parser]:
    """Acquire one parser for a whole run and release it on every exit path.

    Example:
        >>> with open_front_end() as parser:
        ...     tree = parse_bytes(b"val x = 1", parser)
    """
    parser = create_parser()
    logger.info("Kotlin front end acquired")
    try:
        yield parser
    finally:
        parser.reset()
        logger.info("Kotlin front end released")


def parse_bytes(source: bytes, parser: Optional[Parser] = None) -> Tree:
    """Parse raw bytes of Kotlin source code.

    Args:
        source: UTF-8 encoded bytes of Kotlin source code.
        parser: Parser to reuse. A fresh one is created when omitted.

    Returns:
        A Tree object representing the parsed syntax tree.

    Raises:
        TypeError: If source is not bytes.

    Example:
        >>> tree = parse_bytes(b"fun foo() {}")
        >>> tree.root_node.type
        'source_file'
    """
    if not isinstance(source, bytes):
        raise TypeError(f"Source must be bytes, got {type(source).__name__}")

    if parser is None:
        parser = create_parser()
    tree = parser.parse(source)

    logger.debug(f"Parsed {len(source)} bytes of Kotlin code")
    return tree


def is_syntax_error(node: Node) -> bool:
    """Check if a node is a real syntax error rather than a grammar artifact.

    The grammar reports a MISSING member separator when a member and the
    closing brace share a line; that placeholder is valid Kotlin.
    """
    if node.is_error:
        return True
    return node.is_missing and node.type not in GRAMMAR_ARTIFACT_TYPES


def _iter_error_candidates(node: Node) -> Iterator[Node]:
    yield node
    for child in node.children:
        if child.has_error or child.is_missing:
            yield from _iter_error_candidates(child)


def count_error_nodes(tree: Tree) -> int:
    """Count ERROR and non-artifact MISSING nodes in a parsed tree."""
    if not tree.root_node.has_error:
        return 0
    return sum(1 for node in _iter_error_candidates(tree.root_node) if is_syntax_error(node))


def first_error_point(tree: Tree) -> Optional[Tuple[int, int]]:
    """Return the 1-indexed (line, column) of the first syntax error, if any."""
    if not tree.root_node.has_error:
        return None
    for node in _iter_error_candidates(tree.root_node):
        if is_syntax_error(node):
            return node.start_point[0] + 1, node.start_point[1] + 1
    return None


def ensure_well_formed(tree: Tree, path: str) -> Tree:
    """Raise ParseFailureError if the tree contains syntax errors.

    Args:
        tree: A parsed tree.
        path: Source path for the error message.

    Returns:
        The same tree when it is free of errors.

    Raises:
        ParseFailureError: If the tree has ERROR or non-artifact MISSING nodes.
    """
    point = first_error_point(tree)
    if point is None:
        return tree
    line, column = point
    raise ParseFailureError(
        f"syntax error at line {line}, column {column}",
        path=path,
    )


def _collect_break_points(node: Node, points: List[int]) -> None:
    if node.type in OPAQUE_TOKEN_TYPES:
        return
    if node.child_count == 0:
        if node.type in ("{", ";"):
            points.append(node.end_byte)
        elif node.type == "}":
            points.append(node.start_byte)
        return
    for child in node.children:
        _collect_break_points(child, points)


def split_one_line_bodies(tree: Tree, source: bytes) -> bytes:
    """Put every brace and semicolon token of a tree on its own line.

    Newlines after ``{`` and ``;`` and before ``}`` never change the meaning
    of Kotlin code. Braces inside string, character and comment tokens are
    left alone.

    Args:
        tree: Tree parsed from ``source``.
        source: The raw source bytes.

    Returns:
        The rewritten source bytes.
    """
    points: List[int] = []
    _collect_break_points(tree.root_node, points)

    pieces = []
    cursor = 0
    for offset in sorted(set(points)):
        pieces.append(source[cursor:offset])
        pieces.append(b"\n")
        cursor = offset
    pieces.append(source[cursor:])
    return b"".join(pieces)


def parse_source(
    source: bytes,
    path: str,
    parser: Optional[Parser] = None,
) -> Tuple[Tree, bytes]:
    """Parse Kotlin source into a well-formed tree.

    A tree with syntax errors is parsed once more after
    ``split_one_line_bodies``, since the grammar rejects some single-line
    class and object bodies. Errors are reported against the original text.

    Args:
        source: UTF-8 encoded bytes of Kotlin source code.
        path: Source path for error messages.
        parser: Parser to reuse. A fresh one is created when omitted.

    Returns:
        A tuple of (Tree, source_bytes) where source_bytes is the text the
        tree was parsed from.

    Raises:
        ParseFailureError: If neither parse is free of syntax errors.
    """
    if parser is None:
        parser = create_parser()

    tree = parse_bytes(source, parser)
    if first_error_point(tree) is None:
        return tree, source

    retry_source = split_one_line_bodies(tree, source)
    retry_tree = parse_bytes(retry_source, parser)
    if first_error_point(retry_tree) is None:
        logger.debug(f"Parsed {path} after splitting one-line bodies")
        return retry_tree, retry_source

    logger.warning(
        "File %s contains syntax errors (%d error nodes)",
        path,
        count_error_nodes(tree),
    )
    ensure_well_formed(tree, path)
    return tree, source
