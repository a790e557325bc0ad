"""
Recursive rendering of the public surface of a file's declarations.

Visibility is checked top-down: a non-exported container hides all of its
members, including public ones.
"""

import logging
from typing import Iterable, List

from surface.config import INDENT_UNIT
from surface.formatter import format_declaration
from surface.models import Declaration, DeclarationKind
from surface.visibility import is_exported

logger = logging.getLogger(__name__)


def exported_members(declaration: Declaration) -> List[Declaration]:
    """Direct children that are exported and are not initializer blocks."""
    return [
        child
        for child in declaration.children
        if child.kind is not DeclarationKind.INITIALIZER and is_exported(child)
    ]


def render_declaration(declaration: Declaration, indent: str = "") -> List[str]:
    """Render one exported declaration and its exported members.

    Args:
        declaration: An exported declaration.
        indent: Prefix for every emitted line at this nesting level.

    Returns:
        Lines in pre-order. A container with exported members is rendered
        as a brace block; any other declaration is a single line.
    """
    text = format_declaration(declaration)

    if declaration.is_container:
        members = exported_members(declaration)
        if members:
            lines = [f"{indent}{text} {{"]
            for member in members:
                lines.extend(render_declaration(member, indent + INDENT_UNIT))
            lines.append(f"{indent}}}")
            return lines

    return [f"{indent}{text}"]


def render_declarations(declarations: Iterable[Declaration]) -> List[str]:
    """Render the public surface of a file's top-level declarations.

    Args:
        declarations: Top-level declarations in source order.

    Returns:
        Report lines in source order.
    """
    lines: List[str] = []
    for declaration in declarations:
        if not is_exported(declaration):
            logger.debug(
                "Skipping %s declaration '%s' at line %d",
                declaration.visibility.value,
                declaration.name,
                declaration.line,
            )
            continue
        lines.extend(render_declaration(declaration))
    return lines
