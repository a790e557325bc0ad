"""
Canonical one-line signatures for Kotlin declarations.

Every declaration kind has a rendering; unrecognised kinds fall back to a
comment line so the formatter never fails.
"""

from typing import Iterable, Optional

from surface.config import UNKNOWN_PREFIX, UNNAMED_PLACEHOLDER
from surface.models import Declaration, DeclarationKind, Parameter


def _type_clause(type_reference: Optional[str]) -> str:
    return f": {type_reference}" if type_reference else ""


def _binding(name: Optional[str], type_reference: Optional[str], mutable: bool) -> str:
    keyword = "var" if mutable else "val"
    return f"{keyword} {name or ''}{_type_clause(type_reference)}"


def format_parameter(parameter: Parameter) -> str:
    """Render ``name: Type``; an untyped parameter renders as its bare name."""
    return f"{parameter.name}{_type_clause(parameter.type_reference)}"


def format_parameters(parameters: Iterable[Parameter]) -> str:
    return ", ".join(format_parameter(parameter) for parameter in parameters)


def format_declaration(declaration: Declaration) -> str:
    """Render the canonical signature of a declaration.

    Args:
        declaration: The declaration to render.

    Returns:
        A single line without indentation or trailing brace.

    Example:
        >>> format_declaration(Declaration(DeclarationKind.CLASS, name="Foo"))
        'class Foo'
    """
    kind = declaration.kind
    name = declaration.name

    if kind is DeclarationKind.ENUM_ENTRY:
        return f"enum entry {name or UNNAMED_PLACEHOLDER}"

    if kind is DeclarationKind.MUTABLE_PROPERTY:
        return _binding(name, declaration.type_reference, mutable=True)

    if kind is DeclarationKind.IMMUTABLE_PROPERTY:
        return _binding(name, declaration.type_reference, mutable=False)

    if kind is DeclarationKind.FUNCTION:
        return f"fun {name or ''}({format_parameters(declaration.parameters)})"

    if kind is DeclarationKind.CLASS:
        return f"class {name or ''}"

    if kind is DeclarationKind.ENUM_CLASS:
        return f"enum class {name or ''}"

    if kind is DeclarationKind.OBJECT:
        return f"object {name or ''}"

    if kind is DeclarationKind.TYPE_ALIAS:
        if declaration.type_reference:
            return f"typealias {name or ''} = {declaration.type_reference}"
        return f"typealias {name or ''}"

    if kind is DeclarationKind.PARAMETER:
        return _binding(name, declaration.type_reference, declaration.mutable)

    return f"{UNKNOWN_PREFIX}{name}" if name else ""
