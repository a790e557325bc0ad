"""
Data models for extracted Kotlin declarations and per-file results.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from core.errors import ErrorKind
from surface.config import DEFAULT_INCLUDE_CONSTRUCTOR_PROPERTIES


class DeclarationKind(Enum):
    """Closed set of declaration kinds the formatter knows how to render."""

    FUNCTION = "function"
    MUTABLE_PROPERTY = "mutable-property"
    IMMUTABLE_PROPERTY = "immutable-property"
    CLASS = "class"
    ENUM_CLASS = "enum-class"
    ENUM_ENTRY = "enum-entry"
    OBJECT = "singleton-object"
    TYPE_ALIAS = "type-alias"
    PARAMETER = "parameter"
    INITIALIZER = "initializer"
    UNKNOWN = "unknown"


CONTAINER_KINDS = frozenset(
    {
        DeclarationKind.CLASS,
        DeclarationKind.ENUM_CLASS,
        DeclarationKind.OBJECT,
    }
)


class Visibility(Enum):
    """Kotlin visibility modifiers. Absence of a modifier means PUBLIC."""

    PUBLIC = "public"
    INTERNAL = "internal"
    PRIVATE = "private"
    PROTECTED = "protected"


@dataclass(frozen=True)
class Parameter:
    """A function value parameter in declared order."""

    name: str
    type_reference: Optional[str] = None


@dataclass(frozen=True)
class Declaration:
    """A single declaration lowered from the syntax tree.

    Attributes:
        kind: Declaration kind.
        name: Identifier, or None for anonymous constructs.
        type_reference: Declared type as written in source (whitespace
            collapsed), or None.
        visibility: Visibility decided at parse time.
        mutable: True for ``var`` properties and parameters.
        parameters: Function parameters in declared order.
        children: Nested declarations in declared order (containers only).
        line: 1-indexed source line of the declaration.
    """

    kind: DeclarationKind
    name: Optional[str] = None
    type_reference: Optional[str] = None
    visibility: Visibility = Visibility.PUBLIC
    mutable: bool = False
    parameters: Tuple[Parameter, ...] = ()
    children: Tuple["Declaration", ...] = ()
    line: int = 0

    def __post_init__(self) -> None:
        if self.children and self.kind not in CONTAINER_KINDS:
            raise ValueError(
                f"{self.kind.value} declaration '{self.name}' cannot have children"
            )

    @property
    def is_exported(self) -> bool:
        """Whether the declaration is part of the public surface."""
        return self.visibility is Visibility.PUBLIC

    @property
    def is_container(self) -> bool:
        return self.kind in CONTAINER_KINDS


@dataclass(frozen=True)
class ExtractionOptions:
    """Runtime switches for the declaration builder."""

    include_constructor_properties: bool = DEFAULT_INCLUDE_CONSTRUCTOR_PROPERTIES


@dataclass(frozen=True)
class FileDiagnostic:
    """A per-file failure reported instead of the file's surface."""

    path: str
    kind: ErrorKind
    message: str

    def render(self) -> str:
        return f"Parsing error in file '{self.path}': {self.message}"


@dataclass(frozen=True)
class FileReport:
    """Outcome of processing one source file: rendered lines or a diagnostic."""

    path: str
    lines: Tuple[str, ...] = field(default_factory=tuple)
    diagnostic: Optional[FileDiagnostic] = None

    @property
    def ok(self) -> bool:
        return self.diagnostic is None

    def output_lines(self) -> Tuple[str, ...]:
        """Lines to print for this file, in order."""
        if self.diagnostic is not None:
            return (self.diagnostic.render(),)
        return self.lines
