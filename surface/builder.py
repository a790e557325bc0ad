"""
Lowering of the tree-sitter Kotlin syntax tree into declaration nodes.

This module walks the concrete syntax tree and produces the immutable
``Declaration`` model consumed by the formatter and the walker. It is the
only part of the package that knows tree-sitter-kotlin node types.
"""

import logging
import re
from typing import Iterator, List, Optional, Sequence, Tuple

from tree_sitter import Node, Tree

from surface.config import (
    BINDING_KIND_NODE,
    BODY_TYPES,
    CLASS_MODIFIER_NODE,
    CLASS_NODE,
    CLASS_PARAMETER_NODE,
    CLASS_PARAMETERS_NODE,
    COMMENT_TYPES,
    COMPANION_DEFAULT_NAME,
    COMPANION_NODE,
    ENUM_ENTRY_NODE,
    FUNCTION_NODE,
    FUNCTION_PARAMETERS_NODE,
    INITIALIZER_NODE,
    MEMBER_GROUP_TYPES,
    MODIFIERS_NODE,
    MULTI_VARIABLE_NODE,
    NAME_TYPES,
    OBJECT_NODE,
    PARAMETER_NODE,
    PRIMARY_CONSTRUCTOR_NODE,
    PROPERTY_NODE,
    SECONDARY_CONSTRUCTOR_NODE,
    TYPE_ALIAS_NODE,
    TYPE_TERMINATORS,
    VARIABLE_NODE,
    VISIBILITY_MODIFIER_NODE,
)
from surface.models import (
    Declaration,
    DeclarationKind,
    ExtractionOptions,
    Parameter,
    Visibility,
)
from surface.visibility import resolve_visibility

logger = logging.getLogger(__name__)
_SPACE_RE = re.compile(r"\s+")


def node_text(node: Node, source_bytes: bytes) -> str:
    """Decode the source text spanned by a node."""
    return source_bytes[node.start_byte:node.end_byte].decode("utf-8")


def _child_of_type(node: Node, *types: str) -> Optional[Node]:
    for child in node.children:
        if child.type in types:
            return child
    return None


def extract_name(node: Node, source_bytes: bytes) -> Optional[str]:
    """Return the first direct identifier child of a declaration, if any."""
    name_node = _child_of_type(node, *NAME_TYPES)
    if name_node is None:
        return None
    return node_text(name_node, source_bytes)


def extract_visibility(node: Node, source_bytes: bytes) -> Visibility:
    """Resolve visibility from the declaration's ``modifiers`` child."""
    modifiers = _child_of_type(node, MODIFIERS_NODE)
    if modifiers is None:
        return Visibility.PUBLIC
    words = [
        node_text(child, source_bytes)
        for child in modifiers.children
        if child.type == VISIBILITY_MODIFIER_NODE
    ]
    return resolve_visibility(words)


def is_mutable_binding(node: Node, source_bytes: bytes) -> Optional[bool]:
    """Return True for ``var``, False for ``val``, None when neither is present."""
    for child in node.children:
        if child.type == BINDING_KIND_NODE:
            return node_text(child, source_bytes).strip() == "var"
        if child.type == "var":
            return True
        if child.type == "val":
            return False
    return None


def extract_type_text(
    node: Node,
    source_bytes: bytes,
    after: str = ":",
) -> Optional[str]:
    """Collect the type annotation that follows the ``after`` token.

    The type runs from the first child after the token up to a terminator
    (``=``, ``by``, accessors, body). Whitespace runs are collapsed so the
    result fits on one line.

    Args:
        node: Declaration node whose direct children hold the annotation.
        source_bytes: The raw source file bytes.
        after: Token type that introduces the type.

    Returns:
        The type text as written, or None if there is no annotation.
    """
    collected: List[Node] = []
    seen = False
    for child in node.children:
        if not seen:
            seen = child.type == after
            continue
        if child.type in TYPE_TERMINATORS:
            break
        if child.type in COMMENT_TYPES:
            continue
        collected.append(child)

    if not collected:
        return None
    raw = source_bytes[collected[0].start_byte:collected[-1].end_byte].decode("utf-8")
    return _SPACE_RE.sub(" ", raw).strip() or None


def extract_parameters(node: Node, source_bytes: bytes) -> Tuple[Parameter, ...]:
    """Extract value parameters from a function or secondary constructor."""
    parameters_node = _child_of_type(node, FUNCTION_PARAMETERS_NODE)
    if parameters_node is None:
        return ()
    parameters = []
    for child in parameters_node.named_children:
        if child.type != PARAMETER_NODE:
            continue
        parameters.append(
            Parameter(
                name=extract_name(child, source_bytes) or "",
                type_reference=extract_type_text(child, source_bytes),
            )
        )
    return tuple(parameters)


def iter_body_members(node: Node) -> Iterator[Node]:
    """Yield member nodes of a class or object in source order."""
    body = _child_of_type(node, *BODY_TYPES)
    if body is None:
        return
    yield from _flatten_members(body)


def _flatten_members(node: Node) -> Iterator[Node]:
    for child in node.named_children:
        if child.type in MEMBER_GROUP_TYPES:
            yield from _flatten_members(child)
        else:
            yield child


def is_enum_class(node: Node, source_bytes: bytes) -> bool:
    """Check if a class_declaration is an ``enum class``.

    Depending on the grammar release ``enum`` is either a bare keyword child
    or a ``class_modifier``. The body type is not used: the grammar may
    produce an ``enum_class_body`` while recovering a plain class body.
    """
    for child in node.children:
        if child.type == "enum":
            return True
        if child.type == MODIFIERS_NODE:
            for modifier in child.children:
                if (
                    modifier.type == CLASS_MODIFIER_NODE
                    and node_text(modifier, source_bytes).strip() == "enum"
                ):
                    return True
    return False


def extract_constructor_properties(
    node: Node,
    source_bytes: bytes,
) -> List[Declaration]:
    """Promote ``val``/``var`` primary-constructor parameters to declarations."""
    constructor = _child_of_type(node, PRIMARY_CONSTRUCTOR_NODE)
    if constructor is None:
        return []
    parameters_node = _child_of_type(constructor, CLASS_PARAMETERS_NODE)
    if parameters_node is None:
        return []

    properties = []
    for child in parameters_node.named_children:
        if child.type != CLASS_PARAMETER_NODE:
            continue
        mutable = is_mutable_binding(child, source_bytes)
        if mutable is None:
            continue
        properties.append(
            Declaration(
                kind=DeclarationKind.PARAMETER,
                name=extract_name(child, source_bytes),
                type_reference=extract_type_text(child, source_bytes),
                visibility=extract_visibility(child, source_bytes),
                mutable=mutable,
                line=child.start_point[0] + 1,
            )
        )
    return properties


def _build_members(
    node: Node,
    source_bytes: bytes,
    owner_name: Optional[str],
    options: ExtractionOptions,
) -> Tuple[Declaration, ...]:
    members: List[Declaration] = []
    if options.include_constructor_properties:
        members.extend(extract_constructor_properties(node, source_bytes))
    for child in iter_body_members(node):
        declaration = build_declaration(child, source_bytes, owner_name, options)
        if declaration is not None:
            members.append(declaration)
    return tuple(members)


def _build_property(node: Node, source_bytes: bytes) -> Declaration:
    line = node.start_point[0] + 1
    visibility = extract_visibility(node, source_bytes)
    variable = _child_of_type(node, VARIABLE_NODE)
    if variable is None:
        # Destructuring declarations have no single name
        if _child_of_type(node, MULTI_VARIABLE_NODE) is not None:
            logger.debug("Destructuring property at line %d has no single name", line)
        return Declaration(
            kind=DeclarationKind.UNKNOWN,
            visibility=visibility,
            line=line,
        )

    mutable = bool(is_mutable_binding(node, source_bytes))
    return Declaration(
        kind=(
            DeclarationKind.MUTABLE_PROPERTY
            if mutable
            else DeclarationKind.IMMUTABLE_PROPERTY
        ),
        name=extract_name(variable, source_bytes),
        type_reference=extract_type_text(variable, source_bytes),
        visibility=visibility,
        mutable=mutable,
        line=line,
    )


def build_declaration(
    node: Node,
    source_bytes: bytes,
    owner_name: Optional[str] = None,
    options: Optional[ExtractionOptions] = None,
) -> Optional[Declaration]:
    """Lower a single syntax node into a Declaration.

    Args:
        node: A top-level statement or class member node.
        source_bytes: The raw source file bytes.
        owner_name: Name of the enclosing class, used for secondary
            constructors.
        options: Extraction options.

    Returns:
        A Declaration, or None if the node is not a declaration (imports,
        package header, comments, stray expressions).
    """
    if options is None:
        options = ExtractionOptions()

    node_type = node.type
    line = node.start_point[0] + 1

    if node_type == CLASS_NODE:
        name = extract_name(node, source_bytes)
        return Declaration(
            kind=(
                DeclarationKind.ENUM_CLASS
                if is_enum_class(node, source_bytes)
                else DeclarationKind.CLASS
            ),
            name=name,
            visibility=extract_visibility(node, source_bytes),
            children=_build_members(node, source_bytes, name, options),
            line=line,
        )

    if node_type in (OBJECT_NODE, COMPANION_NODE):
        name = extract_name(node, source_bytes)
        if name is None and node_type == COMPANION_NODE:
            name = COMPANION_DEFAULT_NAME
        return Declaration(
            kind=DeclarationKind.OBJECT,
            name=name,
            visibility=extract_visibility(node, source_bytes),
            children=_build_members(node, source_bytes, name, options),
            line=line,
        )

    if node_type == FUNCTION_NODE:
        return Declaration(
            kind=DeclarationKind.FUNCTION,
            name=extract_name(node, source_bytes),
            visibility=extract_visibility(node, source_bytes),
            parameters=extract_parameters(node, source_bytes),
            line=line,
        )

    if node_type == SECONDARY_CONSTRUCTOR_NODE:
        return Declaration(
            kind=DeclarationKind.FUNCTION,
            name=owner_name,
            visibility=extract_visibility(node, source_bytes),
            parameters=extract_parameters(node, source_bytes),
            line=line,
        )

    if node_type == PROPERTY_NODE:
        return _build_property(node, source_bytes)

    if node_type == TYPE_ALIAS_NODE:
        return Declaration(
            kind=DeclarationKind.TYPE_ALIAS,
            name=extract_name(node, source_bytes),
            type_reference=extract_type_text(node, source_bytes, after="="),
            visibility=extract_visibility(node, source_bytes),
            line=line,
        )

    if node_type == ENUM_ENTRY_NODE:
        return Declaration(
            kind=DeclarationKind.ENUM_ENTRY,
            name=extract_name(node, source_bytes),
            visibility=extract_visibility(node, source_bytes),
            line=line,
        )

    if node_type == INITIALIZER_NODE:
        return Declaration(kind=DeclarationKind.INITIALIZER, line=line)

    if "declaration" in node_type:
        logger.warning(f"Unknown declaration type: {node_type} at line {line}")
        return Declaration(
            kind=DeclarationKind.UNKNOWN,
            name=extract_name(node, source_bytes),
            visibility=extract_visibility(node, source_bytes),
            line=line,
        )

    return None


def build_declarations_from_nodes(
    nodes: Sequence[Node],
    source_bytes: bytes,
    options: Optional[ExtractionOptions] = None,
) -> List[Declaration]:
    """Lower a sequence of sibling nodes, dropping non-declarations."""
    declarations = []
    for node in nodes:
        declaration = build_declaration(node, source_bytes, options=options)
        if declaration is not None:
            declarations.append(declaration)
    return declarations


def build_declarations(
    tree: Tree,
    source_bytes: bytes,
    options: Optional[ExtractionOptions] = None,
) -> List[Declaration]:
    """Lower all top-level declarations of a parsed Kotlin file.

    This is the main entry point of the builder.

    Args:
        tree: The parsed syntax tree.
        source_bytes: The raw source file bytes.
        options: Extraction options.

    Returns:
        Top-level declarations in source order.
    """
    declarations = build_declarations_from_nodes(
        tree.root_node.named_children, source_bytes, options
    )
    logger.debug(f"Built {len(declarations)} top-level declarations")
    return declarations
