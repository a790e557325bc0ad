"""
Configuration constants for Kotlin API surface extraction.

Defines the tree-sitter-kotlin node type strings used by the declaration
builder and the rendering constants used by the walker.
"""

from typing import Set

# Kotlin source file extensions
KOTLIN_EXTENSIONS: Set[str] = {
    ".kt",
}

# Declaration node types
CLASS_NODE: str = "class_declaration"
OBJECT_NODE: str = "object_declaration"
COMPANION_NODE: str = "companion_object"
FUNCTION_NODE: str = "function_declaration"
PROPERTY_NODE: str = "property_declaration"
TYPE_ALIAS_NODE: str = "type_alias"
ENUM_ENTRY_NODE: str = "enum_entry"
INITIALIZER_NODE: str = "anonymous_initializer"
SECONDARY_CONSTRUCTOR_NODE: str = "secondary_constructor"

# Class and object bodies
BODY_TYPES: Set[str] = {
    "class_body",
    "enum_class_body",
}

# Grouping nodes inside a body that are flattened into their parent
MEMBER_GROUP_TYPES: Set[str] = {
    "class_member_declarations",
    "enum_entries",
}

# Identifier node types that carry a declaration name
NAME_TYPES: tuple = (
    "simple_identifier",
    "type_identifier",
    "identifier",
)

# Modifier handling
MODIFIERS_NODE: str = "modifiers"
VISIBILITY_MODIFIER_NODE: str = "visibility_modifier"
CLASS_MODIFIER_NODE: str = "class_modifier"
BINDING_KIND_NODE: str = "binding_pattern_kind"

# Properties and parameters
VARIABLE_NODE: str = "variable_declaration"
MULTI_VARIABLE_NODE: str = "multi_variable_declaration"
FUNCTION_PARAMETERS_NODE: str = "function_value_parameters"
PARAMETER_NODE: str = "parameter"
PRIMARY_CONSTRUCTOR_NODE: str = "primary_constructor"
CLASS_PARAMETERS_NODE: str = "class_parameters"
CLASS_PARAMETER_NODE: str = "class_parameter"

# Comment nodes (extras) that may appear between any two tokens
COMMENT_TYPES: Set[str] = {
    "comment",
    "line_comment",
    "multiline_comment",
}

# MISSING placeholders the grammar inserts into valid one-line bodies
GRAMMAR_ARTIFACT_TYPES: Set[str] = {
    "_class_member_semi",
    "_semi",
    "_semis",
    "_automatic_semicolon",
}

# Tokens whose text may contain braces that are not Kotlin structure
OPAQUE_TOKEN_TYPES: Set[str] = {
    "string_literal",
    "multiline_string_literal",
    "line_string_literal",
    "multi_line_string_literal",
    "character_literal",
    "comment",
    "line_comment",
    "multiline_comment",
}

# Tokens that terminate a type annotation
TYPE_TERMINATORS: Set[str] = {
    "=",
    "by",
    "property_delegate",
    "getter",
    "setter",
    "type_constraints",
    "function_body",
    ";",
}

# Rendering
INDENT_UNIT: str = "    "
UNNAMED_PLACEHOLDER: str = "[Unnamed]"
COMPANION_DEFAULT_NAME: str = "Companion"
UNKNOWN_PREFIX: str = "// Unknown declaration: "

# Extraction policy defaults
DEFAULT_INCLUDE_CONSTRUCTOR_PROPERTIES: bool = False
