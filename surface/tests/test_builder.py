"""
Unit tests for builder.py

Tests lowering of real tree-sitter-kotlin parses into declaration nodes.
"""

import unittest

from surface.builder import build_declarations
from surface.models import DeclarationKind, ExtractionOptions, Parameter, Visibility
from surface.parser import parse_source

K = DeclarationKind


def _build(source: str, options=None):
    tree, source_bytes = parse_source(source.encode("utf-8"), "Test.kt")
    return build_declarations(tree, source_bytes, options)


class TestTopLevelDeclarations(unittest.TestCase):
    """Test top-level declaration kinds."""

    def test_function_with_parameters(self):
        decls = _build("fun visible(a: String, b: Int) {}\n")
        self.assertEqual(len(decls), 1)
        self.assertEqual(decls[0].kind, K.FUNCTION)
        self.assertEqual(decls[0].name, "visible")
        self.assertEqual(
            decls[0].parameters,
            (Parameter("a", "String"), Parameter("b", "Int")),
        )

    def test_default_argument_not_part_of_type(self):
        decls = _build('fun greet(name: String = "you", times: Int = 1) {}\n')
        self.assertEqual(
            [(p.name, p.type_reference) for p in decls[0].parameters],
            [("name", "String"), ("times", "Int")],
        )

    def test_extension_function_name(self):
        decls = _build("fun String.shout(): String = uppercase()\n")
        self.assertEqual(decls[0].name, "shout")

    def test_properties(self):
        decls = _build(
            "val answer: Int = 42\n"
            "var items: MutableList<String> = mutableListOf()\n"
            "val inferred = 1\n"
        )
        self.assertEqual([d.kind for d in decls], [
            K.IMMUTABLE_PROPERTY,
            K.MUTABLE_PROPERTY,
            K.IMMUTABLE_PROPERTY,
        ])
        self.assertEqual(decls[0].type_reference, "Int")
        self.assertEqual(decls[1].type_reference, "MutableList<String>")
        self.assertTrue(decls[1].mutable)
        self.assertIsNone(decls[2].type_reference)

    def test_type_alias(self):
        decls = _build("typealias Id = String\n")
        self.assertEqual(decls[0].kind, K.TYPE_ALIAS)
        self.assertEqual(decls[0].name, "Id")
        self.assertEqual(decls[0].type_reference, "String")

    def test_package_and_imports_skipped(self):
        decls = _build(
            "package com.example.api\n\n"
            "import kotlin.collections.List\n\n"
            "fun only() {}\n"
        )
        self.assertEqual([d.name for d in decls], ["only"])

    def test_line_numbers(self):
        decls = _build("fun a() {}\n\nfun b() {}\n")
        self.assertEqual([d.line for d in decls], [1, 3])


class TestVisibility(unittest.TestCase):
    """Test visibility taken from modifiers."""

    def test_explicit_and_default_visibility(self):
        decls = _build(
            "internal fun secret() {}\n"
            "private val hidden = 1\n"
            "public fun shown() {}\n"
            "fun implicit() {}\n"
        )
        self.assertEqual(
            [d.visibility for d in decls],
            [Visibility.INTERNAL, Visibility.PRIVATE, Visibility.PUBLIC, Visibility.PUBLIC],
        )

    def test_other_modifiers_do_not_affect_visibility(self):
        decls = _build("inline fun fast() {}\n")
        self.assertIs(decls[0].visibility, Visibility.PUBLIC)


class TestContainers(unittest.TestCase):
    """Test classes, objects, and their members."""

    def test_class_members_in_order(self):
        decls = _build(
            "class Foo {\n"
            "    val x: Int = 0\n"
            "    private fun helper() {}\n"
            "    fun run() {}\n"
            "}\n"
        )
        foo = decls[0]
        self.assertEqual(foo.kind, K.CLASS)
        self.assertEqual(foo.name, "Foo")
        self.assertEqual([c.name for c in foo.children], ["x", "helper", "run"])
        self.assertIs(foo.children[1].visibility, Visibility.PRIVATE)

    def test_class_without_body(self):
        decls = _build("class Marker\n")
        self.assertEqual(decls[0].kind, K.CLASS)
        self.assertEqual(decls[0].children, ())

    def test_interface_is_class(self):
        decls = _build("interface Shape {\n    fun area(): Double\n}\n")
        self.assertEqual(decls[0].kind, K.CLASS)
        self.assertEqual(decls[0].name, "Shape")
        self.assertEqual(decls[0].children[0].name, "area")

    def test_enum_class_with_entries_and_members(self):
        decls = _build(
            "enum class Color {\n"
            "    RED,\n"
            "    GREEN;\n"
            "\n"
            "    fun label(): String = name\n"
            "}\n"
        )
        color = decls[0]
        self.assertEqual(color.kind, K.ENUM_CLASS)
        self.assertEqual(
            [(c.kind, c.name) for c in color.children],
            [(K.ENUM_ENTRY, "RED"), (K.ENUM_ENTRY, "GREEN"), (K.FUNCTION, "label")],
        )

    def test_one_line_class_is_not_enum(self):
        decls = _build("class F { fun a() {} }")
        self.assertEqual(decls[0].kind, K.CLASS)
        self.assertEqual([c.name for c in decls[0].children], ["a"])

    def test_one_line_enum_class(self):
        decls = _build("enum class Color { RED, GREEN }\n")
        self.assertEqual(decls[0].kind, K.ENUM_CLASS)
        self.assertEqual([c.name for c in decls[0].children], ["RED", "GREEN"])

    def test_object_and_companion(self):
        decls = _build(
            "object Registry {\n"
            "    fun register() {}\n"
            "}\n"
            "\n"
            "class Widget {\n"
            "    companion object {\n"
            "        fun create(): Widget = Widget()\n"
            "    }\n"
            "}\n"
        )
        registry, widget = decls
        self.assertEqual(registry.kind, K.OBJECT)
        self.assertEqual(registry.name, "Registry")
        companion = widget.children[0]
        self.assertEqual(companion.kind, K.OBJECT)
        self.assertEqual(companion.name, "Companion")
        self.assertEqual(companion.children[0].name, "create")

    def test_named_companion(self):
        decls = _build("class Widget {\n    companion object Factory {}\n}\n")
        self.assertEqual(decls[0].children[0].name, "Factory")

    def test_initializer_block(self):
        decls = _build(
            "class Boot {\n"
            "    init {\n"
            "        println(1)\n"
            "    }\n"
            "    fun start() {}\n"
            "}\n"
        )
        self.assertEqual(
            [c.kind for c in decls[0].children],
            [K.INITIALIZER, K.FUNCTION],
        )

    def test_secondary_constructor_named_after_class(self):
        decls = _build(
            "class Point(val x: Int) {\n"
            "    constructor(x: Int, y: Int) : this(x + y)\n"
            "}\n"
        )
        ctor = decls[0].children[0]
        self.assertEqual(ctor.kind, K.FUNCTION)
        self.assertEqual(ctor.name, "Point")
        self.assertEqual([p.name for p in ctor.parameters], ["x", "y"])


class TestConstructorProperties(unittest.TestCase):
    """Test promotion of primary-constructor properties."""

    SOURCE = "class User(val id: Long, var name: String, plain: Int) {\n    fun greet() {}\n}\n"

    def test_off_by_default(self):
        user = _build(self.SOURCE)[0]
        self.assertEqual([c.name for c in user.children], ["greet"])

    def test_promoted_when_enabled(self):
        options = ExtractionOptions(include_constructor_properties=True)
        user = _build(self.SOURCE, options)[0]
        self.assertEqual(
            [(c.kind, c.name, c.type_reference, c.mutable) for c in user.children],
            [
                (K.PARAMETER, "id", "Long", False),
                (K.PARAMETER, "name", "String", True),
                (K.FUNCTION, "greet", None, False),
            ],
        )

    def test_private_constructor_property_keeps_visibility(self):
        options = ExtractionOptions(include_constructor_properties=True)
        cls = _build("class Box(private val secret: String)\n", options)[0]
        self.assertIs(cls.children[0].visibility, Visibility.PRIVATE)


if __name__ == "__main__":
    unittest.main()
