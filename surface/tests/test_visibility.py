"""Unit tests for visibility classification."""

import unittest

from surface.models import Declaration, DeclarationKind, Visibility
from surface.visibility import is_exported, resolve_visibility


class TestResolveVisibility(unittest.TestCase):
    """Map modifier keywords to visibility."""

    def test_no_modifier_is_public(self) -> None:
        self.assertIs(resolve_visibility([]), Visibility.PUBLIC)

    def test_explicit_keywords(self) -> None:
        self.assertIs(resolve_visibility(["public"]), Visibility.PUBLIC)
        self.assertIs(resolve_visibility(["internal"]), Visibility.INTERNAL)
        self.assertIs(resolve_visibility(["private"]), Visibility.PRIVATE)
        self.assertIs(resolve_visibility(["protected"]), Visibility.PROTECTED)

    def test_non_visibility_words_ignored(self) -> None:
        self.assertIs(resolve_visibility(["override", "open"]), Visibility.PUBLIC)
        self.assertIs(resolve_visibility(["open", "protected"]), Visibility.PROTECTED)


class TestIsExported(unittest.TestCase):
    """Exported iff public."""

    def test_public_is_exported(self) -> None:
        self.assertTrue(is_exported(Declaration(DeclarationKind.FUNCTION, name="f")))

    def test_restricted_not_exported(self) -> None:
        for visibility in (Visibility.INTERNAL, Visibility.PRIVATE, Visibility.PROTECTED):
            with self.subTest(visibility=visibility):
                decl = Declaration(DeclarationKind.FUNCTION, name="f", visibility=visibility)
                self.assertFalse(is_exported(decl))

    def test_unknown_kind_uses_its_modifier(self) -> None:
        self.assertTrue(is_exported(Declaration(DeclarationKind.UNKNOWN, name="u")))
        hidden = Declaration(DeclarationKind.UNKNOWN, name="u", visibility=Visibility.PRIVATE)
        self.assertFalse(is_exported(hidden))

    def test_classification_ignores_children(self) -> None:
        decl = Declaration(
            DeclarationKind.CLASS,
            name="Box",
            visibility=Visibility.PRIVATE,
            children=(Declaration(DeclarationKind.FUNCTION, name="open"),),
        )
        self.assertFalse(is_exported(decl))
        self.assertTrue(is_exported(decl.children[0]))


class TestDeclarationInvariants(unittest.TestCase):
    """Children are only allowed on container kinds."""

    def test_non_container_rejects_children(self) -> None:
        child = Declaration(DeclarationKind.FUNCTION, name="f")
        with self.assertRaises(ValueError):
            Declaration(DeclarationKind.FUNCTION, name="g", children=(child,))

    def test_container_kinds(self) -> None:
        self.assertTrue(Declaration(DeclarationKind.CLASS).is_container)
        self.assertTrue(Declaration(DeclarationKind.ENUM_CLASS).is_container)
        self.assertTrue(Declaration(DeclarationKind.OBJECT).is_container)
        self.assertFalse(Declaration(DeclarationKind.ENUM_ENTRY).is_container)


if __name__ == "__main__":
    unittest.main()
