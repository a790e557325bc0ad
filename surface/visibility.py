"""Visibility classification for Kotlin declarations."""

from typing import Iterable

from surface.models import Declaration, Visibility

_KEYWORDS = {visibility.value: visibility for visibility in Visibility}


def resolve_visibility(modifier_words: Iterable[str]) -> Visibility:
    """Map modifier keywords to a visibility.

    The first visibility keyword wins. Without one the declaration is
    public, which is Kotlin's default.
    """
    for word in modifier_words:
        visibility = _KEYWORDS.get(word.strip())
        if visibility is not None:
            return visibility
    return Visibility.PUBLIC


def is_exported(declaration: Declaration) -> bool:
    """Return True if the declaration belongs to the public surface.

    Only the declaration's own visibility is considered. Whether an
    enclosing container is exported is decided by the walker.
    """
    return declaration.is_exported
