"""Text reducers applied to every merged source file."""

from __future__ import annotations

from .bodies import elide_bodies
from .comments import strip_comments


def reduce_source(text: str, *, elide: bool = False) -> str:
    """Strip comments and, when ``elide`` is set, collapse method bodies."""
    reduced = strip_comments(text)
    if elide:
        reduced = elide_bodies(reduced)
    return reduced


__all__ = ["elide_bodies", "reduce_source", "strip_comments"]
