"""Method body elision driven by a signature matcher and a brace counter."""

from __future__ import annotations

import re
from typing import List

from ..logging import get_logger

LOGGER = get_logger("reducers.bodies")

EMPTY_BLOCK = " {\n}\n"

_MODIFIERS = (
    r"(?:(?:public|protected|private|static|final|abstract|synchronized"
    r"|native|default|strictfp)\s+)*"
)
_TYPE_PARAMETERS = r"(?:<[^(){};=]*>\s*)?"
_RETURN_TYPE = (
    r"(?!(?:new|return|else|throw|case|record)\b)"
    r"[A-Za-z_$][\w$.]*(?:\s*<[^(){};=]*>)?(?:\s*\[\s*\])*"
)
_NAME = r"(?!(?:if|for|while|switch|catch|synchronized|return|new)\b)[A-Za-z_$][\w$]*"
_PARAMETERS = r"\([^()]*\)"
_THROWS = r"(?:\s*throws\s+[\w$.<>,\s]+?)?"

SIGNATURE = re.compile(
    rf"(?<![\w$.])"
    rf"{_MODIFIERS}{_TYPE_PARAMETERS}{_RETURN_TYPE}\s+{_NAME}\s*{_PARAMETERS}{_THROWS}\s*\{{"
)


def find_body_end(text: str, start: int) -> int | None:
    """Return the index just past the brace closing the body opened before ``start``.

    ``start`` is the position right after the opening ``{`` (depth 1). Braces in
    string or character literals are counted like any other brace. Returns
    ``None`` when the text ends before the depth returns to zero.
    """
    depth = 1
    for index in range(start, len(text)):
        char = text[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index + 1
    return None


def elide_bodies(text: str) -> str:
    """Collapse every top-level method body in ``text`` to an empty block.

    Matches are processed left to right without overlap. Nested methods, for
    example inside anonymous classes, go away together with the enclosing
    body. If a body is never closed the rest of the text is kept verbatim.

    Each replacement is the trimmed signature, a space, then ``{``, a line
    break, ``}`` and a line break (see ``EMPTY_BLOCK``). The space before the
    brace is added so the result keeps conventional Java formatting.
    """
    pieces: List[str] = []
    position = 0
    while True:
        match = SIGNATURE.search(text, position)
        if match is None:
            break

        pieces.append(text[position : match.start()])
        end = find_body_end(text, match.end())
        if end is None:
            LOGGER.debug("Unterminated body at offset %d; keeping remainder", match.start())
            pieces.append(text[match.start() :])
            return "".join(pieces)

        signature = text[match.start() : match.end() - 1].rstrip()
        pieces.append(signature + EMPTY_BLOCK)

        # The synthetic block already ends the line.
        if text.startswith("\r\n", end):
            end += 2
        elif text.startswith("\n", end):
            end += 1
        position = end

    pieces.append(text[position:])
    return "".join(pieces)


__all__ = ["EMPTY_BLOCK", "SIGNATURE", "elide_bodies", "find_body_end"]
