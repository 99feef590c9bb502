"""Comment stripping for C-family source text."""

from __future__ import annotations

import re

_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_LINE_COMMENT = re.compile(r"//.*$", re.MULTILINE)
# Whitespace-only lines, including a whitespace-only tail without newline.
_BLANK_LINE = re.compile(r"^\s*(?:[\r\n]|\Z)", re.MULTILINE)


def strip_comments(text: str) -> str:
    """Remove ``/* */`` and ``//`` comments, then drop blank lines.

    Comment delimiters inside string literals are not recognised as such, so
    ``"http://host"`` loses everything after ``//``. An unterminated ``/*`` is
    left in place. The function never raises.
    """
    text = _BLOCK_COMMENT.sub("", text)
    text = _LINE_COMMENT.sub("", text)
    return _BLANK_LINE.sub("", text)


__all__ = ["strip_comments"]
