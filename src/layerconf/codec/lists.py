"""Encoding of ordered string lists inside a single configuration value.

Elements are joined with ``,``. A ``\\`` makes the next character literal,
so an element may itself contain commas or backslashes::

    >>> encode(["a,b", "c"])
    'a\\\\,b,c'
    >>> decode("a\\\\,b, c")
    ['a,b', 'c']

Whitespace around each decoded element is trimmed.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final, Optional

from layerconf.utils.text import trim

SEPARATOR: Final = ","
ESCAPE: Final = "\\"


def _next_separator(text: str, begin: int) -> Optional[int]:
    """Return the index of the first unescaped separator at or after ``begin``."""
    escaped = False
    for index in range(begin, len(text)):
        ch = text[index]
        if escaped:
            escaped = False
        elif ch == ESCAPE:
            escaped = True
        elif ch == SEPARATOR:
            return index
    return None


def unquote(segment: str) -> str:
    """Undo :func:`quote` on a segment that starts with the separator.

    Reading stops at the first unescaped separator after the opening one,
    or at the end of the segment when it is not closed.
    """
    chars: list[str] = []
    escaped = False
    for ch in segment[1:]:
        if escaped:
            chars.append(ch)
            escaped = False
        elif ch == ESCAPE:
            escaped = True
        elif ch == SEPARATOR:
            break
        else:
            chars.append(ch)
    return "".join(chars)


def escape(item: str) -> str:
    """Escape separators and escape characters in one element."""
    return "".join(ESCAPE + ch if ch in (SEPARATOR, ESCAPE) else ch for ch in item)


def quote(item: str) -> str:
    """Return ``item`` escaped and surrounded by separators."""
    return SEPARATOR + escape(item) + SEPARATOR


def decode(raw: str) -> list[str]:
    """Split a stored value into its elements.

    The value is wrapped in one separator at each end, then cut at every
    unescaped separator. Each piece is unquoted and trimmed.

    Args:
        raw: The stored value

    Returns:
        The decoded elements; an empty value decodes to an empty list
    """
    if not raw:
        return []

    text = SEPARATOR + raw + SEPARATOR
    last = len(text) - 1
    items: list[str] = []
    start = 0
    while start != last:
        pos = _next_separator(text, start + 1)
        if pos is None:
            # A trailing escape swallowed the closing separator
            items.append(trim(unquote(text[start:])))
            break
        items.append(trim(unquote(text[start:pos])))
        start = pos
    return items


def encode(items: Iterable[str]) -> str:
    """Join elements into one value that :func:`decode` splits back.

    Each element is quoted; adjacent closing and opening separators are
    merged and the outermost pair is dropped, so the result reads like a
    plain comma separated list.

    Args:
        items: Elements to encode

    Returns:
        The encoded value; an empty list encodes to an empty string
    """
    quoted = "".join(quote(item)[:-1] for item in items)
    return quoted[1:]
