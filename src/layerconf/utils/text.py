"""Text helpers shared by the codecs."""

from __future__ import annotations

# Undecodable bytes read with the surrogateescape handler
_ESCAPED_BYTES = ("\udc80", "\udcff")


def is_visible(ch: str) -> bool:
    """Return True for characters that are printable and not whitespace.

    A byte that was not valid UTF-8 on disk counts as visible so it is kept
    verbatim.
    """
    if _ESCAPED_BYTES[0] <= ch <= _ESCAPED_BYTES[1]:
        return True
    return ch.isprintable() and not ch.isspace()


def trim(text: str) -> str:
    """Strip every non-visible character from both ends of ``text``.

    Unlike ``str.strip`` this also removes control characters such as a
    stray byte order mark or NUL at the edges of a line.

    Args:
        text: Text to trim

    Returns:
        The trimmed text
    """
    start = 0
    end = len(text)
    while start < end and not is_visible(text[start]):
        start += 1
    while end > start and not is_visible(text[end - 1]):
        end -= 1
    return text[start:end]
