"""Locale-independent number parsing and formatting."""

from __future__ import annotations

import locale
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Final

# Whitespace skipped in front of a number, as the C library does
C_SPACE: Final = " \t\n\v\f\r"

DIGITS: Final = "0123456789abcdefghijklmnopqrstuvwxyz"

# Base → (format code, textual prefix)
BASE_PREFIXES: Final[dict[int, tuple[str, str]]] = {
    16: ("x", "0x"),
    8: ("o", "0o"),
    2: ("b", "0b"),
}


@contextmanager
def numeric_locale() -> Iterator[None]:
    """Pin ``LC_NUMERIC`` to the "C" locale for the duration of the block.

    The previous numeric locale is restored when the block exits, whether
    normally or through an exception.
    """
    previous = locale.setlocale(locale.LC_NUMERIC)
    switched = previous != "C"
    if switched:
        locale.setlocale(locale.LC_NUMERIC, "C")
    try:
        yield
    finally:
        if switched:
            locale.setlocale(locale.LC_NUMERIC, previous)


def _check_base(base: int) -> None:
    if base != 0 and not 2 <= base <= 36:
        raise ValueError(f"base must be 0 or between 2 and 36, not {base}")


def parse_integer(text: str, base: int = 10) -> int:
    """Parse an integer the way ``strtol`` does, but without partial reads.

    Leading whitespace and a sign are accepted. A ``0x``/``0o``/``0b``
    prefix is accepted when it matches ``base``; with ``base=0`` the base
    is guessed from the prefix and defaults to 10. Any character left after
    the digits is an error.

    Unlike ``strtol``, base 0 does not read a bare leading ``0`` as octal:
    ``"010"`` is 10. Octal needs the ``0o`` prefix, as in Python literals.

    Args:
        text: Text to parse
        base: Numeric base (0 or 2-36)

    Returns:
        The parsed integer

    Raises:
        ValueError: If the text is not a complete integer in ``base``
    """
    _check_base(base)
    body = text.lstrip(C_SPACE)
    negative = body[:1] == "-"
    if body[:1] in ("+", "-"):
        body = body[1:]

    prefix = body[:2].lower()
    if base == 0:
        base = next((b for b, (_, p) in BASE_PREFIXES.items() if p == prefix), 10)
        if base != 10:
            body = body[2:]
    elif base in BASE_PREFIXES and prefix == BASE_PREFIXES[base][1] and len(body) > 2:
        body = body[2:]

    # int() would also accept underscores and non-ASCII digits
    if not body or not body.isascii() or not body.isalnum():
        raise ValueError(f"invalid literal for base {base}: {text!r}")
    value = int(body, base)
    return -value if negative else value


def parse_float(text: str) -> float:
    """Parse a float with a dot decimal point and no trailing characters.

    Raises:
        ValueError: If the text is not a complete floating point literal
    """
    body = text.lstrip(C_SPACE)
    if not body or body != body.rstrip() or "_" in body or not body.isascii():
        raise ValueError(f"invalid float literal: {text!r}")
    return float(body)


def format_integer(value: int, base: int = 10, show_base: bool = False) -> str:
    """Format an integer in the given base.

    Args:
        value: Integer to format
        base: Numeric base (2-36); 0 is treated as 10
        show_base: Prefix hexadecimal, octal and binary output with
            ``0x``, ``0o`` or ``0b``

    Returns:
        The textual representation
    """
    _check_base(base)
    if base in (0, 10):
        return str(value)
    if base in BASE_PREFIXES:
        code = BASE_PREFIXES[base][0]
        return format(value, f"#{code}" if show_base else code)

    magnitude = abs(value)
    digits: list[str] = []
    while True:
        magnitude, rem = divmod(magnitude, base)
        digits.append(DIGITS[rem])
        if not magnitude:
            break
    return ("-" if value < 0 else "") + "".join(reversed(digits))
