"""Line-oriented reader and writer for the on-disk configuration format.

The format is a minimal INI dialect::

    [section-name]
    key = value

There is no comment syntax. Blank lines, lines without ``=`` and tokens a
Section refuses (a key starting with ``[``, a line break inside the line)
are skipped, and empty values are never stored.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Final, Optional, TextIO

from layerconf.errors import ParseError
from layerconf.section import Section
from layerconf.utils.text import trim

logger: Final = logging.getLogger(__name__)

Tier = dict[str, Section]


def parse(
    stream: Iterable[str],
    no_section: Optional[Section] = None,
    strict: bool = False,
) -> Tier:
    """Read sections and tokens from a text stream.

    Args:
        stream: Open text stream (or any iterable of lines)
        no_section: Section receiving keys found before the first header;
            a throwaway section is used when omitted
        strict: Raise on lines that are neither header nor ``key = value``

    Returns:
        Mapping of section name to Section

    Raises:
        ParseError: In strict mode, for a line without ``=`` or with a
            token the section refuses
    """
    tier: Tier = {}
    current = no_section if no_section is not None else Section("")

    for line_number, raw_line in enumerate(stream, start=1):
        line = trim(raw_line)
        if not line:
            continue

        if line[0] == "[" and line[-1] == "]":
            name = line[1:-1]
            section = tier.get(name)
            if section is None:
                section = tier[name] = Section(name)
            current = section
            continue

        key, sep, value = line.partition("=")
        if not sep:
            if strict:
                raise ParseError(line_number, line)
            logger.debug("Skipping line %d without '=': %r", line_number, line)
            continue

        value = trim(value)
        if not value:
            continue
        try:
            current[trim(key)] = value
        except ValueError:
            # e.g. "[name = value" or a stray carriage return
            if strict:
                raise ParseError(line_number, line) from None
            logger.debug("Skipping line %d with an invalid token: %r", line_number, line)

    return tier


def write(tier: Tier, stream: TextIO) -> None:
    """Serialize sections to a text stream.

    Sections and keys are written in ascending order. Empty values are
    skipped, a header is only written once its section has a value, and
    every section is followed by a blank line.

    Args:
        tier: Mapping of section name to Section
        stream: Writable text stream
    """
    for name in sorted(tier):
        header_written = False
        for key, value in tier[name].items():
            if not value:
                continue
            if not header_written:
                stream.write(f"[{name}]\n")
                header_written = True
            stream.write(f"{key} = {value}\n")
        stream.write("\n")
