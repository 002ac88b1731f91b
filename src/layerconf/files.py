"""Loading and saving configuration files."""

from __future__ import annotations

import io
import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Final, NamedTuple, Optional, TextIO

from layerconf.store import Configuration

logger: Final = logging.getLogger(__name__)

# Bytes that are not UTF-8 survive a load/save cycle as lone surrogates
ENCODING: Final = "utf-8"
ENCODING_ERRORS: Final = "surrogateescape"

Opener = Callable[..., TextIO]
PathLike = str | os.PathLike[str]


class LoadResult(NamedTuple):
    """Outcome of :func:`from_file`."""

    config: Configuration
    missing: bool  # a requested file could not be opened


def ensure_directory_exists(directory: Path) -> None:
    """Create directory if it doesn't exist.

    Args:
        directory: Path to create
    """
    if not directory.exists():
        directory.mkdir(parents=True, exist_ok=True)
        logger.debug("Created directory: %s", directory)


def _read_lines(path: Path, opener: Opener) -> tuple[list[str], bool]:
    try:
        with opener(path, "r", encoding=ENCODING, errors=ENCODING_ERRORS) as stream:
            return stream.readlines(), False
    except OSError as exc:
        logger.warning("Unable to open configuration file %s", path)
        logger.debug("Open failure for %s: %s", path, exc)
        return [], True


def from_file(
    local_path: PathLike,
    global_path: Optional[PathLike] = None,
    *,
    strict: bool = False,
    opener: Opener = open,
) -> LoadResult:
    """Load a local file, and optionally a global one.

    A file that cannot be opened is reported with a warning and read as
    empty, so the caller can still start from an empty store.

    Args:
        local_path: Local configuration file
        global_path: Global configuration file
        strict: Raise ParseError on malformed lines
        opener: Callable used to open files (``open`` by default)

    Returns:
        The store, and whether any requested file was missing
    """
    local_lines, missing = _read_lines(Path(local_path), opener)
    if global_path is None:
        return LoadResult(Configuration(local_lines, strict=strict), missing)

    global_lines, global_missing = _read_lines(Path(global_path), opener)
    config = Configuration(local_lines, global_lines, strict=strict)
    return LoadResult(config, missing or global_missing)


def to_file(
    config: Configuration,
    local_path: PathLike,
    global_path: Optional[PathLike] = None,
    *,
    opener: Opener = open,
) -> bool:
    """Write the local tier, and the global tier when a path is given.

    The text is rendered before any file is opened; the global file is
    written first.

    Args:
        config: Store to save
        local_path: Destination of the local tier
        global_path: Destination of the global tier
        opener: Callable used to open files (``open`` by default)

    Returns:
        False if a destination could not be opened or written
    """
    local_buffer = io.StringIO()
    global_buffer: Optional[io.StringIO] = None if global_path is None else io.StringIO()
    config.serialize(local_buffer, global_buffer)

    targets: list[tuple[Path, str]] = []
    if global_path is not None and global_buffer is not None:
        targets.append((Path(global_path), global_buffer.getvalue()))
    targets.append((Path(local_path), local_buffer.getvalue()))

    for path, content in targets:
        try:
            with opener(
                path, "w", encoding=ENCODING, errors=ENCODING_ERRORS, newline="\n"
            ) as stream:
                stream.write(content)
        except (OSError, UnicodeError) as exc:
            logger.warning("Unable to write configuration file %s: %s", path, exc)
            return False
        logger.debug("Wrote configuration file %s", path)
    return True
