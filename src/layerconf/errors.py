"""Exception classes for the layered configuration store.

This module defines the hierarchy of errors raised by the store. Most
problems in configuration files are tolerated silently; these exceptions
cover programming errors and the opt-in strict modes.
"""

from __future__ import annotations

from typing import Optional


class ConfigurationError(Exception):
    """Base class for every error raised by layerconf."""


class InvalidDestinationError(ConfigurationError):
    """Raised when a tier-specific operation receives an unknown destination.

    This is a programming error and is never recovered from internally.
    """

    def __init__(self, destination: object) -> None:
        """Initialize with the rejected destination.

        Args:
            destination: The value that is neither local nor global
        """
        super().__init__(f"Invalid Configuration destination: {destination!r}")
        self.destination = destination


class ConversionError(ConfigurationError, ValueError):
    """Raised when a stored string cannot be converted to the requested kind.

    The high-level accessors catch this and fall back to the caller's
    default unless strict access was requested.
    """

    def __init__(
        self, raw: str, kind: str, original_error: Optional[Exception] = None
    ) -> None:
        """Initialize with conversion details.

        Args:
            raw: The stored text that failed to convert
            kind: Name of the target kind
            original_error: The underlying exception, if any
        """
        super().__init__(f"Cannot convert {raw!r} to {kind}")
        self.raw = raw
        self.kind = kind
        self.original_error = original_error


class ParseError(ConfigurationError):
    """Raised by strict parsing for a line that is neither header nor token."""

    def __init__(self, line_number: int, line: str) -> None:
        super().__init__(f"line {line_number}: expected '[section]' or 'key = value', got {line!r}")
        self.line_number = line_number
        self.line = line


class FrozenSectionError(ConfigurationError):
    """Raised when the shared read-only empty section is modified."""

    pass
