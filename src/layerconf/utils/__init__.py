"""Common utility functions and helpers for the layerconf package."""

from layerconf.utils.numeric import (
    format_integer,
    numeric_locale,
    parse_float,
    parse_integer,
)
from layerconf.utils.text import is_visible, trim

__all__ = [
    "format_integer",
    "is_visible",
    "numeric_locale",
    "parse_float",
    "parse_integer",
    "trim",
]
