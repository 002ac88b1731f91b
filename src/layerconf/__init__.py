"""Layered key/value configuration files.

A Configuration reads a *local* and a *global* INI-style file, resolves
reads local first, routes writes to either tier and writes both back
without losing data. Values are strings with typed accessors on top.
"""

from layerconf.common.enums import Destination
from layerconf.errors import (
    ConfigurationError,
    ConversionError,
    FrozenSectionError,
    InvalidDestinationError,
    ParseError,
)
from layerconf.files import LoadResult, from_file, to_file
from layerconf.section import Section
from layerconf.store import Configuration
from layerconf.types import Custom, Kind, ListOf, Stringable

__version__ = "0.1.0"

__all__ = [
    "Configuration",
    "ConfigurationError",
    "ConversionError",
    "Custom",
    "Destination",
    "FrozenSectionError",
    "InvalidDestinationError",
    "Kind",
    "ListOf",
    "LoadResult",
    "ParseError",
    "Section",
    "Stringable",
    "from_file",
    "to_file",
]
