"""Conversion kinds used by typed configuration access.

This package provides:
- Kind and its variants: String, Integer, Float, Boolean, Custom, ListOf
- Stringable: opt-in interface for values that know their textual form
"""

from layerconf.types.kinds import (
    BOOLEAN,
    FLOAT,
    FLOAT32,
    INT8,
    INT16,
    INT32,
    INT64,
    INTEGER,
    STRING,
    STRINGABLE,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    Boolean,
    Custom,
    Float,
    Integer,
    Kind,
    ListOf,
    String,
    convert_to_num,
    kind_of,
)
from layerconf.types.stringable import Stringable

__all__ = [
    "BOOLEAN",
    "FLOAT",
    "FLOAT32",
    "INT16",
    "INT32",
    "INT64",
    "INT8",
    "INTEGER",
    "STRING",
    "STRINGABLE",
    "UINT16",
    "UINT32",
    "UINT64",
    "UINT8",
    "Boolean",
    "Custom",
    "Float",
    "Integer",
    "Kind",
    "ListOf",
    "String",
    "Stringable",
    "convert_to_num",
    "kind_of",
]
