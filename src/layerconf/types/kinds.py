"""Conversion kinds between stored strings and Python values.

Every configuration value is a string. A Kind names how that string is
read and written; the set of kinds is closed and dispatch is explicit:

- String: the text itself
- Integer: fixed-width signed or unsigned integers in any base
- Float: 32 or 64 bit floating point numbers
- Boolean: ``true``/``false`` or an integer
- Custom: caller-supplied conversion functions, or a Stringable
- ListOf: a comma separated list whose elements use another kind
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Final, Generic, Optional, TypeVar

from layerconf.codec import lists
from layerconf.errors import ConversionError
from layerconf.types.stringable import Stringable
from layerconf.utils.numeric import (
    format_integer,
    numeric_locale,
    parse_float,
    parse_integer,
)

logger: Final = logging.getLogger(__name__)

T = TypeVar("T")

# Largest finite single precision value
FLT_MAX: Final = 3.4028234663852886e38


class Kind(ABC, Generic[T]):
    """A conversion variant between stored text and a Python value."""

    @property
    def name(self) -> str:
        """Human-readable name used in error messages."""
        return type(self).__name__.lower()

    @property
    @abstractmethod
    def default(self) -> T:
        """Value returned for a missing key when the caller gives no default."""
        ...

    @abstractmethod
    def parse(self, raw: str, base: int = 10) -> T:
        """Convert stored text to a value.

        Args:
            raw: Stored text
            base: Numeric base for integer kinds

        Returns:
            The converted value

        Raises:
            ConversionError: If the text is not a valid value of this kind
        """
        ...

    @abstractmethod
    def format(self, value: T, base: int = 10, show_base: bool = False) -> str:
        """Convert a value to the text that is stored.

        Args:
            value: Value to store
            base: Numeric base for integer kinds
            show_base: Prefix non-decimal integers with their base marker

        Returns:
            The text to store

        Raises:
            TypeError: If the value does not belong to this kind
        """
        ...


def _type_error(kind: Kind[Any], value: object) -> TypeError:
    return TypeError(f"cannot store {type(value).__name__} as {kind.name}")


@dataclass(frozen=True)
class String(Kind[str]):
    """Text stored as is."""

    @property
    def default(self) -> str:
        return ""

    def parse(self, raw: str, base: int = 10) -> str:
        return raw

    def format(self, value: str, base: int = 10, show_base: bool = False) -> str:
        if not isinstance(value, str):
            raise _type_error(self, value)
        return value


@dataclass(frozen=True)
class Integer(Kind[int]):
    """Integer restricted to a machine width.

    Text that parses to a number outside ``[minimum, maximum]`` is a
    conversion error rather than a silently wrapped value.
    """

    bits: int = 64
    signed: bool = True

    def __post_init__(self) -> None:
        if self.bits not in (8, 16, 32, 64):
            raise ValueError(f"unsupported integer width: {self.bits}")

    @property
    def name(self) -> str:
        return f"{'int' if self.signed else 'uint'}{self.bits}"

    @property
    def default(self) -> int:
        return 0

    @property
    def minimum(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def maximum(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    def parse(self, raw: str, base: int = 10) -> int:
        with numeric_locale():
            try:
                value = parse_integer(raw, base)
            except ValueError as exc:
                raise ConversionError(raw, self.name, exc) from exc

        if not self.minimum <= value <= self.maximum:
            raise ConversionError(
                raw, self.name, OverflowError(f"{value} is out of range for {self.name}")
            )
        return value

    def format(self, value: int, base: int = 10, show_base: bool = False) -> str:
        """Write ``value`` in ``base``.

        Non-decimal output carries no ``0x``/``0o``/``0b`` prefix unless
        ``show_base`` is set, so ``format(255, 16)`` stores ``ff`` where a
        ``std::showbase`` writer would store ``0xff``. Both read back with
        the same base.
        """
        if not isinstance(value, int):
            raise _type_error(self, value)
        with numeric_locale():
            return format_integer(int(value), base, show_base)


@dataclass(frozen=True)
class Float(Kind[float]):
    """Floating point number with a dot decimal separator."""

    bits: int = 64

    def __post_init__(self) -> None:
        if self.bits not in (32, 64):
            raise ValueError(f"unsupported float width: {self.bits}")

    @property
    def name(self) -> str:
        return f"float{self.bits}"

    @property
    def default(self) -> float:
        return 0.0

    def parse(self, raw: str, base: int = 10) -> float:
        with numeric_locale():
            try:
                value = parse_float(raw)
            except ValueError as exc:
                raise ConversionError(raw, self.name, exc) from exc

        # Python saturates to inf where strtod reports a range error
        overflow = math.isinf(value) and "inf" not in raw.lower()
        if self.bits == 32 and math.isfinite(value) and abs(value) > FLT_MAX:
            overflow = True
        if overflow:
            raise ConversionError(raw, self.name, OverflowError(f"{raw!r} is out of range"))
        return value

    def format(self, value: float, base: int = 10, show_base: bool = False) -> str:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise _type_error(self, value)
        with numeric_locale():
            return repr(float(value))


@dataclass(frozen=True)
class Boolean(Kind[bool]):
    """``true``/``false`` flag.

    Reading never fails: ``true`` and ``false`` are taken literally, an
    integer is true when non-zero and anything else reads as False.
    """

    @property
    def default(self) -> bool:
        return False

    def parse(self, raw: str, base: int = 10) -> bool:
        words = raw.split()
        token = words[0] if words else ""
        if token == "true":
            return True
        if token == "false":
            return False
        try:
            with numeric_locale():
                return parse_integer(token, base) != 0
        except ValueError:
            return False

    def format(self, value: bool, base: int = 10, show_base: bool = False) -> str:
        if not isinstance(value, int):
            raise _type_error(self, value)
        return "true" if value else "false"


@dataclass(frozen=True)
class Custom(Kind[Any]):
    """Conversion through caller-supplied functions.

    Without a parser the stored text is returned unchanged. Without a
    formatter the value must be a Stringable.
    """

    parser: Optional[Callable[[str], Any]] = None
    formatter: Optional[Callable[[Any], str]] = None
    label: str = "custom"

    @classmethod
    def of(cls, stringable: type[Stringable]) -> Custom:
        """Build the kind that reads and writes a Stringable subclass."""
        return cls(parser=stringable.from_string, label=stringable.__name__)

    @property
    def name(self) -> str:
        return self.label

    @property
    def default(self) -> Any:
        return None

    def parse(self, raw: str, base: int = 10) -> Any:
        if self.parser is None:
            return raw
        try:
            return self.parser(raw)
        except ValueError as exc:
            raise ConversionError(raw, self.name, exc) from exc

    def format(self, value: Any, base: int = 10, show_base: bool = False) -> str:
        if self.formatter is not None:
            return self.formatter(value)
        if isinstance(value, Stringable):
            return value.to_string()
        raise _type_error(self, value)


@dataclass(frozen=True)
class ListOf(Kind[list[Any]]):
    """List of values of one kind, stored with the list encoding.

    Elements that fail to convert are dropped when reading.
    """

    item: Kind[Any] = field(default_factory=String)

    @property
    def name(self) -> str:
        return f"list[{self.item.name}]"

    @property
    def default(self) -> list[Any]:
        return []

    def parse(self, raw: str, base: int = 10) -> list[Any]:
        return self.parse_items(raw, base)

    def parse_items(self, raw: str, base: int = 10, strict: bool = False) -> list[Any]:
        """Decode the list and convert each element.

        Args:
            raw: Stored text
            base: Numeric base for integer elements
            strict: Raise on the first element that fails to convert
                instead of dropping it

        Returns:
            The converted elements

        Raises:
            ConversionError: In strict mode, for an invalid element
        """
        values: list[Any] = []
        for element in lists.decode(raw):
            try:
                values.append(self.item.parse(element, base))
            except ConversionError:
                if strict:
                    raise
                logger.debug("Dropping list element %r: not a valid %s", element, self.item.name)
        return values

    def format(self, value: Iterable[Any], base: int = 10, show_base: bool = False) -> str:
        if isinstance(value, str):
            raise _type_error(self, value)
        return lists.encode(self.item.format(v, base, show_base) for v in value)


STRING: Final = String()
BOOLEAN: Final = Boolean()
INT8: Final = Integer(8)
INT16: Final = Integer(16)
INT32: Final = Integer(32)
INT64: Final = Integer(64)
UINT8: Final = Integer(8, signed=False)
UINT16: Final = Integer(16, signed=False)
UINT32: Final = Integer(32, signed=False)
UINT64: Final = Integer(64, signed=False)
INTEGER: Final = INT64
FLOAT: Final = Float(64)
FLOAT32: Final = Float(32)
STRINGABLE: Final = Custom(label="stringable")


def kind_of(value: object) -> Kind[Any]:
    """Pick the kind used to store ``value`` when the caller names none.

    Args:
        value: Value about to be stored, or a default about to be returned

    Returns:
        The matching kind

    Raises:
        TypeError: If the value's type has no kind
    """
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return BOOLEAN
    if isinstance(value, int):
        return INTEGER
    if isinstance(value, float):
        return FLOAT
    if isinstance(value, str):
        return STRING
    if isinstance(value, Stringable):
        return Custom.of(type(value))
    if isinstance(value, (list, tuple)):
        return ListOf(kind_of(value[0]) if value else STRING)
    raise TypeError(f"no configuration kind for {type(value).__name__}")


def convert_to_num(
    text: str, default: Any, kind: Kind[Any] = INTEGER, base: int = 10
) -> tuple[Any, bool]:
    """Convert text to a number, reporting failure instead of raising.

    Args:
        text: Text to convert
        default: Value returned when the conversion fails
        kind: An Integer, Float or Boolean kind
        base: Numeric base for integers

    Returns:
        Tuple of (value, failed). Boolean conversions never fail.

    Raises:
        TypeError: If ``kind`` is not numeric
    """
    if not isinstance(kind, (Integer, Float, Boolean)):
        raise TypeError(f"{kind.name} is not a numeric kind")
    try:
        return kind.parse(text, base), False
    except ConversionError:
        return default, True
