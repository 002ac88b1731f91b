"""A named group of configuration tokens with typed accessors."""

from __future__ import annotations

import logging
from collections.abc import Iterator, MutableMapping, Sequence
from typing import Any, Final, Optional

from layerconf.errors import ConversionError, FrozenSectionError
from layerconf.types.kinds import STRING, Kind, ListOf, kind_of

logger: Final = logging.getLogger(__name__)

# A stored key or value must fit on one line of the text format
LINE_BREAKS: Final = frozenset("\n\r")


class Section(MutableMapping[str, str]):
    """Ordered mapping of key to stored string, plus typed get/set.

    Keys iterate in ascending order. Values are always strings; the typed
    accessors convert through a Kind. A failed conversion on read returns
    the caller's default unless ``strict`` is requested.

    Examples:
        section = Section("server")
        section.set("port", 8080)
        section.get("port", 0)          # 8080
        section.get("missing", 5)       # 5
        section.set_list("hosts", ["a", "b,c"])
        section.get_list("hosts")       # ["a", "b,c"]
    """

    def __init__(self, name: str, *, frozen: bool = False) -> None:
        """Create an empty section.

        Args:
            name: Section name, fixed for the lifetime of the section
            frozen: Reject every modification
        """
        self._name = name
        self._frozen = frozen
        self._store: dict[str, str] = {}

    @property
    def name(self) -> str:
        return self._name

    @property
    def frozen(self) -> bool:
        return self._frozen

    def copy(self) -> Section:
        """Return a writable copy holding the same tokens."""
        other = Section(self._name)
        other._store = dict(self._store)
        return other

    def _check_writable(self) -> None:
        if self._frozen:
            raise FrozenSectionError(f"section {self._name!r} is read-only")

    # ---- mapping protocol ----
    def __getitem__(self, key: str) -> str:
        return self._store[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._check_writable()
        if not isinstance(value, str):
            raise TypeError(f"section values are strings, got {type(value).__name__}")
        if any(ch in LINE_BREAKS for ch in value):
            raise ValueError(f"value of {key!r} spans several lines: {value!r}")
        if key.startswith("[") or any(ch in LINE_BREAKS or ch == "=" for ch in key):
            raise ValueError(f"invalid key {key!r}")
        self._store[key] = value

    def __delitem__(self, key: str) -> None:
        self._check_writable()
        del self._store[key]

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._store))

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def __repr__(self) -> str:
        return f"Section({self._name!r}, {dict(self.items())!r})"

    # ---- typed access ----
    def get(  # type: ignore[override]
        self,
        key: str,
        default: Any = None,
        kind: Optional[Kind[Any]] = None,
        base: int = 10,
        strict: bool = False,
    ) -> Any:
        """Return the token converted to ``kind``.

        Args:
            key: Token to read
            default: Returned when the token is missing or does not convert;
                when None the kind's own default is used
            kind: Conversion to apply (default: the kind of ``default``,
                or STRING)
            base: Numeric base for integer kinds
            strict: Raise ConversionError instead of returning the default

        Returns:
            The converted value, or the default
        """
        if kind is None:
            kind = STRING if default is None else kind_of(default)
        fallback = kind.default if default is None else default

        raw = self._store.get(key)
        if raw is None:
            return fallback

        try:
            if isinstance(kind, ListOf):
                return kind.parse_items(raw, base, strict)
            return kind.parse(raw, base)
        except ConversionError as exc:
            if strict:
                raise
            logger.debug("[%s] %s: %s, using default", self._name, key, exc)
            return fallback

    def get_list(
        self,
        key: str,
        kind: Kind[Any] = STRING,
        base: int = 10,
        strict: bool = False,
    ) -> list[Any]:
        """Return a list token with each element converted to ``kind``.

        Elements that do not convert are dropped. A missing token reads as
        an empty list.
        """
        raw = self._store.get(key)
        if raw is None:
            return []
        return ListOf(kind).parse_items(raw, base, strict)

    def set(
        self,
        key: str,
        value: Any,
        kind: Optional[Kind[Any]] = None,
        base: int = 10,
        show_base: bool = False,
    ) -> str:
        """Store ``value`` under ``key``.

        Args:
            key: Token to create or replace
            value: Value to store
            kind: Conversion to apply (default: picked from the value's type)
            base: Numeric base for integers
            show_base: Prefix non-decimal integers with ``0x``/``0o``/``0b``

        Returns:
            The stored string
        """
        if kind is None:
            kind = kind_of(value)
        text = kind.format(value, base, show_base)
        self[key] = text
        return text

    def set_list(
        self,
        key: str,
        values: Sequence[Any],
        kind: Optional[Kind[Any]] = None,
        base: int = 10,
        show_base: bool = False,
    ) -> str:
        """Store ``values`` as one list token and return the stored string."""
        if kind is None:
            kind = kind_of(values[0]) if values else STRING
        text = ListOf(kind).format(values, base, show_base)
        self[key] = text
        return text

    def remove(self, key: str) -> bool:
        """Remove a token.

        Returns:
            True if the token existed
        """
        self._check_writable()
        if key not in self._store:
            return False
        del self._store[key]
        return True
