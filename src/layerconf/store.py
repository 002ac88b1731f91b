"""Two-tier configuration store.

A Configuration holds a *local* and a *global* tier, each an independent
mapping of section name to Section. Reads prefer the local tier; writes go
to the local tier unless the global one is requested.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable, Iterator, Sequence
from typing import Any, ClassVar, Final, Optional, TextIO

from layerconf.codec import text
from layerconf.codec.text import Tier
from layerconf.common.enums import Destination
from layerconf.errors import InvalidDestinationError
from layerconf.section import Section
from layerconf.types.kinds import STRING, Kind

logger: Final = logging.getLogger(__name__)


class Configuration:
    """Local and global configuration, read from and written to text streams.

    The store never keeps a stream: constructors read the streams they are
    given and ``serialize`` writes the current state out.

    Examples:
        with open("local.ini") as local, open("global.ini") as shared:
            config = Configuration(local, shared)

        config.get("guild", "prefix", "!")
        config.set("guild", "prefix", "?")
        config.set("guild", "prefix", "!", destination=Destination.GLOBAL)
    """

    # Returned by ``at`` for sections missing from both tiers
    NO_CONF: ClassVar[Section] = Section("", frozen=True)

    def __init__(
        self,
        local: Optional[Iterable[str]] = None,
        global_: Optional[Iterable[str]] = None,
        *,
        strict: bool = False,
    ) -> None:
        """Create a store, parsing the given streams.

        The global stream is parsed first. Keys found before the first
        section header of either stream land in ``no_section``.

        Args:
            local: Stream holding the local tier
            global_: Stream holding the global tier
            strict: Raise ParseError on malformed lines
        """
        self.no_section = Section("")
        self._global: Tier = {}
        self._local: Tier = {}
        if global_ is not None:
            self._global = text.parse(global_, self.no_section, strict)
        if local is not None:
            self._local = text.parse(local, self.no_section, strict)

    def _tier(self, destination: Destination | str) -> Tier:
        try:
            destination = Destination(destination)
        except ValueError as exc:
            raise InvalidDestinationError(destination) from exc
        return self._local if destination is Destination.LOCAL else self._global

    # ---- section access ----
    def __getitem__(self, name: str) -> Section:
        """Return the section, creating it in the local tier if needed."""
        found = self.find(name)
        if found is not None:
            return found
        logger.debug("Creating local section %r", name)
        section = self._local[name] = Section(name)
        return section

    def at(self, name: str) -> Section:
        """Return the section, or the read-only empty section if missing."""
        found = self.find(name)
        return found if found is not None else self.NO_CONF

    def find(self, name: str) -> Optional[Section]:
        """Return the local section, else the global one, else None."""
        found = self._local.get(name)
        if found is None:
            found = self._global.get(name)
        return found

    def emplace(self, name: str, destination: Destination | str = Destination.LOCAL) -> Section:
        """Return the section of the given tier, creating it if needed.

        Raises:
            InvalidDestinationError: If ``destination`` is not a tier
        """
        tier = self._tier(destination)
        section = tier.get(name)
        if section is None:
            section = tier[name] = Section(name)
        return section

    def names(self) -> list[str]:
        """Sorted names of the sections of both tiers, without duplicates."""
        return sorted(set(self._local) | set(self._global))

    def size(self) -> int:
        """Count of distinct section names across both tiers."""
        return len(self.names())

    def empty(self) -> bool:
        return not self._local and not self._global

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __contains__(self, name: object) -> bool:
        return name in self._local or name in self._global

    # ---- typed access ----
    def has(self, section: str, key: str) -> bool:
        """Whether the section found by :meth:`at` holds ``key``."""
        return key in self.at(section)

    def get(
        self,
        section: str,
        key: str,
        default: Any = None,
        kind: Optional[Kind[Any]] = None,
        base: int = 10,
        strict: bool = False,
    ) -> Any:
        """Read a token from the section found by :meth:`at`.

        The section is located first and the key is read from it only: a
        local section shadows the global section of the same name as a
        whole. See :meth:`Section.get` for the conversion rules.
        """
        return self.at(section).get(key, default, kind, base, strict)

    def get_list(
        self,
        section: str,
        key: str,
        kind: Kind[Any] = STRING,
        base: int = 10,
        strict: bool = False,
    ) -> list[Any]:
        """Read a list token from the section found by :meth:`at`."""
        return self.at(section).get_list(key, kind, base, strict)

    def set(
        self,
        section: str,
        key: str,
        value: Any,
        destination: Destination | str = Destination.LOCAL,
        kind: Optional[Kind[Any]] = None,
        base: int = 10,
        show_base: bool = False,
    ) -> str:
        """Write a token to the given tier and return the stored string."""
        return self.emplace(section, destination).set(key, value, kind, base, show_base)

    def set_list(
        self,
        section: str,
        key: str,
        values: Sequence[Any],
        destination: Destination | str = Destination.LOCAL,
        kind: Optional[Kind[Any]] = None,
        base: int = 10,
        show_base: bool = False,
    ) -> str:
        """Write a list token to the given tier and return the stored string."""
        return self.emplace(section, destination).set_list(key, values, kind, base, show_base)

    def remove(
        self, section: str, key: str, destination: Destination | str = Destination.LOCAL
    ) -> bool:
        """Remove a token from the given tier.

        Returns:
            True if the token existed there
        """
        found = self._tier(destination).get(section)
        return found.remove(key) if found is not None else False

    # ---- serialization ----
    def serialize(self, local_stream: TextIO, global_stream: Optional[TextIO] = None) -> None:
        """Write the local tier, and the global tier first when a stream is given."""
        if global_stream is not None:
            text.write(self._global, global_stream)
        text.write(self._local, local_stream)

    def dump(self, stream: TextIO) -> None:
        """Write the merged view: every section as resolved by :meth:`at`.

        Unlike :meth:`serialize`, headers are always written and empty
        values are kept.
        """
        for name in self.names():
            stream.write(f"[{name}]\n")
            for key, value in self.at(name).items():
                stream.write(f"{key} = {value}\n")
            stream.write("\n")

    def __str__(self) -> str:
        buffer = io.StringIO()
        self.dump(buffer)
        return buffer.getvalue()
