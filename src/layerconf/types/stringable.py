"""Capability interface for values stored through their own text form."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TypeVar

S = TypeVar("S", bound="Stringable")


class Stringable(ABC):
    """Values that can be written to a configuration token.

    Types opt in by subclassing and implementing :meth:`to_string`. To be
    read back with ``Custom.of(cls)`` they also override :meth:`from_string`.
    """

    @abstractmethod
    def to_string(self) -> str:
        """Return the text stored for this value."""
        ...

    @classmethod
    def from_string(cls: type[S], text: str) -> S:
        """Rebuild a value from its stored text.

        Raises:
            ValueError: If the text does not describe a valid value
        """
        raise NotImplementedError(f"{cls.__name__} cannot be read from configuration")
