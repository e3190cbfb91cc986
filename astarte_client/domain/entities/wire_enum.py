"""Base class for the closed string enumerations used on the Astarte wire."""

from enum import Enum
from typing import Any, Type, TypeVar

E = TypeVar("E", bound="WireEnum")


class WireEnum(str, Enum):
    """A string enumeration that knows how to validate and decode wire values."""

    @classmethod
    def is_valid(cls, value: Any) -> bool:
        """Return whether value is a member or the wire string of a member."""
        if isinstance(value, cls):
            return True
        return isinstance(value, str) and value in cls._value2member_map_

    @classmethod
    def from_wire(cls: Type[E], value: Any) -> E:
        """
        Decode a wire string into a member.

        Raises:
            ValueError: If the value is not a valid wire string for this enum.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value in cls._value2member_map_:
            return cls(value)
        raise ValueError(f"'{value}' is not a valid {cls.__name__}")

    @classmethod
    def coerce(cls: Type[E], value: Any, default: E) -> E:
        """Decode value, falling back to default when it is absent or invalid."""
        if cls.is_valid(value):
            return cls.from_wire(value)
        return default

    def __str__(self) -> str:
        return self.value
