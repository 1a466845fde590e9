from __future__ import annotations

from enum import IntEnum, StrEnum
from typing import Any, Optional


class StringEnum(StrEnum):
    """
    String-backed enum similar to Laravel's string backed enums.
    """

    @classmethod
    def from_value(cls, value: Any) -> 'StringEnum':
        """Get the member backed by the given value, raising ValueError when none is."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Invalid value '{value}' for enum {cls.__name__}")
        return cls(value)

    @classmethod
    def try_from(cls, value: Any) -> Optional['StringEnum']:
        """Get the member backed by the given value, or None."""
        try:
            return cls.from_value(value)
        except ValueError:
            return None


class IntegerEnum(IntEnum):
    """
    Integer-backed enum similar to Laravel's integer backed enums.

    Numeric strings are accepted on lookup, since stored values often
    come back as text.
    """

    @classmethod
    def from_value(cls, value: Any) -> 'IntegerEnum':
        """Get the member backed by the given value, raising ValueError when none is."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value.strip().lstrip('-').isdigit():
            value = int(value)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Invalid value '{value}' for enum {cls.__name__}")
        return cls(value)

    @classmethod
    def try_from(cls, value: Any) -> Optional['IntegerEnum']:
        """Get the member backed by the given value, or None."""
        try:
            return cls.from_value(value)
        except ValueError:
            return None
