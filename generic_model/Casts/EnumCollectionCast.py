from __future__ import annotations

import json
from enum import Enum
from typing import Any, Dict, List, TYPE_CHECKING, Type

from generic_model.Casts.CastSpec import import_string
from generic_model.Support.Json import Json

if TYPE_CHECKING:
    from generic_model.Models.Model import Model


class EnumCollectionCast:
    """
    Cast for collections/arrays of enum values.

    Stored as a JSON list of backing values. Values that match no member
    are skipped on read and kept verbatim on write.
    """

    def __init__(self, enum_class: Any) -> None:
        if isinstance(enum_class, str):
            enum_class = import_string(enum_class)

        if not (isinstance(enum_class, type) and issubclass(enum_class, Enum)):
            raise TypeError(f"[{enum_class!r}] is not an enum class")

        self.enum_class: Type[Enum] = enum_class

    def get(self, model: 'Model', key: str, value: Any, attributes: Dict[str, Any]) -> List[Enum]:
        """Convert the stored value to a list of enum instances."""
        if value is None:
            return []

        if isinstance(value, str):
            try:
                value = Json.decode(value)
            except json.JSONDecodeError:
                return []

        if not isinstance(value, list):
            return []

        enums: List[Enum] = []
        for item in value:
            try:
                enums.append(item if isinstance(item, self.enum_class) else self.enum_class(item))
            except ValueError:
                # Skip invalid values
                continue

        return enums

    def set(self, model: 'Model', key: str, value: Any, attributes: Dict[str, Any]) -> str:
        """Convert a list of enum instances to a JSON string."""
        if not isinstance(value, (list, tuple)):
            return '[]'

        enum_values: List[Any] = []
        for item in value:
            if isinstance(item, Enum):
                enum_values.append(item.value)
                continue

            try:
                enum_values.append(self.enum_class(item).value)
            except ValueError:
                # Include raw value if conversion fails
                enum_values.append(item)

        return Json.encode(enum_values)
