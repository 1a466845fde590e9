from __future__ import annotations

import json
from typing import Any, Callable, Dict, Optional, TYPE_CHECKING

from generic_model.Exceptions import JsonEncodingException
from generic_model.Support.Json import Json

if TYPE_CHECKING:
    from generic_model.Models.Model import Model


class JsonCast:
    """
    Cast for JSON serialization and deserialization, with an empty structure to fall back on.

    ``JsonCast('object')`` reads a missing or unreadable value as ``{}`` and
    ``JsonCast('array')`` as ``[]``, so the field can be changed in place and
    is written back. Text that already holds JSON is stored as given instead
    of being encoded a second time.
    """

    EMPTY: Dict[str, Callable[[], Any]] = {'object': dict, 'array': list}

    def __init__(self, empty: Optional[str] = None) -> None:
        if empty is not None and empty not in self.EMPTY:
            raise ValueError(f"Unsupported empty JSON structure [{empty}], expected 'object' or 'array'")

        self.empty = empty

    def get(self, model: 'Model', key: str, value: Any, attributes: Dict[str, Any]) -> Any:
        """Transform JSON string to Python object."""
        if isinstance(value, (str, bytes, bytearray)):
            try:
                value = Json.decode(value)
            except json.JSONDecodeError:
                value = None

        if value is None and self.empty is not None:
            return self.EMPTY[self.empty]()

        return value

    def set(self, model: 'Model', key: str, value: Any, attributes: Dict[str, Any]) -> Optional[str]:
        """Transform Python object to JSON string."""
        if value is None:
            return None

        if isinstance(value, str) and Json.is_json(value):
            return value

        try:
            return Json.encode(value)
        except (TypeError, ValueError) as e:
            raise JsonEncodingException.for_attribute(model, key, str(e)) from e
