from __future__ import annotations

import json
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from types import SimpleNamespace
from typing import Any, Dict, Optional

from generic_model.Contracts.Support import Arrayable, JsonSerializable


class Json:
    """JSON text codec used for storage and serialization."""

    SEPARATORS = (',', ':')

    @staticmethod
    def encode(value: Any, indent: Optional[int] = None) -> str:
        """
        Encode a value as JSON text.

        Output is compact unless an indent is given. NaN and infinities are
        rejected, as are objects with no JSON representation.
        """
        return json.dumps(
            value,
            separators=Json.SEPARATORS if indent is None else None,
            indent=indent,
            allow_nan=False,
            default=Json._default
        )

    @staticmethod
    def decode(value: Any, as_object: bool = False) -> Any:
        """Decode JSON text into dicts/lists, or into SimpleNamespace objects."""
        if as_object:
            return json.loads(value, object_hook=Json._to_object)
        return json.loads(value)

    @staticmethod
    def is_json(value: Any) -> bool:
        """Determine if a given value is a JSON document."""
        if not isinstance(value, (str, bytes)):
            return False
        try:
            json.loads(value)
            return True
        except ValueError:
            return False

    @staticmethod
    def _to_object(data: Dict[str, Any]) -> SimpleNamespace:
        return SimpleNamespace(**data)

    @staticmethod
    def _default(value: Any) -> Any:
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, JsonSerializable):
            return value.json_serialize()
        if isinstance(value, Arrayable):
            return value.to_array()
        if isinstance(value, (datetime, date, time)):
            return value.isoformat()
        if isinstance(value, Decimal):
            return str(value)
        if isinstance(value, SimpleNamespace):
            return vars(value)
        if isinstance(value, (set, frozenset, tuple)):
            return list(value)
        raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
