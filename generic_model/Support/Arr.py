from __future__ import annotations

import copy
from typing import Any, Dict, List, Union


class Arr:
    """Laravel-style array helper class with dot notation support."""

    @staticmethod
    def set(data: Dict[str, Any], key: str, value: Any) -> Dict[str, Any]:
        """Set an array item to a given value using dot notation."""
        keys = key.split('.')
        current = data

        for k in keys[:-1]:
            if k not in current or not isinstance(current[k], dict):
                current[k] = {}
            current = current[k]

        current[keys[-1]] = value
        return data

    @staticmethod
    def forget(data: Dict[str, Any], key: str) -> Dict[str, Any]:
        """Remove an array item using dot notation."""
        keys = key.split('.')
        current: Any = data

        for k in keys[:-1]:
            if not isinstance(current, dict) or k not in current:
                return data
            current = current[k]

        if isinstance(current, dict):
            current.pop(keys[-1], None)
        return data

    @staticmethod
    def except_(data: Dict[str, Any], keys: Union[str, List[str]]) -> Dict[str, Any]:
        """Get all of the given array except for a specified array of keys."""
        if isinstance(keys, str):
            keys = [keys]

        result = copy.deepcopy(data)
        for key in keys:
            Arr.forget(result, key)
        return result
