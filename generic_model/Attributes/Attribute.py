from __future__ import annotations

import inspect
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

AttributeCallback = Callable[..., Any]

# Values of these types are never cached by object caching
_NON_OBJECT_TYPES = (bool, int, float, complex, Decimal, str, bytes, bytearray, list, tuple, dict)


def is_object_value(value: Any) -> bool:
    """Determine if a resolved value counts as an object for caching purposes."""
    return value is not None and not isinstance(value, _NON_OBJECT_TYPES)


class Attribute:
    """
    Laravel 9+ style Attribute class for defining accessors and mutators.

    A model exposes one by declaring a method named like the field whose
    return annotation is ``Attribute``:

        def full_name(self) -> Attribute:
            return Attribute.make(
                get=lambda value, attributes: f"{attributes['first']} {attributes['last']}",
                set=lambda value: dict(zip(('first', 'last'), value.split(' ', 1)))
            )

    Callbacks receive ``(value)`` or ``(value, attributes)``. A ``set``
    callback may return a single value (stored under the field) or a
    mapping of raw attributes to merge.
    """

    def __init__(
        self,
        get: Optional[AttributeCallback] = None,
        set: Optional[AttributeCallback] = None
    ) -> None:
        self.get = get
        self.set = set
        self.with_caching = False
        self.with_object_caching = True
        self._arity: Dict[str, bool] = {}

    @classmethod
    def make(
        cls,
        get: Optional[AttributeCallback] = None,
        set: Optional[AttributeCallback] = None
    ) -> 'Attribute':
        """Laravel-style factory method for creating Attribute instances."""
        return cls(get=get, set=set)

    @classmethod
    def getter(cls, get: AttributeCallback) -> 'Attribute':
        """Create an accessor-only attribute."""
        return cls(get=get)

    @classmethod
    def setter(cls, set: AttributeCallback) -> 'Attribute':
        """Create a mutator-only attribute."""
        return cls(set=set)

    def without_object_caching(self) -> 'Attribute':
        """Disable object caching for the attribute."""
        self.with_object_caching = False
        return self

    def should_cache(self) -> 'Attribute':
        """Enable caching for the attribute."""
        self.with_caching = True
        return self

    def should_cache_value(self, value: Any) -> bool:
        """Determine if a resolved value should be kept in the cast cache."""
        return self.with_caching or (self.with_object_caching and is_object_value(value))

    def get_value(self, value: Any, attributes: Dict[str, Any]) -> Any:
        """Run the accessor callback, or return the value when there is none."""
        if self.get is None:
            return value
        return self._call('get', self.get, value, attributes)

    def set_value(self, value: Any, attributes: Dict[str, Any]) -> Any:
        """Run the mutator callback, or return the value when there is none."""
        if self.set is None:
            return value
        return self._call('set', self.set, value, attributes)

    def _call(self, kind: str, callback: AttributeCallback, value: Any, attributes: Dict[str, Any]) -> Any:
        if kind not in self._arity:
            self._arity[kind] = self._accepts_attributes_parameter(callback)

        if self._arity[kind]:
            return callback(value, attributes)
        return callback(value)

    @staticmethod
    def _accepts_attributes_parameter(func: AttributeCallback) -> bool:
        """
        Check if the function accepts the attributes parameter.

        Functions with a ``*args`` parameter or at least two positional
        parameters receive the raw attributes as their second argument.
        """
        try:
            signature = inspect.signature(func)
        except (TypeError, ValueError):
            return False

        positional = 0
        for param in signature.parameters.values():
            if param.kind == inspect.Parameter.VAR_POSITIONAL:
                return True
            if param.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
                positional += 1

        return positional >= 2
