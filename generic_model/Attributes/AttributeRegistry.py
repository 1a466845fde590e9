from __future__ import annotations

import inspect
import re
import threading
import typing
from typing import Any, Callable, Dict, List, Optional, Tuple, TYPE_CHECKING

from generic_model.Attributes.Attribute import Attribute
from generic_model.Casts.CastSpec import CastSpec
from generic_model.Utils.Logger import get_logger

if TYPE_CHECKING:
    from generic_model.Models.Model import Model

logger = get_logger(__name__)

GET_MUTATOR_PATTERN = re.compile(r'^get_(.+)_attribute$')


class AttributeRegistry:
    """
    Process-wide reflection caches shared by every model class.

    Holds the mutated attribute names per class, whether a member is an
    accessor object factory per (class, field), and the parsed cast
    declarations. Lookups read the caches without locking; population
    happens under a lock and each entry is computed at most once.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._mutated_attributes: Dict[type, List[str]] = {}
        self._attribute_mutators: Dict[Tuple[type, str], bool] = {}
        self._attribute_get_mutators: Dict[Tuple[type, str], bool] = {}
        self._attribute_set_mutators: Dict[Tuple[type, str], bool] = {}
        self._cast_specs: Dict[Any, CastSpec] = {}
        self._casters: Dict[Any, Any] = {}

    def has_attribute_mutator(self, cls: type, key: str) -> bool:
        """Determine if the class declares an accessor object factory named like the field."""
        cache_key = (cls, key)
        cached = self._attribute_mutators.get(cache_key)
        if cached is not None:
            return cached

        with self._lock:
            if cache_key not in self._attribute_mutators:
                self._attribute_mutators[cache_key] = _returns_attribute(cls, key)
            return self._attribute_mutators[cache_key]

    def has_attribute_get_mutator(self, model: 'Model', key: str) -> bool:
        """Determine if the field's accessor object defines a getter."""
        return self._resolve_accessor_flag(self._attribute_get_mutators, model, key, lambda attribute: attribute.get)

    def has_attribute_set_mutator(self, model: 'Model', key: str) -> bool:
        """Determine if the field's accessor object defines a setter."""
        return self._resolve_accessor_flag(self._attribute_set_mutators, model, key, lambda attribute: attribute.set)

    def _resolve_accessor_flag(
        self,
        cache: Dict[Tuple[type, str], bool],
        model: 'Model',
        key: str,
        callback: Callable[[Attribute], Any]
    ) -> bool:
        cls = type(model)
        cache_key = (cls, key)
        cached = cache.get(cache_key)
        if cached is not None:
            return cached

        with self._lock:
            if cache_key not in cache:
                if not self.has_attribute_mutator(cls, key):
                    cache[cache_key] = False
                else:
                    cache[cache_key] = callable(callback(model.attribute_accessor(key)))
            return cache[cache_key]

    def mutated_attributes(self, cls: type) -> List[str]:
        """Get the fields with a convention getter or a gettable accessor object."""
        cached = self._mutated_attributes.get(cls)
        if cached is not None:
            return cached

        with self._lock:
            if cls not in self._mutated_attributes:
                self._mutated_attributes[cls] = self._cache_mutated_attributes(cls)
            return self._mutated_attributes[cls]

    def _cache_mutated_attributes(self, cls: type) -> List[str]:
        mutated: List[str] = []

        for name in dir(cls):
            match = GET_MUTATOR_PATTERN.match(name)
            if match and callable(getattr(cls, name, None)):
                mutated.append(match.group(1))
            elif not name.startswith('_') and self.has_attribute_mutator(cls, name):
                mutated.append(name)

        logger.debug("Cached mutated attributes", {'class': cls.__qualname__, 'count': len(mutated)})
        return mutated

    def cast_spec(self, declaration: Any) -> CastSpec:
        """Get the parsed form of a cast declaration."""
        cache_key = _declaration_key(declaration)
        cached = self._cast_specs.get(cache_key)
        if cached is not None:
            return cached

        with self._lock:
            if cache_key not in self._cast_specs:
                self._cast_specs[cache_key] = CastSpec.parse(declaration)
            return self._cast_specs[cache_key]

    def caster(self, spec: CastSpec, factory: Callable[[CastSpec], Any]) -> Any:
        """Get the caster built for a declaration, building it once."""
        cache_key = _declaration_key(spec.declaration)
        if cache_key in self._casters:
            return self._casters[cache_key]

        with self._lock:
            if cache_key not in self._casters:
                self._casters[cache_key] = factory(spec)
                logger.debug("Resolved caster", {'cast': spec.type})
            return self._casters[cache_key]

    def flush(self) -> None:
        """Forget everything cached so far."""
        with self._lock:
            self._mutated_attributes.clear()
            self._attribute_mutators.clear()
            self._attribute_get_mutators.clear()
            self._attribute_set_mutators.clear()
            self._cast_specs.clear()
            self._casters.clear()


def _declaration_key(declaration: Any) -> Any:
    # Caster instances are keyed by identity, everything else by value
    if isinstance(declaration, (str, type)):
        return declaration
    return ('instance', id(declaration))


def accessor_function(cls: type, key: str) -> Optional[Callable[..., Any]]:
    """Get the function behind a method or property named like the field."""
    member = inspect.getattr_static(cls, key, None)

    if isinstance(member, property):
        return member.fget
    if inspect.isfunction(member):
        return member
    return None


def _takes_no_arguments(func: Callable[..., Any]) -> bool:
    try:
        parameters = inspect.signature(func).parameters
    except (TypeError, ValueError):
        return False

    # Only the bound instance
    return len(parameters) == 1


def _returns_attribute(cls: type, key: str) -> bool:
    func = accessor_function(cls, key)
    if func is None or not _takes_no_arguments(func):
        return False

    try:
        return_type = typing.get_type_hints(func).get('return')
    except (NameError, TypeError, AttributeError):
        return_type = getattr(func, '__annotations__', {}).get('return')

    if isinstance(return_type, str):
        return return_type.rpartition('.')[2] == 'Attribute'

    return return_type is Attribute


# Global registry
attribute_registry = AttributeRegistry()
