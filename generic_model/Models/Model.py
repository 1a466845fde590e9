from __future__ import annotations

from typing import Any, ClassVar, Dict, Iterable, List, Mapping, Optional, Sized, Type, TypeVar

from generic_model.Attributes.AttributeRegistry import attribute_registry
from generic_model.Contracts.Support import Arrayable
from generic_model.Exceptions import JsonEncodingException
from generic_model.Support.Arr import Arr
from generic_model.Support.Collection import Collection
from generic_model.Support.Json import Json
from generic_model.Traits.GuardsAttributes import GuardsAttributesMixin
from generic_model.Traits.HasAttributes import HasAttributesMixin
from generic_model.Traits.HidesAttributes import HidesAttributesMixin

T = TypeVar('T', bound='Model')


class Model(HasAttributesMixin, GuardsAttributesMixin, HidesAttributesMixin):
    """
    Laravel-style attribute model without persistence.

    Fields are declared through class variables::

        class User(Model):
            __fillable__ = ['name', 'email', 'options']
            __hidden__ = ['password']
            __casts__ = {'options': 'array', 'status': UserStatus}

    Public names that are not members of the class resolve to model fields,
    so ``user.name = 'Ada'`` goes through ``set_attribute`` and ``user.name``
    through ``get_attribute``. A field named like a model method (``make``,
    ``fill``, ``get``, ``append``, ...) is still written by assignment, but
    reading it by name gives the method; read such fields with
    ``user['make']`` or ``get_attribute('make')``. Names starting with an
    underscore are plain Python attributes.

    A model class used as a cast is itself a caster: the field holds the
    JSON of the nested model and reads back as a model instance.
    """

    __nullable__: ClassVar[bool] = False

    # Iterating a model is meaningless; keep ``__getitem__`` from implying it
    __iter__ = None  # type: ignore[assignment]

    def __init__(self, attributes: Optional[Mapping[str, Any]] = None) -> None:
        self._init_attributes()
        self._init_guards()
        self._init_visibility()

        self.fill(dict(attributes or {}))
        self.sync_original()

    @classmethod
    def make(cls: Type[T], attributes: Optional[Mapping[str, Any]] = None) -> T:
        """Create a new instance of the model."""
        return cls(attributes)

    def new_instance(self: T, attributes: Optional[Mapping[str, Any]] = None) -> T:
        """Create a new instance of the given model."""
        return type(self)(attributes)

    @classmethod
    def hydrate(cls: Type[T], items: Iterable[Mapping[str, Any]]) -> List[T]:
        """Create a list of models from plain mappings."""
        instance = cls()
        return [instance.new_instance(item) for item in items]

    def replicate(self: T, except_: Optional[List[str]] = None) -> T:
        """Clone the model into a new instance, leaving out the given attributes."""
        attributes = Arr.except_(self.get_attributes(), except_ or [])
        return self.new_instance().set_raw_attributes(attributes, sync=True)

    @classmethod
    def nullable(cls) -> bool:
        return cls.__nullable__

    def is_nullable(self) -> bool:
        """Determine if a nested value of this model may be stored as null."""
        return type(self).nullable()

    # Caster protocol, for models nested in a field of another model

    def get(self, model: Model, key: str, value: Any, attributes: Dict[str, Any]) -> Any:
        if self.is_nullable() and _is_empty(value):
            return None

        return self.new_instance(self._cast_raw_value(value))

    def set(self, model: Model, key: str, value: Any, attributes: Dict[str, Any]) -> Dict[str, Any]:
        if self.is_nullable() and _is_empty(value):
            return {key: None}

        current = self._cast_raw_value(attributes.get(key) or {})
        merged = {**current, **self._cast_raw_value(value)}

        return {key: self.new_instance(merged).to_json()}

    @staticmethod
    def _cast_raw_value(value: Any) -> Dict[str, Any]:
        """Normalize a stored or incoming nested value to a plain mapping."""
        if isinstance(value, (str, bytes, bytearray)) and Json.is_json(value):
            value = Json.decode(value)
        elif isinstance(value, Collection):
            value = value.values().to_array()
        elif isinstance(value, Arrayable):
            value = value.to_array()

        if not value:
            return {}
        if isinstance(value, Mapping):
            return dict(value)
        if isinstance(value, (list, tuple)):
            return {str(index): item for index, item in enumerate(value)}
        if hasattr(value, '__dict__'):
            return dict(vars(value))

        return {'0': value}

    # Views

    def to_array(self) -> Dict[str, Any]:
        """Convert the model instance to an array."""
        return self.attributes_to_array()

    def json_serialize(self) -> Dict[str, Any]:
        """Convert the object into something JSON serializable."""
        data = self._project_attributes(for_json=True)
        excluded = set(self.get_appends()) | set(self.get_temporary())

        return {key: value for key, value in data.items() if key not in excluded}

    def to_json(self, indent: Optional[int] = None) -> str:
        """Convert the model instance to JSON."""
        try:
            return Json.encode(self.json_serialize(), indent=indent)
        except (TypeError, ValueError) as e:
            raise JsonEncodingException.for_model(self, str(e)) from e

    # Dynamic access

    def __getattribute__(self, key: str) -> Any:
        # Accessor object factories are shadowed by the value they resolve
        if key[:1] != '_' and attribute_registry.has_attribute_mutator(type(self), key):
            return object.__getattribute__(self, 'get_attribute')(key)

        return object.__getattribute__(self, key)

    def __getattr__(self, key: str) -> Any:
        if key.startswith('_'):
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{key}'")

        return self.get_attribute(key)

    def __setattr__(self, key: str, value: Any) -> None:
        if key.startswith('_'):
            object.__setattr__(self, key, value)
        else:
            self.set_attribute(key, value)

    def __delattr__(self, key: str) -> None:
        if key.startswith('_'):
            object.__delattr__(self, key)
        else:
            self._forget_attribute(key)

    def __getitem__(self, key: str) -> Any:
        return self.get_attribute(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set_attribute(key, value)

    def __delitem__(self, key: str) -> None:
        self._forget_attribute(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False

        if self._attributes.get(key) is not None:
            return True

        if self.has_get_mutator(key) or self.has_attribute_get_mutator(key):
            return self.get_attribute(key) is not None

        return False

    def _forget_attribute(self, key: str) -> None:
        self._attributes.pop(key, None)
        self._class_cast_cache.pop(key, None)
        self._attribute_cast_cache.pop(key, None)

    def __str__(self) -> str:
        return self.to_json()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._attributes!r})"


def _is_empty(value: Any) -> bool:
    """Null, empty text and empty containers all count as no nested model."""
    if value is None:
        return True

    return isinstance(value, Sized) and len(value) == 0
