from __future__ import annotations

import copy
import json
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Union

from generic_model.Attributes.Attribute import Attribute
from generic_model.Attributes.AttributeRegistry import attribute_registry
from generic_model.Casts.CastsAttributes import CastsAttributes, CastsInboundAttributes
from generic_model.Casts.CastSpec import CastKind, CastSpec
from generic_model.Config import settings
from generic_model.Contracts.Support import Arrayable, JsonSerializable
from generic_model.Encryption.Encrypter import EncrypterContract, encryption_manager
from generic_model.Exceptions import (
    InvalidCastException,
    InvalidCasterException,
    JsonEncodingException
)
from generic_model.Support.Arr import Arr
from generic_model.Support.Collection import Collection
from generic_model.Support.Date import DateFactory
from generic_model.Support.Json import Json
from generic_model.Support.Str import Str

CUSTOM_DATE_CAST_TYPES = ('custom_datetime', 'immutable_custom_datetime')


class HasAttributesMixin:
    """
    Mixin class holding the raw attributes and casting them on the way in and out.

    Reads resolve in this order: a ``get_<key>_attribute`` method, an
    accessor object (a method named like the key returning ``Attribute``),
    a declared cast, then the ``dates`` list. Writes go through a
    ``set_<key>_attribute`` method, an accessor object setter, date
    formatting, enum and class casts, JSON encoding, ``->`` paths and
    encryption, in that order.
    """

    __casts__: ClassVar[Dict[str, Any]] = {}
    __dates__: ClassVar[List[str]] = []
    __date_format__: ClassVar[Optional[str]] = None

    _encrypter: ClassVar[Optional[EncrypterContract]] = None
    _date_factory: ClassVar[DateFactory] = DateFactory()

    _attributes: Dict[str, Any]
    _original: Dict[str, Any]
    _class_cast_cache: Dict[str, Any]
    _attribute_cast_cache: Dict[str, Any]
    _casts: Dict[str, Any]
    _dates: List[str]
    _date_format: str

    def _init_attributes(self) -> None:
        cls = type(self)
        self._attributes = {}
        self._original = {}
        self._class_cast_cache = {}
        self._attribute_cast_cache = {}
        self._casts = dict(cls.__casts__)
        self._dates = list(cls.__dates__)
        self._date_format = cls.__date_format__ or settings.DATE_FORMAT

    # Attribute store

    def get_raw(self, key: str) -> Any:
        """Get a raw attribute value without any transformation."""
        return self.get_attributes().get(key)

    def put_raw(self, key: str, value: Any) -> Any:
        """Overwrite a raw attribute value without any transformation."""
        self._attributes[key] = value
        self._class_cast_cache.pop(key, None)
        return self

    def get_attributes(self) -> Dict[str, Any]:
        """Get all of the current raw attributes, written back from cast values first."""
        self._merge_attributes_from_class_casts()
        return self._attributes

    def set_raw_attributes(self, attributes: Mapping[str, Any], sync: bool = False) -> Any:
        """Replace the raw attributes. No checking is done."""
        self._attributes = dict(attributes)
        self._class_cast_cache = {}
        self._attribute_cast_cache = {}

        if sync:
            self.sync_original()

        return self

    def add_attributes(self, attributes: Mapping[str, Any]) -> Any:
        """Merge raw attributes without casting."""
        for key, value in attributes.items():
            self.put_raw(key, value)
        return self

    def sync_original(self) -> Any:
        """Sync the original attributes with the current."""
        self._original = copy.deepcopy(self.get_attributes())
        return self

    def get_original(self, key: Optional[str] = None, default: Any = None) -> Any:
        """Get the original snapshot, or one value of it."""
        if key is None:
            return copy.deepcopy(self._original)
        return copy.deepcopy(self._original.get(key, default))

    def _merge_attributes_from_class_casts(self) -> None:
        if not self._class_cast_cache:
            return

        resolved: Dict[str, Any] = {}
        for key, value in self._class_cast_cache.items():
            caster = self._resolve_caster_class(key)
            resolved.update(self._normalize_cast_class_response(
                key, caster.set(self, key, value, dict(self._attributes))
            ))

        self._attributes.update(resolved)

    @staticmethod
    def _normalize_cast_class_response(key: str, value: Any) -> Dict[str, Any]:
        return dict(value) if isinstance(value, Mapping) else {key: value}

    # Reading

    def get_attribute(self, key: str) -> Any:
        """Get an attribute from the model, transformed for use."""
        if not key:
            return None

        return self._transform_model_value(key, self.get_attributes().get(key))

    def _transform_model_value(self, key: str, value: Any) -> Any:
        if self.has_get_mutator(key):
            return self._mutate_attribute(key, value)

        if self.has_attribute_get_mutator(key):
            return self._mutate_attribute_marked_attribute(key, value)

        if self.has_cast(key):
            return self._cast_attribute(key, value)

        if value is not None and key in self.get_dates():
            return self._as_date_time(value)

        return value

    def has_get_mutator(self, key: str) -> bool:
        """Determine if a get mutator exists for an attribute."""
        return callable(getattr(type(self), self._mutator_name('get', key), None))

    def has_set_mutator(self, key: str) -> bool:
        """Determine if a set mutator exists for an attribute."""
        return callable(getattr(type(self), self._mutator_name('set', key), None))

    def has_attribute_mutator(self, key: str) -> bool:
        """Determine if an ``Attribute`` returning accessor exists for an attribute."""
        return attribute_registry.has_attribute_mutator(type(self), key)

    def has_attribute_get_mutator(self, key: str) -> bool:
        return attribute_registry.has_attribute_get_mutator(self, key)

    def has_attribute_set_mutator(self, key: str) -> bool:
        return attribute_registry.has_attribute_set_mutator(self, key)

    def get_mutated_attributes(self) -> List[str]:
        """Get the mutated attributes for a given instance."""
        return attribute_registry.mutated_attributes(type(self))

    def attribute_accessor(self, key: str) -> Attribute:
        """Build the accessor object declared for an attribute."""
        factory = object.__getattribute__(self, key)
        return factory if isinstance(factory, Attribute) else factory()

    @staticmethod
    def _mutator_name(prefix: str, key: str) -> str:
        return f"{prefix}_{Str.snake(key)}_attribute"

    def _mutate_attribute(self, key: str, value: Any) -> Any:
        return getattr(self, self._mutator_name('get', key))(value)

    def _mutate_attribute_marked_attribute(self, key: str, value: Any) -> Any:
        if key in self._attribute_cast_cache:
            return self._attribute_cast_cache[key]

        attribute = self.attribute_accessor(key)
        value = attribute.get_value(value, dict(self._attributes))

        if attribute.should_cache_value(value):
            self._attribute_cast_cache[key] = value
        else:
            self._attribute_cast_cache.pop(key, None)

        return value

    # Cast metadata

    def get_casts(self) -> Dict[str, Any]:
        return self._casts

    def add_casts(self, casts: Mapping[str, Any]) -> Any:
        """Merge new casts with existing casts on the model."""
        self._casts.update(casts)
        return self

    def has_cast(self, key: str, types: Union[str, List[str], None] = None) -> bool:
        """Determine whether an attribute should be cast to a native type."""
        if key not in self._casts:
            return False

        if not types:
            return True

        if isinstance(types, str):
            types = [types]

        return self.get_cast_type(key) in types

    def get_cast_type(self, key: str) -> str:
        """Get the normalized type of cast for a model attribute."""
        return self._get_cast_spec(key).type

    def _get_cast_spec(self, key: str) -> CastSpec:
        return attribute_registry.cast_spec(self._casts[key])

    def is_class_castable(self, key: str) -> bool:
        """Determine if the given key is cast using a custom class."""
        return key in self._casts and self._get_cast_spec(key).is_class_castable

    def _is_enum_castable(self, key: str) -> bool:
        return key in self._casts and self._get_cast_spec(key).is_enum

    def _is_json_castable(self, key: str) -> bool:
        return key in self._casts and self._get_cast_spec(key).is_json

    def _is_encrypted_castable(self, key: str) -> bool:
        return key in self._casts and self._get_cast_spec(key).is_encrypted

    def _is_date_attribute(self, key: str) -> bool:
        if key in self.get_dates():
            return True

        if key not in self._casts:
            return False

        spec = self._get_cast_spec(key)
        return spec.is_date or spec.type in CUSTOM_DATE_CAST_TYPES

    def get_dates(self) -> List[str]:
        return self._dates

    def get_date_format(self) -> str:
        """Get the format for stored dates."""
        return self._date_format

    def set_date_format(self, date_format: str) -> Any:
        self._date_format = date_format
        return self

    @classmethod
    def get_date_factory(cls) -> DateFactory:
        return cls._date_factory

    @classmethod
    def use_date_factory(cls, factory: DateFactory) -> None:
        """Set the date capability used by this model class and its subclasses."""
        cls._date_factory = factory

    @classmethod
    def encrypt_using(cls, encrypter: Optional[EncrypterContract]) -> None:
        """Set the encrypter instance used to encrypt attributes."""
        HasAttributesMixin._encrypter = encrypter

    @classmethod
    def current_encrypter(cls) -> EncrypterContract:
        return HasAttributesMixin._encrypter or encryption_manager.driver()

    # Casting

    def _cast_attribute(self, key: str, value: Any) -> Any:
        spec = self._get_cast_spec(key)
        cast_type = spec.type

        if value is None and spec.is_primitive:
            return None

        if spec.is_encrypted and value:
            value = self._from_encrypted_string(value)
            cast_type = spec.inner_type

        if spec.is_primitive:
            return self._cast_primitive(key, cast_type, spec, value)

        if spec.is_enum:
            return self._get_enum_castable_attribute_value(key, spec, value)

        if spec.is_class_castable:
            return self._get_class_castable_attribute_value(key, value)

        return value

    def _cast_primitive(self, key: str, cast_type: str, spec: CastSpec, value: Any) -> Any:
        if cast_type in ('int', 'integer'):
            return self._as_integer(key, value)
        if cast_type in ('real', 'float', 'double'):
            return self._as_float(key, value)
        if cast_type == 'decimal':
            return self._as_decimal(key, value, spec.format)
        if cast_type == 'string':
            return value.decode('utf-8') if isinstance(value, bytes) else str(value)
        if cast_type in ('bool', 'boolean'):
            return self._as_boolean(value)
        if cast_type == 'object':
            return self.from_json(value, as_object=True) if isinstance(value, str) else value
        if cast_type in ('array', 'json'):
            return self.from_json(value) if isinstance(value, str) else value
        if cast_type == 'collection':
            return Collection(self.from_json(value) if isinstance(value, str) else value)
        if cast_type in ('date', 'immutable_date'):
            return self._as_date(value)
        if cast_type in ('datetime', 'custom_datetime', 'immutable_datetime', 'immutable_custom_datetime'):
            return self._as_date_time(value)
        if cast_type == 'timestamp':
            return self._as_timestamp(value)

        return value

    def _as_integer(self, key: str, value: Any) -> int:
        try:
            try:
                return int(value)
            except ValueError:
                # Numeric text such as "17.9"
                return int(float(value))
        except (TypeError, ValueError, OverflowError) as e:
            raise InvalidCastException(self, key, 'int', value) from e

    def _as_float(self, key: str, value: Any) -> float:
        try:
            return self.from_float(value)
        except (TypeError, ValueError) as e:
            raise InvalidCastException(self, key, 'float', value) from e

    def from_float(self, value: Any) -> float:
        """Decode the given float, including the textual IEEE special values."""
        text = str(value)
        if text == 'Infinity':
            return float('inf')
        if text == '-Infinity':
            return float('-inf')
        if text == 'NaN':
            return float('nan')
        return float(value)

    def _as_decimal(self, key: str, value: Any, precision: Optional[str]) -> str:
        """Return a decimal as string with exactly ``precision`` fraction digits."""
        if precision is None or not precision.isdigit():
            raise InvalidCastException(
                self, key, 'decimal', value, "Decimal casts need a precision, such as decimal:2."
            )

        try:
            number = value if isinstance(value, Decimal) else Decimal(str(value).strip())
            quantized = number.quantize(Decimal(1).scaleb(-int(precision)), rounding=ROUND_HALF_UP)
        except InvalidOperation as e:
            raise InvalidCastException(self, key, f"decimal:{precision}", value) from e

        return format(quantized, 'f')

    @staticmethod
    def _as_boolean(value: Any) -> bool:
        if isinstance(value, str):
            return value not in ('', '0')
        return bool(value)

    def _as_date_time(self, value: Any) -> datetime:
        return self.get_date_factory().parse(value, self.get_date_format())

    def _as_date(self, value: Any) -> datetime:
        return self.get_date_factory().start_of_day(self._as_date_time(value))

    def _as_timestamp(self, value: Any) -> int:
        return int(self._as_date_time(value).timestamp())

    def from_date_time(self, value: Any) -> Any:
        """Convert a date value to a storable string."""
        if not value:
            return value

        return self.get_date_factory().format(self._as_date_time(value), self.get_date_format())

    def from_json(self, value: Any, as_object: bool = False) -> Any:
        """Decode the given JSON back into a dict/list, or SimpleNamespace objects. Invalid JSON gives None."""
        text = value if isinstance(value, (str, bytes, bytearray)) else self.as_json(value)

        try:
            return Json.decode(text, as_object=as_object)
        except json.JSONDecodeError:
            return None

    def as_json(self, value: Any) -> str:
        """Encode the given value as JSON."""
        return Json.encode(value)

    def _from_encrypted_string(self, value: Any) -> str:
        return self.current_encrypter().decrypt_string(value)

    def _cast_attribute_as_encrypted_string(self, key: str, value: Any) -> str:
        return self.current_encrypter().encrypt_string(value if isinstance(value, str) else str(value))

    def _cast_attribute_as_json(self, key: str, value: Any) -> str:
        try:
            return self.as_json(value)
        except (TypeError, ValueError) as e:
            raise JsonEncodingException.for_attribute(self, key, str(e)) from e

    # Enum casts

    def _get_enum_castable_attribute_value(self, key: str, spec: CastSpec, value: Any) -> Any:
        if value is None:
            return None

        enum_class = spec.target
        if isinstance(value, enum_class):
            return value

        lookup = getattr(enum_class, 'from_value', enum_class)
        try:
            return lookup(value)
        except ValueError as e:
            raise InvalidCastException(self, key, enum_class, value) from e

    def _set_enum_castable_attribute(self, key: str, value: Any) -> None:
        enum_class = self._get_cast_spec(key).target

        if value is None:
            self._attributes[key] = None
        elif isinstance(value, enum_class):
            self._attributes[key] = value.value
        else:
            member = _try_enum(enum_class, value)
            self._attributes[key] = member.value if member is not None else None

    # Class casts

    def _get_class_castable_attribute_value(self, key: str, value: Any) -> Any:
        if key in self._class_cast_cache:
            return self._class_cast_cache[key]

        caster = self._resolve_caster_class(key)

        # Inbound-only casters leave reads alone
        if not isinstance(caster, CastsAttributes):
            return value

        value = caster.get(self, key, value, dict(self._attributes))

        if value is not None:
            self._class_cast_cache[key] = value

        return value

    def _set_class_castable_attribute(self, key: str, value: Any) -> None:
        caster = self._resolve_caster_class(key)

        if value is None:
            # Null every raw key the caster writes for the current value
            response = self._normalize_cast_class_response(
                key, caster.set(self, key, self.get_attribute(key), dict(self._attributes))
            )
            self._attributes.update({name: None for name in response})
        else:
            self._attributes.update(self._normalize_cast_class_response(
                key, caster.set(self, key, value, dict(self._attributes))
            ))

        self._class_cast_cache.pop(key, None)

    def _resolve_caster_class(self, key: str) -> Any:
        spec = self._get_cast_spec(key)
        return attribute_registry.caster(spec, lambda resolved: self._make_caster(key, resolved))

    def _make_caster(self, key: str, spec: CastSpec) -> Any:
        try:
            if spec.kind is CastKind.CASTABLE:
                caster = spec.target.cast_using(list(spec.arguments))
            elif spec.kind is CastKind.CASTER_CLASS:
                caster = spec.target(*spec.arguments)
            else:
                caster = spec.target
        except (TypeError, ValueError) as e:
            raise InvalidCasterException(self, key, spec.declaration, str(e)) from e

        if not isinstance(caster, (CastsAttributes, CastsInboundAttributes)):
            raise InvalidCasterException(self, key, spec.declaration)

        return caster

    # Writing

    def set_attribute(self, key: str, value: Any) -> Any:
        """Set a given attribute on the model."""
        if self.has_set_mutator(key):
            getattr(self, self._mutator_name('set', key))(value)
            return self

        if self.has_attribute_set_mutator(key):
            return self._set_attribute_marked_mutated_attribute_value(key, value)

        self._attribute_cast_cache.pop(key, None)

        if value and self._is_date_attribute(key):
            value = self.from_date_time(value)

        if self._is_enum_castable(key):
            self._set_enum_castable_attribute(key, value)
            return self

        if self.is_class_castable(key):
            self._set_class_castable_attribute(key, value)
            return self

        if value is not None and self._is_json_castable(key):
            value = self._cast_attribute_as_json(key, value)

        if '->' in key:
            return self.fill_json_attribute(key, value)

        if value is not None and self._is_encrypted_castable(key):
            value = self._cast_attribute_as_encrypted_string(key, value)

        self._attributes[key] = value
        return self

    def _set_attribute_marked_mutated_attribute_value(self, key: str, value: Any) -> Any:
        attribute = self.attribute_accessor(key)

        self._attributes.update(self._normalize_cast_class_response(
            key, attribute.set_value(value, dict(self._attributes))
        ))

        if attribute.should_cache_value(value):
            self._attribute_cast_cache[key] = value
        else:
            self._attribute_cast_cache.pop(key, None)

        return self

    def fill_json_attribute(self, key: str, value: Any) -> Any:
        """Set a given JSON attribute on the model, ``"meta->colors->primary"`` style."""
        key, _, path = key.partition('->')

        array = self._get_array_attribute_by_key(key)
        Arr.set(array, path.replace('->', '.'), value)
        encoded = self._cast_attribute_as_json(key, array)

        if self._is_encrypted_castable(key):
            encoded = self._cast_attribute_as_encrypted_string(key, encoded)

        self._attributes[key] = encoded
        self._class_cast_cache.pop(key, None)
        return self

    def _get_array_attribute_by_key(self, key: str) -> Dict[str, Any]:
        raw = self._attributes.get(key)
        if raw is None:
            return {}

        if self._is_encrypted_castable(key):
            raw = self._from_encrypted_string(raw)

        decoded = self.from_json(raw)
        return decoded if isinstance(decoded, dict) else {}

    # Array form

    def attributes_to_array(self) -> Dict[str, Any]:
        """Convert the model's attributes to an array."""
        return self._project_attributes(for_json=False)

    def _project_attributes(self, for_json: bool) -> Dict[str, Any]:
        attributes = self._get_arrayable_items(self.get_attributes())

        for key, value in attributes.items():
            if self.has_get_mutator(key) or self.has_attribute_get_mutator(key):
                attributes[key] = self._serialize_value(self._transform_model_value(key, value), for_json)
            elif self.has_cast(key):
                attributes[key] = self._serialize_cast_value(key, self._cast_attribute(key, value), for_json)
            else:
                attributes[key] = self._serialize_value(value, for_json)

        for key in self._get_arrayable_appends():
            attributes[key] = self._serialize_value(self._transform_model_value(key, None), for_json)

        return attributes

    def _get_arrayable_appends(self) -> List[str]:
        # Visibility lists come from HidesAttributesMixin
        return list(self._get_arrayable_items({key: key for key in self._appends}))  # type: ignore[attr-defined]

    def _serialize_cast_value(self, key: str, value: Any, for_json: bool) -> Any:
        spec = self._get_cast_spec(key)

        if spec.type in CUSTOM_DATE_CAST_TYPES and spec.format and isinstance(value, datetime):
            return self.get_date_factory().format(value, spec.format)

        return self._serialize_value(value, for_json)

    @staticmethod
    def _serialize_value(value: Any, for_json: bool) -> Any:
        if isinstance(value, Enum):
            return value.value
        if for_json and isinstance(value, JsonSerializable):
            return value.json_serialize()
        if isinstance(value, Arrayable):
            return value.to_array()
        return value


def _try_enum(enum_class: Any, value: Any) -> Optional[Enum]:
    """Look up an enum member leniently, giving None when no member matches."""
    try_from = getattr(enum_class, 'try_from', None)
    if callable(try_from):
        return try_from(value)

    try:
        return enum_class(value)
    except ValueError:
        return None
