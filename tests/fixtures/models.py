from __future__ import annotations

from dataclasses import dataclass
from types import SimpleNamespace
from typing import Any, ClassVar, Dict, List, Optional

from generic_model import AsCollectionOf, Attribute, EnumCollectionCast, HashCast, JsonCast, Model
from tests.fixtures.enums import Color, Priority, Status


@dataclass
class Money:
    amount: int
    currency: str


class MoneyCast:
    """Spreads a Money value over the ``amount`` and ``currency`` columns."""

    def get(self, model: Model, key: str, value: Any, attributes: Dict[str, Any]) -> Optional[Money]:
        if attributes.get('amount') is None:
            return None
        return Money(int(attributes['amount']), attributes.get('currency') or 'USD')

    def set(self, model: Model, key: str, value: Any, attributes: Dict[str, Any]) -> Dict[str, Any]:
        if value is None:
            return {'amount': None, 'currency': None}
        return {'amount': value.amount, 'currency': value.currency}


class PrefixCast:
    def __init__(self, prefix: str = '#') -> None:
        self.prefix = prefix

    def get(self, model: Model, key: str, value: Any, attributes: Dict[str, Any]) -> Optional[str]:
        if value is None:
            return None
        return value[len(self.prefix):] if value.startswith(self.prefix) else value

    def set(self, model: Model, key: str, value: Any, attributes: Dict[str, Any]) -> Optional[str]:
        return None if value is None else f"{self.prefix}{value}"


class Temperature:
    def __init__(self, degrees: float, unit: str) -> None:
        self.degrees = degrees
        self.unit = unit

    @classmethod
    def cast_using(cls, arguments: List[str]) -> 'TemperatureCast':
        return TemperatureCast(arguments[0] if arguments else 'C')


class TemperatureCast:
    def __init__(self, unit: str) -> None:
        self.unit = unit

    def get(self, model: Model, key: str, value: Any, attributes: Dict[str, Any]) -> Optional[Temperature]:
        return None if value is None else Temperature(float(value), self.unit)

    def set(self, model: Model, key: str, value: Any, attributes: Dict[str, Any]) -> Optional[float]:
        if value is None:
            return None
        return value.degrees if isinstance(value, Temperature) else float(value)


class NotACaster:
    pass


class NeedsArgumentCast:
    def __init__(self, required: str) -> None:
        self.required = required

    def get(self, model: Model, key: str, value: Any, attributes: Dict[str, Any]) -> Any:
        return value

    def set(self, model: Model, key: str, value: Any, attributes: Dict[str, Any]) -> Any:
        return value


class Measurement(Model):
    __casts__ = {
        'count': 'integer',
        'ratio': 'float',
        'price': 'decimal:2',
        'rate': 'decimal',
        'label': 'string',
        'enabled': 'boolean',
        'payload': 'object',
        'options': 'array',
        'meta': 'json',
        'tags': 'collection',
        'measured_on': 'date',
        'measured_at': 'datetime',
        'frozen_at': 'immutable_datetime',
        'published_at': 'datetime:%Y-%m-%d',
        'recorded': 'timestamp',
        'secret': 'encrypted',
        'secret_options': 'encrypted:array',
        'status': Status,
        'priority': Priority,
        'mystery': 'not.a.real.Caster',
    }
    __dates__ = ['reviewed_at']


class Address(Model):
    __fillable__ = ['street', 'city', 'zip']


class NullableAddress(Model):
    __fillable__ = ['street', 'city', 'zip']
    __nullable__ = True


class Customer(Model):
    __fillable__ = ['name', 'address', 'billing_address']
    __casts__ = {'address': Address, 'billing_address': NullableAddress}


class Company(Model):
    __fillable__ = ['name', 'owner']
    __casts__ = {'owner': Customer}


class LineItem(Model):
    __fillable__ = ['sku', 'quantity']
    __casts__ = {'quantity': 'integer'}


class Order(Model):
    __fillable__ = ['number', 'items', 'tags', 'price', 'colors', 'reference', 'temperature', 'metadata', 'lines']
    __casts__ = {
        'items': 'generic_model.Casts.AsCollectionOf.AsCollectionOf:tests.fixtures.models.LineItem',
        'tags': AsCollectionOf,
        'price': MoneyCast,
        'colors': EnumCollectionCast(Color),
        'reference': 'tests.fixtures.models.PrefixCast:INV-',
        'temperature': 'tests.fixtures.models.Temperature:F',
        'metadata': 'generic_model.Casts.JsonCast.JsonCast:object',
        'lines': JsonCast,
    }


class BrokenCasts(Model):
    __casts__ = {
        'plain': NotACaster,
        'needy': NeedsArgumentCast,
        'needy_with_argument': 'tests.fixtures.models.NeedsArgumentCast:yes',
    }


class Credential(Model):
    __fillable__ = ['username', 'password']
    __hidden__ = ['password']
    __casts__ = {'password': HashCast}


class Person(Model):
    __fillable__ = ['first_name', 'last_name', 'full_name']
    __appends__ = ['full_name']

    def full_name(self) -> Attribute:
        return Attribute.make(
            get=lambda value, attributes: f"{attributes.get('first_name', '')} {attributes.get('last_name', '')}".strip(),
            set=lambda value: dict(zip(('first_name', 'last_name'), value.split(' ', 1)))
        )


class Greeter(Model):
    _greeting_calls: ClassVar[int] = 0

    def greeting(self) -> Attribute:
        def resolve(value: Any, attributes: Dict[str, Any]) -> str:
            type(self)._greeting_calls += 1
            return f"Hello {attributes.get('name')}"

        return Attribute.make(get=resolve).should_cache()

    def farewell(self) -> Attribute:
        def resolve(value: Any, attributes: Dict[str, Any]) -> str:
            type(self)._greeting_calls += 1
            return f"Bye {attributes.get('name')}"

        return Attribute.getter(resolve)

    def profile(self) -> Attribute:
        return Attribute.getter(lambda value, attributes: SimpleNamespace(name=attributes.get('name')))

    def fresh_profile(self) -> Attribute:
        return Attribute.getter(
            lambda value, attributes: SimpleNamespace(name=attributes.get('name'))
        ).without_object_caching()

    @property
    def shout(self) -> Attribute:
        return Attribute.getter(lambda value, attributes: str(attributes.get('name', '')).upper())

    def nickname(self) -> Attribute:
        return Attribute.setter(lambda value: value.lower())


class Article(Model):
    __fillable__ = ['title', 'body']
    __hidden__ = ['body']
    __appends__ = ['excerpt']

    def get_title_attribute(self, value: Optional[str]) -> Optional[str]:
        return value.title() if value else value

    def set_title_attribute(self, value: str) -> None:
        self.put_raw('title', value.strip())
        self.put_raw('slug', value.strip().lower().replace(' ', '-'))

    def get_excerpt_attribute(self, value: Any) -> str:
        return (self.get_raw('body') or '')[:10]


class Account(Model):
    __fillable__ = ['name', 'email', 'password', 'status', 'settings', 'token', 'signed_up_at']
    __hidden__ = ['password']
    __temporary__ = ['token']
    __appends__ = ['display_name']
    __casts__ = {'status': Status, 'settings': 'array', 'signed_up_at': 'datetime:%Y-%m-%d'}

    def get_display_name_attribute(self, value: Any) -> str:
        return f"{self.get_raw('name')} <{self.get_raw('email')}>"


class GuardedPost(Model):
    __guarded__ = ['id', 'author_id']


class LockedPost(Model):
    __guarded__ = ['*']


class FillablePost(Model):
    __fillable__ = ['title']
    __guarded__ = ['title', 'body']


class ExplodingPost(Model):
    __guarded__ = ['*']

    def set_title_attribute(self, value: str) -> None:
        raise RuntimeError('title rejected')
