from __future__ import annotations

from generic_model.Attributes import Attribute, attribute_registry
from generic_model.Casts import (
    AsCollectionOf,
    Castable,
    CastsAttributes,
    CastsInboundAttributes,
    EnumCollectionCast,
    HashCast,
    JsonCast
)
from generic_model.Contracts import Arrayable, Jsonable, JsonSerializable
from generic_model.Encryption import Encrypter, EncrypterContract, EncryptionException
from generic_model.Enums import IntegerEnum, StringEnum
from generic_model.Exceptions import (
    InvalidCastException,
    InvalidCasterException,
    JsonEncodingException,
    MassAssignmentException,
    ModelException
)
from generic_model.Models import Model
from generic_model.Support import Arr, Collection, DateFactory, Json, Str

__version__ = '1.0.0'

__all__ = [
    'Arr',
    'Arrayable',
    'AsCollectionOf',
    'Attribute',
    'Castable',
    'CastsAttributes',
    'CastsInboundAttributes',
    'Collection',
    'DateFactory',
    'Encrypter',
    'EncrypterContract',
    'EncryptionException',
    'EnumCollectionCast',
    'HashCast',
    'IntegerEnum',
    'InvalidCastException',
    'InvalidCasterException',
    'Json',
    'JsonCast',
    'JsonEncodingException',
    'Jsonable',
    'JsonSerializable',
    'MassAssignmentException',
    'Model',
    'ModelException',
    'Str',
    'StringEnum',
    'attribute_registry'
]
