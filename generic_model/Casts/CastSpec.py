from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple

from generic_model.Utils.Logger import get_logger

logger = get_logger(__name__)

PRIMITIVE_CAST_TYPES: Tuple[str, ...] = (
    'array',
    'bool',
    'boolean',
    'collection',
    'custom_datetime',
    'date',
    'datetime',
    'decimal',
    'double',
    'encrypted',
    'encrypted:array',
    'encrypted:collection',
    'encrypted:json',
    'encrypted:object',
    'float',
    'immutable_date',
    'immutable_datetime',
    'immutable_custom_datetime',
    'int',
    'integer',
    'json',
    'object',
    'real',
    'string',
    'timestamp',
)

ENCRYPTED_CAST_TYPES: Tuple[str, ...] = (
    'encrypted',
    'encrypted:array',
    'encrypted:collection',
    'encrypted:json',
    'encrypted:object',
)

JSON_CAST_TYPES: Tuple[str, ...] = ('array', 'json', 'object', 'collection')

DATE_CAST_TYPES: Tuple[str, ...] = ('date', 'datetime', 'immutable_date', 'immutable_datetime')


class CastKind(Enum):
    """The variants a cast declaration resolves to."""

    PRIMITIVE = 'primitive'
    ENUM = 'enum'
    CASTABLE = 'castable'
    CASTER_CLASS = 'caster_class'
    CASTER_INSTANCE = 'caster_instance'
    UNKNOWN = 'unknown'


@dataclass(frozen=True)
class CastSpec:
    """
    A parsed cast declaration.

    ``type`` is the normalized cast type: the primitive tag (``decimal:2``
    becomes ``decimal``, ``date:%Y`` becomes ``custom_datetime``) or the
    dotted path of the referenced class. ``arguments`` holds whatever
    followed the first colon, split on commas for caster classes.
    """

    declaration: Any
    kind: CastKind
    type: str
    arguments: Tuple[str, ...] = ()
    target: Any = field(default=None, compare=False)

    @property
    def is_primitive(self) -> bool:
        return self.kind is CastKind.PRIMITIVE

    @property
    def is_enum(self) -> bool:
        return self.kind is CastKind.ENUM

    @property
    def is_class_castable(self) -> bool:
        return self.kind in (CastKind.CASTABLE, CastKind.CASTER_CLASS, CastKind.CASTER_INSTANCE)

    @property
    def is_encrypted(self) -> bool:
        return self.type in ENCRYPTED_CAST_TYPES

    @property
    def is_json(self) -> bool:
        return self.inner_type in JSON_CAST_TYPES

    @property
    def is_date(self) -> bool:
        return self.type in DATE_CAST_TYPES

    @property
    def inner_type(self) -> str:
        """The cast type once any ``encrypted:`` prefix is removed."""
        if self.type.startswith('encrypted:'):
            return self.type[len('encrypted:'):]
        return self.type

    @property
    def format(self) -> Optional[str]:
        """The date format or decimal precision carried by the declaration."""
        return self.arguments[0] if self.arguments else None

    @classmethod
    def parse(cls, declaration: Any) -> 'CastSpec':
        """Parse a cast declaration into its variant."""
        if isinstance(declaration, str):
            return cls._parse_string(declaration)

        return cls._classify(declaration, declaration, ())

    @classmethod
    def _parse_string(cls, declaration: str) -> 'CastSpec':
        text = declaration.strip()
        lowered = text.lower()

        if lowered in ENCRYPTED_CAST_TYPES:
            return cls(declaration, CastKind.PRIMITIVE, lowered)

        base, separator, rest = text.partition(':')
        base_lowered = base.strip().lower()

        if separator and base_lowered in ('date', 'datetime'):
            return cls(declaration, CastKind.PRIMITIVE, 'custom_datetime', (rest,))

        if separator and base_lowered in ('immutable_date', 'immutable_datetime'):
            return cls(declaration, CastKind.PRIMITIVE, 'immutable_custom_datetime', (rest,))

        if separator and base_lowered == 'decimal':
            return cls(declaration, CastKind.PRIMITIVE, 'decimal', (rest.strip(),))

        if not separator and lowered in PRIMITIVE_CAST_TYPES:
            return cls(declaration, CastKind.PRIMITIVE, lowered)

        arguments = tuple(argument.strip() for argument in rest.split(',')) if separator else ()
        target = import_string(base.strip())

        if target is None:
            logger.warning(
                "Unresolvable cast declaration, values pass through untouched",
                {'declaration': declaration}
            )
            return cls(declaration, CastKind.UNKNOWN, lowered)

        return cls._classify(declaration, target, arguments)

    @classmethod
    def _classify(cls, declaration: Any, target: Any, arguments: Tuple[str, ...]) -> 'CastSpec':
        if isinstance(target, type):
            type_name = f"{target.__module__}.{target.__qualname__}"

            if issubclass(target, Enum):
                return cls(declaration, CastKind.ENUM, type_name, arguments, target)

            if callable(getattr(target, 'cast_using', None)):
                return cls(declaration, CastKind.CASTABLE, type_name, arguments, target)

            return cls(declaration, CastKind.CASTER_CLASS, type_name, arguments, target)

        instance_type = type(target)
        return cls(
            declaration,
            CastKind.CASTER_INSTANCE,
            f"{instance_type.__module__}.{instance_type.__qualname__}",
            arguments,
            target
        )


def import_string(path: str) -> Any:
    """Import a dotted "package.module.Name" path, or return None when it does not resolve."""
    module_name, _, attribute = path.rpartition('.')

    if not module_name or not attribute:
        return None

    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None

    return getattr(module, attribute, None)
