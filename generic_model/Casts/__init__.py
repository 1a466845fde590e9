from __future__ import annotations

from .CastsAttributes import Castable, CastsAttributes, CastsInboundAttributes
from .CastSpec import CastKind, CastSpec
from .AsCollectionOf import AsCollectionOf
from .EnumCollectionCast import EnumCollectionCast
from .HashCast import HashCast
from .JsonCast import JsonCast

__all__ = [
    'Castable',
    'CastsAttributes',
    'CastsInboundAttributes',
    'CastKind',
    'CastSpec',
    'AsCollectionOf',
    'EnumCollectionCast',
    'HashCast',
    'JsonCast'
]
