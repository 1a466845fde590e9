from __future__ import annotations

from .Arr import Arr
from .Collection import Collection
from .Date import DateFactory
from .Json import Json
from .Str import Str

__all__ = ['Arr', 'Collection', 'DateFactory', 'Json', 'Str']
