from __future__ import annotations

from .Support import Arrayable, Jsonable, JsonSerializable

__all__ = ['Arrayable', 'Jsonable', 'JsonSerializable']
