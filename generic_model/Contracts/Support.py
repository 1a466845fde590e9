from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Arrayable(Protocol):
    """Anything that can convert itself to plain Python data."""

    def to_array(self) -> Any:
        ...


@runtime_checkable
class Jsonable(Protocol):
    """Anything that can render itself as JSON text."""

    def to_json(self) -> str:
        ...


@runtime_checkable
class JsonSerializable(Protocol):
    """Anything that can produce the data it should be JSON-encoded as."""

    def json_serialize(self) -> Any:
        ...
