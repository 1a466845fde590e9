from __future__ import annotations

from typing import Any, Dict, List, Protocol, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from generic_model.Models.Model import Model


@runtime_checkable
class CastsAttributes(Protocol):
    """Interface for Laravel-style attribute casting."""

    def get(self, model: 'Model', key: str, value: Any, attributes: Dict[str, Any]) -> Any:
        """Transform the raw attribute into its cast value."""
        ...

    def set(self, model: 'Model', key: str, value: Any, attributes: Dict[str, Any]) -> Any:
        """Transform the value for storage, as a single value or a mapping of raw attributes."""
        ...


@runtime_checkable
class CastsInboundAttributes(Protocol):
    """Interface for casts that only transform values being set."""

    def set(self, model: 'Model', key: str, value: Any, attributes: Dict[str, Any]) -> Any:
        ...


@runtime_checkable
class Castable(Protocol):
    """A type that supplies its own caster when used as a cast."""

    @classmethod
    def cast_using(cls, arguments: List[str]) -> Any:
        ...
