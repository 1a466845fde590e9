from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING

from generic_model.Casts.CastSpec import import_string
from generic_model.Support.Collection import Collection
from generic_model.Support.Json import Json

if TYPE_CHECKING:
    from generic_model.Models.Model import Model


class AsCollectionOf:
    """
    Cast a JSON list into a Collection, optionally mapping every item into a class.

    Usable as a castable type (``AsCollectionOf`` or
    ``"generic_model.Casts.AsCollectionOf.AsCollectionOf:app.models.Item"``)
    or configured inline (``AsCollectionOf(Item)``).
    """

    def __init__(self, item_class: Optional[Callable[[Any], Any]] = None) -> None:
        self.item_class = item_class

    @classmethod
    def cast_using(cls, arguments: List[str]) -> 'AsCollectionOf':
        """Build the caster from declaration arguments."""
        if not arguments or not arguments[0]:
            return cls()

        item_class = import_string(arguments[0])
        if item_class is None:
            raise ValueError(f"Collection item class [{arguments[0]}] could not be imported")

        return cls(item_class)

    def get(self, model: 'Model', key: str, value: Any, attributes: Dict[str, Any]) -> Collection[Any]:
        """Transform the stored JSON into a collection."""
        raw = attributes.get(key)

        if raw is None:
            return Collection()

        data = Json.decode(raw) if isinstance(raw, str) else raw
        collection = Collection.wrap(data or [])

        if self.item_class is not None:
            collection = collection.map_into(self.item_class)

        return collection.values()

    def set(self, model: 'Model', key: str, value: Any, attributes: Dict[str, Any]) -> Dict[str, Any]:
        """Transform the collection into JSON for storage."""
        json_value = value if isinstance(value, str) else Collection.wrap(value or []).to_json()

        return {key: json_value}
