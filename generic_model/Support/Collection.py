from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, Iterator, List, Mapping, Optional, TypeVar, Union

from generic_model.Contracts.Support import Arrayable, Jsonable, JsonSerializable
from generic_model.Support.Json import Json

T = TypeVar('T')
U = TypeVar('U')


class Collection(Generic[T]):
    """Laravel-style collection used by collection casts."""

    def __init__(self, items: Union[List[T], Iterable[T], None] = None):
        if items is None:
            self._items: List[T] = []
        elif isinstance(items, list):
            self._items = items.copy()
        elif isinstance(items, Mapping):
            self._items = list(items.values())
        else:
            self._items = list(items)

    @classmethod
    def make(cls, items: Union[List[T], Iterable[T], None] = None) -> 'Collection[T]':
        """Create a new collection instance."""
        return cls(items)

    @classmethod
    def wrap(cls, value: Any) -> 'Collection[Any]':
        """Wrap a value in a collection if it's not already one."""
        if isinstance(value, cls):
            return value
        if isinstance(value, Collection):
            return cls(value.all())
        if value is None:
            return cls()
        if isinstance(value, (list, tuple, Mapping)):
            return cls(value)
        return cls([value])

    # Core methods
    def all(self) -> List[T]:
        """Get all items as a list."""
        return self._items.copy()

    def count(self) -> int:
        """Get the number of items."""
        return len(self._items)

    def is_empty(self) -> bool:
        """Check if the collection is empty."""
        return len(self._items) == 0

    def push(self, *items: T) -> 'Collection[T]':
        """Add items to the end of the collection."""
        self._items.extend(items)
        return self

    def filter(self, callback: Optional[Callable[[T], bool]] = None) -> 'Collection[T]':
        """Filter items using a callback, or drop falsy items without one."""
        if callback is None:
            return self.__class__([item for item in self._items if item])
        return self.__class__([item for item in self._items if callback(item)])

    def first(self, callback: Optional[Callable[[T], bool]] = None, default: Any = None) -> Any:
        """Get the first item."""
        if callback is None:
            return self._items[0] if self._items else default

        for item in self._items:
            if callback(item):
                return item
        return default

    def map(self, callback: Callable[[T], U]) -> 'Collection[U]':
        """Apply a callback to every item."""
        return self.__class__([callback(item) for item in self._items])  # type: ignore

    def map_into(self, class_type: Callable[[T], U]) -> 'Collection[U]':
        """Create a new instance of the given class for every item."""
        return self.map(class_type)

    def values(self) -> 'Collection[T]':
        """Reset the keys on the underlying items."""
        return self.__class__(self._items)

    # Conversion
    def to_array(self) -> List[Any]:
        """Convert the collection to plain data, converting arrayable items too."""
        return [item.to_array() if isinstance(item, Arrayable) else item for item in self._items]

    def json_serialize(self) -> List[Any]:
        """Get the data each item should be JSON-encoded as."""
        result: List[Any] = []

        for item in self._items:
            if isinstance(item, JsonSerializable):
                result.append(item.json_serialize())
            elif isinstance(item, Jsonable):
                result.append(Json.decode(item.to_json()))
            elif isinstance(item, Arrayable):
                result.append(item.to_array())
            else:
                result.append(item)

        return result

    def to_json(self, indent: Optional[int] = None) -> str:
        """Convert collection to JSON."""
        return Json.encode(self.to_array(), indent=indent)

    # Magic methods
    def __iter__(self) -> Iterator[T]:
        """Iterate over items."""
        return iter(self._items)

    def __len__(self) -> int:
        """Get length."""
        return len(self._items)

    def __getitem__(self, key: Union[int, slice]) -> Union[T, 'Collection[T]']:  # type: ignore
        """Get item by index or slice."""
        if isinstance(key, slice):
            return self.__class__(self._items[key])
        return self._items[key]

    def __contains__(self, item: Any) -> bool:
        """Check if item is in collection."""
        return item in self._items

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Collection):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    __hash__ = None  # type: ignore

    def __bool__(self) -> bool:
        """Check if collection is not empty."""
        return not self.is_empty()

    def __repr__(self) -> str:
        """String representation."""
        return f"Collection({self._items})"
