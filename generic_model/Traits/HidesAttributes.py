from __future__ import annotations

from typing import Any, ClassVar, Dict, List, Union


def _as_list(attributes: Union[str, List[str], None]) -> List[str]:
    if attributes is None:
        return []
    if isinstance(attributes, str):
        return [attributes]
    return list(attributes)


class HidesAttributesMixin:
    """
    Mixin class controlling which attributes appear in array and JSON form.

    A non-empty ``visible`` list wins over ``hidden``. ``appends`` adds
    computed attributes to the array form; ``temporary`` attributes are
    left out of the JSON form together with the appended ones.
    """

    __hidden__: ClassVar[List[str]] = []
    __visible__: ClassVar[List[str]] = []
    __appends__: ClassVar[List[str]] = []
    __temporary__: ClassVar[List[str]] = []

    _hidden: List[str]
    _visible: List[str]
    _appends: List[str]
    _temporary: List[str]

    def _init_visibility(self) -> None:
        cls = type(self)
        self._hidden = list(cls.__hidden__)
        self._visible = list(cls.__visible__)
        self._appends = list(cls.__appends__)
        self._temporary = list(cls.__temporary__)

    def get_hidden(self) -> List[str]:
        """Get the hidden attributes for the model."""
        return self._hidden

    def set_hidden(self, hidden: List[str]) -> Any:
        """Set the hidden attributes for the model."""
        self._hidden = list(hidden)
        return self

    def add_hidden(self, attributes: Union[str, List[str], None] = None) -> Any:
        """Add hidden attributes for the model."""
        self._hidden = self._hidden + [key for key in _as_list(attributes) if key not in self._hidden]
        return self

    def make_visible(self, attributes: Union[str, List[str]]) -> Any:
        """Make the given, typically hidden, attributes visible."""
        keys = _as_list(attributes)
        self._hidden = [key for key in self._hidden if key not in keys]

        if self._visible:
            self._visible = self._visible + [key for key in keys if key not in self._visible]

        return self

    def get_visible(self) -> List[str]:
        """Get the visible attributes for the model."""
        return self._visible

    def set_visible(self, visible: List[str]) -> Any:
        """Set the visible attributes for the model."""
        self._visible = list(visible)
        return self

    def add_visible(self, attributes: Union[str, List[str], None] = None) -> Any:
        """Add visible attributes for the model."""
        self._visible = self._visible + [key for key in _as_list(attributes) if key not in self._visible]
        return self

    def get_appends(self) -> List[str]:
        return self._appends

    def append(self, attributes: Union[str, List[str]]) -> Any:
        """Append attributes to the array form of the model."""
        self._appends = self._appends + [key for key in _as_list(attributes) if key not in self._appends]
        return self

    def add_appends(self, attributes: Union[str, List[str], None] = None) -> Any:
        return self.append(_as_list(attributes))

    def set_appends(self, appends: List[str]) -> Any:
        """Set the accessors to append to the array form."""
        self._appends = list(appends)
        return self

    def get_temporary(self) -> List[str]:
        return self._temporary

    def set_temporary(self, temporary: List[str]) -> Any:
        """Set the attributes left out of the JSON form."""
        self._temporary = list(temporary)
        return self

    def _get_arrayable_items(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Filter a mapping down to the attributes allowed in array form."""
        if self._visible:
            return {key: value for key, value in values.items() if key in self._visible}

        return {key: value for key, value in values.items() if key not in self._hidden}
