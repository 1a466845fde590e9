from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, ClassVar, Dict, Iterator, List, TypeVar, Union

from generic_model.Config import settings
from generic_model.Exceptions import MassAssignmentException
from generic_model.Utils.Logger import get_logger

logger = get_logger(__name__)

T = TypeVar('T')


class GuardsAttributesMixin:
    """
    Mixin class for mass assignment protection.

    ``fillable`` is an allow-list and ``guarded`` a deny-list; ``['*']``
    guards every attribute. The unguarded flag and strict mode are shared
    by every model in the process.
    """

    __fillable__: ClassVar[List[str]] = []
    __guarded__: ClassVar[List[str]] = []

    _unguarded: ClassVar[bool] = False
    _prevent_silently_discarding: ClassVar[bool] = settings.PREVENT_SILENTLY_DISCARDING_ATTRIBUTES

    _fillable: List[str]
    _guarded: List[str]

    def _init_guards(self) -> None:
        self._fillable = list(type(self).__fillable__)
        self._guarded = list(type(self).__guarded__)

    def fill(self, attributes: Dict[str, Any]) -> Any:
        """Laravel-style mass assignment with fillable/guarded protection."""
        totally_guarded = self.totally_guarded()
        fillable = self._fillable_from_array(attributes)

        for key, value in fillable.items():
            if self.is_fillable(key):
                self.set_attribute(key, value)
            elif totally_guarded or self.prevents_silently_discarding_attributes():
                raise MassAssignmentException([key], self)
            else:
                logger.debug(
                    "Discarded guarded attribute",
                    {'model': type(self).__qualname__, 'key': key}
                )

        if len(attributes) != len(fillable):
            dropped = [key for key in attributes if key not in fillable]

            if self.prevents_silently_discarding_attributes():
                raise MassAssignmentException(dropped, self, dropped=True)

            logger.debug(
                "Discarded attributes missing from fillable",
                {'model': type(self).__qualname__, 'keys': ', '.join(dropped)}
            )

        return self

    def force_fill(self, attributes: Dict[str, Any]) -> Any:
        """Fill the model with an array of attributes. Force mass assignment."""
        return self.unguarded(lambda: self.fill(attributes))

    def _fillable_from_array(self, attributes: Dict[str, Any]) -> Dict[str, Any]:
        """Get the fillable attributes of a given array."""
        if self._fillable and not GuardsAttributesMixin._unguarded:
            return {key: value for key, value in attributes.items() if key in self._fillable}

        return dict(attributes)

    def is_fillable(self, key: str) -> bool:
        """Determine if the given attribute may be mass assigned."""
        if GuardsAttributesMixin._unguarded:
            return True

        # Listed in fillable, so assignable regardless of guarded
        if key in self._fillable:
            return True

        if self.is_guarded(key):
            return False

        return not self._fillable

    def is_guarded(self, key: str) -> bool:
        """Determine if the given key is guarded."""
        if not self._guarded:
            return False

        return self._guarded == ['*'] or key in self._guarded

    def totally_guarded(self) -> bool:
        """Determine if the model is totally guarded."""
        return not self._fillable and self._guarded == ['*']

    def get_fillable(self) -> List[str]:
        return self._fillable

    def fillable(self, fillable: List[str]) -> Any:
        """Set the fillable attributes for the model."""
        self._fillable = list(fillable)
        return self

    def add_fillables(self, attributes: Union[str, List[str]]) -> Any:
        """Merge new fillable attributes with existing ones."""
        if isinstance(attributes, str):
            attributes = [attributes]

        self._fillable = self._fillable + [key for key in attributes if key not in self._fillable]
        return self

    def get_guarded(self) -> List[str]:
        return self._guarded

    def guard(self, guarded: List[str]) -> Any:
        """Set the guarded attributes for the model."""
        self._guarded = list(guarded)
        return self

    @classmethod
    def unguard(cls, state: bool = True) -> None:
        """Disable all mass assignable restrictions."""
        GuardsAttributesMixin._unguarded = state

    @classmethod
    def reguard(cls) -> None:
        """Enable the mass assignment restrictions."""
        GuardsAttributesMixin._unguarded = False

    @classmethod
    def is_unguarded(cls) -> bool:
        return GuardsAttributesMixin._unguarded

    @classmethod
    def unguarded(cls, callback: Callable[[], T]) -> T:
        """Run the given callable while being unguarded, restoring the previous state afterwards."""
        with cls.without_guarding():
            return callback()

    @classmethod
    @contextmanager
    def without_guarding(cls) -> Iterator[None]:
        """Context manager that disables mass assignment restrictions for its body."""
        previous = GuardsAttributesMixin._unguarded
        GuardsAttributesMixin._unguarded = True

        try:
            yield
        finally:
            GuardsAttributesMixin._unguarded = previous

    @classmethod
    def prevent_silently_discarding_attributes(cls, value: bool = True) -> None:
        """Raise instead of silently discarding attributes that are not fillable."""
        GuardsAttributesMixin._prevent_silently_discarding = value

    @classmethod
    def prevents_silently_discarding_attributes(cls) -> bool:
        return GuardsAttributesMixin._prevent_silently_discarding
