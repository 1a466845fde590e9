from __future__ import annotations

from typing import Any, List, Optional


def _class_name(model: Any) -> str:
    cls = model if isinstance(model, type) else type(model)
    return f"{cls.__module__}.{cls.__qualname__}"


def _cast_name(cast_type: Any) -> str:
    if isinstance(cast_type, type):
        return cast_type.__qualname__
    if isinstance(cast_type, str):
        return cast_type
    return type(cast_type).__qualname__


class ModelException(Exception):
    """Base exception for attribute model errors"""
    pass


class MassAssignmentException(ModelException):
    """Raised when a non-fillable attribute is mass assigned under guard."""

    def __init__(self, keys: List[str], model: Any, dropped: bool = False) -> None:
        self.keys = keys
        self.model_class = _class_name(model)

        keys_str = ", ".join(keys)

        if dropped:
            message = f"Add fillable property [{keys_str}] to allow mass assignment on [{self.model_class}]."
        else:
            message = f"Add [{keys_str}] to fillable property to allow mass assignment on [{self.model_class}]."

        super().__init__(message)


class JsonEncodingException(ModelException):
    """Raised when a model or one of its attributes cannot be encoded as JSON."""

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        self.key = key
        super().__init__(message)

    @classmethod
    def for_model(cls, model: Any, message: str) -> 'JsonEncodingException':
        """Create an exception for a model that failed to encode."""
        return cls(f"Error encoding model [{_class_name(model)}] to JSON: {message}")

    @classmethod
    def for_attribute(cls, model: Any, key: str, message: str) -> 'JsonEncodingException':
        """Create an exception for a single attribute that failed to encode."""
        return cls(
            f"Unable to encode attribute [{key}] for model [{_class_name(model)}] to JSON: {message}.",
            key=key
        )


class InvalidCastException(ModelException):
    """Raised when a declared cast cannot produce a value."""

    def __init__(self, model: Any, column: str, cast_type: Any, value: Any = None, reason: Optional[str] = None) -> None:
        self.model_class = _class_name(model)
        self.column = column
        self.cast_type = _cast_name(cast_type)
        self.value = value

        message = (
            f"Unable to cast value [{value!r}] on column [{column}] "
            f"to [{self.cast_type}] in model [{self.model_class}]."
        )
        if reason:
            message = f"{message} {reason}"

        super().__init__(message)


class InvalidCasterException(ModelException):
    """Raised when a cast declaration does not name a usable caster."""

    def __init__(self, model: Any, column: str, cast_type: Any, reason: Optional[str] = None) -> None:
        self.model_class = _class_name(model)
        self.column = column
        self.cast_type = _cast_name(cast_type)

        message = (
            f"Cast [{self.cast_type}] on column [{column}] in model "
            f"[{self.model_class}] is not a valid caster."
        )
        if reason:
            message = f"{message} {reason}"

        super().__init__(message)
