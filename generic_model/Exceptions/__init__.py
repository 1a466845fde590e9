from __future__ import annotations

from .ModelExceptions import (
    ModelException,
    MassAssignmentException,
    JsonEncodingException,
    InvalidCastException,
    InvalidCasterException
)

__all__ = [
    'ModelException',
    'MassAssignmentException',
    'JsonEncodingException',
    'InvalidCastException',
    'InvalidCasterException'
]
