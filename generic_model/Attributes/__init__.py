from __future__ import annotations

from .Attribute import Attribute, is_object_value
from .AttributeRegistry import AttributeRegistry, attribute_registry

__all__ = ['Attribute', 'AttributeRegistry', 'attribute_registry', 'is_object_value']
