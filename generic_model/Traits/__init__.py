from __future__ import annotations

from .GuardsAttributes import GuardsAttributesMixin
from .HasAttributes import HasAttributesMixin
from .HidesAttributes import HidesAttributesMixin

__all__ = ['GuardsAttributesMixin', 'HasAttributesMixin', 'HidesAttributesMixin']
