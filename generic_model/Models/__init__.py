from __future__ import annotations

from .Model import Model

__all__ = ['Model']
