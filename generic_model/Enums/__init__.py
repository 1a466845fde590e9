from __future__ import annotations

from .BaseEnum import IntegerEnum, StringEnum

__all__ = ['IntegerEnum', 'StringEnum']
