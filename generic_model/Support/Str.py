from __future__ import annotations

import re
from typing import Dict


class Str:
    """Laravel-style string helper class."""

    _snake_cache: Dict[str, str] = {}

    @staticmethod
    def snake(value: str, delimiter: str = '_') -> str:
        """Convert a field name such as ``firstName`` or ``first-name`` to ``first_name``."""
        cached = Str._snake_cache.get(value)
        if cached is not None:
            return cached

        words = re.sub(r'([a-z0-9])([A-Z])', r'\1 \2', value)
        result = delimiter.join(re.findall(r'[a-zA-Z0-9]+', words)).lower()

        Str._snake_cache[value] = result
        return result
