from __future__ import annotations

from typing import Any, Dict, Optional, TYPE_CHECKING

import bcrypt

if TYPE_CHECKING:
    from generic_model.Models.Model import Model


class HashCast:
    """Inbound-only cast for hashing sensitive data like passwords."""

    def set(self, model: 'Model', key: str, value: Any, attributes: Dict[str, Any]) -> Optional[str]:
        """Hash the value using bcrypt."""
        if value is None:
            return None

        # If value is already hashed, return as is
        if isinstance(value, str) and value.startswith(('$2a$', '$2b$', '$2y$')):
            return value

        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(str(value).encode('utf-8'), salt)
        return hashed.decode('utf-8')

    @staticmethod
    def verify(plain_value: str, hashed_value: Optional[str]) -> bool:
        """Verify a plain value against its hash."""
        if not hashed_value:
            return False

        try:
            return bcrypt.checkpw(
                plain_value.encode('utf-8'),
                hashed_value.encode('utf-8')
            )
        except ValueError:
            return False
