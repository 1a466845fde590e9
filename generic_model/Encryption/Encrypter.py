from __future__ import annotations

import base64
import os
from typing import Dict, Optional, Protocol, runtime_checkable

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from generic_model.Config import settings


class EncryptionException(Exception):
    """Exception raised when encryption/decryption fails."""
    pass


@runtime_checkable
class EncrypterContract(Protocol):
    """Capability used by encrypted casts."""

    def encrypt_string(self, value: str) -> str:
        ...

    def decrypt_string(self, payload: str) -> str:
        ...


class Encrypter:
    """Laravel-style string encrypter built on Fernet."""

    def __init__(self, key: str) -> None:
        self.key = key
        self._fernet = self._create_fernet_instance()

    def _create_fernet_instance(self) -> Fernet:
        """Create Fernet instance from key."""
        # Convert Laravel app key to Fernet key
        if self.key.startswith('base64:'):
            key_data = base64.b64decode(self.key[7:])
        else:
            key_data = self.key.encode()

        # Derive a 32-byte key for Fernet
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=b'generic_model_salt',  # Static salt so the same key decrypts across runs
            iterations=100000,
        )
        derived_key = base64.urlsafe_b64encode(kdf.derive(key_data))

        return Fernet(derived_key)

    def encrypt_string(self, value: str) -> str:
        """Encrypt a string without serialization."""
        if not isinstance(value, str):
            raise EncryptionException(
                f"Encryption failed: expected a string, got {type(value).__name__}"
            )

        return self._fernet.encrypt(value.encode()).decode()

    def decrypt_string(self, payload: str) -> str:
        """Decrypt a string without unserialization."""
        try:
            return self._fernet.decrypt(str(payload).encode()).decode()
        except (InvalidToken, UnicodeDecodeError) as e:
            raise EncryptionException("Decryption failed: the payload is invalid") from e

    @staticmethod
    def generate_key() -> str:
        """Generate a new encryption key."""
        key = base64.b64encode(os.urandom(32)).decode()
        return f"base64:{key}"


class EncryptionManager:
    """Manager for encryption services."""

    def __init__(self, default_key: Optional[str] = None) -> None:
        self.default_key = default_key or settings.APP_KEY or self._generate_default_key()
        self._encrypters: Dict[str, Encrypter] = {}

    def _generate_default_key(self) -> str:
        """Generate default encryption key."""
        return Encrypter.generate_key()

    def driver(self, name: str = 'default') -> Encrypter:
        """Get encrypter instance."""
        if name not in self._encrypters:
            self._encrypters[name] = Encrypter(self.default_key)

        return self._encrypters[name]

    def encrypt_string(self, value: str) -> str:
        """Encrypt string using default driver."""
        return self.driver().encrypt_string(value)

    def decrypt_string(self, payload: str) -> str:
        """Decrypt string using default driver."""
        return self.driver().decrypt_string(payload)


# Global encryption manager
encryption_manager = EncryptionManager()
