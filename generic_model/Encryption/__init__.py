from __future__ import annotations

from .Encrypter import (
    Encrypter,
    EncrypterContract,
    EncryptionException,
    EncryptionManager,
    encryption_manager
)

__all__ = [
    'Encrypter',
    'EncrypterContract',
    'EncryptionException',
    'EncryptionManager',
    'encryption_manager'
]
