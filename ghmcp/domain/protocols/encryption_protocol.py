"""Encryption protocol for stored GitHub tokens.

Defines the port for encryption/decryption operations. The infrastructure
layer implements it with AES-256-GCM.

Architecture:
    - Domain layer protocol (port)
    - Infrastructure adapter: ghmcp/infrastructure/security/encryption_service.py
    - Used by the CredentialStore before tokens reach storage
"""

from typing import Protocol

from ghmcp.core.result import Result
from ghmcp.domain.errors import EncryptionError


class EncryptionProtocol(Protocol):
    """Protocol for encryption/decryption operations.

    Ciphertext is text so it can live in ordinary TEXT columns. Two
    encryptions of the same plaintext never produce the same ciphertext.
    """

    def encrypt(self, plaintext: str) -> Result[str, EncryptionError]:
        """Encrypt a token.

        Args:
            plaintext: Token to protect.

        Returns:
            Success(ciphertext) or Failure(EncryptionError).
        """
        ...

    def decrypt(self, ciphertext: str) -> Result[str, EncryptionError]:
        """Decrypt a token produced by encrypt().

        Args:
            ciphertext: Output of encrypt().

        Returns:
            Success(plaintext) or Failure(DecryptionError) on a wrong key,
            tampering or malformed input.
        """
        ...
