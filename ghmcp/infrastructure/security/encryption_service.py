"""Encryption service for stored GitHub tokens.

Provides AES-256-GCM encryption for the access and refresh tokens kept
in github_tokens.

Security Properties:
    - Confidentiality: Only holder of key can decrypt
    - Integrity: Tampering is detected via GCM authentication tag
    - Uniqueness: Random IV per encryption prevents pattern analysis

Architecture:
    - Infrastructure adapter (catches cryptography exceptions)
    - Returns Result types (railway-oriented programming)
    - Uses domain error codes (ErrorCode enum)
"""

import base64
import binascii
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ghmcp.core.constants import AES_KEY_LENGTH
from ghmcp.core.enums import ErrorCode
from ghmcp.core.result import Failure, Result, Success
from ghmcp.domain.errors import DecryptionError, EncryptionError, EncryptionKeyError


class EncryptionService:
    """AES-256-GCM encryption service for tokens.

    Format:
        urlsafe_base64( IV (12 bytes) || ciphertext || auth_tag (16 bytes) )

    Text output so ciphertext fits the TEXT token columns unchanged.

    Usage:
        >>> service = EncryptionService.create(settings.encryption_key.encode())
        >>> match service:
        ...     case Success(value=svc):
        ...         result = svc.encrypt("gho_abc123")
        ...     case Failure(error=error):
        ...         ...

    Thread Safety:
        The AESGCM instance can be used concurrently.
    """

    IV_SIZE = 12  # 96 bits - NIST recommended for GCM
    MIN_ENCRYPTED_SIZE = 12 + 16  # IV + auth tag

    def __init__(self, aesgcm: AESGCM) -> None:
        """Initialize with pre-validated AESGCM instance.

        Use EncryptionService.create() factory instead of direct construction.

        Args:
            aesgcm: Pre-initialized AESGCM cipher instance.
        """
        self._aesgcm = aesgcm

    @classmethod
    def create(cls, key: bytes) -> Result["EncryptionService", EncryptionKeyError]:
        """Create encryption service with validated key.

        Args:
            key: 32-byte (256-bit) encryption key.

        Returns:
            Success(EncryptionService) if key is valid.
            Failure(EncryptionKeyError) if key is invalid.
        """
        if len(key) != AES_KEY_LENGTH:
            return Failure(
                error=EncryptionKeyError(
                    code=ErrorCode.ENCRYPTION_KEY_INVALID,
                    message=(
                        f"Encryption key must be exactly {AES_KEY_LENGTH} bytes "
                        f"(256 bits), got {len(key)} bytes"
                    ),
                    details={
                        "expected_length": str(AES_KEY_LENGTH),
                        "actual_length": str(len(key)),
                    },
                )
            )

        return Success(value=cls(AESGCM(key)))

    def encrypt(self, plaintext: str) -> Result[str, EncryptionError]:
        """Encrypt a token.

        Args:
            plaintext: Token to encrypt.

        Returns:
            Success(str) with base64 text of IV || ciphertext || tag.
            Failure(EncryptionError) if encryption fails.
        """
        try:
            data = plaintext.encode("utf-8")
        except UnicodeEncodeError as e:
            return Failure(
                error=EncryptionError(
                    code=ErrorCode.ENCRYPTION_FAILED,
                    message=f"Token is not encodable as UTF-8: {e.reason}",
                )
            )

        iv = os.urandom(self.IV_SIZE)
        ciphertext = self._aesgcm.encrypt(iv, data, associated_data=None)
        return Success(value=base64.urlsafe_b64encode(iv + ciphertext).decode("ascii"))

    def decrypt(self, ciphertext: str) -> Result[str, EncryptionError]:
        """Decrypt a token produced by encrypt().

        Args:
            ciphertext: Output of encrypt().

        Returns:
            Success(str) with the original token.
            Failure(DecryptionError) if the input is malformed, the key is
            wrong or the data was tampered with.
        """
        try:
            encrypted = base64.urlsafe_b64decode(ciphertext.encode("ascii"))
        except (binascii.Error, UnicodeEncodeError):
            return Failure(
                error=DecryptionError(
                    code=ErrorCode.DECRYPTION_FAILED,
                    message="Encrypted token is not valid base64",
                )
            )

        # Validate minimum size
        if len(encrypted) < self.MIN_ENCRYPTED_SIZE:
            return Failure(
                error=DecryptionError(
                    code=ErrorCode.DECRYPTION_FAILED,
                    message=(
                        f"Encrypted data too short: {len(encrypted)} bytes "
                        f"(minimum {self.MIN_ENCRYPTED_SIZE} bytes)"
                    ),
                    details={
                        "actual_length": str(len(encrypted)),
                        "minimum_length": str(self.MIN_ENCRYPTED_SIZE),
                    },
                )
            )

        iv = encrypted[: self.IV_SIZE]
        body = encrypted[self.IV_SIZE :]

        try:
            plaintext = self._aesgcm.decrypt(iv, body, associated_data=None)
        except InvalidTag:
            return Failure(
                error=DecryptionError(
                    code=ErrorCode.DECRYPTION_FAILED,
                    message="Failed to decrypt token: invalid key or tampered data",
                )
            )

        try:
            return Success(value=plaintext.decode("utf-8"))
        except UnicodeDecodeError:
            return Failure(
                error=DecryptionError(
                    code=ErrorCode.DECRYPTION_FAILED,
                    message="Decrypted token is not valid UTF-8",
                )
            )
