"""Encryption error types for stored GitHub tokens.

Usage:
    from ghmcp.domain.errors import DecryptionError

    match encryption.decrypt(blob):
        case Failure(error=DecryptionError()):
            # Key rotated or data tampered: user must log in again
            ...
"""

from dataclasses import dataclass

from ghmcp.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class EncryptionError(DomainError):
    """Base encryption error.

    Used when encryption or decryption fails.
    Does NOT inherit from Exception - used in Result types.
    """

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class EncryptionKeyError(EncryptionError):
    """Invalid encryption key (wrong length, etc.)."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class DecryptionError(EncryptionError):
    """Decryption failure.

    Occurs when:
    - The encryption key was rotated since the value was stored
    - Data has been tampered with
    - Invalid encrypted data format
    """

    pass
