"""Security adapters: token encryption."""

from ghmcp.infrastructure.security.encryption_service import EncryptionService

__all__ = ["EncryptionService"]
