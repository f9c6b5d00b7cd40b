"""
Configuration management using Pydantic Settings.

This module provides type-safe, validated configuration loading from environment
variables. The process-wide encryption key and the rate-limit defaults live here
and are handed to components by the container, never read ambiently.

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables (optionally a .env file)
- Type validation via Pydantic

Usage:
    from ghmcp.core.config import get_settings

    settings = get_settings()
    db_url = settings.database_url

    if settings.is_development:
        # Dev-specific behavior
"""

from datetime import timedelta
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ghmcp.core.constants import AES_KEY_LENGTH
from ghmcp.core.enums import Environment


class Settings(BaseSettings):
    """
    Main application settings (flat structure).

    Configuration precedence:
        1. Environment variables
        2. .env file in the working directory
        3. Default values (only for non-sensitive config)
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Database configuration
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/github-mcp-server.db",
        description="Database connection URL (sqlite+aiosqlite://... or postgresql+asyncpg://...)",
    )
    db_echo: bool = Field(
        default=False,
        description="Log all SQL queries (useful for debugging, disabled in production)",
    )
    db_command_timeout: float = Field(
        default=30.0,
        description="Seconds before a storage call is abandoned and reported as StorageError",
    )

    # Security configuration
    encryption_key: str = Field(
        description="Encryption key for stored GitHub tokens (32 characters for AES-256)",
    )
    session_timeout_hours: int = Field(
        default=24,
        description="Lifetime of a bearer session token in hours",
    )
    csrf_token_ttl_minutes: int = Field(
        default=10,
        description="Lifetime of an OAuth CSRF state token in minutes",
    )
    max_token_age_days: int = Field(
        default=30,
        description="Default lifetime of a stored GitHub credential in days",
    )

    # Audit configuration
    audit_log_enabled: bool = Field(
        default=True,
        description="Record security-relevant actions in audit_logs",
    )
    audit_retention_days: int = Field(
        default=90,
        description="Audit rows older than this are purged by maintenance",
    )

    # Rate limit configuration
    rate_limit_requests_per_minute: int = Field(
        default=60,
        description="Default per-address request limit for endpoints without an override",
    )
    rate_limit_window_seconds: int = Field(
        default=60,
        description="Fixed window size of the default rate limit rule",
    )

    # Maintenance
    maintenance_interval_seconds: int = Field(
        default=3600,
        description="Interval between maintenance purge runs",
    )

    # GitHub OAuth App
    github_client_id: str = Field(
        default="",
        description="GitHub OAuth App client ID",
    )
    github_client_secret: str = Field(
        default="",
        description="GitHub OAuth App client secret",
    )
    github_redirect_uri: str = Field(
        default="https://localhost:8443/auth/github/callback",
        description="OAuth callback URL registered with the GitHub OAuth App",
    )
    github_oauth_base_url: str = Field(
        default="https://github.com",
        description="GitHub web base URL (authorize and access_token endpoints)",
    )
    github_api_base_url: str = Field(
        default="https://api.github.com",
        description="GitHub REST API base URL",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("encryption_key")
    @classmethod
    def validate_encryption_key(cls, v: str) -> str:
        """
        Validate encryption key length.

        Args:
            v: Encryption key string.

        Returns:
            str: Validated key.

        Raises:
            ValueError: If the key is not exactly 32 bytes when UTF-8 encoded.
        """
        if len(v.encode("utf-8")) != AES_KEY_LENGTH:
            raise ValueError(
                f"encryption_key must be exactly {AES_KEY_LENGTH} bytes for AES-256"
            )
        return v

    @field_validator(
        "session_timeout_hours",
        "csrf_token_ttl_minutes",
        "max_token_age_days",
        "audit_retention_days",
        "rate_limit_requests_per_minute",
        "rate_limit_window_seconds",
        "maintenance_interval_seconds",
    )
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """
        Reject zero and negative durations and limits.

        Args:
            v: Configured value.

        Returns:
            int: Validated value.

        Raises:
            ValueError: If value is not positive.
        """
        if v <= 0:
            raise ValueError("value must be positive")
        return v

    @field_validator("github_oauth_base_url", "github_api_base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """
        Remove trailing slashes from URLs.

        Args:
            v: URL string.

        Returns:
            str: URL without trailing slash.
        """
        return v.rstrip("/")

    # Derived durations
    @property
    def session_ttl(self) -> timedelta:
        """Default session lifetime."""
        return timedelta(hours=self.session_timeout_hours)

    @property
    def csrf_token_ttl(self) -> timedelta:
        """CSRF state token lifetime."""
        return timedelta(minutes=self.csrf_token_ttl_minutes)

    @property
    def credential_ttl(self) -> timedelta:
        """Default credential lifetime when GitHub does not report one."""
        return timedelta(days=self.max_token_age_days)

    @property
    def audit_retention(self) -> timedelta:
        """Audit retention window."""
        return timedelta(days=self.audit_retention_days)

    # Convenience properties for environment checks
    @property
    def is_development(self) -> bool:
        """
        Check if running in development environment.

        Returns:
            bool: True if environment is DEVELOPMENT, False otherwise.
        """
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.

        Returns:
            bool: True if environment is PRODUCTION, False otherwise.
        """
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Loaded once per process; the container passes it on to every component.

    Returns:
        Settings: Application settings loaded from the environment.
    """
    return Settings()  # type: ignore[call-arg]
