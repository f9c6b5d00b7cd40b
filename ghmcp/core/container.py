# mypy: disable-error-code="arg-type"
"""Composition root.

Builds every component from one Settings instance. Adapters are chosen
here and nowhere else; application services only ever see protocols.

Application-scoped singletons:
- Logging (structlog console, JSON outside development)
- Database (async SQLAlchemy engine)
- Encryption (AES-256-GCM)

Everything else is assembled by build_services(), which the server's
entry point calls once at startup.

Usage:
    from ghmcp.core.container import build_services

    services = build_services()
    scheduler = services.maintenance_scheduler
    scheduler.start()
    ...
    await services.aclose()
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

from ghmcp.core.config import Settings, get_settings
from ghmcp.core.enums import Environment

if TYPE_CHECKING:
    from ghmcp.application.services import (
        AuditLogger,
        CredentialStore,
        CsrfTokenManager,
        MaintenanceScheduler,
        MaintenanceService,
        OAuthLoginFlow,
        RateLimiter,
        SessionManager,
        UserDirectory,
        WorkflowStateTracker,
    )
    from ghmcp.domain.protocols import LoggerProtocol
    from ghmcp.infrastructure.persistence import Database
    from ghmcp.infrastructure.security import EncryptionService


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from ghmcp.infrastructure.logging import ConsoleAdapter

    settings = get_settings()
    return ConsoleAdapter(
        use_json=settings.environment != Environment.DEVELOPMENT,
        level=settings.log_level,
    )


@lru_cache()
def get_database() -> "Database":
    """Get database manager singleton (app-scoped).

    Returns:
        Database manager instance.
    """
    return _database(get_settings())


@lru_cache()
def get_encryption_service() -> "EncryptionService":
    """Get encryption service singleton (app-scoped).

    Uses settings.encryption_key for AES-256-GCM encryption.

    Raises:
        RuntimeError: If encryption key is invalid.
    """
    return _encryption_service(get_settings())


# ============================================================================
# Service Graph
# ============================================================================


@dataclass(frozen=True, slots=True, kw_only=True)
class Services:
    """Every component of the server, wired together.

    Attributes:
        database: Shared store (owns the connection pool).
        credential_store: Encrypted GitHub tokens.
        csrf_tokens: OAuth state tokens.
        sessions: Bearer sessions.
        rate_limiter: Fixed-window limiter.
        audit_logger: Security trail.
        workflow_states: Per-branch workflow state.
        users: User directory.
        oauth: GitHub OAuth login flow.
        maintenance: Purge job.
        maintenance_scheduler: Periodic runner for the purge job.
    """

    database: "Database"
    credential_store: "CredentialStore"
    csrf_tokens: "CsrfTokenManager"
    sessions: "SessionManager"
    rate_limiter: "RateLimiter"
    audit_logger: "AuditLogger"
    workflow_states: "WorkflowStateTracker"
    users: "UserDirectory"
    oauth: "OAuthLoginFlow"
    maintenance: "MaintenanceService"
    maintenance_scheduler: "MaintenanceScheduler"

    async def aclose(self) -> None:
        """Stop background work and release the connection pool."""
        await self.maintenance_scheduler.stop()
        await self.database.close()


def build_services(
    settings: Settings | None = None,
    *,
    logger: "LoggerProtocol | None" = None,
    database: "Database | None" = None,
) -> Services:
    """Assemble the service graph.

    Args:
        settings: Configuration. When omitted, get_settings() is used and
            the database and encryption singletons are shared.
        logger: Logger override (tests); defaults to get_logger().
        database: Database override (tests); defaults to get_database(),
            or a new Database when explicit settings are given.

    Returns:
        Services: Fully wired components.

    Raises:
        RuntimeError: If the encryption key is invalid.
    """
    from ghmcp.application.services import (
        AuditLogger,
        CredentialStore,
        CsrfTokenManager,
        MaintenanceScheduler,
        MaintenanceService,
        OAuthLoginFlow,
        RateLimiter,
        SessionManager,
        UserDirectory,
        WorkflowStateTracker,
    )
    from ghmcp.config.rate_limits import build_rate_limit_config
    from ghmcp.infrastructure.audit import DatabaseAuditAdapter
    from ghmcp.infrastructure.github import GitHubOAuthClient
    from ghmcp.infrastructure.persistence import SqlUnitOfWork

    logger = logger or get_logger()
    if settings is None:
        settings = get_settings()
        database = database or get_database()
        encryption = get_encryption_service()
    else:
        database = database or _database(settings)
        encryption = _encryption_service(settings)
    rate_limit_config = build_rate_limit_config(settings)

    uow = SqlUnitOfWork(database, logger, timeout=settings.db_command_timeout)
    audit_logger = AuditLogger(
        DatabaseAuditAdapter(database),
        logger,
        enabled=settings.audit_log_enabled,
    )
    csrf_tokens = CsrfTokenManager(uow, logger, ttl=settings.csrf_token_ttl)
    sessions = SessionManager(uow, logger, default_ttl=settings.session_ttl)
    credential_store = CredentialStore(
        uow, encryption, logger, default_ttl=settings.credential_ttl
    )
    users = UserDirectory(uow, logger)
    github = GitHubOAuthClient(
        client_id=settings.github_client_id,
        client_secret=settings.github_client_secret,
        redirect_uri=settings.github_redirect_uri,
        logger=logger,
        oauth_base_url=settings.github_oauth_base_url,
        api_base_url=settings.github_api_base_url,
    )
    maintenance = MaintenanceService(
        uow,
        audit_logger,
        logger,
        audit_retention=settings.audit_retention,
        rate_limit_window=rate_limit_config.longest_window,
    )

    return Services(
        database=database,
        credential_store=credential_store,
        csrf_tokens=csrf_tokens,
        sessions=sessions,
        rate_limiter=RateLimiter(uow, rate_limit_config, logger),
        audit_logger=audit_logger,
        workflow_states=WorkflowStateTracker(uow, logger),
        users=users,
        oauth=OAuthLoginFlow(
            csrf=csrf_tokens,
            github=github,
            users=users,
            credentials=credential_store,
            sessions=sessions,
            audit=audit_logger,
            logger=logger,
        ),
        maintenance=maintenance,
        maintenance_scheduler=MaintenanceScheduler(
            maintenance,
            logger,
            interval_seconds=settings.maintenance_interval_seconds,
        ),
    )


def _database(settings: Settings) -> "Database":
    from ghmcp.infrastructure.persistence import Database

    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
        command_timeout=settings.db_command_timeout,
    )


def _encryption_service(settings: Settings) -> "EncryptionService":
    from ghmcp.core.result import Failure, Success
    from ghmcp.infrastructure.security import EncryptionService

    result = EncryptionService.create(settings.encryption_key.encode("utf-8"))

    match result:
        case Success(value=service):
            return service
        case Failure(error=err):
            raise RuntimeError(
                f"Failed to initialize encryption service: {err.message}"
            )
