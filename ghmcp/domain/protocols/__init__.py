"""Domain protocols (ports) package.

Infrastructure adapters implement these protocols without inheritance.

Usage:
    from ghmcp.domain.protocols import UnitOfWorkProtocol, Repositories
    from ghmcp.domain.protocols import SessionData, WorkflowStateData
"""

# Service protocols
from ghmcp.domain.protocols.audit_protocol import AuditEntry, AuditProtocol
from ghmcp.domain.protocols.encryption_protocol import EncryptionProtocol
from ghmcp.domain.protocols.github_oauth_protocol import (
    GitHubOAuthProtocol,
    GitHubUser,
    OAuthTokens,
)
from ghmcp.domain.protocols.logger_protocol import LoggerProtocol
from ghmcp.domain.protocols.unit_of_work import Repositories, UnitOfWorkProtocol

# Repository protocols
from ghmcp.domain.protocols.credential_repository import (
    Credential,
    CredentialRecord,
    CredentialRepository,
)
from ghmcp.domain.protocols.csrf_token_repository import CsrfTokenRepository
from ghmcp.domain.protocols.rate_limit_repository import RateLimitRepository
from ghmcp.domain.protocols.session_repository import SessionData, SessionRepository
from ghmcp.domain.protocols.user_repository import UserData, UserRepository
from ghmcp.domain.protocols.workflow_state_repository import (
    WorkflowStateData,
    WorkflowStateRepository,
)

__all__ = [
    # Service protocols
    "AuditEntry",
    "AuditProtocol",
    "EncryptionProtocol",
    "GitHubOAuthProtocol",
    "GitHubUser",
    "LoggerProtocol",
    "OAuthTokens",
    "Repositories",
    "UnitOfWorkProtocol",
    # Repository protocols
    "Credential",
    "CredentialRecord",
    "CredentialRepository",
    "CsrfTokenRepository",
    "RateLimitRepository",
    "SessionData",
    "SessionRepository",
    "UserData",
    "UserRepository",
    "WorkflowStateData",
    "WorkflowStateRepository",
]
