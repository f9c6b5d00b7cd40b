"""Repository implementations (adapters) for the persistence ports.

Each repository receives the AsyncSession of the current transaction and
never commits on its own; SqlUnitOfWork owns the transaction boundary.
"""

from ghmcp.infrastructure.persistence.repositories.credential_repository import (
    CredentialRepository,
)
from ghmcp.infrastructure.persistence.repositories.csrf_token_repository import (
    CsrfTokenRepository,
)
from ghmcp.infrastructure.persistence.repositories.rate_limit_repository import (
    RateLimitRepository,
)
from ghmcp.infrastructure.persistence.repositories.session_repository import (
    SessionRepository,
)
from ghmcp.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)
from ghmcp.infrastructure.persistence.repositories.workflow_state_repository import (
    WorkflowStateRepository,
)

__all__ = [
    "CredentialRepository",
    "CsrfTokenRepository",
    "RateLimitRepository",
    "SessionRepository",
    "UserRepository",
    "WorkflowStateRepository",
]
