"""Database models for persistence layer.

SQLAlchemy models mapping to the server's tables. These are
infrastructure concerns and are never imported by the domain layer.

Models Organization:
    - user.py: users (identity anchor)
    - github_token.py: github_tokens (encrypted credentials)
    - csrf_token.py: csrf_tokens
    - session.py: sessions
    - audit_log.py: audit_logs (append-only)
    - rate_limit_window.py: rate_limits
    - workflow_state.py: workflow_states
"""

from ghmcp.infrastructure.persistence.models.audit_log import AuditLog
from ghmcp.infrastructure.persistence.models.csrf_token import CsrfToken
from ghmcp.infrastructure.persistence.models.github_token import GitHubToken
from ghmcp.infrastructure.persistence.models.rate_limit_window import (
    RateLimitWindow,
)
from ghmcp.infrastructure.persistence.models.session import Session
from ghmcp.infrastructure.persistence.models.user import User
from ghmcp.infrastructure.persistence.models.workflow_state import WorkflowState

__all__ = [
    "AuditLog",
    "CsrfToken",
    "GitHubToken",
    "RateLimitWindow",
    "Session",
    "User",
    "WorkflowState",
]
