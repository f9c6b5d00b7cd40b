"""Application services.

Each service owns one concern of the server and talks to storage only
through the ports in ghmcp.domain.protocols.

Usage:
    from ghmcp.application.services import SessionManager, RateLimiter
"""

from ghmcp.application.services.audit_logger import AuditLogger
from ghmcp.application.services.credential_store import CredentialStore
from ghmcp.application.services.csrf_token_manager import CsrfTokenManager
from ghmcp.application.services.maintenance import (
    MaintenanceReport,
    MaintenanceScheduler,
    MaintenanceService,
)
from ghmcp.application.services.oauth_login_flow import (
    LoginResult,
    LoginStart,
    OAuthLoginFlow,
)
from ghmcp.application.services.rate_limiter import RateLimiter
from ghmcp.application.services.session_manager import SessionManager
from ghmcp.application.services.user_directory import UserDirectory
from ghmcp.application.services.workflow_state_tracker import WorkflowStateTracker

__all__ = [
    "AuditLogger",
    "CredentialStore",
    "CsrfTokenManager",
    "LoginResult",
    "LoginStart",
    "MaintenanceReport",
    "MaintenanceScheduler",
    "MaintenanceService",
    "OAuthLoginFlow",
    "RateLimiter",
    "SessionManager",
    "UserDirectory",
    "WorkflowStateTracker",
]
