"""Audit action types for security monitoring.

The audit log's `action` column is free-form text, but the actions the
server itself records are enumerated here so they stay consistent across
components. Callers may still pass plain strings for ad-hoc actions.

Categories:
    - Authentication: login, logout, sessions
    - Credentials: GitHub token issue/read/refresh
    - Abuse: rate limit rejections
    - Workflows: push, scan_tasks, merge command flows

Usage:
    from ghmcp.domain.enums import AuditAction

    await audit_logger.record(
        action=AuditAction.LOGIN,
        user_id=user_id,
        resource="session",
    )
"""

from enum import Enum


class AuditAction(str, Enum):
    """Audit action verbs recorded by the server.

    String Enum:
        Inherits from str for easy serialization and database storage.
        Values are snake_case strings for consistency.
    """

    # =========================================================================
    # Authentication
    # =========================================================================
    LOGIN = "login"
    LOGIN_FAILED = "login_failed"
    LOGOUT = "logout"
    SESSION_CREATED = "session_created"
    SESSION_REVOKED = "session_revoked"

    # =========================================================================
    # Credentials
    # =========================================================================
    TOKEN_ISSUED = "token_issued"
    TOKEN_READ = "token_read"
    TOKEN_REFRESHED = "token_refreshed"

    # =========================================================================
    # Abuse
    # =========================================================================
    RATE_LIMITED = "rate_limited"

    # =========================================================================
    # Workflows
    # =========================================================================
    PUSH = "push"
    SCAN_TASKS = "scan_tasks"
    MERGE = "merge"
    WORKFLOW_STATE_UPDATED = "workflow_state_updated"
