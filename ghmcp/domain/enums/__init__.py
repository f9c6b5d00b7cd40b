"""Domain enums package.

Usage:
    from ghmcp.domain.enums import AuditAction, WorkflowType
"""

from ghmcp.domain.enums.audit_action import AuditAction
from ghmcp.domain.enums.workflow_type import WorkflowStatus, WorkflowType

__all__ = ["AuditAction", "WorkflowStatus", "WorkflowType"]
