"""Audit adapters implementing AuditProtocol."""

from ghmcp.infrastructure.audit.database_adapter import DatabaseAuditAdapter

__all__ = ["DatabaseAuditAdapter"]
