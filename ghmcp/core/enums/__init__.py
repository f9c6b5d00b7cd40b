"""Core enums package.

Exports all core-level enums for convenient importing.

Usage:
    from ghmcp.core.enums import ErrorCode, Environment
"""

from ghmcp.core.enums.environment import Environment
from ghmcp.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
