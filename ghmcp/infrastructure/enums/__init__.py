"""Infrastructure enums package.

Usage:
    from ghmcp.infrastructure.enums import InfrastructureErrorCode
"""

from ghmcp.infrastructure.enums.infrastructure_error_code import (
    InfrastructureErrorCode,
)

__all__ = ["InfrastructureErrorCode"]
