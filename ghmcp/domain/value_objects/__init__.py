"""Domain value objects.

Usage:
    from ghmcp.domain.value_objects import ClientMeta, RateLimitRule
"""

from ghmcp.domain.value_objects.client_meta import ClientMeta
from ghmcp.domain.value_objects.rate_limit_rule import (
    RateLimitConfig,
    RateLimitResult,
    RateLimitRule,
)

__all__ = ["ClientMeta", "RateLimitConfig", "RateLimitResult", "RateLimitRule"]
