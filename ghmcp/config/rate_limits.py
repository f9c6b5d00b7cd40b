"""Endpoint rate limit rules for the MCP server.

Every endpoint not listed here uses the default rule built from
settings (RATE_LIMIT_REQUESTS_PER_MINUTE per RATE_LIMIT_WINDOW_SECONDS).

Usage:
    from ghmcp.config.rate_limits import build_rate_limit_config

    config = build_rate_limit_config(settings)
    rule = config.rule_for("push")
"""

from ghmcp.core.config import Settings
from ghmcp.domain.value_objects import RateLimitConfig, RateLimitRule

# =============================================================================
# Endpoint overrides
# =============================================================================
#
# Workflow commands write to GitHub on the user's behalf and get tight
# per-minute limits. OAuth endpoints are unauthenticated and limited by
# address to slow down state-token guessing.
#
# =============================================================================

RATE_LIMIT_RULES: dict[str, RateLimitRule] = {
    # Workflow commands
    "push": RateLimitRule(limit=3, window_seconds=60),
    "merge": RateLimitRule(limit=3, window_seconds=60),
    "scan_tasks": RateLimitRule(limit=10, window_seconds=60),
    # OAuth flow
    "auth_start": RateLimitRule(limit=10, window_seconds=60),
    "auth_callback": RateLimitRule(limit=10, window_seconds=60),
    "token_refresh": RateLimitRule(limit=5, window_seconds=60),
}


def build_rate_limit_config(settings: Settings) -> RateLimitConfig:
    """Combine the settings default with the endpoint overrides."""
    return RateLimitConfig(
        default_rule=RateLimitRule(
            limit=settings.rate_limit_requests_per_minute,
            window_seconds=settings.rate_limit_window_seconds,
        ),
        rules=dict(RATE_LIMIT_RULES),
    )
