"""Rate limit rule value objects.

Immutable configuration for fixed-window rate limiting. A rule says how
many requests one client address may make to one endpoint inside each
non-overlapping time bucket of `window_seconds`.

Usage:
    from ghmcp.domain.value_objects import RateLimitConfig, RateLimitRule

    config = RateLimitConfig(
        default_rule=RateLimitRule(limit=60, window_seconds=60),
        rules={"push": RateLimitRule(limit=3, window_seconds=60)},
    )
    rule = config.rule_for("push")
"""

import math
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitRule:
    """Fixed-window rate limit rule (value object).

    Fixed Window Algorithm:
        - Time is cut into buckets aligned to the Unix epoch
        - window_start = floor(now / window_seconds) * window_seconds
        - Each request increments the counter of its bucket
        - A request is rejected once the counter exceeds `limit`
        - The counter starts over at the next bucket boundary

    Attributes:
        limit: Requests allowed per window. Typical: 3-100.
        window_seconds: Bucket size in seconds. Default 60.
        enabled: Whether this rule is active. Disabled rules always allow.

    Raises:
        ValueError: If limit <= 0 or window_seconds <= 0.
    """

    limit: int
    window_seconds: int = 60
    enabled: bool = True

    def __post_init__(self) -> None:
        """Validate rule configuration after initialization.

        Raises:
            ValueError: If any numeric field is invalid.
        """
        if self.limit <= 0:
            raise ValueError(f"limit must be positive, got {self.limit}")
        if self.window_seconds <= 0:
            raise ValueError(
                f"window_seconds must be positive, got {self.window_seconds}"
            )

    def window_start(self, now: datetime) -> datetime:
        """Start of the fixed window that contains `now`.

        Args:
            now: Timezone-aware instant.

        Returns:
            datetime: UTC start of the bucket.

        Example:
            rule = RateLimitRule(limit=3, window_seconds=60)
            rule.window_start(datetime(2024, 1, 1, 12, 0, 42, tzinfo=UTC))
            # datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)
        """
        epoch_seconds = int(now.timestamp())
        bucket = epoch_seconds - (epoch_seconds % self.window_seconds)
        return datetime.fromtimestamp(bucket, tz=UTC)

    def seconds_until_reset(self, now: datetime) -> int:
        """Whole seconds until the next window begins (at least 1)."""
        window_end = self.window_start(now) + timedelta(seconds=self.window_seconds)
        return max(1, math.ceil((window_end - now).total_seconds()))


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitResult:
    """Result of an allowed rate limit check.

    Attributes:
        limit: Requests allowed per window (X-RateLimit-Limit).
        remaining: Requests left in the current window (X-RateLimit-Remaining).
        reset_seconds: Seconds until the window resets (X-RateLimit-Reset).
    """

    limit: int
    remaining: int
    reset_seconds: int


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitConfig:
    """Endpoint to rule mapping built once at startup.

    Attributes:
        default_rule: Rule for endpoints without an override.
        rules: Per-endpoint overrides keyed by endpoint name.
    """

    default_rule: RateLimitRule
    rules: dict[str, RateLimitRule] = field(default_factory=dict)

    def rule_for(self, endpoint: str) -> RateLimitRule:
        """Rule that applies to `endpoint`."""
        return self.rules.get(endpoint, self.default_rule)

    @property
    def longest_window(self) -> timedelta:
        """Largest window of any configured rule.

        Windows that started more than this long ago are never read again.
        """
        seconds = max(
            [self.default_rule.window_seconds]
            + [rule.window_seconds for rule in self.rules.values()]
        )
        return timedelta(seconds=seconds)
