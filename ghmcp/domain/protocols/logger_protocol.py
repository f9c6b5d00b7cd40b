"""LoggerProtocol definition for structured logging.

Backend-agnostic port for structured logs. Implementations MUST keep
logs structured (message plus key-value context) and MUST NOT receive
secrets: no access tokens, refresh tokens, session tokens or the
encryption key.

Usage:
    from ghmcp.core.container import get_logger

    logger = get_logger()
    logger.info("session_created", user_id=user_id)

    scoped = logger.bind(component="rate_limiter")
    scoped.warning("rate_limit_exceeded", endpoint="push")
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Event name (avoid f-strings; use context).
            error: Optional exception; implementations add error_type and
                error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message for failures needing attention."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return new logger with permanently bound context.

        The original logger instance remains unchanged.
        """
        ...
