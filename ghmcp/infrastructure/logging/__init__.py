"""Logging adapters implementing LoggerProtocol."""

from ghmcp.infrastructure.logging.console_adapter import ConsoleAdapter

__all__ = ["ConsoleAdapter"]
