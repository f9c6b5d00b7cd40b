"""GitHub MCP Server credential, session and audit core."""

__version__ = "0.1.0"
