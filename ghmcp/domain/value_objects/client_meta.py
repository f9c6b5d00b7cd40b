"""Request metadata captured alongside sessions and audit entries."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class ClientMeta:
    """Where a request came from.

    Attributes:
        ip_address: Client address (IPv4 or IPv6 string), if known.
        user_agent: Client user agent string, if sent.
    """

    ip_address: str | None = None
    user_agent: str | None = None

    @classmethod
    def unknown(cls) -> "ClientMeta":
        """Metadata for system actions with no inbound request."""
        return cls()
