"""Rate limit window database model (fixed-window counter)."""

from datetime import datetime

from sqlalchemy import Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ghmcp.infrastructure.persistence.base import BaseMutableModel
from ghmcp.infrastructure.persistence.types import UTCDateTime


class RateLimitWindow(BaseMutableModel):
    """Request counter for one (address, endpoint, window start).

    Fields:
        ip_address: Client address
        endpoint: Logical endpoint name
        window_start: Start of the fixed window
        request_count: Requests seen in the window (starts at 1)
    """

    __tablename__ = "rate_limits"

    ip_address: Mapped[str] = mapped_column(String(45), nullable=False)

    endpoint: Mapped[str] = mapped_column(String(100), nullable=False)

    window_start: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    request_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        server_default="1",
    )

    __table_args__ = (
        UniqueConstraint("ip_address", "endpoint", "window_start"),
        Index("ix_rate_limits_ip_address_endpoint", "ip_address", "endpoint"),
    )
