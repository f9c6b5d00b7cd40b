"""CSRF token database model (single-use OAuth state)."""

from datetime import datetime

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from ghmcp.infrastructure.persistence.base import BaseModel
from ghmcp.infrastructure.persistence.types import UTCDateTime


class CsrfToken(BaseModel):
    """OAuth state token, deleted when consumed.

    Fields:
        token: 64 hex characters (unique)
        expires_at: Expiry (indexed for the maintenance purge)
    """

    __tablename__ = "csrf_tokens"

    token: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)

    expires_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        index=True,
    )
