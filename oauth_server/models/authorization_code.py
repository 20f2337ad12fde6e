"""Authorization Code model"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from oauth_server.models.database import Base


class AuthorizationCode(Base):
    """Single-use code linking a user's login to one client"""

    __tablename__ = "oauth_authorization_codes"

    # Primary key
    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    # Code identification (SHA-256 hash of the issued code)
    code_hash: Mapped[str] = mapped_column(
        String(64),
        unique=True,
        nullable=False,
        index=True,
        comment="SHA-256 hash of the authorization code",
    )

    # Relationships
    client_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("oauth_clients.client_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # Redirect URI presented when the code was issued
    redirect_uri: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    # Expiration
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<AuthorizationCode(id={self.id}, client_id={self.client_id}, user_id={self.user_id})>"
