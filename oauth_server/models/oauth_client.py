"""OAuth Client model"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from oauth_server.models.database import Base


class OAuthClient(Base):
    """Registered OAuth consumer allowed to run the authorization code flow"""

    __tablename__ = "oauth_clients"

    # Primary key
    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    # Client identification
    client_id: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    client_secret_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # The only redirect target codes may be delivered to
    redirect_uri: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    # Presentation strings for the external login UI
    login_title: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    login_form: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    # Status
    enabled: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
        index=True,
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<OAuthClient(id={self.id}, client_id={self.client_id}, enabled={self.enabled})>"
