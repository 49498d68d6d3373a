"""
DelipuCash Backend: AppUser SQLAlchemy Model
==============================================

What:  ORM model for the `app_users` table.
Why:   Every reaction and reply references an existing user; replies and
       responses embed the user's minimal public profile.
Who:   Owned by the auth/user subsystem. The interaction engine only
       existence-checks and reads it.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, String, text
from sqlalchemy.orm import Mapped, mapped_column

from delipucash.database import Base


class AppUser(Base):
    """A registered mobile app user (read-only from this service)."""

    __tablename__ = "app_users"

    # Opaque server-assigned identifier (UUID4 text)
    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    email: Mapped[Optional[str]] = mapped_column(String(255), unique=True, nullable=True)

    first_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<AppUser(id={self.id}, name='{self.first_name} {self.last_name}')>"
