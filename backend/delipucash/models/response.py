"""
DelipuCash Backend: Response SQLAlchemy Model
===============================================

What:  ORM model for the `responses` table: a user's answer to a question.
Why:   The anchor entity of the interaction engine. Likes, dislikes and
       replies all point at a Response.
Who:   Created by the question/answer subsystem; immutable here.

Table Design Rationale:
    - No like/dislike/reply counters: counts are derived from the reaction
      and reply tables on every read, so they can never drift.
    - question_id is an opaque reference. The question module is a separate
      subsystem, so no foreign key is declared.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from delipucash.database import Base
from delipucash.models.app_user import AppUser


class Response(Base):
    """
    A response posted by a user.

    Query Patterns:
        - Existence check: SELECT ... WHERE id = :id (primary key)
        - Aggregate view: same, with the author eagerly loaded (selectinload)
    """

    __tablename__ = "responses"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    # The author. Exposed on the wire as `userId` plus an embedded `user`.
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("app_users.id", ondelete="CASCADE"),
        nullable=False,
    )

    question_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    response_text: Mapped[str] = mapped_column(Text, nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    # lazy="raise": async sessions cannot lazy-load, so every read path must
    # ask for the author explicitly (selectinload)
    user: Mapped[AppUser] = relationship(AppUser, lazy="raise")

    __table_args__ = (
        Index("idx_responses_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Response(id={self.id}, user_id={self.user_id})>"
