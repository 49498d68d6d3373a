"""
DelipuCash Backend: ResponseReply SQLAlchemy Model
====================================================

What:  ORM model for `response_replies`: threaded replies under a response.
Lifecycle:
    Append-only. Created by ReplyService.submit_reply(); never edited or
    deleted by this service. A user may post any number of replies.

Index on (response_id, created_at):
    Serves both access paths: "list this response's replies oldest first"
    and "count this response's replies".
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from delipucash.database import Base
from delipucash.models.app_user import AppUser


class ResponseReply(Base):
    """A reply posted under a response."""

    __tablename__ = "response_replies"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    response_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("responses.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("app_users.id", ondelete="CASCADE"),
        nullable=False,
    )

    # Stored trimmed; never blank
    reply_text: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    # Author snapshot for the API payload. One-directional: AppUser has no
    # `replies` collection, so assigning `reply.user` never triggers a load.
    user: Mapped[AppUser] = relationship(AppUser, lazy="raise")

    __table_args__ = (
        Index("idx_response_replies_response_created", "response_id", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<ResponseReply(id={self.id}, response_id={self.response_id}, "
            f"created_at='{self.created_at}')>"
        )
