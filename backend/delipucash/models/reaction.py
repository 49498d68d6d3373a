"""
DelipuCash Backend: Reaction SQLAlchemy Models
================================================

What:  ORM models for `response_likes` and `response_dislikes`.
Why:   A row's existence IS the reaction: "this user currently likes (or
       dislikes) this response". Removing the reaction deletes the row.
How:   Both tables share one shape (ReactionMixin) and each carries a unique
       constraint on (user_id, response_id).

Invariant (maintained by ReactionService, not by the schema):
    For any (user_id, response_id) pair, at most one of the two tables holds
    a row. The unique constraints only stop duplicates WITHIN a table; they
    are the last line of defense when two identical requests race.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from delipucash.database import Base


class ReactionMixin:
    """Columns shared by likes and dislikes."""

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("app_users.id", ondelete="CASCADE"),
        nullable=False,
    )
    response_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("responses.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__}(user_id={self.user_id}, "
            f"response_id={self.response_id})>"
        )


class ResponseLike(ReactionMixin, Base):
    """A user's like on a response."""

    __tablename__ = "response_likes"
    __table_args__ = (
        UniqueConstraint("user_id", "response_id", name="uq_response_likes_user_response"),
        # Count queries filter on response_id alone
        Index("idx_response_likes_response_id", "response_id"),
    )


class ResponseDislike(ReactionMixin, Base):
    """A user's dislike on a response."""

    __tablename__ = "response_dislikes"
    __table_args__ = (
        UniqueConstraint("user_id", "response_id", name="uq_response_dislikes_user_response"),
        Index("idx_response_dislikes_response_id", "response_id"),
    )
