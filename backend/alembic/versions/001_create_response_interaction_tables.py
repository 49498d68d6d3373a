"""Create response interaction tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates app_users, responses, response_likes, response_dislikes and
       response_replies.
How:   String(36) UUID text keys (generated by the application), timezone-aware
       timestamps, ON DELETE CASCADE from every child table.

The two unique constraints on (user_id, response_id) are what make
concurrent like/dislike calls safe; never drop them in a later revision.

Rollback: downgrade() drops all five tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.TIMESTAMP(timezone=True),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
    )


def _reaction_table(name: str) -> None:
    op.create_table(
        name,
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column(
            "user_id",
            sa.String(36),
            sa.ForeignKey("app_users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "response_id",
            sa.String(36),
            sa.ForeignKey("responses.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "response_id", name=f"uq_{name}_user_response"),
    )
    op.create_index(f"idx_{name}_response_id", name, ["response_id"])


def upgrade() -> None:
    op.create_table(
        "app_users",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("first_name", sa.String(100), nullable=False, server_default=sa.text("''")),
        sa.Column("last_name", sa.String(100), nullable=False, server_default=sa.text("''")),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "responses",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column(
            "user_id",
            sa.String(36),
            sa.ForeignKey("app_users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("question_id", sa.String(36), nullable=True),
        sa.Column("response_text", sa.Text(), nullable=False, server_default=sa.text("''")),
        _created_at(),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_responses_user_id", "responses", ["user_id"])

    _reaction_table("response_likes")
    _reaction_table("response_dislikes")

    op.create_table(
        "response_replies",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column(
            "response_id",
            sa.String(36),
            sa.ForeignKey("responses.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "user_id",
            sa.String(36),
            sa.ForeignKey("app_users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("reply_text", sa.Text(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    # Thread reads: WHERE response_id = ? ORDER BY created_at
    op.create_index(
        "idx_response_replies_response_created",
        "response_replies",
        ["response_id", "created_at"],
    )


def downgrade() -> None:
    """Drop every table, children first. All interaction data is lost."""
    op.drop_index("idx_response_replies_response_created", table_name="response_replies")
    op.drop_table("response_replies")
    for name in ("response_dislikes", "response_likes"):
        op.drop_index(f"idx_{name}_response_id", table_name=name)
        op.drop_table(name)
    op.drop_index("idx_responses_user_id", table_name="responses")
    op.drop_table("responses")
    op.drop_table("app_users")
