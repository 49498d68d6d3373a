"""
DelipuCash Backend: Reply Service
===================================

What:  Posts and lists threaded replies under a response.
Who:   Called by POST and GET /api/responses/{id}/replies.

submit_reply flow:
    ┌──────────────┐    ┌───────────────┐    ┌──────────┐    ┌─────────────┐
    │ Trim & check │───▶│ Response/User │───▶│  Insert  │───▶│ Count total │
    │  reply text  │    │    exist?     │    │  reply   │    │   replies   │
    └──────────────┘    └───────────────┘    └──────────┘    └─────────────┘
    A blank text is rejected before the database is queried at all.

Ordering contract:
    list_replies returns oldest first. Clients render threads in this
    order and rely on it.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from delipucash.exceptions import DatabaseError, DelipuCashError
from delipucash.repositories.response_repository import ResponseRepository
from delipucash.schemas.interaction import ReplyCreatedResult, ReplyListResult, ReplyOut
from delipucash.services.validators import normalize_reply_text, require_response, require_user

logger = logging.getLogger(__name__)


class ReplyService:
    """Stateless reply manager. Replies are append-only."""

    async def submit_reply(
        self,
        db: AsyncSession,
        response_id: str,
        user_id: str,
        reply_text: Optional[str],
    ) -> ReplyCreatedResult:
        """
        Validate, persist and return a new reply with the updated reply count.

        Raises:
            ValidationError: reply_text missing or blank (→ 400, no row written)
            NotFoundError: response or user does not exist (→ 404)
            DatabaseError: store failure (→ 500)
        """
        logger.info("Reply submission: response=%s user=%s", response_id, user_id)
        text = normalize_reply_text(reply_text)
        repo = ResponseRepository(db)

        try:
            await require_response(repo, response_id)
            author = await require_user(repo, user_id)

            reply = await repo.create_reply(response_id, author, text)
            reply_count = await repo.count_replies(response_id)
            logger.info(
                "Reply %s posted on response %s (%d total)", reply.id, response_id, reply_count
            )

            return ReplyCreatedResult(
                message="Reply posted successfully",
                reply=ReplyOut.model_validate(reply),
                reply_count=reply_count,
            )

        except DelipuCashError:
            raise
        except Exception as e:
            logger.error("Error submitting reply on %s: %s", response_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to post reply",
                cause=e,
                context={"response_id": response_id, "user_id": user_id},
            )

    async def list_replies(self, db: AsyncSession, response_id: str) -> ReplyListResult:
        """
        All replies for a response, oldest first, each with its author.

        Raises:
            NotFoundError: response does not exist (→ 404)
            DatabaseError: store failure (→ 500)
        """
        logger.info("Fetching replies for response %s", response_id)
        repo = ResponseRepository(db)

        try:
            await require_response(repo, response_id)
            replies = [ReplyOut.model_validate(r) for r in await repo.list_replies(response_id)]
        except DelipuCashError:
            raise
        except Exception as e:
            logger.error("Error fetching replies for %s: %s", response_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to fetch replies",
                cause=e,
                context={"response_id": response_id},
            )

        return ReplyListResult(replies=replies, count=len(replies))


reply_service = ReplyService()
