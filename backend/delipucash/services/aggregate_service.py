"""
DelipuCash Backend: Response Aggregate Service
================================================

What:  Builds the aggregate view of a response: the stored record with its
       author, live like/dislike/reply counts, and the requesting user's
       reaction flags.
Who:   Called by GET /api/responses/{id}?userId=...

Read-only. Safe to call with any concurrency; nothing is cached, every call
counts rows again.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from delipucash.exceptions import DatabaseError, DelipuCashError
from delipucash.repositories.response_repository import ResponseRepository
from delipucash.schemas.interaction import ResponseAggregate, ResponseOut
from delipucash.services.reaction_service import read_reaction_state
from delipucash.services.validators import require_response

logger = logging.getLogger(__name__)


class AggregateService:

    async def get_aggregate(
        self, db: AsyncSession, response_id: str, user_id: Optional[str] = None
    ) -> ResponseAggregate:
        """
        Raises:
            NotFoundError: response does not exist (→ 404)
            DatabaseError: store failure (→ 500)

        The user is not existence-checked: an unknown user_id simply has no
        reactions, so both flags come back False.
        """
        logger.info("Fetching response with counts: response=%s user=%s", response_id, user_id)
        repo = ResponseRepository(db)

        try:
            response = await require_response(repo, response_id, with_author=True)
            state = await read_reaction_state(repo, response_id, user_id)
            reply_count = await repo.count_replies(response_id)
        except DelipuCashError:
            raise
        except Exception as e:
            logger.error("Error fetching response %s: %s", response_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to fetch response data",
                cause=e,
                context={"response_id": response_id},
            )

        base = ResponseOut.model_validate(response)
        return ResponseAggregate(
            **base.model_dump(),
            like_count=state.like_count,
            dislike_count=state.dislike_count,
            reply_count=reply_count,
            is_liked=state.is_liked,
            is_disliked=state.is_disliked,
        )


aggregate_service = AggregateService()
