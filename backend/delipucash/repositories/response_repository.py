"""
DelipuCash Backend: Response Repository
=========================================

What:  Data access for responses, users, reactions and replies.
Who:   Instantiated per call by the services with the request's session.

Contract:
    get_response / get_user      → find by primary key (None when absent)
    has_reaction                 → find by (user_id, response_id), as a bool
    create_reaction              → insert; unique violation → ConstraintConflictError
    delete_reactions             → delete-many by (user_id, response_id)
    count_reactions / count_replies → row counts for one response
    create_reply / list_replies  → append and list replies

Every method is a separate round trip. Callers must not assume a row seen by
one call is still there for the next one (another request may have removed
it in between).

Error Translation:
    IntegrityError on create_reaction → ConstraintConflictError (benign)
    Everything else propagates unchanged; services wrap it in DatabaseError.
"""

import logging
from typing import List, Optional, Type, Union

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from delipucash.exceptions import ConstraintConflictError
from delipucash.models import AppUser, Response, ResponseDislike, ResponseLike, ResponseReply

logger = logging.getLogger(__name__)

ReactionModel = Union[Type[ResponseLike], Type[ResponseDislike]]


class ResponseRepository:
    """Persistence gateway for the response-interaction tables."""

    def __init__(self, session: AsyncSession):
        self.session = session

    # ── Responses & users ─────────────────────────────────────────────────

    async def get_response(
        self, response_id: str, with_author: bool = False
    ) -> Optional[Response]:
        """Fetch a response by id, optionally with its author profile loaded."""
        query = select(Response).where(Response.id == response_id)
        if with_author:
            # populate_existing: the row may already sit in the identity map
            # without its author loaded
            query = query.options(selectinload(Response.user)).execution_options(
                populate_existing=True
            )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_user(self, user_id: str) -> Optional[AppUser]:
        result = await self.session.execute(
            select(AppUser).where(AppUser.id == user_id)
        )
        return result.scalar_one_or_none()

    # ── Reactions ─────────────────────────────────────────────────────────

    async def has_reaction(
        self, model: ReactionModel, user_id: str, response_id: str
    ) -> bool:
        """
        What:  Looks up the (user_id, response_id) row in a reaction table.
        Why bool: Callers only need presence; the row itself carries no state.
        """
        result = await self.session.execute(
            select(model.id).where(
                model.user_id == user_id,
                model.response_id == response_id,
            )
        )
        return result.scalar_one_or_none() is not None

    async def create_reaction(
        self, model: ReactionModel, user_id: str, response_id: str
    ) -> None:
        """
        Insert a reaction row inside a SAVEPOINT.

        Why a savepoint:
            A unique violation aborts the current transaction on PostgreSQL.
            Rolling back only to the savepoint keeps the request's
            transaction usable for the steps that follow (opposite-reaction
            delete and count read-back).

        Raises:
            ConstraintConflictError: the row already exists (lost a race)
        """
        try:
            async with self.session.begin_nested():
                self.session.add(model(user_id=user_id, response_id=response_id))
                await self.session.flush()
        except IntegrityError as e:
            logger.info(
                "%s already exists for user=%s response=%s",
                model.__name__, user_id, response_id,
            )
            raise ConstraintConflictError(
                message=f"{model.__name__} already exists",
                context={
                    "table": model.__tablename__,
                    "user_id": user_id,
                    "response_id": response_id,
                    "cause": str(e.orig) if e.orig is not None else str(e),
                },
            ) from e

    async def delete_reactions(
        self, model: ReactionModel, user_id: str, response_id: str
    ) -> int:
        """Delete every row for the pair. Returns the number of rows removed."""
        result = await self.session.execute(
            delete(model).where(
                model.user_id == user_id,
                model.response_id == response_id,
            )
        )
        return result.rowcount or 0

    async def count_reactions(self, model: ReactionModel, response_id: str) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(model).where(model.response_id == response_id)
        )
        return result.scalar_one()

    # ── Replies ───────────────────────────────────────────────────────────

    async def create_reply(
        self, response_id: str, author: AppUser, reply_text: str
    ) -> ResponseReply:
        """
        Append a reply. The author object is attached so the returned row
        carries its profile without another query.
        """
        reply = ResponseReply(response_id=response_id, user=author, reply_text=reply_text)
        self.session.add(reply)
        await self.session.flush()  # Assigns id/created_at without committing
        return reply

    async def list_replies(self, response_id: str) -> List[ResponseReply]:
        """
        All replies for a response, oldest first.

        Query plan:
            WHERE response_id = :id ORDER BY created_at ASC, id ASC
            → idx_response_replies_response_created
            The id tiebreaker keeps the order stable for equal timestamps.
        """
        result = await self.session.execute(
            select(ResponseReply)
            .options(selectinload(ResponseReply.user))
            .where(ResponseReply.response_id == response_id)
            .order_by(ResponseReply.created_at.asc(), ResponseReply.id.asc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def count_replies(self, response_id: str) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(ResponseReply)
            .where(ResponseReply.response_id == response_id)
        )
        return result.scalar_one()
