"""
DelipuCash Backend: Reaction Service (Like / Dislike Resolver)
================================================================

What:  Applies a user's like/dislike action to a response and reports the
       resulting counts and the user's own status.
Who:   Called by POST /api/responses/{id}/like and /dislike.

Rules:
    set(active=True):
        1. Create the requested reaction if the user doesn't have it yet.
           A unique-constraint violation means a concurrent identical
           request won; the desired state already holds, so it is ignored.
        2. Delete the opposite reaction for the same pair (like and dislike
           are mutually exclusive). This runs even when step 1 found an
           existing row, so repeating a call repairs an earlier interrupted
           switch.
    set(active=False):
        Delete the requested reaction; no-op when absent. The opposite
        reaction is left alone.
    Then, always:
        Re-read both counts and both flags from the tables. Nothing is
        inferred from the request.

Failure Model:
    Each repository call is its own round trip and may fail independently.
    A failure after step 1 leaves the pair in a state the next call fixes;
    counts are derived from rows, so no stored counter can drift.
    No retries: the client gets a 500 and decides.
"""

import logging
from enum import Enum
from typing import Dict, NamedTuple, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from delipucash.exceptions import ConstraintConflictError, DatabaseError, DelipuCashError
from delipucash.models import ResponseDislike, ResponseLike
from delipucash.repositories.response_repository import ReactionModel, ResponseRepository
from delipucash.schemas.interaction import ReactionResult
from delipucash.services.validators import require_response, require_user

logger = logging.getLogger(__name__)


class ReactionKind(str, Enum):
    LIKE = "like"
    DISLIKE = "dislike"


# kind → (table written, opposite table)
_TABLES: Dict[ReactionKind, Tuple[ReactionModel, ReactionModel]] = {
    ReactionKind.LIKE: (ResponseLike, ResponseDislike),
    ReactionKind.DISLIKE: (ResponseDislike, ResponseLike),
}

_MESSAGES: Dict[Tuple[ReactionKind, bool], str] = {
    (ReactionKind.LIKE, True): "Response liked successfully",
    (ReactionKind.LIKE, False): "Like removed successfully",
    (ReactionKind.DISLIKE, True): "Response disliked successfully",
    (ReactionKind.DISLIKE, False): "Dislike removed successfully",
}

_FAILURE_MESSAGES: Dict[ReactionKind, str] = {
    ReactionKind.LIKE: "Failed to update like status",
    ReactionKind.DISLIKE: "Failed to update dislike status",
}


class ReactionState(NamedTuple):
    """Counts for a response plus one user's flags, freshly read."""
    like_count: int
    dislike_count: int
    is_liked: bool
    is_disliked: bool


async def read_reaction_state(
    repo: ResponseRepository, response_id: str, user_id: Optional[str] = None
) -> ReactionState:
    """
    Count likes/dislikes and resolve the user's flags by row presence.

    Without a user_id both flags are False.
    """
    like_count = await repo.count_reactions(ResponseLike, response_id)
    dislike_count = await repo.count_reactions(ResponseDislike, response_id)
    is_liked = False
    is_disliked = False
    if user_id is not None:
        is_liked = await repo.has_reaction(ResponseLike, user_id, response_id)
        is_disliked = await repo.has_reaction(ResponseDislike, user_id, response_id)
    return ReactionState(like_count, dislike_count, is_liked, is_disliked)


class ReactionService:
    """
    Stateless like/dislike resolver.

    set_like() and set_dislike() are mirror images; both delegate to
    _set_reaction() with the table pair swapped.
    """

    async def set_like(
        self, db: AsyncSession, response_id: str, user_id: str, is_liked: bool
    ) -> ReactionResult:
        """
        Like (is_liked=True) or un-like (False) a response.

        Raises:
            NotFoundError: response or user does not exist (→ 404)
            DatabaseError: store failure (→ 500)
        """
        return await self._set_reaction(db, ReactionKind.LIKE, response_id, user_id, is_liked)

    async def set_dislike(
        self, db: AsyncSession, response_id: str, user_id: str, is_disliked: bool
    ) -> ReactionResult:
        """Mirror image of set_like() on the dislike table."""
        return await self._set_reaction(
            db, ReactionKind.DISLIKE, response_id, user_id, is_disliked
        )

    async def _set_reaction(
        self,
        db: AsyncSession,
        kind: ReactionKind,
        response_id: str,
        user_id: str,
        active: bool,
    ) -> ReactionResult:
        logger.info(
            "%s request: response=%s user=%s active=%s",
            kind.value.capitalize(), response_id, user_id, active,
        )
        repo = ResponseRepository(db)
        table, opposite = _TABLES[kind]

        try:
            # ── Preconditions: nothing is written unless both exist ───────
            await require_response(repo, response_id)
            await require_user(repo, user_id)

            # ── Primary mutation ──────────────────────────────────────────
            if active:
                if not await repo.has_reaction(table, user_id, response_id):
                    try:
                        await repo.create_reaction(table, user_id, response_id)
                    except ConstraintConflictError:
                        logger.info(
                            "Concurrent %s already recorded for user=%s response=%s",
                            kind.value, user_id, response_id,
                        )

                removed = await repo.delete_reactions(opposite, user_id, response_id)
                if removed:
                    logger.info(
                        "Removed %d opposite reaction(s) from %s for user=%s response=%s",
                        removed, opposite.__tablename__, user_id, response_id,
                    )
            else:
                await repo.delete_reactions(table, user_id, response_id)

            # ── Read back the authoritative state ─────────────────────────
            state = await read_reaction_state(repo, response_id, user_id)

        except DelipuCashError:
            raise
        except Exception as e:
            logger.error(
                "Error updating %s status for response %s: %s",
                kind.value, response_id, str(e), exc_info=True,
            )
            raise DatabaseError(
                message=_FAILURE_MESSAGES[kind],
                cause=e,
                context={"response_id": response_id, "user_id": user_id},
            )

        return ReactionResult(
            message=_MESSAGES[(kind, active)],
            like_count=state.like_count,
            dislike_count=state.dislike_count,
            is_liked=state.is_liked,
            is_disliked=state.is_disliked,
        )


reaction_service = ReactionService()
