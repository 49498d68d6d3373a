"""
DelipuCash Backend: Response Interaction Route Handlers
=========================================================

What:  Like, dislike, reply and aggregate endpoints for a survey/question
       response, mounted under /api/responses.
How:   Thin adapters: parse body/query, delegate to the service singletons,
       return the service's model. Domain errors propagate to the global
       exception handlers registered in main.py.
Who:   Called by the DelipuCash mobile and web clients.

Caching:
    Every payload here is live state (counts, flags, threads). The security
    headers middleware marks all responses no-store.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from delipucash.database import get_db_session
from delipucash.schemas.common import ErrorResponse
from delipucash.schemas.interaction import (
    DislikeRequest,
    LikeRequest,
    ReactionResult,
    ReplyCreatedResult,
    ReplyListResult,
    ReplyRequest,
    ResponseAggregate,
)
from delipucash.services.aggregate_service import aggregate_service
from delipucash.services.reaction_service import reaction_service
from delipucash.services.reply_service import reply_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/responses", tags=["Responses"])

_ERRORS = {
    400: {"description": "Invalid input", "model": ErrorResponse},
    404: {"description": "Response or user not found", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.post(
    "/{response_id}/like",
    response_model=ReactionResult,
    responses=_ERRORS,
    summary="Like or un-like a response",
    description=(
        "isLiked=true records a like and clears any dislike by the same user; "
        "isLiked=false removes the like. Returns the fresh counts and flags."
    ),
)
async def like_response(
    response_id: str,
    body: LikeRequest,
    db: AsyncSession = Depends(get_db_session),
) -> ReactionResult:
    return await reaction_service.set_like(
        db=db, response_id=response_id, user_id=body.user_id, is_liked=body.is_liked
    )


@router.post(
    "/{response_id}/dislike",
    response_model=ReactionResult,
    responses=_ERRORS,
    summary="Dislike or un-dislike a response",
)
async def dislike_response(
    response_id: str,
    body: DislikeRequest,
    db: AsyncSession = Depends(get_db_session),
) -> ReactionResult:
    """Mirror of like_response on the dislike table."""
    return await reaction_service.set_dislike(
        db=db, response_id=response_id, user_id=body.user_id, is_disliked=body.is_disliked
    )


@router.post(
    "/{response_id}/replies",
    response_model=ReplyCreatedResult,
    status_code=201,
    responses=_ERRORS,
    summary="Post a reply to a response",
)
async def submit_reply(
    response_id: str,
    body: ReplyRequest,
    db: AsyncSession = Depends(get_db_session),
) -> ReplyCreatedResult:
    """
    Append a reply. The text is trimmed; an empty result is rejected with
    400 before anything is written.
    """
    return await reply_service.submit_reply(
        db=db, response_id=response_id, user_id=body.user_id, reply_text=body.reply_text
    )


@router.get(
    "/{response_id}/replies",
    response_model=ReplyListResult,
    responses={404: _ERRORS[404], 500: _ERRORS[500]},
    summary="List replies, oldest first",
)
async def list_replies(
    response_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> ReplyListResult:
    return await reply_service.list_replies(db=db, response_id=response_id)


@router.get(
    "/{response_id}",
    response_model=ResponseAggregate,
    responses={404: _ERRORS[404], 500: _ERRORS[500]},
    summary="Get a response with counts and the caller's reaction status",
)
async def get_response(
    response_id: str,
    user_id: Optional[str] = Query(
        default=None,
        alias="userId",
        description="When given, isLiked/isDisliked reflect this user's reactions",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> ResponseAggregate:
    return await aggregate_service.get_aggregate(db=db, response_id=response_id, user_id=user_id)
