"""
DelipuCash Backend: Response Interaction Schemas
==================================================

What:  Pydantic models for the like / dislike / reply / aggregate endpoints.
Why:   Request validation, camelCase serialization, and OpenAPI docs.
How:   Every model shares CAMEL_MODEL_CONFIG: the mobile client sends and
       receives `userId`, `isLiked`, `replyText`, `likeCount`, ...

Design Decision:
    `reply_text` is Optional in ReplyRequest on purpose. A missing or blank
    reply is a business-rule violation answered with 400 and the message
    "Reply text is required" by ReplyService, the same as a whitespace-only
    one, rather than a schema error.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from delipucash.schemas.common import CAMEL_MODEL_CONFIG


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class LikeRequest(BaseModel):
    """Body of POST /api/responses/{responseId}/like."""
    user_id: str = Field(min_length=1, description="Acting user's id")
    is_liked: bool = Field(description="true = like, false = remove like")

    model_config = CAMEL_MODEL_CONFIG


class DislikeRequest(BaseModel):
    """Body of POST /api/responses/{responseId}/dislike."""
    user_id: str = Field(min_length=1, description="Acting user's id")
    is_disliked: bool = Field(description="true = dislike, false = remove dislike")

    model_config = CAMEL_MODEL_CONFIG


class ReplyRequest(BaseModel):
    """Body of POST /api/responses/{responseId}/replies."""
    user_id: str = Field(min_length=1, description="Replying user's id")
    reply_text: Optional[str] = Field(
        default=None,
        description="Reply body; surrounding whitespace is trimmed and it must not be blank",
    )

    model_config = CAMEL_MODEL_CONFIG


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserProfile(BaseModel):
    """Minimal public profile embedded in replies and responses."""
    id: str
    first_name: str
    last_name: str

    model_config = CAMEL_MODEL_CONFIG


class ReactionResult(BaseModel):
    """
    What:  Outcome of a like/dislike call.
    Why:   Counts and flags are read back after the mutation, so the client
           can replace its optimistic state with the authoritative one.
    """
    message: str
    like_count: int = Field(ge=0)
    dislike_count: int = Field(ge=0)
    is_liked: bool
    is_disliked: bool

    model_config = CAMEL_MODEL_CONFIG


class ReplyOut(BaseModel):
    """A reply with its author's profile."""
    id: str
    response_id: str
    user_id: str
    reply_text: str
    created_at: datetime
    user: UserProfile

    model_config = CAMEL_MODEL_CONFIG


class ReplyCreatedResult(BaseModel):
    """Returned with HTTP 201 by POST /{responseId}/replies."""
    message: str = Field(default="Reply posted successfully")
    reply: ReplyOut
    reply_count: int = Field(ge=0, description="Total replies on the response after this one")

    model_config = CAMEL_MODEL_CONFIG


class ReplyListResult(BaseModel):
    """Returned by GET /{responseId}/replies: oldest reply first."""
    replies: List[ReplyOut]
    count: int = Field(ge=0)

    model_config = CAMEL_MODEL_CONFIG


class ResponseOut(BaseModel):
    """The stored response with its author."""
    id: str
    user_id: str
    question_id: Optional[str] = None
    response_text: str
    created_at: datetime
    updated_at: datetime
    user: UserProfile

    model_config = CAMEL_MODEL_CONFIG


class ResponseAggregate(ResponseOut):
    """
    What:  Aggregate view: the response merged with live counts and the
           requesting user's reaction status.
    Who:   Returned by GET /api/responses/{responseId}?userId=...

    is_liked / is_disliked are false when no userId was supplied.
    """
    like_count: int = Field(ge=0)
    dislike_count: int = Field(ge=0)
    reply_count: int = Field(ge=0)
    is_liked: bool = False
    is_disliked: bool = False
