"""
DelipuCash Backend: Shared Validation Helpers
===============================================

What:  Preconditions shared by the reaction, reply and aggregate services.
Why:   Every operation checks its references before touching storage; doing
       it in one place keeps the NotFound/InvalidInput behaviour identical.

Order of checks (fail fast, no partial writes):
    1. Input shape (reply text)    → ValidationError (400)
    2. Response exists             → NotFoundError(resource="response")
    3. User exists                 → NotFoundError(resource="user")
"""

from typing import Optional

from delipucash.exceptions import NotFoundError, ValidationError
from delipucash.models import AppUser, Response
from delipucash.repositories.response_repository import ResponseRepository


async def require_response(
    repo: ResponseRepository, response_id: str, with_author: bool = False
) -> Response:
    response = await repo.get_response(response_id, with_author=with_author)
    if response is None:
        raise NotFoundError(resource="response", resource_id=response_id)
    return response


async def require_user(repo: ResponseRepository, user_id: str) -> AppUser:
    user = await repo.get_user(user_id)
    if user is None:
        raise NotFoundError(resource="user", resource_id=user_id)
    return user


def normalize_reply_text(reply_text: Optional[str]) -> str:
    """
    Trim a reply body and reject it when nothing is left.

    >>> normalize_reply_text("  great answer ")
    'great answer'
    """
    if reply_text is None or not reply_text.strip():
        raise ValidationError(message="Reply text is required", field="replyText")
    return reply_text.strip()
