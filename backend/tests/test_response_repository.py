"""
DelipuCash Backend: Response Repository Tests
===============================================

What we test:
    ✅ Duplicate reaction insert → ConstraintConflictError, session still usable
    ✅ delete_reactions reports rows removed and is a no-op when absent
    ✅ Replies ordered by created_at, not insertion order
"""

from datetime import datetime, timedelta, timezone

import pytest

from delipucash.exceptions import ConstraintConflictError
from delipucash.models import ResponseDislike, ResponseLike, ResponseReply
from delipucash.repositories.response_repository import ResponseRepository


class TestReactionRows:

    @pytest.mark.asyncio
    async def test_duplicate_insert_raises_conflict(self, db_session, seed):
        repo = ResponseRepository(db_session)
        await repo.create_reaction(ResponseLike, seed.alice, seed.response)

        with pytest.raises(ConstraintConflictError) as exc_info:
            await repo.create_reaction(ResponseLike, seed.alice, seed.response)

        assert exc_info.value.context["table"] == "response_likes"
        # Only the savepoint was rolled back
        assert await repo.count_reactions(ResponseLike, seed.response) == 1
        assert await repo.has_reaction(ResponseLike, seed.alice, seed.response) is True

    @pytest.mark.asyncio
    async def test_same_pair_allowed_in_both_tables(self, db_session, seed):
        """Uniqueness is per table; exclusivity is the service's job."""
        repo = ResponseRepository(db_session)
        await repo.create_reaction(ResponseLike, seed.alice, seed.response)
        await repo.create_reaction(ResponseDislike, seed.alice, seed.response)
        assert await repo.has_reaction(ResponseDislike, seed.alice, seed.response) is True

    @pytest.mark.asyncio
    async def test_delete_reactions(self, db_session, seed):
        repo = ResponseRepository(db_session)
        assert await repo.delete_reactions(ResponseLike, seed.alice, seed.response) == 0

        await repo.create_reaction(ResponseLike, seed.alice, seed.response)
        assert await repo.delete_reactions(ResponseLike, seed.alice, seed.response) == 1
        assert await repo.has_reaction(ResponseLike, seed.alice, seed.response) is False


class TestReplyRows:

    @pytest.mark.asyncio
    async def test_list_replies_sorted_by_created_at(self, db_session, seed):
        base = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
        db_session.add_all([
            ResponseReply(response_id=seed.response, user_id=seed.bob, reply_text="late",
                          created_at=base + timedelta(minutes=5)),
            ResponseReply(response_id=seed.response, user_id=seed.carol, reply_text="early",
                          created_at=base),
            ResponseReply(response_id=seed.response, user_id=seed.alice, reply_text="middle",
                          created_at=base + timedelta(minutes=1)),
        ])
        await db_session.flush()

        replies = await ResponseRepository(db_session).list_replies(seed.response)

        assert [r.reply_text for r in replies] == ["early", "middle", "late"]
        assert replies[0].user.first_name == "Carol"
