"""
DelipuCash Backend: Aggregate Service Tests
=============================================

What we test:
    ✅ Response fields, author and live counts
    ✅ Caller's flags reflect their own reactions only
    ✅ No userId / unknown userId → both flags false
    ✅ Unknown response → NotFoundError
"""

import pytest

from delipucash.exceptions import NotFoundError
from delipucash.services.aggregate_service import AggregateService
from delipucash.services.reaction_service import ReactionService
from delipucash.services.reply_service import ReplyService


class TestGetAggregate:

    def setup_method(self):
        self.service = AggregateService()

    @pytest.mark.asyncio
    async def test_counts_and_author(self, db_session, seed):
        reactions = ReactionService()
        await reactions.set_like(db_session, seed.response, seed.bob, True)
        await reactions.set_like(db_session, seed.response, seed.carol, True)
        await reactions.set_dislike(db_session, seed.response, seed.alice, True)
        await ReplyService().submit_reply(db_session, seed.response, seed.bob, "nice")

        result = await self.service.get_aggregate(db_session, seed.response, seed.bob)

        assert result.id == seed.response
        assert result.user_id == seed.alice
        assert result.question_id == "q-1"
        assert result.user.first_name == "Alice"
        assert (result.like_count, result.dislike_count, result.reply_count) == (2, 1, 1)
        assert result.is_liked is True
        assert result.is_disliked is False

    @pytest.mark.asyncio
    async def test_flags_for_disliking_user(self, db_session, seed):
        await ReactionService().set_dislike(db_session, seed.response, seed.alice, True)

        result = await self.service.get_aggregate(db_session, seed.response, seed.alice)

        assert result.is_liked is False
        assert result.is_disliked is True

    @pytest.mark.asyncio
    async def test_without_user(self, db_session, seed):
        await ReactionService().set_like(db_session, seed.response, seed.bob, True)

        result = await self.service.get_aggregate(db_session, seed.response)

        assert result.like_count == 1
        assert result.is_liked is False
        assert result.is_disliked is False

    @pytest.mark.asyncio
    async def test_unknown_user_is_not_an_error(self, db_session, seed):
        result = await self.service.get_aggregate(db_session, seed.response, "nobody")
        assert result.is_liked is False
        assert result.is_disliked is False

    @pytest.mark.asyncio
    async def test_unknown_response(self, db_session, seed):
        with pytest.raises(NotFoundError):
            await self.service.get_aggregate(db_session, "missing", seed.alice)
