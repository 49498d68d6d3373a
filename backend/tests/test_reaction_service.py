"""
DelipuCash Backend: Reaction Service Tests
=============================================

What:  Like/dislike resolver behaviour against a real (SQLite) schema.

What we test:
    ✅ Two users like, one switches to dislike (counts and flags per step)
    ✅ Like and dislike are never both set for one user
    ✅ Repeating a like changes nothing
    ✅ N distinct users → likeCount == N
    ✅ Like then un-like returns to baseline
    ✅ Un-liking leaves an existing dislike alone
    ✅ Repeating a like clears a dislike left behind by an interrupted switch
    ✅ Unknown response/user → NotFoundError, nothing written
    ✅ Unique conflict on insert is treated as success
    ✅ Unexpected store failure → DatabaseError
"""

import pytest
from unittest.mock import AsyncMock, patch

from sqlalchemy.exc import OperationalError

from delipucash.exceptions import ConstraintConflictError, DatabaseError, NotFoundError
from delipucash.models import AppUser, ResponseDislike, ResponseLike
from delipucash.repositories.response_repository import ResponseRepository
from delipucash.services.reaction_service import ReactionService


class TestReactionScenario:
    """Step-by-step walk through the canonical two-user scenario."""

    def setup_method(self):
        self.service = ReactionService()

    @pytest.mark.asyncio
    async def test_like_like_then_switch(self, db_session, seed):
        first = await self.service.set_like(db_session, seed.response, seed.alice, True)
        assert first.message == "Response liked successfully"
        assert (first.like_count, first.dislike_count) == (1, 0)
        assert first.is_liked is True
        assert first.is_disliked is False

        second = await self.service.set_like(db_session, seed.response, seed.bob, True)
        assert (second.like_count, second.dislike_count) == (2, 0)
        assert second.is_liked is True

        switched = await self.service.set_dislike(db_session, seed.response, seed.alice, True)
        assert switched.message == "Response disliked successfully"
        assert (switched.like_count, switched.dislike_count) == (1, 1)
        assert switched.is_liked is False
        assert switched.is_disliked is True


class TestReactionInvariants:

    def setup_method(self):
        self.service = ReactionService()

    @pytest.mark.asyncio
    async def test_flags_never_both_true(self, db_session, seed):
        calls = [
            ("like", True), ("dislike", True), ("dislike", True), ("like", True),
            ("like", False), ("dislike", True), ("dislike", False), ("like", True),
        ]
        for kind, active in calls:
            if kind == "like":
                result = await self.service.set_like(db_session, seed.response, seed.alice, active)
            else:
                result = await self.service.set_dislike(db_session, seed.response, seed.alice, active)
            assert not (result.is_liked and result.is_disliked)

    @pytest.mark.asyncio
    async def test_like_is_idempotent(self, db_session, seed):
        once = await self.service.set_like(db_session, seed.response, seed.alice, True)
        twice = await self.service.set_like(db_session, seed.response, seed.alice, True)
        assert twice == once

    @pytest.mark.asyncio
    async def test_like_count_matches_distinct_users(self, db_session, seed):
        users = [AppUser(first_name=f"User{i}", last_name="Test") for i in range(5)]
        db_session.add_all(users)
        await db_session.flush()

        result = None
        for user in users:
            result = await self.service.set_like(db_session, seed.response, user.id, True)

        assert result.like_count == 5
        assert result.dislike_count == 0

    @pytest.mark.asyncio
    async def test_toggle_round_trip_returns_to_baseline(self, db_session, seed):
        baseline = await self.service.set_like(db_session, seed.response, seed.bob, True)

        await self.service.set_like(db_session, seed.response, seed.alice, True)
        removed = await self.service.set_like(db_session, seed.response, seed.alice, False)

        assert removed.message == "Like removed successfully"
        assert removed.is_liked is False
        assert removed.like_count == baseline.like_count

    @pytest.mark.asyncio
    async def test_unlike_when_absent_is_noop(self, db_session, seed):
        result = await self.service.set_like(db_session, seed.response, seed.alice, False)
        assert (result.like_count, result.dislike_count) == (0, 0)
        assert result.is_liked is False

    @pytest.mark.asyncio
    async def test_unlike_leaves_dislike_alone(self, db_session, seed):
        await self.service.set_dislike(db_session, seed.response, seed.alice, True)
        result = await self.service.set_like(db_session, seed.response, seed.alice, False)
        assert result.is_disliked is True
        assert result.dislike_count == 1

    @pytest.mark.asyncio
    async def test_repeat_like_repairs_interrupted_switch(self, db_session, seed):
        """A like and a dislike both present (half-finished switch) is fixed by re-liking."""
        db_session.add(ResponseLike(user_id=seed.alice, response_id=seed.response))
        db_session.add(ResponseDislike(user_id=seed.alice, response_id=seed.response))
        await db_session.flush()

        result = await self.service.set_like(db_session, seed.response, seed.alice, True)

        assert result.is_liked is True
        assert result.is_disliked is False
        assert (result.like_count, result.dislike_count) == (1, 0)


class TestReactionNotFound:

    def setup_method(self):
        self.service = ReactionService()

    @pytest.mark.asyncio
    async def test_unknown_response(self, db_session, seed):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.set_like(db_session, "missing-response", seed.alice, True)
        assert exc_info.value.resource == "response"

    @pytest.mark.asyncio
    async def test_unknown_user_writes_nothing(self, db_session, seed):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.set_dislike(db_session, seed.response, "missing-user", True)
        assert exc_info.value.resource == "user"

        repo = ResponseRepository(db_session)
        assert await repo.count_reactions(ResponseDislike, seed.response) == 0


class TestReactionFailurePaths:

    def setup_method(self):
        self.service = ReactionService()

    @pytest.mark.asyncio
    async def test_unique_conflict_is_benign(self, mock_db_session):
        """Losing the insert race still reports the stored state."""
        with patch("delipucash.services.reaction_service.ResponseRepository") as repo_cls:
            repo = repo_cls.return_value
            repo.get_response = AsyncMock(return_value=object())
            repo.get_user = AsyncMock(return_value=object())
            # not there when checked, there by the time of the insert, then read back
            repo.has_reaction = AsyncMock(side_effect=[False, True, False])
            repo.create_reaction = AsyncMock(side_effect=ConstraintConflictError())
            repo.delete_reactions = AsyncMock(return_value=0)
            repo.count_reactions = AsyncMock(side_effect=[1, 0])

            result = await self.service.set_like(mock_db_session, "r1", "u1", True)

        assert result.is_liked is True
        assert result.like_count == 1
        repo.delete_reactions.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_store_failure_becomes_database_error(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("connection lost"))

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.set_dislike(mock_db_session, "r1", "u1", True)

        assert exc_info.value.message == "Failed to update dislike status"
        assert isinstance(exc_info.value.cause, OperationalError)
