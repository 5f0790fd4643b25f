"""Unit tests for the in-memory unit of work."""

from datetime import datetime
from uuid import uuid4

import pytest

from stars.domain.error import DuplicateVoteError
from stars.domain.model import Vote
from stars.domain.value import RateableId, RateableRef, RaterId, VoteId
from stars.persistence.repository.inmemory import (
    InMemoryRateableRepository,
    InMemoryUnitOfWork,
    InMemoryVoteRepository,
)


def make_vote(rater_id: str = "u1", score: int = 3, dimension=None) -> Vote:
    """Build a car vote."""
    return Vote(
        id=VoteId(uuid4()),
        rateable_type="car",
        rateable_id=RateableId("c1"),
        rater_id=RaterId(rater_id),
        dimension=dimension,
        score=score,
        created_at=datetime.now(),
        updated_at=datetime.now(),
    )


REF = RateableRef(rateable_type="car", rateable_id=RateableId("c1"))


class TestAtomic:
    """Tests for rollback of journaled writes."""

    @pytest.mark.asyncio
    async def test_commit_keeps_writes(self):
        """Writes in a successful block should persist."""
        votes = InMemoryVoteRepository()
        rateables = InMemoryRateableRepository()

        async with InMemoryUnitOfWork().atomic():
            await votes.save(make_vote())
            await rateables.set_cached_average(REF, "rating_average", 3.0)

        assert votes.count() == 1
        assert await rateables.get_cached_average(REF, "rating_average") == 3.0

    @pytest.mark.asyncio
    async def test_error_undoes_every_write(self):
        """A failing block should restore all repositories."""
        votes = InMemoryVoteRepository()
        rateables = InMemoryRateableRepository()
        existing = await votes.save(make_vote(rater_id="u0", score=5))
        await rateables.set_cached_average(REF, "rating_average", 5.0)

        with pytest.raises(RuntimeError):
            async with InMemoryUnitOfWork().atomic():
                await votes.save(make_vote())
                await votes.update_score(existing.id, 1, datetime.now())
                await rateables.set_cached_average(REF, "rating_average", 2.0)
                await rateables.set_cached_average(REF, "rating_average_speed", 1.0)
                raise RuntimeError("boom")

        assert votes.count() == 1
        assert (await votes.find_by_key(existing.key)).score == 5
        assert await rateables.get_cached_average(REF, "rating_average") == 5.0
        assert await rateables.get_cached_average(REF, "rating_average_speed") is None

    @pytest.mark.asyncio
    async def test_nested_block_failure_keeps_outer_writes(self):
        """A failing inner block should undo only its own writes."""
        votes = InMemoryVoteRepository()
        uow = InMemoryUnitOfWork()

        async with uow.atomic():
            await votes.save(make_vote(rater_id="outer"))
            with pytest.raises(RuntimeError):
                async with uow.atomic():
                    await votes.save(make_vote(rater_id="inner"))
                    raise RuntimeError("boom")

        assert votes.count() == 1


class TestInMemoryVoteRepository:
    """Tests for in-memory vote storage."""

    @pytest.mark.asyncio
    async def test_duplicate_key_is_rejected(self):
        """A second vote for the same key should fail."""
        votes = InMemoryVoteRepository()
        await votes.save(make_vote(score=3))

        with pytest.raises(DuplicateVoteError):
            await votes.save(make_vote(score=4))

    @pytest.mark.asyncio
    async def test_dimensions_are_separate_keys(self):
        """The same rater may vote once per dimension."""
        votes = InMemoryVoteRepository()

        await votes.save(make_vote())
        await votes.save(make_vote(dimension="speed"))

        assert votes.count() == 2
        assert len(await votes.find_by_rateable("car", RateableId("c1"))) == 1
        assert len(await votes.find_by_rater(RaterId("u1"))) == 2
        assert await votes.find_rateable_ids("car") == ["c1"]
