"""Unit tests for AggregationService."""

import math
from datetime import datetime
from uuid import uuid4

import pytest

from stars.domain.model import Vote
from stars.domain.repository import RateableRepository, VoteRepository
from stars.domain.service import (
    AdmissionService,
    AggregationService,
    RateableRegistry,
    guard_average,
)
from stars.domain.value import RateableId, RateableRef, RaterId, VoteId
from tests.conftest import car_type, register_types
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def make_vote(rateable_id: str, rater_id: str, score: int, dimension=None) -> Vote:
    """Build a car vote."""
    return Vote(
        id=VoteId(uuid4()),
        rateable_type="car",
        rateable_id=RateableId(rateable_id),
        rater_id=RaterId(rater_id),
        dimension=dimension,
        score=score,
        created_at=datetime.now(),
        updated_at=datetime.now(),
    )


class TestGuardAverage:
    """Tests for the zero guard."""

    def test_none_and_nan_become_zero(self):
        """Missing or undefined averages should read as 0.0."""
        assert guard_average(None) == 0.0
        assert guard_average(math.nan) == 0.0

    def test_numbers_pass_through_as_float(self):
        """Real values should be returned as floats."""
        assert guard_average(3) == 3.0
        assert isinstance(guard_average(3), float)


class TestRefresh:
    """Tests for refresh."""

    @pytest.mark.asyncio
    async def test_no_votes_yields_zero(self, unit_env):
        """Refreshing a rateable without votes should store 0.0."""
        register_types(await unit_env.get(RateableRegistry))
        aggregation = await unit_env.get(AggregationService)
        rateable_repo = await unit_env.get(RateableRepository)

        average = await aggregation.refresh("car", RateableId("c1"), "speed")

        assert average == 0.0
        ref = RateableRef(rateable_type="car", rateable_id=RateableId("c1"))
        assert await rateable_repo.get_cached_average(ref, "rating_average_speed") == 0.0

    @pytest.mark.asyncio
    async def test_recomputes_from_votes(self, unit_env):
        """Refresh should compute sum over count of the dimension's votes."""
        register_types(await unit_env.get(RateableRegistry))
        aggregation = await unit_env.get(AggregationService)
        vote_repo = await unit_env.get(VoteRepository)

        for rater, score in (("u1", 3), ("u2", 4), ("u3", 8)):
            await vote_repo.save(make_vote("c1", rater, score))
        await vote_repo.save(make_vote("c1", "u1", 10, dimension="price"))

        assert await aggregation.refresh("car", RateableId("c1")) == 5.0
        assert await aggregation.votes_sum("car", RateableId("c1")) == 15
        assert await aggregation.total_votes("car", RateableId("c1")) == 3

    @pytest.mark.asyncio
    async def test_without_cache_column_nothing_is_stored(self, unit_env):
        """Types without a cache column should not write cached averages."""
        register_types(
            await unit_env.get(RateableRegistry), car_type(cache_column=None)
        )
        aggregation = await unit_env.get(AggregationService)
        rateable_repo = await unit_env.get(RateableRepository)
        vote_repo = await unit_env.get(VoteRepository)
        await vote_repo.save(make_vote("c1", "u1", 6))

        assert await aggregation.refresh("car", RateableId("c1")) == 6.0
        assert await rateable_repo.find_ids("car") == []


class TestCurrentAverage:
    """Tests for current_average."""

    @pytest.mark.asyncio
    async def test_zero_for_unrated_rateable(self, unit_env):
        """A rateable without votes should average 0.0 on both paths."""
        register_types(await unit_env.get(RateableRegistry))
        aggregation = await unit_env.get(AggregationService)

        assert await aggregation.current_average("car", RateableId("nope")) == 0.0
        assert (
            await aggregation.current_average(
                "car", RateableId("nope"), prefer_cache=False
            )
            == 0.0
        )

    @pytest.mark.asyncio
    async def test_cached_path_does_not_read_votes(self, unit_env):
        """The cached value should be returned until the next refresh."""
        register_types(await unit_env.get(RateableRegistry))
        aggregation = await unit_env.get(AggregationService)
        vote_repo = await unit_env.get(VoteRepository)

        await vote_repo.save(make_vote("c1", "u1", 2))
        await aggregation.refresh("car", RateableId("c1"))
        # Written behind the engine's back: the cache is now stale
        await vote_repo.save(make_vote("c1", "u2", 10))

        assert await aggregation.current_average("car", RateableId("c1")) == 2.0
        assert (
            await aggregation.current_average(
                "car", RateableId("c1"), prefer_cache=False
            )
            == 6.0
        )

    @pytest.mark.asyncio
    async def test_live_path_when_caching_disabled(self, unit_env):
        """Without a cache column the average should always be computed."""
        register_types(
            await unit_env.get(RateableRegistry), car_type(cache_column="")
        )
        aggregation = await unit_env.get(AggregationService)
        vote_repo = await unit_env.get(VoteRepository)
        await vote_repo.save(make_vote("c1", "u1", 7, dimension="speed"))

        assert await aggregation.current_average("car", RateableId("c1"), "speed") == 7.0


class TestDimensionNormalization:
    """Tests for blank and padded dimension names on reads."""

    @pytest.mark.asyncio
    async def test_blank_dimension_reads_the_implicit_dimension(self, unit_env):
        """An empty dimension should read the same aggregate as None."""
        register_types(await unit_env.get(RateableRegistry))
        admission = await unit_env.get(AdmissionService)
        aggregation = await unit_env.get(AggregationService)

        await admission.submit_vote(
            RateableId("c1"), "car", RaterId("u1"), 7, dimension=""
        )

        assert await aggregation.current_average("car", RateableId("c1"), "") == 7.0
        assert (
            await aggregation.current_average(
                "car", RateableId("c1"), "", prefer_cache=False
            )
            == 7.0
        )
        assert await aggregation.total_votes("car", RateableId("c1"), "") == 1
        assert await aggregation.votes_sum("car", RateableId("c1"), "  ") == 7

    @pytest.mark.asyncio
    async def test_padded_dimension_reads_the_named_dimension(self, unit_env):
        """Surrounding whitespace should not change the dimension read."""
        register_types(await unit_env.get(RateableRegistry))
        admission = await unit_env.get(AdmissionService)
        aggregation = await unit_env.get(AggregationService)

        await admission.submit_vote(
            RateableId("c1"), "car", RaterId("u1"), 4, dimension="speed"
        )

        assert (
            await aggregation.current_average("car", RateableId("c1"), " speed ")
            == 4.0
        )
        assert (
            await aggregation.current_average(
                "car", RateableId("c1"), "speed ", prefer_cache=False
            )
            == 4.0
        )
        assert await aggregation.total_votes("car", RateableId("c1"), " speed") == 1

    @pytest.mark.asyncio
    async def test_refresh_with_blank_dimension_writes_base_field(self, unit_env):
        """Refreshing with an empty dimension should update the base cache field."""
        register_types(await unit_env.get(RateableRegistry))
        aggregation = await unit_env.get(AggregationService)
        vote_repo = await unit_env.get(VoteRepository)
        rateable_repo = await unit_env.get(RateableRepository)
        await vote_repo.save(make_vote("c1", "u1", 3))

        assert await aggregation.refresh("car", RateableId("c1"), "") == 3.0

        ref = RateableRef(rateable_type="car", rateable_id=RateableId("c1"))
        assert await rateable_repo.get_cached_average(ref, "rating_average") == 3.0
        assert await rateable_repo.get_cached_average(ref, "rating_average_") is None
