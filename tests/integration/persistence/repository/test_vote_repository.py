"""Integration tests for the PostgreSQL rating repositories.

Require a reachable PostgreSQL at DATABASE__URL; enable with
STARS_INTEGRATION=1.
"""

import os
from datetime import datetime
from uuid import uuid4

import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from stars.domain.error import DuplicateVoteError
from stars.domain.model import Vote
from stars.domain.repository import RateableRepository, UnitOfWork, VoteRepository
from stars.domain.service import AdmissionService, QueryService, RateableRegistry
from stars.domain.value import RateableId, RateableRef, RaterId, VoteId, VoteKey
from stars.persistence.tables import metadata
from tests.conftest import register_types
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    os.environ.get("STARS_INTEGRATION") != "1",
    reason="set STARS_INTEGRATION=1 to run against PostgreSQL",
)

# Integration test fixture - real persistence
postgres_env = create_env_fixture(unmock={"persistence"})


@pytest_asyncio.fixture
async def integration_env(postgres_env):
    """Request container over an empty rating schema."""
    engine = await postgres_env.get(AsyncEngine)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
        await conn.execute(text("TRUNCATE votes, rating_averages, rateables"))
    register_types(await postgres_env.get(RateableRegistry))
    yield postgres_env


def make_vote(rater_id: str, score: int, dimension=None) -> Vote:
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


class TestPostgresVoteRepository:
    """Integration tests for PostgresVoteRepository."""

    @pytest.mark.asyncio
    async def test_implicit_dimension_round_trip(self, integration_env):
        """Undimensioned votes should be stored and found by key."""
        vote_repo = await integration_env.get(VoteRepository)

        saved = await vote_repo.save(make_vote("u1", 4))
        found = await vote_repo.find_by_key(
            VoteKey("car", RateableId("c1"), RaterId("u1"), None)
        )

        assert found is not None
        assert found.id == saved.id
        assert found.dimension is None

    @pytest.mark.asyncio
    async def test_unique_constraint_covers_implicit_dimension(self, integration_env):
        """A second undimensioned vote for one key should be rejected."""
        vote_repo = await integration_env.get(VoteRepository)
        unit_of_work = await integration_env.get(UnitOfWork)
        await vote_repo.save(make_vote("u1", 4))

        with pytest.raises(DuplicateVoteError):
            async with unit_of_work.atomic():
                await vote_repo.save(make_vote("u1", 5))

        assert len(await vote_repo.find_by_rateable("car", RateableId("c1"))) == 1


class TestPostgresAdmission:
    """Admission and queries over PostgreSQL."""

    @pytest.mark.asyncio
    async def test_votes_update_cache_and_queries(self, integration_env):
        """Admitted votes should refresh the cached average."""
        admission = await integration_env.get(AdmissionService)
        query = await integration_env.get(QueryService)
        rateable_repo = await integration_env.get(RateableRepository)
        c1 = RateableId("c1")

        await admission.submit_vote(c1, "car", RaterId("u1"), 8, dimension="speed")
        await admission.submit_vote(c1, "car", RaterId("u2"), 6, dimension="speed")
        result = await admission.submit_vote(
            c1, "car", RaterId("u2"), 10, dimension="speed"
        )

        assert result.created is False
        assert result.average == 9.0
        ref = RateableRef(rateable_type="car", rateable_id=c1)
        assert await rateable_repo.get_cached_average(ref, "rating_average_speed") == 9.0
        assert await query.entities_with_score("car", 10, "speed") == ["c1"]
        assert await query.most_popular("car", "speed") == "c1"
