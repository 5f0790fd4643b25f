"""Unit tests for rateable lookup use cases."""

import pytest

from stars.application.usecase.rating import (
    FindRatedByRequest,
    FindRatedByUseCase,
    FindRatedWithRequest,
    FindRatedWithUseCase,
    GetPopularRequest,
    GetPopularUseCase,
    PopularityOrder,
    SubmitVoteRequest,
    SubmitVoteUseCase,
)
from stars.domain.service import RateableRegistry
from tests.conftest import register_types
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def cast(submit: SubmitVoteUseCase, rateable_id, rater_id, score, dimension=None):
    """Submit a car vote through the use case."""
    await submit.execute(
        SubmitVoteRequest(
            rateable_type="car",
            rateable_id=rateable_id,
            rater_id=rater_id,
            score=score,
            dimension=dimension,
        )
    )


class TestLookups:
    """Tests for find rated with, popular and rated by."""

    @pytest.mark.asyncio
    async def test_find_rated_with(self, unit_env):
        """Rateables holding the raw score should be listed."""
        register_types(await unit_env.get(RateableRegistry))
        submit = await unit_env.get(SubmitVoteUseCase)
        use_case = await unit_env.get(FindRatedWithUseCase)
        await cast(submit, "c2", "u1", 8, "speed")
        await cast(submit, "c1", "u2", 8, "speed")

        response = await use_case.execute(
            FindRatedWithRequest(rateable_type="car", score=8, dimension="speed")
        )

        assert response.rateable_ids == ["c1", "c2"]

    @pytest.mark.asyncio
    async def test_popular_both_orders(self, unit_env):
        """Most and least popular should be selected by order."""
        register_types(await unit_env.get(RateableRegistry))
        submit = await unit_env.get(SubmitVoteUseCase)
        use_case = await unit_env.get(GetPopularUseCase)
        await cast(submit, "c1", "u1", 3)
        await cast(submit, "c2", "u1", 9)

        most = await use_case.execute(GetPopularRequest(rateable_type="car"))
        least = await use_case.execute(
            GetPopularRequest(rateable_type="car", order=PopularityOrder.LEAST)
        )

        assert most.rateable_id == "c2"
        assert least.rateable_id == "c1"

    @pytest.mark.asyncio
    async def test_find_rated_by_is_sorted(self, unit_env):
        """A rater's rateables should come back sorted by type and id."""
        register_types(await unit_env.get(RateableRegistry))
        submit = await unit_env.get(SubmitVoteUseCase)
        use_case = await unit_env.get(FindRatedByUseCase)
        await cast(submit, "c2", "u1", 3)
        await cast(submit, "c1", "u1", 3, "price")

        response = await use_case.execute(FindRatedByRequest(rater_id="u1"))

        assert [item.rateable_id for item in response.rateables] == ["c1", "c2"]
