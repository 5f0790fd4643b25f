"""Application layer DI providers."""

from dishka import Scope, provide

from stars.application.usecase.rating import (
    FindRatedByUseCase,
    FindRatedWithUseCase,
    GetPopularUseCase,
    GetRatingUseCase,
    SubmitVoteUseCase,
)
from stars.domain.service import (
    AdmissionService,
    AggregationService,
    QueryService,
    RateableRegistry,
)
from stars.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Write use cases
    @provide(scope=Scope.REQUEST)
    def get_submit_vote_use_case(
        self, admission_service: AdmissionService
    ) -> SubmitVoteUseCase:
        """Provide submit vote use case."""
        return SubmitVoteUseCase(admission_service=admission_service)

    # Read use cases
    @provide(scope=Scope.REQUEST)
    def get_get_rating_use_case(
        self,
        registry: RateableRegistry,
        aggregation_service: AggregationService,
        query_service: QueryService,
    ) -> GetRatingUseCase:
        """Provide get rating use case."""
        return GetRatingUseCase(
            registry=registry,
            aggregation_service=aggregation_service,
            query_service=query_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_find_rated_with_use_case(
        self, query_service: QueryService
    ) -> FindRatedWithUseCase:
        """Provide find rated with use case."""
        return FindRatedWithUseCase(query_service=query_service)

    @provide(scope=Scope.REQUEST)
    def get_get_popular_use_case(self, query_service: QueryService) -> GetPopularUseCase:
        """Provide get popular use case."""
        return GetPopularUseCase(query_service=query_service)

    @provide(scope=Scope.REQUEST)
    def get_find_rated_by_use_case(
        self, query_service: QueryService
    ) -> FindRatedByUseCase:
        """Provide find rated by use case."""
        return FindRatedByUseCase(query_service=query_service)
