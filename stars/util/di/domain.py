"""Domain layer DI providers."""

from dishka import Scope, provide

from stars.domain.repository import RateableRepository, UnitOfWork, VoteRepository
from stars.domain.service import (
    AdmissionService,
    AggregationService,
    QueryService,
    RateableRegistry,
)
from stars.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each request gets fresh service instances sharing one transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_aggregation_service(
        self,
        registry: RateableRegistry,
        vote_repository: VoteRepository,
        rateable_repository: RateableRepository,
    ) -> AggregationService:
        """Provide aggregation domain service."""
        return AggregationService(
            registry=registry,
            vote_repository=vote_repository,
            rateable_repository=rateable_repository,
        )

    @provide
    def get_admission_service(
        self,
        registry: RateableRegistry,
        vote_repository: VoteRepository,
        aggregation_service: AggregationService,
        unit_of_work: UnitOfWork,
    ) -> AdmissionService:
        """Provide vote admission domain service."""
        return AdmissionService(
            registry=registry,
            vote_repository=vote_repository,
            aggregation_service=aggregation_service,
            unit_of_work=unit_of_work,
        )

    @provide
    def get_query_service(
        self,
        registry: RateableRegistry,
        vote_repository: VoteRepository,
        rateable_repository: RateableRepository,
        aggregation_service: AggregationService,
    ) -> QueryService:
        """Provide query domain service."""
        return QueryService(
            registry=registry,
            vote_repository=vote_repository,
            rateable_repository=rateable_repository,
            aggregation_service=aggregation_service,
        )
