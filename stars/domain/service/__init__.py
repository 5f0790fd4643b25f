"""Domain services."""

from .admission_service import AdmissionService
from .aggregation_service import AggregationService, guard_average
from .base import Service
from .query_service import QueryService
from .registry import RateableRegistry

__all__ = [
    "AdmissionService",
    "AggregationService",
    "QueryService",
    "RateableRegistry",
    "Service",
    "guard_average",
]
