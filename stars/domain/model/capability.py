"""Capability interfaces for entities taking part in ratings.

Concrete entity types of the host application implement these by exposing
the listed attributes; the rating services never depend on a concrete type.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Rateable(Protocol):
    """An entity that can receive votes."""

    @property
    def rateable_type(self) -> str: ...

    @property
    def rateable_id(self) -> str: ...


@runtime_checkable
class Rater(Protocol):
    """An identity that casts votes."""

    @property
    def rater_id(self) -> str: ...
