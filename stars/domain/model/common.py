"""Base model for rating domain entities."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for rating domain models.

    Entities are immutable. ``evolve`` produces a validated copy, unlike
    ``model_copy`` which skips validation of the updated fields.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    def evolve(self, **changes: Any) -> Self:
        """Return a validated copy with the given fields replaced."""
        return self.model_validate({**self.model_dump(), **changes})
