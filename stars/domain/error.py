"""Domain layer errors."""

from typing import Optional


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class InvalidScoreError(ValidationError):
    """Raised when a submitted score falls outside ``[1, max_score]``."""

    def __init__(self, score: object, max_score: int):
        self.score = score
        self.max_score = max_score
        super().__init__(f"Score must be an integer between 1 and {max_score}, got {score!r}")


class UnknownDimensionError(ValidationError):
    """Raised when a dimension is not declared for the rateable type."""

    def __init__(self, rateable_type: str, dimension: str):
        self.rateable_type = rateable_type
        self.dimension = dimension
        super().__init__(f"Dimension {dimension!r} is not declared for {rateable_type}")


class InvalidIdentifierError(ValidationError):
    """Raised when a rateable or rater identifier is blank or too long."""

    def __init__(self, field: str, value: object):
        self.field = field
        self.value = value
        super().__init__(f"{field} must be 1-255 characters, got {value!r}")


class AlreadyRatedError(BusinessRuleViolationError):
    """Raised when a rater votes again on a type that disallows updates."""

    def __init__(
        self,
        rateable_type: str,
        rateable_id: str,
        rater_id: str,
        dimension: Optional[str] = None,
    ):
        self.rateable_type = rateable_type
        self.rateable_id = rateable_id
        self.rater_id = rater_id
        self.dimension = dimension
        on = f" on {dimension}" if dimension else ""
        super().__init__(
            f"Rater {rater_id} has already rated {rateable_type} {rateable_id}{on}. "
            "Enable allow_update on the rateable type to let raters change their votes."
        )


class UnknownRateableTypeError(NotFoundError):
    """Raised when a rateable type has not been registered."""

    def __init__(self, name: str):
        super().__init__("Rateable type", name)


class PersistenceError(DomainError):
    """Raised when the vote store cannot complete a read or write."""

    pass


class DuplicateVoteError(PersistenceError):
    """Raised when storage rejects a second vote for the same key."""

    def __init__(self, key: object):
        self.key = key
        super().__init__(f"Vote already exists for {key}")
