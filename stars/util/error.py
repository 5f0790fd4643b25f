"""Utility layer errors.

These signal startup problems (configuration, wiring) rather than
rating rule violations, which live in ``stars.domain.error``.
"""

from typing import Optional


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Raised for invalid startup configuration."""

    def __init__(self, message: str, rateable_type: Optional[str] = None):
        self.rateable_type = rateable_type
        super().__init__(message)


class DependencyInjectionError(UtilError):
    """Raised when no provider implementation matches a component."""

    def __init__(self, component: str, use_mock: bool):
        self.component = component
        self.use_mock = use_mock
        kind = "mock" if use_mock else "production"
        super().__init__(f"No {kind} implementation for {component}")
