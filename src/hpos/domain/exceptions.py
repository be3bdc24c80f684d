"""Domain-level exceptions.

Rule functions report expected violations as ``ValidationResult`` values;
application handlers turn a failed result into one of these exceptions so
the CLI layer can catch them uniformly and display the message.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class InvalidTransitionError(ValidationError):
    """A transaction cannot move to the requested status."""

    def __init__(self, message: str) -> None:
        super().__init__(message, field="status")


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class StaleReferenceError(DomainException):
    """A previously selected reference (e.g. a guest) is no longer valid."""


class AuthorizationError(DomainException):
    """The actor is not allowed to perform the operation."""

    def __init__(self) -> None:
        super().__init__("Invalid manager code")


class PersistenceError(DomainException):
    """The backing store failed; the operation may be retried."""


class ConfigurationError(Exception):
    """Invalid application settings."""
