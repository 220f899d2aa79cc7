class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when the target entity of an update/delete does not exist."""


class ConflictError(DomainError):
    """Raised when a write violates a uniqueness constraint."""
