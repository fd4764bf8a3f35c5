class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or a precondition is not met."""


class AuthorizationError(DomainError):
    """Raised when an instructor acts on a class context they are not assigned to."""


class NotFoundError(DomainError):
    """Raised when a referenced directory entry does not exist."""
