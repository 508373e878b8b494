class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConflictError(DomainError):
    """Raised when a write would duplicate an existing record."""


class NotFoundError(DomainError):
    """Raised when the requested record does not exist (or is not visible to the caller)."""


class AuthenticationError(DomainError):
    """Raised when the request carries no valid token."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
