class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class NotFoundError(DomainError):
    """Raised when a referenced user is missing or inactive."""

    status_code = 404


class ConflictError(DomainError):
    """Raised on a uniqueness race; callers may retry."""

    status_code = 409


class StaleScheduleError(ConflictError):
    """Raised when a favorite's schedule changed between preview and apply."""


class StoreError(DomainError):
    """Raised on an unexpected persistence failure."""

    status_code = 500
