"""Service-level exceptions, mapped to HTTP responses in src.api.errors."""


class ServiceError(Exception):
    """Base exception for the identity and character services."""

    default_message = "Service error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ConflictError(ServiceError):
    """Raised when a unique field is already taken."""

    default_message = "Resource already exists"


class UnauthorizedError(ServiceError):
    """Raised for bad credentials or an invalid, expired or missing token."""

    default_message = "Invalid authentication credentials"


class NotFoundError(ServiceError):
    """Raised when a record is absent or not owned by the caller."""

    default_message = "Not found"


class InternalError(ServiceError):
    """Raised when the store or the password hasher fails."""

    default_message = "Internal server error"
