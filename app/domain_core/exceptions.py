"""
Domain error taxonomy.

Every error carries a stable ``code`` which the API layer maps to an HTTP
status (see ``app.api.errors``).
"""

from typing import Optional


class DomainError(Exception):
    """Base class for domain-specific errors."""

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class ValidationError(DomainError):
    """Raised when required fields are missing or malformed."""

    def __init__(self, message: str):
        super().__init__(message, "VALIDATION_ERROR")


class BadRequestError(DomainError):
    """Raised when query parameters cannot be interpreted."""

    def __init__(self, message: str):
        super().__init__(message, "BAD_REQUEST")


class UnauthorizedError(DomainError):
    """Raised when no caller identity could be resolved."""

    def __init__(self, message: str = "Unauthorized. Must be logged in."):
        super().__init__(message, "UNAUTHORIZED")


class ForbiddenError(DomainError):
    """Raised when the caller does not own the resource."""

    def __init__(self, message: str = "Forbidden. You are not the owner of this event."):
        super().__init__(message, "FORBIDDEN")


class NotFoundError(DomainError):
    """Raised when a resource is absent (or deliberately hidden from the caller)."""

    def __init__(self, resource: str, resource_id: Optional[str] = None, message: Optional[str] = None):
        if message is None:
            message = (
                f"{resource} {resource_id} not found"
                if resource_id
                else f"{resource} not found"
            )
        super().__init__(message, "NOT_FOUND")


class EventNotFoundError(NotFoundError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str, message: Optional[str] = None):
        super().__init__("Event", event_id, message)


class ConflictError(DomainError):
    """Raised when a stale version token is supplied on update."""

    def __init__(self, message: str):
        super().__init__(message, "CONFLICT")


class ExternalServiceDegradedError(DomainError):
    """Raised when an external provider is unavailable and the caller needs its answer."""

    def __init__(self, message: str):
        super().__init__(message, "EXTERNAL_SERVICE_DEGRADED")


class PersistenceError(DomainError):
    """Raised on unexpected store failures."""

    def __init__(self, reason: str):
        super().__init__(f"Persistence failure: {reason}", "PERSISTENCE_ERROR")
