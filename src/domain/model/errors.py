"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainError):
    """Input violates a validation rule. Raised before any side effect."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        self.errors = errors or []
        super().__init__(message)


class UnauthorizedError(DomainError):
    """Bearer token is missing or cannot be verified."""


class ForbiddenError(DomainError):
    """Caller is authenticated but its role does not satisfy the route."""


class InvalidTokenError(DomainError):
    """Token signature, structure or expiry check failed."""


class PersistenceError(DomainError):
    """Underlying store failed to read or write."""


class NotificationDeliveryError(DomainError):
    """Delivery to a single subscriber failed. Never propagates to writers."""

    def __init__(self, subscriber_id: str, event: str, cause: BaseException | None = None):
        self.subscriber_id = subscriber_id
        self.event = event
        self.cause = cause
        super().__init__(f"Failed to deliver '{event}' to subscriber {subscriber_id}: {cause!r}")
