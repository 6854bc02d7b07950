"""Domain error classes.

Protocol-agnostic errors that represent business failures in the shop.
The HTTP entrypoint translates them to status codes and JSON bodies.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain errors.

    Carries a human-readable message, a stable error code and optional
    context that protocol adapters may expose to clients.
    """

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        """Create a domain error.

        Args:
            message: Human-readable error message
            **context: Additional context (field names, identifiers, ...)
        """
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format for protocol translation."""
        return {
            "message": self.message,
            "code": self.error_code,
            **self.context,
        }


class ValidationError(DomainError):
    """Business rule validation error.

    Examples:
        - Catalog entry created without make or model
        - Malformed UUID in a path parameter
        - Order without items
        - Ticket message on a closed ticket

    REST mapping: 422 Unprocessable Entity
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, str]] | None = None,
        **context: Any,
    ) -> None:
        """Create a validation error.

        Args:
            message: Overall validation error message (optional if errors provided)
            errors: Field-level errors, each with 'field', 'message' and 'code'
            **context: Additional context
        """
        self.errors: list[dict[str, str]] | None
        if errors:
            self.errors = errors
            msg = message or "Validation failed"
        else:
            self.errors = None
            msg = message or "Validation error"

        super().__init__(msg, **context)

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format."""
        if self.errors:
            return {
                "message": self.message,
                "code": self.error_code,
                "errors": self.errors,
                **self.context,
            }
        return super().to_dict()


class NotFoundError(DomainError):
    """Resource not found.

    REST mapping: 404 Not Found
    """

    error_code: str = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str | None = None, **context: Any) -> None:
        """Create a not found error.

        Args:
            resource: Type of resource (e.g., "CatalogEntry", "Order")
            identifier: Resource identifier
            **context: Additional context
        """
        if identifier:
            message = f"{resource} with identifier '{identifier}' not found"
        else:
            message = f"{resource} not found"

        super().__init__(message, resource=resource, identifier=identifier, **context)


class ConflictError(DomainError):
    """Business constraint conflict.

    Examples:
        - Catalog entry whose normalized make/model key already exists
        - E-mail address already registered

    REST mapping: 409 Conflict
    """

    error_code: str = "CONFLICT"


class UnauthorizedError(DomainError):
    """Authentication required or failed.

    REST mapping: 401 Unauthorized
    """

    error_code: str = "UNAUTHORIZED"


class TokenExpiredError(UnauthorizedError):
    """Bearer token is well formed but past its expiry.

    REST mapping: 401 Unauthorized
    """

    error_code: str = "TOKEN_EXPIRED"


class ForbiddenError(DomainError):
    """Authenticated but insufficient permissions.

    REST mapping: 403 Forbidden
    """

    error_code: str = "FORBIDDEN"


class InternalError(DomainError):
    """Internal domain error (unexpected conditions).

    REST mapping: 500 Internal Server Error
    """

    error_code: str = "INTERNAL_ERROR"
