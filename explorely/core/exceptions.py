"""
Exception hierarchy for the Explorely backend.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class ExplorelyError(Exception):
    """Base exception for all Explorely application errors."""

    status_code = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(ExplorelyError):
    """Raised when input validation fails."""

    status_code = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ConflictError(ExplorelyError):
    """Raised when a unique value is already taken or an action was already recorded."""

    status_code = 409

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class AuthenticationError(ExplorelyError):
    """Raised when the caller is not authenticated or credentials are wrong."""

    status_code = 401


class AuthorizationError(ExplorelyError):
    """Raised when an authenticated caller may not perform an action."""

    status_code = 403


class NotFoundError(ExplorelyError):
    """Raised when a referenced entity does not exist."""

    status_code = 404

    def __init__(
        self,
        entity: str,
        entity_id: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize not found error.

        Args:
            entity: Human-readable entity name ("Post", "Community")
            entity_id: Identifier that was looked up
            details: Additional context
        """
        details = details or {}
        if entity_id is not None:
            details["entity_id"] = str(entity_id)
        super().__init__(f"{entity} not found", details)
