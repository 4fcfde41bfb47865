"""
Exception hierarchy for the scan orchestration service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class AuditScanException(Exception):
    """Base exception for all scan orchestration errors."""

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


class UnauthorizedError(AuditScanException):
    """Raised when the request carries no resolvable session."""

    def __init__(self, message: str = "Unauthorized", details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details)


class IdentityError(AuditScanException):
    """
    Raised when a session is present but cannot be mapped to a user.

    Indicates a misconfigured upstream authentication layer, so it is
    surfaced as an internal error rather than an auth failure.
    """


class ValidationError(AuditScanException):
    """Raised when input validation fails."""

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


class UnsupportedMediaTypeError(ValidationError):
    """Raised when the request payload is not JSON."""

    def __init__(self, content_type: str | None = None) -> None:
        super().__init__(
            "Invalid content-type. Use application/json.",
            details={"content_type": content_type or ""},
        )


class NotFoundError(AuditScanException):
    """Raised when a referenced resource is missing or not owned by the caller."""


class ProjectNotFoundError(NotFoundError):
    """Raised when a project does not exist or belongs to another user."""

    def __init__(self, project_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["project_id"] = project_id
        super().__init__("Project not found or access denied.", details)


class ScanNotFoundError(NotFoundError):
    """Raised when a scan does not exist or belongs to another user."""

    def __init__(self, scan_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["scan_id"] = scan_id
        super().__init__("Scan not found", details)


class DispatchFailure(AuditScanException):
    """
    Raised inside a dispatched analysis when the engine fails.

    Never reaches the request that created the scan; the dispatcher records
    it on the scan and project rows instead.
    """

    def __init__(self, scan_id: str, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(
            getattr(cause, "message", None) or str(cause) or type(cause).__name__,
            {"scan_id": scan_id, "error_type": type(cause).__name__},
        )


class AnalysisError(AuditScanException):
    """Raised by the analysis engine when a scan cannot be analyzed."""
