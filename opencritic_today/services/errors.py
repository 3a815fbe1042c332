"""Error handling module for the OpenCritic release checker.

This module provides:
- Custom exception classes for the failure modes of a lookup run
  (network, decoding, deadline)
- User-friendly error message generation with suggested actions
- Centralized error handling service used by the command-line front end

Every error raised here is fatal for the current run; nothing is retried.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog

log = structlog.stdlib.get_logger()


class ErrorCategory(Enum):
    """Categories of errors for classification and handling."""
    NETWORK = "network"
    DECODE = "decode"
    TIMEOUT = "timeout"
    UNEXPECTED = "unexpected"


class ErrorSeverity(Enum):
    """Severity levels for errors."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass(frozen=True)
class ErrorContext:
    """Context information for an error."""
    operation: str
    component: str
    details: dict[str, Any]


@dataclass(frozen=True)
class UserFriendlyError:
    """User-friendly error representation with suggested actions."""
    message: str
    category: ErrorCategory
    severity: ErrorSeverity
    suggested_actions: list[str]
    technical_details: str | None = None


class AppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNEXPECTED,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        suggested_actions: list[str] | None = None,
        technical_details: str | None = None,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.suggested_actions = suggested_actions or []
        self.technical_details = technical_details
        self.context = context

    def to_user_friendly(self) -> UserFriendlyError:
        """Convert to user-friendly error representation."""
        return UserFriendlyError(
            message=self.message,
            category=self.category,
            severity=self.severity,
            suggested_actions=self.suggested_actions,
            technical_details=self.technical_details,
        )


class NetworkError(AppError):
    """Exception for transport failures and non-2xx responses."""

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        suggested_actions = [
            "Check your internet connection",
            "Check whether api.opencritic.com is reachable",
            "Try again in a few moments",
        ]

        if status_code:
            if status_code == 429:
                suggested_actions = [
                    "OpenCritic is rate limiting requests",
                    "Wait a few minutes before retrying",
                ]
            elif status_code == 404:
                suggested_actions = [
                    "The requested resource may no longer exist",
                    "Check the configured base URL",
                ]
            elif status_code >= 500:
                suggested_actions = [
                    "The server is experiencing issues",
                    "Try again later",
                ]

        technical_details = None
        if original_error:
            technical_details = f"{type(original_error).__name__}: {str(original_error)}"
        if url:
            technical_details = f"URL: {url}" + (f"\n{technical_details}" if technical_details else "")
        if status_code:
            technical_details = f"Status: {status_code}" + (f"\n{technical_details}" if technical_details else "")

        super().__init__(
            message=message,
            category=ErrorCategory.NETWORK,
            severity=ErrorSeverity.ERROR,
            suggested_actions=suggested_actions,
            technical_details=technical_details,
        )
        self.original_error = original_error
        self.url = url
        self.status_code = status_code


class DecodeError(AppError):
    """Exception for responses that are not valid JSON or have the wrong shape."""

    def __init__(
        self,
        message: str,
        payload: str | None = None,
        field: str | None = None,
        url: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        technical_details = None
        if payload:
            technical_details = f"Payload: {payload}"
        if field:
            technical_details = (technical_details or "") + f"\nField: {field}"
        if url:
            technical_details = (technical_details or "") + f"\nURL: {url}"
        if original_error:
            technical_details = (technical_details or "") + f"\nError: {type(original_error).__name__}: {str(original_error)}"

        super().__init__(
            message=message,
            category=ErrorCategory.DECODE,
            severity=ErrorSeverity.ERROR,
            suggested_actions=[
                "The OpenCritic API format may have changed",
                "Run again with --log-level DEBUG for the raw response details",
            ],
            technical_details=technical_details.strip() if technical_details else None,
        )
        self.payload = payload
        self.field = field
        self.url = url
        self.original_error = original_error


class HydrationTimeoutError(AppError):
    """Exception raised when detail lookups do not finish before the deadline."""

    def __init__(self, deadline: float, pending: int) -> None:
        super().__init__(
            message=f"Fetching game details did not finish within {deadline:g} seconds.",
            category=ErrorCategory.TIMEOUT,
            severity=ErrorSeverity.ERROR,
            suggested_actions=[
                "The service may be slow or unavailable",
                "Increase hydration_deadline in the configuration file",
            ],
            technical_details=f"Deadline: {deadline:g}s\nPending lookups: {pending}",
        )
        self.deadline = deadline
        self.pending = pending


class ErrorHandlingService:
    """Turns exceptions into user-facing errors.

    Lookup failures already arrive as ``AppError`` subclasses; anything else
    is reported as an unexpected error. Technical details go to the log so
    the terminal output can stay short.
    """

    def handle_error(
        self,
        error: Exception,
        operation: str,
        component: str,
        context: dict[str, Any] | None = None,
    ) -> UserFriendlyError:
        """Log an error and return its user-friendly representation.

        Args:
            error: The exception that occurred
            operation: The operation being performed
            component: The component where the error occurred
            context: Additional context information
        """
        if isinstance(error, AppError):
            app_error = error
        else:
            app_error = AppError(
                message="An unexpected error occurred.",
                category=ErrorCategory.UNEXPECTED,
                severity=ErrorSeverity.CRITICAL,
                suggested_actions=["Run again with --log-level DEBUG and report the log output"],
                technical_details=f"{type(error).__name__}: {error}",
                context=ErrorContext(
                    operation=operation,
                    component=component,
                    details=context or {},
                ),
            )

        log_method = log.warning if app_error.severity == ErrorSeverity.WARNING else log.error
        log_method(
            "Error occurred",
            error_message=app_error.message,
            category=app_error.category.value,
            severity=app_error.severity.value,
            operation=operation,
            component=component,
            technical_details=app_error.technical_details,
            context=context,
        )

        return app_error.to_user_friendly()

    def create_user_message(
        self,
        error: UserFriendlyError,
        include_suggestions: bool = True,
    ) -> str:
        """Create a formatted user message from an error.

        Args:
            error: The user-friendly error
            include_suggestions: Whether to include suggested actions

        Returns:
            Formatted message string
        """
        parts = [error.message]

        if include_suggestions and error.suggested_actions:
            parts.append("\nSuggested actions:")
            for action in error.suggested_actions[:3]:
                parts.append(f"  • {action}")

        return "\n".join(parts)


def get_http_error_message(status_code: int) -> str:
    """Get a user-friendly message for HTTP status codes."""
    messages = {
        400: "The request was rejected by OpenCritic.",
        403: "Access denied by OpenCritic.",
        404: "The requested resource was not found.",
        408: "The request timed out. Please try again.",
        429: "Too many requests. Please wait before trying again.",
        500: "The server encountered an error. Please try again later.",
        502: "The server is temporarily unavailable. Please try again later.",
        503: "The service is temporarily unavailable. Please try again later.",
        504: "The server took too long to respond. Please try again.",
    }
    return messages.get(status_code, f"HTTP error {status_code} occurred.")


_error_service: ErrorHandlingService | None = None


def get_error_service() -> ErrorHandlingService:
    """Get the global error handling service instance."""
    global _error_service
    if _error_service is None:
        _error_service = ErrorHandlingService()
    return _error_service


def handle_error(
    error: Exception,
    operation: str,
    component: str,
    context: dict[str, Any] | None = None,
) -> UserFriendlyError:
    """Convenience function to handle errors using the global service."""
    return get_error_service().handle_error(error, operation, component, context)
