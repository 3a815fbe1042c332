"""Service layer for business logic and external integrations."""

from .config import ConfigurationService, ValidationResult
from .errors import (
    AppError,
    DecodeError,
    ErrorCategory,
    ErrorHandlingService,
    ErrorSeverity,
    HydrationTimeoutError,
    NetworkError,
    UserFriendlyError,
    get_error_service,
    handle_error,
)
from .filters import (
    apply_filters,
    filter_by_date,
    filter_by_genres,
    filter_by_platforms,
    sort_by_name,
)
from .http_client import HttpClientService
from .hydrator import DetailHydrator
from .opencritic_api import OpenCriticClient
from .releases import ReleaseService

__all__ = [
    "AppError",
    "ConfigurationService",
    "DecodeError",
    "DetailHydrator",
    "ErrorCategory",
    "ErrorHandlingService",
    "ErrorSeverity",
    "HttpClientService",
    "HydrationTimeoutError",
    "NetworkError",
    "OpenCriticClient",
    "ReleaseService",
    "UserFriendlyError",
    "ValidationResult",
    "apply_filters",
    "filter_by_date",
    "filter_by_genres",
    "filter_by_platforms",
    "get_error_service",
    "handle_error",
    "sort_by_name",
]
