"""Configuration data models."""

from dataclasses import dataclass

DEFAULT_BASE_URL = "https://api.opencritic.com/api"


@dataclass(frozen=True)
class AppConfig:
    """Application configuration settings."""
    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = 30.0  # Per-request timeout in seconds
    hydration_deadline: float = 60.0  # Upper bound for the whole detail fan-out
    concurrent_requests: int = 10  # Detail lookups in flight at once
    verify_ssl: bool = True
    log_level: str = "WARNING"
