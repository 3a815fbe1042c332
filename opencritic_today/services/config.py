"""Configuration service for managing application settings."""

import json
from pathlib import Path
from typing import Any

import structlog

from ..models import AppConfig

log = structlog.stdlib.get_logger()

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ValidationResult:
    """Result of configuration validation."""

    def __init__(self, is_valid: bool, errors: list[str] | None = None) -> None:
        self.is_valid: bool = is_valid
        self.errors: list[str] = errors or []


class ConfigurationService:
    """Service for loading application configuration."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path: Path = config_path or Path.home() / ".config" / "opencritic-today" / "config.json"
        log.debug("Configuration service initialized", config_path=str(self.config_path))

    def load_config(self) -> AppConfig:
        """Load configuration from file or return default configuration."""
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data: Any = json.load(f)

            if not isinstance(data, dict):
                raise TypeError("configuration root must be a JSON object")

            config = self._dict_to_config(data)
            validation_result = self.validate_config(config)

            if not validation_result.is_valid:
                log.warning("Invalid configuration loaded, using defaults", errors=validation_result.errors)
                return self._get_default_config()

            log.debug("Configuration loaded successfully")
            return config

        except FileNotFoundError:
            log.debug("Configuration file not found, using defaults")
            return self._get_default_config()

        except (OSError, json.JSONDecodeError, TypeError, ValueError) as e:
            log.warning("Failed to load configuration, using defaults", error=str(e))
            return self._get_default_config()

    def validate_config(self, config: AppConfig) -> ValidationResult:
        """Validate configuration settings."""
        errors = []

        if not isinstance(config.base_url, str) or not config.base_url.startswith(("http://", "https://")):
            errors.append("base_url must be an http(s) URL")

        if not _is_number(config.request_timeout) or config.request_timeout <= 0:
            errors.append("request_timeout must be a positive number")
        elif config.request_timeout > 300:
            errors.append("request_timeout should not exceed 300 seconds")

        if not _is_number(config.hydration_deadline) or config.hydration_deadline <= 0:
            errors.append("hydration_deadline must be a positive number")
        elif config.hydration_deadline > 600:
            errors.append("hydration_deadline should not exceed 600 seconds")

        if (
            isinstance(config.concurrent_requests, bool)
            or not isinstance(config.concurrent_requests, int)
            or config.concurrent_requests < 1
        ):
            errors.append("concurrent_requests must be a positive integer")
        elif config.concurrent_requests > 50:
            errors.append("concurrent_requests should not exceed 50")

        if not isinstance(config.verify_ssl, bool):
            errors.append("verify_ssl must be true or false")

        if config.log_level not in VALID_LOG_LEVELS:
            errors.append(f"log_level must be one of: {', '.join(VALID_LOG_LEVELS)}")

        return ValidationResult(len(errors) == 0, errors)

    def _get_default_config(self) -> AppConfig:
        """Get default configuration."""
        return AppConfig()

    def _dict_to_config(self, data: dict[str, Any]) -> AppConfig:
        """Convert dictionary to AppConfig, keeping defaults for absent keys.

        Values are passed through as-is so ``validate_config`` can reject
        anything of the wrong type.
        """
        defaults = self._get_default_config()
        log_level = data.get("log_level", defaults.log_level)
        return AppConfig(
            base_url=data.get("base_url", defaults.base_url),
            request_timeout=data.get("request_timeout", defaults.request_timeout),
            hydration_deadline=data.get("hydration_deadline", defaults.hydration_deadline),
            concurrent_requests=data.get("concurrent_requests", defaults.concurrent_requests),
            verify_ssl=data.get("verify_ssl", defaults.verify_ssl),
            log_level=log_level.upper() if isinstance(log_level, str) else log_level,
        )


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
