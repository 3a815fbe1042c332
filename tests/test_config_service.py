"""Property-based tests for configuration service."""

import json
import tempfile
from dataclasses import asdict
from pathlib import Path
from unittest.mock import patch

import pytest
from hypothesis import given, strategies as st

from opencritic_today.models import AppConfig
from opencritic_today.services import ConfigurationService


valid_config_strategy = st.builds(
    AppConfig,
    base_url=st.sampled_from([
        "https://api.opencritic.com/api",
        "http://localhost:8080/api",
        "https://mirror.example.org/opencritic",
    ]),
    request_timeout=st.floats(min_value=0.1, max_value=300.0, allow_nan=False, allow_infinity=False),
    hydration_deadline=st.floats(min_value=0.1, max_value=600.0, allow_nan=False, allow_infinity=False),
    concurrent_requests=st.integers(min_value=1, max_value=50),
    verify_ssl=st.booleans(),
    log_level=st.sampled_from(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
)


@given(valid_config_strategy)
def test_configuration_round_trip(config: AppConfig) -> None:
    """For any valid configuration, loading its JSON form preserves all values."""
    with tempfile.TemporaryDirectory() as temp_dir:
        path = Path(temp_dir) / "config.json"
        path.write_text(json.dumps(asdict(config)), encoding="utf-8")

        loaded_config = ConfigurationService(path).load_config()

        assert loaded_config == config


def test_missing_file_gives_defaults() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        service = ConfigurationService(Path(temp_dir) / "absent.json")
        config = service.load_config()

    assert config == AppConfig()
    assert config.base_url == "https://api.opencritic.com/api"
    assert config.concurrent_requests == 10


def test_default_path_is_under_user_config() -> None:
    service = ConfigurationService()
    assert service.config_path == Path.home() / ".config" / "opencritic-today" / "config.json"


def test_partial_file_keeps_defaults_for_absent_keys() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        path = Path(temp_dir) / "config.json"
        path.write_text(json.dumps({"concurrent_requests": 4, "log_level": "debug"}), encoding="utf-8")

        config = ConfigurationService(path).load_config()

    assert config.concurrent_requests == 4
    assert config.log_level == "DEBUG"
    assert config.request_timeout == AppConfig().request_timeout


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[1, 2, 3]",
        json.dumps({"concurrent_requests": 0}),
        json.dumps({"concurrent_requests": "many"}),
        json.dumps({"request_timeout": -5}),
        json.dumps({"hydration_deadline": True}),
        json.dumps({"base_url": "ftp://example.com"}),
        json.dumps({"verify_ssl": "yes"}),
        json.dumps({"log_level": "LOUD"}),
    ],
)
def test_invalid_file_falls_back_to_defaults(content: str) -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        path = Path(temp_dir) / "config.json"
        path.write_text(content, encoding="utf-8")

        assert ConfigurationService(path).load_config() == AppConfig()


def test_unreadable_file_falls_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.mkdir()

    assert ConfigurationService(path).load_config() == AppConfig()


def test_permission_denied_falls_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"concurrent_requests": 4}), encoding="utf-8")

    with patch("builtins.open", side_effect=PermissionError("denied")):
        assert ConfigurationService(path).load_config() == AppConfig()


class TestValidation:
    """Validation rules."""

    def test_defaults_are_valid(self) -> None:
        result = ConfigurationService().validate_config(AppConfig())
        assert result.is_valid
        assert result.errors == []

    @given(st.integers(min_value=51, max_value=1000))
    def test_too_many_concurrent_requests(self, value: int) -> None:
        result = ConfigurationService().validate_config(AppConfig(concurrent_requests=value))
        assert not result.is_valid
        assert any("concurrent_requests" in error for error in result.errors)

    def test_multiple_errors_are_reported(self) -> None:
        config = AppConfig(request_timeout=0, hydration_deadline=1000, log_level="TRACE")
        result = ConfigurationService().validate_config(config)
        assert len(result.errors) == 3
