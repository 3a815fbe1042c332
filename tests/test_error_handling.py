"""Tests for error conversion, user messages and HTTP client error logging."""

from unittest.mock import patch

import httpx
import pytest
from hypothesis import given, settings, strategies as st

from opencritic_today.services.errors import (
    AppError,
    DecodeError,
    ErrorCategory,
    ErrorHandlingService,
    ErrorSeverity,
    HydrationTimeoutError,
    NetworkError,
    get_http_error_message,
)
from opencritic_today.services.http_client import HttpClientService


class TestHttpClientErrors:
    """The HTTP client translates httpx failures and logs technical details."""

    @given(
        path=st.text(min_size=1, max_size=30, alphabet="abcdefghijklmnopqrstuvwxyz0123456789"),
        error_type=st.sampled_from(["network_error", "timeout_error", "http_4xx_error", "http_5xx_error"]),
        error_message=st.text(min_size=5, max_size=50),
    )
    @settings(deadline=None)
    @pytest.mark.asyncio
    async def test_failures_raise_network_error_and_log_details(
        self,
        path: str,
        error_type: str,
        error_message: str,
    ) -> None:
        url = f"https://api.test/api/{path}"
        status_code = {"http_4xx_error": 404, "http_5xx_error": 500}.get(error_type)

        def handler(request: httpx.Request) -> httpx.Response:
            if error_type == "network_error":
                raise httpx.ConnectError(error_message, request=request)
            if error_type == "timeout_error":
                raise httpx.ConnectTimeout(error_message, request=request)
            return httpx.Response(status_code or 500, text=error_message)

        client = HttpClientService(timeout=1.0, transport=httpx.MockTransport(handler))

        with patch("opencritic_today.services.http_client.log") as mock_logger:
            with pytest.raises(NetworkError) as exc_info:
                await client.get(url)

            assert mock_logger.error.called
            _, kwargs = mock_logger.error.call_args
            assert kwargs["url"] == url

        await client.close()

        error = exc_info.value
        assert error.category == ErrorCategory.NETWORK
        assert error.url == url
        assert error.status_code == status_code
        assert error.suggested_actions
        assert error.technical_details and url in error.technical_details

    @pytest.mark.asyncio
    async def test_success_returns_response(self) -> None:
        client = HttpClientService(
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[]))
        )
        async with client:
            response = await client.get("https://api.test/api/genre")
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_rate_limit_uses_status_message(self) -> None:
        client = HttpClientService(transport=httpx.MockTransport(lambda request: httpx.Response(429)))

        with pytest.raises(NetworkError) as exc_info:
            await client.get("https://api.test/api/game")
        await client.close()

        assert exc_info.value.message == get_http_error_message(429)
        assert "OpenCritic is rate limiting requests" in exc_info.value.suggested_actions


class TestErrorHandlingService:
    """Conversion of arbitrary exceptions into user-facing errors."""

    def test_app_errors_pass_through(self) -> None:
        error = DecodeError("Missing required field 'tier'.", field="tier")
        friendly = ErrorHandlingService().handle_error(error, "lookup", "test")

        assert friendly.message == error.message
        assert friendly.category == ErrorCategory.DECODE
        assert "Field: tier" in (friendly.technical_details or "")

    def test_other_exceptions_are_unexpected(self) -> None:
        friendly = ErrorHandlingService().handle_error(RuntimeError("boom"), "lookup", "test", {"url": "https://api.test"})

        assert friendly.category == ErrorCategory.UNEXPECTED
        assert friendly.severity == ErrorSeverity.CRITICAL
        assert friendly.message == "An unexpected error occurred."
        assert friendly.technical_details == "RuntimeError: boom"
        assert friendly.suggested_actions

    def test_errors_are_logged_with_technical_details(self) -> None:
        with patch("opencritic_today.services.errors.log") as mock_logger:
            friendly = ErrorHandlingService().handle_error(
                NetworkError("down", url="https://api.test", status_code=503), "lookup", "test"
            )

        _, kwargs = mock_logger.error.call_args
        assert kwargs["category"] == "network"
        assert "Status: 503" in kwargs["technical_details"]
        assert friendly.message == "down"

    def test_warnings_are_logged_as_warnings(self) -> None:
        error = AppError("minor", severity=ErrorSeverity.WARNING)
        with patch("opencritic_today.services.errors.log") as mock_logger:
            ErrorHandlingService().handle_error(error, "lookup", "test")

        assert mock_logger.warning.called
        assert not mock_logger.error.called

    def test_user_message_lists_at_most_three_suggestions(self) -> None:
        service = ErrorHandlingService()
        friendly = AppError(
            "Something failed",
            suggested_actions=["one", "two", "three", "four"],
        ).to_user_friendly()

        message = service.create_user_message(friendly)

        assert message.startswith("Something failed")
        assert "• three" in message
        assert "four" not in message
        assert service.create_user_message(friendly, include_suggestions=False) == "Something failed"


def test_hydration_timeout_error_describes_deadline() -> None:
    error = HydrationTimeoutError(deadline=60.0, pending=4)
    assert error.category == ErrorCategory.TIMEOUT
    assert error.severity == ErrorSeverity.ERROR
    assert "60 seconds" in error.message
    assert "Pending lookups: 4" in (error.technical_details or "")


@given(st.integers(min_value=100, max_value=599))
def test_every_status_code_has_a_message(status_code: int) -> None:
    message = get_http_error_message(status_code)
    assert message
    assert message.endswith(".")
