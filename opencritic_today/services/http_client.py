"""HTTP client service: one attempt per request, explicit timeout."""

from typing import Any

import httpx
import structlog

from .errors import NetworkError, get_http_error_message

log = structlog.stdlib.get_logger()


class HttpClientService:
    """Async HTTP client that issues each GET exactly once.

    Transport failures and non-2xx responses are raised as ``NetworkError``;
    callers are expected to let them abort the run.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        verify_ssl: bool = True,
        max_connections: int = 20,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client service.

        Args:
            timeout: Per-request timeout in seconds
            verify_ssl: Whether to verify SSL certificates
            max_connections: Connection pool size
            transport: Optional transport override (used by tests)
        """
        self.timeout = timeout

        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={
                "User-Agent": "opencritic-today/0.1.0",
                "Accept": "application/json",
            },
            follow_redirects=True,
            limits=httpx.Limits(max_keepalive_connections=10, max_connections=max_connections),
            verify=verify_ssl,
            transport=transport,
        )

        log.debug(
            "HTTP client service initialized",
            timeout=timeout,
            verify_ssl=verify_ssl,
            max_connections=max_connections,
        )

    async def get(
        self,
        url: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Make a single GET request.

        Args:
            url: The URL to request
            params: Optional query parameters

        Returns:
            HTTP response object with a 2xx status

        Raises:
            NetworkError: On transport failure, timeout or non-2xx status
        """
        log.debug("Making HTTP GET request", url=url)

        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            log.error(
                "HTTP GET request returned an error status",
                url=url,
                status_code=status_code,
            )
            raise NetworkError(
                message=get_http_error_message(status_code),
                original_error=e,
                url=url,
                status_code=status_code,
            ) from e
        except httpx.TimeoutException as e:
            log.error("HTTP GET request timed out", url=url, timeout=self.timeout)
            raise NetworkError(
                message="The request timed out. The server may be slow or unavailable.",
                original_error=e,
                url=url,
            ) from e
        except httpx.RequestError as e:
            log.error(
                "HTTP GET request failed",
                url=url,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise NetworkError(
                message="Unable to reach OpenCritic. Please check your internet connection.",
                original_error=e,
                url=url,
            ) from e

        log.debug(
            "HTTP GET request successful",
            url=url,
            status_code=response.status_code,
            content_length=len(response.content),
        )
        return response

    async def close(self) -> None:
        """Close the HTTP client and clean up resources."""
        await self._client.aclose()
        log.debug("HTTP client closed")

    async def __aenter__(self) -> "HttpClientService":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type[Exception] | None, exc_val: Exception | None, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
