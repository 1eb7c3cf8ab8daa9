"""
HTTP Transport for ghdash.

Handles authenticated async HTTP communication with the GitHub REST and
GraphQL APIs, rate-limit tracking and error classification.
"""

import time
from typing import Any

import httpx

from ghdash.exceptions import (
    ApiError,
    DashboardError,
    NetworkError,
    NotFoundError,
    RateLimitedError,
)
from ghdash.logging import log_http_request, log_http_response
from ghdash.types.rate_limit import RateLimitSnapshot

ACCEPT_HEADER = "application/vnd.github.v3+json"
DEFAULT_TIMEOUT = 30.0


class HTTPTransport:
    """
    Async HTTP transport layer.

    Handles:
    - Authorization header only when a token is configured
    - Rate-limit snapshot refresh on every response carrying the headers,
      successful or not
    - Error response parsing into typed exceptions
    """

    def __init__(
        self,
        token: str = "",
        timeout: float = DEFAULT_TIMEOUT,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize HTTP transport.

        Args:
            token: Personal access token; empty for unauthenticated access
            timeout: Request timeout in seconds
            http_transport: Custom httpx transport (e.g. httpx.MockTransport in tests)
        """
        self.token = token
        self.timeout = timeout
        self.rate_limit: RateLimitSnapshot | None = None

        self._client = httpx.AsyncClient(timeout=timeout, transport=http_transport)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "HTTPTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    @property
    def headers(self) -> dict[str, str]:
        headers = {"Accept": ACCEPT_HEADER}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def send(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """
        Send a request and record the rate-limit headers of the response.

        A response without any X-RateLimit-* header keeps the previous snapshot.

        Args:
            method: HTTP method
            url: Absolute request URL
            params: Query parameters
            json: JSON request body (for POST)

        Returns:
            The raw response, whatever its status

        Raises:
            NetworkError: If no response was received
        """
        headers = self.headers
        log_http_request(method, url, headers=headers, body=json)

        started = time.perf_counter()
        try:
            response = await self._client.request(
                method, url, params=params, json=json, headers=headers
            )
        except httpx.RequestError as e:
            raise NetworkError(f"{type(e).__name__}: {e!s}") from e

        snapshot = RateLimitSnapshot.from_headers(response.headers)
        if snapshot != RateLimitSnapshot():
            self.rate_limit = snapshot
        log_http_response(
            response.status_code,
            url,
            elapsed_ms=(time.perf_counter() - started) * 1000,
            rate_remaining=snapshot.remaining,
        )
        return response

    async def request_json(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """
        Send a request and decode a successful JSON response.

        Returns:
            Parsed JSON response

        Raises:
            NotFoundError: On 404
            RateLimitedError: On 403
            ApiError: On any other non-success status
            NetworkError: If no response was received or the body is not JSON
        """
        response = await self.send(method, url, params=params, json=json)

        if not response.is_success:
            raise self._parse_error_response(response)

        try:
            return response.json()
        except ValueError as e:
            raise NetworkError(f"Invalid JSON from {url}") from e

    def _parse_error_response(self, response: httpx.Response) -> DashboardError:
        """
        Map a non-success response onto a typed exception.

        Args:
            response: HTTP response with error status

        Returns:
            Appropriate DashboardError subclass
        """
        status_code = response.status_code

        if status_code == 404:
            return NotFoundError()
        elif status_code == 403:
            reset = self.rate_limit.reset if self.rate_limit else None
            return RateLimitedError(reset=reset)
        else:
            return ApiError(status_code)
