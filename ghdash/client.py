"""
ghdash GitHub client.

Provides the four fetches behind the dashboard: profile, repositories,
public events and the contribution calendar.
"""

import os
from typing import Any
from urllib.parse import quote

import httpx

from ghdash.exceptions import ConfigurationError, DashboardError
from ghdash.logging import get_logger
from ghdash.transport import DEFAULT_TIMEOUT, HTTPTransport
from ghdash.types.rate_limit import RateLimitSnapshot

GITHUB_API = "https://api.github.com"
GITHUB_GRAPHQL = "https://api.github.com/graphql"

PAGE_SIZE = 100
MAX_REPO_PAGES = 10
MAX_EVENT_PAGES = 3

CONTRIBUTIONS_QUERY = """query($username: String!) {
    user(login: $username) {
        contributionsCollection {
            contributionCalendar {
                totalContributions
                weeks {
                    contributionDays {
                        contributionCount
                        date
                    }
                }
            }
        }
    }
}"""

_logger = get_logger()


def _user_path(username: str) -> str:
    return f"{GITHUB_API}/users/{quote(username, safe='')}"


class GitHubClient:
    """
    Client for the GitHub data shown on a dashboard.

    Example:
        ```python
        import asyncio
        from ghdash import GitHubClient

        async def main():
            async with GitHubClient(token="ghp_...") as client:
                user = await client.get_user("octocat")
                repos = await client.get_all_repos("octocat")
                print(user["name"], len(repos), client.rate_limit)

        asyncio.run(main())
        ```
    """

    def __init__(
        self,
        token: str = "",
        timeout: float = DEFAULT_TIMEOUT,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            token: Personal access token. Without one the REST API is used
                anonymously and the contribution calendar is unavailable.
            timeout: Request timeout in seconds (default: 30.0)
            http_transport: Custom httpx transport (optional)
        """
        self._transport = HTTPTransport(
            token=token,
            timeout=timeout,
            http_transport=http_transport,
        )

    @classmethod
    def from_env(
        cls, http_transport: httpx.AsyncBaseTransport | None = None
    ) -> "GitHubClient":
        """
        Create a client from environment variables.

        Environment variables:
            GITHUB_TOKEN: Personal access token (optional)
            GHDASH_TIMEOUT: Request timeout in seconds (optional, default: 30)

        Raises:
            ConfigurationError: If GHDASH_TIMEOUT is not a positive number
        """
        token = os.environ.get("GITHUB_TOKEN", "").strip()
        timeout_raw = os.environ.get("GHDASH_TIMEOUT")

        timeout = DEFAULT_TIMEOUT
        if timeout_raw:
            try:
                timeout = float(timeout_raw)
            except ValueError:
                raise ConfigurationError(
                    f"Invalid GHDASH_TIMEOUT: {timeout_raw!r}. Must be a number"
                ) from None
            if timeout <= 0:
                raise ConfigurationError("GHDASH_TIMEOUT must be positive")

        return cls(token=token, timeout=timeout, http_transport=http_transport)

    @property
    def transport(self) -> HTTPTransport:
        """Get the underlying HTTP transport (for advanced use cases)."""
        return self._transport

    @property
    def token(self) -> str:
        return self._transport.token

    @token.setter
    def token(self, value: str) -> None:
        self._transport.token = value

    @property
    def rate_limit(self) -> RateLimitSnapshot | None:
        """Quota reported by the most recent response, if any."""
        return self._transport.rate_limit

    async def get_user(self, username: str) -> dict[str, Any]:
        """
        Get a user's public profile.

        Raises:
            NotFoundError: If the user does not exist
            RateLimitedError: If the API quota is exhausted
            ApiError: On any other error status
            NetworkError: If the request failed at transport level
        """
        return await self._transport.request_json("GET", _user_path(username))

    async def get_all_repos(self, username: str) -> list[dict[str, Any]]:
        """
        List a user's public repositories, most recently updated first.

        Pages are fetched one at a time until a short page or MAX_REPO_PAGES.
        Any page failure propagates.
        """
        repos: list[dict[str, Any]] = []
        for page in range(1, MAX_REPO_PAGES + 1):
            batch = await self._transport.request_json(
                "GET",
                f"{_user_path(username)}/repos",
                params={"per_page": PAGE_SIZE, "page": page, "sort": "updated"},
            )
            repos.extend(batch)
            if len(batch) < PAGE_SIZE:
                break
        return repos

    async def get_events(self, username: str) -> list[dict[str, Any]]:
        """
        List a user's recent public events.

        Fetches at most MAX_EVENT_PAGES pages. A failing page ends pagination
        and the events gathered so far are returned.
        """
        events: list[dict[str, Any]] = []
        for page in range(1, MAX_EVENT_PAGES + 1):
            try:
                batch = await self._transport.request_json(
                    "GET",
                    f"{_user_path(username)}/events/public",
                    params={"per_page": PAGE_SIZE, "page": page},
                )
            except DashboardError as e:
                _logger.warning(
                    "Event page %d for %s failed, keeping %d events: %s",
                    page, username, len(events), e.message,
                )
                break
            events.extend(batch)
            if len(batch) < PAGE_SIZE:
                break
        return events

    async def get_contributions(self, username: str) -> dict[str, Any] | None:
        """
        Get the contribution calendar from the GraphQL API.

        Returns:
            The ``contributionCalendar`` object (``totalContributions`` and
            ``weeks``), or None when no token is configured or the call failed
        """
        if not self.token:
            return None

        try:
            response = await self._transport.send(
                "POST",
                GITHUB_GRAPHQL,
                json={"query": CONTRIBUTIONS_QUERY, "variables": {"username": username}},
            )
        except DashboardError as e:
            _logger.warning("Contribution calendar unavailable for %s: %s", username, e.message)
            return None

        if not response.is_success:
            _logger.warning(
                "Contribution calendar unavailable for %s: HTTP %d",
                username, response.status_code,
            )
            return None

        try:
            payload = response.json()
        except ValueError:
            _logger.warning("Contribution calendar for %s is not valid JSON", username)
            return None

        calendar = payload
        for step in ("data", "user", "contributionsCollection", "contributionCalendar"):
            calendar = calendar.get(step) if isinstance(calendar, dict) else None
        if not isinstance(calendar, dict):
            _logger.warning("Contribution calendar missing from response for %s", username)
            return None
        return calendar

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> "GitHubClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit - closes the client."""
        await self.close()
