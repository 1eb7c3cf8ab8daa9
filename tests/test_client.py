"""
Tests for GitHubClient pagination, soft failures and configuration.
"""

import asyncio
import json
from datetime import date

import httpx
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from ghdash.client import (
    GITHUB_GRAPHQL,
    MAX_EVENT_PAGES,
    MAX_REPO_PAGES,
    PAGE_SIZE,
    GitHubClient,
)
from ghdash.exceptions import ConfigurationError, NotFoundError, RateLimitedError
from ghdash.testing import create_mock_calendar, create_mock_repos


class Recorder:
    """httpx.MockTransport handler that serves page sizes and records requests."""

    def __init__(self, pages: list[int | None], status: int = 500) -> None:
        # None marks a failing page
        self.pages = pages
        self.status = status
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        page = int(request.url.params.get("page", "1"))
        size = self.pages[page - 1] if page <= len(self.pages) else 0
        if size is None:
            return httpx.Response(self.status)
        items = [{"id": (page - 1) * PAGE_SIZE + i} for i in range(size)]
        return httpx.Response(200, json=items)


def make_client(handler, token: str = "") -> GitHubClient:
    return GitHubClient(token=token, http_transport=httpx.MockTransport(handler))


def calendar_response(calendar: dict) -> httpx.Response:
    return httpx.Response(
        200,
        json={"data": {"user": {"contributionsCollection": {"contributionCalendar": calendar}}}},
    )


@given(pages=st.lists(st.integers(min_value=0, max_value=PAGE_SIZE), min_size=1, max_size=12))
@settings(max_examples=30, deadline=None)
def test_property_repos_stop_at_short_page_or_cap(pages: list[int]) -> None:
    """Pagination ends after the first short page or MAX_REPO_PAGES pages."""
    recorder = Recorder(pages)

    async def fetch() -> list:
        async with make_client(recorder) as client:
            return await client.get_all_repos("octocat")

    repos = asyncio.run(fetch())

    # pages past the list are served empty
    sizes = pages + [0] * MAX_REPO_PAGES
    expected_pages = MAX_REPO_PAGES
    for index, size in enumerate(sizes[:MAX_REPO_PAGES]):
        if size < PAGE_SIZE:
            expected_pages = index + 1
            break

    assert len(recorder.requests) == expected_pages
    assert len(repos) == sum(sizes[:expected_pages])


class TestGetAllRepos:
    """Tests for get_all_repos()."""

    @pytest.mark.asyncio
    async def test_concatenates_pages_in_order(self) -> None:
        recorder = Recorder([100, 100, 30])
        async with make_client(recorder) as client:
            repos = await client.get_all_repos("octocat")

        assert len(repos) == 230
        assert [r["id"] for r in repos] == list(range(230))
        assert len(recorder.requests) == 3

    @pytest.mark.asyncio
    async def test_query_parameters(self) -> None:
        recorder = Recorder([5])
        async with make_client(recorder) as client:
            await client.get_all_repos("octocat")

        request = recorder.requests[0]
        assert request.url.path == "/users/octocat/repos"
        assert request.url.params["per_page"] == "100"
        assert request.url.params["page"] == "1"
        assert request.url.params["sort"] == "updated"

    @pytest.mark.asyncio
    async def test_capped_at_max_pages(self) -> None:
        recorder = Recorder([PAGE_SIZE] * (MAX_REPO_PAGES + 2))
        async with make_client(recorder) as client:
            repos = await client.get_all_repos("octocat")

        assert len(recorder.requests) == MAX_REPO_PAGES
        assert len(repos) == MAX_REPO_PAGES * PAGE_SIZE

    @pytest.mark.asyncio
    async def test_page_failure_propagates(self) -> None:
        recorder = Recorder([100, None], status=403)
        async with make_client(recorder) as client:
            with pytest.raises(RateLimitedError):
                await client.get_all_repos("octocat")

    @pytest.mark.asyncio
    async def test_username_is_escaped(self) -> None:
        recorder = Recorder([0])
        async with make_client(recorder) as client:
            await client.get_all_repos("a/b")

        assert recorder.requests[0].url.raw_path.startswith(b"/users/a%2Fb/repos")


class TestGetEvents:
    """Tests for get_events()."""

    @pytest.mark.asyncio
    async def test_partial_result_on_later_failure(self) -> None:
        recorder = Recorder([100, None])
        async with make_client(recorder) as client:
            events = await client.get_events("octocat")

        assert len(events) == 100
        assert len(recorder.requests) == 2

    @pytest.mark.asyncio
    async def test_first_page_failure_gives_empty_list(self) -> None:
        recorder = Recorder([None], status=404)
        async with make_client(recorder) as client:
            events = await client.get_events("octocat")

        assert events == []

    @pytest.mark.asyncio
    async def test_capped_at_max_pages(self) -> None:
        recorder = Recorder([PAGE_SIZE] * 5)
        async with make_client(recorder) as client:
            events = await client.get_events("octocat")

        assert len(recorder.requests) == MAX_EVENT_PAGES
        assert len(events) == MAX_EVENT_PAGES * PAGE_SIZE
        assert recorder.requests[0].url.path == "/users/octocat/events/public"


class TestGetUser:
    """Tests for get_user()."""

    @pytest.mark.asyncio
    async def test_returns_profile_and_tracks_rate_limit(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={"login": "octocat", "public_repos": 8},
                headers={"X-RateLimit-Remaining": "59", "X-RateLimit-Limit": "60"},
            )

        async with make_client(handler) as client:
            user = await client.get_user("octocat")

            assert user["login"] == "octocat"
            assert client.rate_limit is not None
            assert client.rate_limit.remaining == 59

    @pytest.mark.asyncio
    async def test_unknown_user(self) -> None:
        async with make_client(lambda r: httpx.Response(404)) as client:
            with pytest.raises(NotFoundError):
                await client.get_user("nobody-here")


class TestGetContributions:
    """Tests for get_contributions()."""

    @pytest.mark.asyncio
    async def test_without_token_makes_no_request(self) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={})

        async with make_client(handler) as client:
            assert await client.get_contributions("octocat") is None

        assert requests == []

    @pytest.mark.asyncio
    async def test_returns_calendar(self) -> None:
        calendar = create_mock_calendar({date(2024, 1, 30): 2, date(2024, 1, 31): 3})
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return calendar_response(calendar)

        async with make_client(handler, token="tkn") as client:
            result = await client.get_contributions("octocat")

        assert result == calendar
        request = requests[0]
        assert str(request.url) == GITHUB_GRAPHQL
        assert request.method == "POST"
        assert request.headers["Authorization"] == "Bearer tkn"
        body = json.loads(request.content)
        assert body["variables"] == {"username": "octocat"}
        assert "contributionCalendar" in body["query"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(401),
            httpx.Response(502),
            httpx.Response(200, content=b"not json"),
            httpx.Response(200, json={"data": {"user": None}}),
            httpx.Response(200, json={"errors": [{"message": "Could not resolve"}]}),
        ],
    )
    async def test_soft_failures_return_none(self, response: httpx.Response) -> None:
        async with make_client(lambda r: response, token="tkn") as client:
            assert await client.get_contributions("octocat") is None

    @pytest.mark.asyncio
    async def test_network_failure_returns_none(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async with make_client(handler, token="tkn") as client:
            assert await client.get_contributions("octocat") is None


class TestConfiguration:
    """Client construction and environment handling."""

    def test_token_setter_updates_transport(self) -> None:
        client = GitHubClient()
        client.token = "new"
        assert client.transport.token == "new"
        assert client.transport.headers["Authorization"] == "Bearer new"

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITHUB_TOKEN", " ghp_abc ")
        monkeypatch.setenv("GHDASH_TIMEOUT", "12.5")

        client = GitHubClient.from_env()

        assert client.token == "ghp_abc"
        assert client.transport.timeout == 12.5

    def test_from_env_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        monkeypatch.delenv("GHDASH_TIMEOUT", raising=False)

        client = GitHubClient.from_env()

        assert client.token == ""
        assert client.transport.timeout == 30.0

    @pytest.mark.parametrize("value", ["soon", "0", "-3"])
    def test_from_env_invalid_timeout(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        monkeypatch.setenv("GHDASH_TIMEOUT", value)

        with pytest.raises(ConfigurationError) as exc_info:
            GitHubClient.from_env()

        assert exc_info.value.code == "CONFIGURATION_ERROR"


def test_mock_repos_factory_matches_page_shape() -> None:
    repos = create_mock_repos(3, owner="octocat")
    assert [r["full_name"] for r in repos] == ["octocat/repo-0", "octocat/repo-1", "octocat/repo-2"]
