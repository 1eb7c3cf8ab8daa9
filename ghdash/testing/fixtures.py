"""
Pytest fixtures for ghdash testing.

Provides common fixtures for testing code that builds on ghdash.
"""

from collections.abc import Generator
from typing import Any

import pytest

from ghdash.cache import TTLCache
from ghdash.storage import MemoryStore
from ghdash.testing.factories import (
    create_mock_calendar,
    create_mock_events,
    create_mock_repos,
    create_mock_user,
)
from ghdash.testing.mock import MockGitHubClient


class FakeClock:
    """Manually advanced clock returning epoch seconds."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ============================================================================
# Mock Client Fixtures
# ============================================================================


@pytest.fixture
def mock_client() -> Generator[MockGitHubClient, None, None]:
    """
    Provide an unauthenticated MockGitHubClient.

    Example:
        ```python
        async def test_my_feature(mock_client):
            mock_client.configure_get_user(error=NotFoundError())
            ...
            assert mock_client.was_called("get_user")
        ```
    """
    client = MockGitHubClient()
    yield client
    client.reset()


@pytest.fixture
def mock_client_with_token() -> Generator[MockGitHubClient, None, None]:
    """Provide a MockGitHubClient whose contribution calendar is available."""
    client = MockGitHubClient(token="test-token")
    yield client
    client.reset()


# ============================================================================
# Cache Fixtures
# ============================================================================


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide a clock that only moves when told to."""
    return FakeClock()


@pytest.fixture
def memory_store() -> MemoryStore:
    """Provide an empty in-memory store."""
    return MemoryStore()


@pytest.fixture
def ttl_cache(memory_store: MemoryStore, fake_clock: FakeClock) -> TTLCache:
    """Provide a cache over ``memory_store`` driven by ``fake_clock``."""
    return TTLCache(memory_store, clock=fake_clock)


# ============================================================================
# Record Fixtures
# ============================================================================


@pytest.fixture
def sample_user() -> dict[str, Any]:
    """Provide a user profile record."""
    return create_mock_user("octocat")


@pytest.fixture
def sample_repos() -> list[dict[str, Any]]:
    """Provide three repository records."""
    return create_mock_repos(3)


@pytest.fixture
def sample_events() -> list[dict[str, Any]]:
    """Provide five watch events."""
    return create_mock_events(5)


@pytest.fixture
def sample_calendar() -> dict[str, Any]:
    """Provide an empty contribution calendar ending 2024-01-31."""
    return create_mock_calendar()
