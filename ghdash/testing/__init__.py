"""ghdash testing utilities.

Provides a mock client, record factories and fixtures for testing
applications that use ghdash.
"""

from ghdash.testing.factories import (
    create_mock_calendar,
    create_mock_event,
    create_mock_events,
    create_mock_repo,
    create_mock_repos,
    create_mock_user,
)
from ghdash.testing.fixtures import FakeClock
from ghdash.testing.mock import MockCall, MockGitHubClient, MockResponse

__all__ = [
    # Mock client
    "MockGitHubClient",
    "MockCall",
    "MockResponse",
    "FakeClock",
    # Helper functions
    "create_mock_user",
    "create_mock_repo",
    "create_mock_repos",
    "create_mock_event",
    "create_mock_events",
    "create_mock_calendar",
]
