"""
Pytest plugin for ghdash testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
automatically discovered by pytest when this package is installed.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["ghdash.testing.conftest"]

Or import the fixtures directly:

    from ghdash.testing.fixtures import mock_client, ttl_cache
"""

# Re-export all fixtures for pytest auto-discovery
from ghdash.testing.fixtures import (
    fake_clock,
    memory_store,
    mock_client,
    mock_client_with_token,
    sample_calendar,
    sample_events,
    sample_repos,
    sample_user,
    ttl_cache,
)

__all__ = [
    "mock_client",
    "mock_client_with_token",
    "fake_clock",
    "memory_store",
    "ttl_cache",
    "sample_user",
    "sample_repos",
    "sample_events",
    "sample_calendar",
]
