from ghdash.testing.conftest import (  # noqa: F401
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
