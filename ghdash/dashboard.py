"""
Dashboard loading.

DashboardLoader ties the cache, the GitHub client and the heatmap engine
together: it serves fresh entries from the cache, fetches the rest
concurrently, stores what it fetched and builds the snapshot handed to the
renderer.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from ghdash.cache import TTLCache, contributions_key, events_key, repos_key, user_key
from ghdash.client import GitHubClient
from ghdash.contributions import DEFAULT_EVENT_POLICY, EventWeightPolicy, select_source
from ghdash.exceptions import DashboardError
from ghdash.heatmap import build_heatmap
from ghdash.logging import get_logger
from ghdash.registry import DEFAULT_REGISTRY, DisplayRegistry
from ghdash.settings import DashboardSettings
from ghdash.storage import store_from_env
from ghdash.types.contributions import ContributionSource
from ghdash.types.heatmap import HeatmapLayout
from ghdash.types.rate_limit import RateLimitSnapshot

if TYPE_CHECKING:
    import httpx

_logger = get_logger()


@dataclass
class DashboardSnapshot:
    """Everything fetched and computed for one user."""

    username: str
    user: dict[str, Any]
    repos: list[dict[str, Any]]
    events: list[dict[str, Any]]
    contributions: ContributionSource
    heatmap: HeatmapLayout
    fetched_at: datetime | None
    rate_limit: RateLimitSnapshot | None
    generation: int


class DashboardLoader:
    """
    Loads dashboards, one fetch cycle at a time.

    Every call to ``load`` starts a new generation. A cycle that completes
    after a newer one has started is discarded, so a slow response can never
    replace the state of a later request.

    Example:
        ```python
        from ghdash import DashboardLoader, GitHubClient, TTLCache
        from ghdash.storage import MemoryStore

        loader = DashboardLoader(GitHubClient(), TTLCache(MemoryStore()))
        snapshot = await loader.load("octocat")
        print(snapshot.heatmap.total, snapshot.heatmap.is_exact)
        ```
    """

    def __init__(
        self,
        client: GitHubClient,
        cache: TTLCache,
        registry: DisplayRegistry = DEFAULT_REGISTRY,
        event_policy: EventWeightPolicy = DEFAULT_EVENT_POLICY,
        today: Callable[[], date] | None = None,
    ) -> None:
        """
        Args:
            client: GitHub client (or a mock with the same interface)
            cache: Cache for the four per-user entities
            registry: Month and weekday names for the heatmap
            event_policy: Weights for the event-based calendar approximation
            today: Returns the last heatmap day (default: current UTC date)
        """
        self.client = client
        self.cache = cache
        self.registry = registry
        self.event_policy = event_policy
        self._today = today
        self._generation = 0
        self._current: DashboardSnapshot | None = None

    @classmethod
    def from_env(cls, http_transport: "httpx.AsyncBaseTransport | None" = None) -> "DashboardLoader":
        """
        Create a loader backed by the on-disk store.

        The token comes from the persisted settings, or GITHUB_TOKEN when
        none is stored. See ``GitHubClient.from_env`` and ``store_from_env``
        for the other environment variables.

        Raises:
            ConfigurationError: If an environment variable is invalid
        """
        store = store_from_env()
        settings = DashboardSettings.from_env(store)
        client = GitHubClient.from_env(http_transport=http_transport)
        client.token = settings.token
        return cls(client, TTLCache(store))

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def current(self) -> DashboardSnapshot | None:
        """Snapshot of the most recent cycle that completed in order."""
        return self._current

    async def load(self, username: str) -> DashboardSnapshot | None:
        """
        Load a user's dashboard.

        Returns:
            The new snapshot, or None if a newer cycle started meanwhile

        Raises:
            NotFoundError, RateLimitedError, ApiError, NetworkError: The first
                failure among the concurrent fetches; nothing is published
        """
        self._generation += 1
        generation = self._generation

        try:
            snapshot = await self._run_cycle(username, generation)
        except DashboardError as e:
            if generation != self._generation:
                _logger.info("Discarding failed stale load of %s: %s", username, e.message)
                return None
            raise

        if generation != self._generation:
            _logger.info(
                "Discarding stale load of %s (generation %d, now %d)",
                username, generation, self._generation,
            )
            return None

        self._current = snapshot
        return snapshot

    async def refresh(self, username: str) -> DashboardSnapshot | None:
        """Drop every cached entry, then load ``username`` from the API."""
        self.cache.clear()
        return await self.load(username)

    async def apply_settings(self, settings: DashboardSettings) -> DashboardSnapshot | None:
        """
        Use the token from ``settings``.

        With a token and a dashboard on screen the dashboard is refreshed,
        so the exact contribution calendar replaces the approximation.
        """
        self.client.token = settings.token
        if self._current is not None and settings.token:
            return await self.refresh(self._current.username)
        return None

    def fetched_at(self, username: str) -> datetime | None:
        """When the profile shown for ``username`` was fetched."""
        return self.cache.get_timestamp(user_key(username))

    async def _fetch_and_store(
        self,
        key: str,
        fetch: Callable[[str], Awaitable[Any]],
        username: str,
        generation: int,
    ) -> Any:
        data = await fetch(username)
        if data is None:
            return None
        if generation != self._generation:
            _logger.debug("Generation %d superseded, not caching %s", generation, key)
            return data
        self.cache.set(key, data)
        return data

    async def _run_cycle(self, username: str, generation: int) -> DashboardSnapshot:
        fetchers: dict[str, tuple[str, Callable[[str], Awaitable[Any]]]] = {
            "user": (user_key(username), self.client.get_user),
            "repos": (repos_key(username), self.client.get_all_repos),
            "events": (events_key(username), self.client.get_events),
            "contributions": (contributions_key(username), self.client.get_contributions),
        }

        results: dict[str, Any] = {}
        pending: dict[str, asyncio.Task[Any]] = {}
        for name, (key, fetch) in fetchers.items():
            cached = self.cache.get(key)
            if cached is not None:
                results[name] = cached
            else:
                pending[name] = asyncio.create_task(
                    self._fetch_and_store(key, fetch, username, generation)
                )

        if pending:
            _logger.debug("Generation %d fetching %s for %s", generation, sorted(pending), username)
            try:
                values = await asyncio.gather(*pending.values())
            except BaseException:
                for task in pending.values():
                    task.cancel()
                raise
            results.update(zip(pending, values))

        source = select_source(results["contributions"], results["events"], self.event_policy)
        heatmap = build_heatmap(
            source,
            today=self._today() if self._today else None,
            registry=self.registry,
        )

        return DashboardSnapshot(
            username=username,
            user=results["user"],
            repos=results["repos"],
            events=results["events"],
            contributions=source,
            heatmap=heatmap,
            fetched_at=self.fetched_at(username),
            rate_limit=self.client.rate_limit,
            generation=generation,
        )


__all__ = ["DashboardSnapshot", "DashboardLoader"]
