"""ghdash - data core for a GitHub profile dashboard."""

from ghdash.cache import CACHE_TTL, TTLCache
from ghdash.client import GitHubClient
from ghdash.contributions import EventWeightPolicy, from_calendar, from_events
from ghdash.dashboard import DashboardLoader, DashboardSnapshot
from ghdash.exceptions import (
    ApiError,
    ConfigurationError,
    DashboardError,
    NetworkError,
    NotFoundError,
    RateLimitedError,
    StoreError,
    StoreFullError,
)
from ghdash.heatmap import build_heatmap, get_level
from ghdash.logging import configure_logging, get_logger
from ghdash.registry import DEFAULT_REGISTRY, DisplayRegistry
from ghdash.settings import DashboardSettings
from ghdash.stats import format_number
from ghdash.storage import JsonFileStore, KeyValueStore, MemoryStore
from ghdash.transport import HTTPTransport
from ghdash.types import (
    ApproximateContributions,
    ContributionDay,
    ExactContributions,
    HeatmapLayout,
    RateLimitSnapshot,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Main entry points
    "DashboardLoader",
    "DashboardSnapshot",
    "GitHubClient",
    # Cache
    "TTLCache",
    "CACHE_TTL",
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    # Contributions & heatmap
    "ContributionDay",
    "ExactContributions",
    "ApproximateContributions",
    "EventWeightPolicy",
    "from_calendar",
    "from_events",
    "HeatmapLayout",
    "build_heatmap",
    "get_level",
    # Presentation
    "DisplayRegistry",
    "DEFAULT_REGISTRY",
    "format_number",
    "DashboardSettings",
    # Exceptions
    "DashboardError",
    "NotFoundError",
    "RateLimitedError",
    "ApiError",
    "NetworkError",
    "ConfigurationError",
    "StoreError",
    "StoreFullError",
    # Transport
    "HTTPTransport",
    "RateLimitSnapshot",
    # Logging
    "configure_logging",
    "get_logger",
]
