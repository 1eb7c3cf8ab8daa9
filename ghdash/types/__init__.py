"""ghdash type definitions.

This module exports all data model types used by the package.
"""

from ghdash.types.contributions import (
    ApproximateContributions,
    ContributionDay,
    ContributionSource,
    ExactContributions,
)
from ghdash.types.heatmap import HeatmapCell, HeatmapLabel, HeatmapLayout
from ghdash.types.rate_limit import RateLimitSnapshot

__all__ = [
    # Contribution calendar
    "ContributionDay",
    "ExactContributions",
    "ApproximateContributions",
    "ContributionSource",
    # Heatmap layout
    "HeatmapCell",
    "HeatmapLabel",
    "HeatmapLayout",
    # Transport
    "RateLimitSnapshot",
]
