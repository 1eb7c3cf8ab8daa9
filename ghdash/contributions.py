"""
Builders for the two contribution calendar sources.

``from_calendar`` reads the GraphQL contribution calendar. ``from_events``
approximates a calendar from the public event stream when no token is
available. Its weights are a heuristic held in an EventWeightPolicy.
"""

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any

from ghdash.logging import get_logger
from ghdash.types.contributions import (
    ApproximateContributions,
    ContributionDay,
    ContributionSource,
    ExactContributions,
)

_logger = get_logger()


@dataclass(frozen=True)
class EventWeightPolicy:
    """How much a single public event adds to its day's count."""

    commit_event_types: frozenset[str] = frozenset({"PushEvent"})
    # Push events whose commit list is absent or empty
    missing_commits_weight: int = 1
    other_event_weight: int = 1


DEFAULT_EVENT_POLICY = EventWeightPolicy()


def _event_date(event: dict[str, Any]) -> date | None:
    created_at = event.get("created_at")
    if not isinstance(created_at, str):
        return None
    try:
        parsed = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


def event_weight(event: dict[str, Any], policy: EventWeightPolicy = DEFAULT_EVENT_POLICY) -> int:
    """Contribution weight of one event under ``policy``."""
    if event.get("type") in policy.commit_event_types:
        commits = (event.get("payload") or {}).get("commits")
        if commits:
            return len(commits)
        return policy.missing_commits_weight
    return policy.other_event_weight


def from_events(
    events: Iterable[dict[str, Any]],
    policy: EventWeightPolicy = DEFAULT_EVENT_POLICY,
) -> ApproximateContributions:
    """Aggregate public events into per-day counts."""
    counts: dict[date, int] = defaultdict(int)
    for event in events:
        day = _event_date(event)
        if day is None:
            continue
        counts[day] += event_weight(event, policy)

    return ApproximateContributions(
        days=tuple(ContributionDay(date=d, count=c) for d, c in sorted(counts.items()))
    )


def from_calendar(calendar: dict[str, Any]) -> ExactContributions:
    """
    Flatten a GraphQL ``contributionCalendar`` object.

    Args:
        calendar: Object with ``totalContributions`` and
            ``weeks[].contributionDays[]{date, contributionCount}``

    Returns:
        ExactContributions carrying the calendar's own total

    Raises:
        ValueError: If the calendar is structurally invalid
    """
    try:
        counts: dict[date, int] = {}
        for week in calendar.get("weeks") or []:
            for day in week.get("contributionDays") or []:
                counts[date.fromisoformat(day["date"])] = int(day["contributionCount"])
        total = int(calendar.get("totalContributions", sum(counts.values())))
    except (AttributeError, KeyError, TypeError) as e:
        raise ValueError(f"Malformed contribution calendar: {e!s}") from e

    return ExactContributions(
        total_contributions=total,
        days=tuple(ContributionDay(date=d, count=c) for d, c in sorted(counts.items())),
    )


def select_source(
    calendar: dict[str, Any] | None,
    events: Iterable[dict[str, Any]],
    policy: EventWeightPolicy = DEFAULT_EVENT_POLICY,
) -> ContributionSource:
    """
    Prefer the exact calendar, falling back to the event approximation.

    A malformed calendar is treated like a missing one.
    """
    if calendar is not None:
        try:
            return from_calendar(calendar)
        except ValueError as e:
            _logger.warning("Ignoring contribution calendar: %s", e)
    return from_events(events, policy)


__all__ = [
    "EventWeightPolicy",
    "DEFAULT_EVENT_POLICY",
    "event_weight",
    "from_events",
    "from_calendar",
    "select_source",
]
