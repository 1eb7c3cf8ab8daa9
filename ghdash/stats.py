"""
Presentation helpers.

Pure functions that turn raw API records into the numbers and strings the
dashboard shows: formatted magnitudes, relative times, totals, the language
breakdown, the activity summary and the repository list view.
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from typing import Any

from ghdash.registry import DEFAULT_REGISTRY, DisplayRegistry
from ghdash.types.stats import ActivityItem, ActivitySummary, LanguageShare

REPOS_PER_REVEAL = 10
TOP_LANGUAGES = 8
RECENT_EVENTS = 8

SORT_KEYS = ("stars", "updated", "name", "forks")


def format_number(n: int) -> str:
    """
    Abbreviate a count for display.

    Examples:
        >>> format_number(999)
        '999'
        >>> format_number(99999)
        '100.0K'
        >>> format_number(2500000)
        '2.5M'
    """
    if n >= 1_000_000:
        return f"{n / 1_000_000:.1f}M"
    if n >= 1000:
        return f"{n / 1000:.1f}K"
    return str(n)


def _parse_iso(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_date(value: str) -> str:
    """Render an ISO timestamp as ``YYYY/M/D`` (UTC)."""
    d = _parse_iso(value).astimezone(timezone.utc)
    return f"{d.year}/{d.month}/{d.day}"


def _ago(amount: int, unit: str) -> str:
    return f"{amount} {unit}{'s' if amount != 1 else ''} ago"


def time_ago(value: str, now: datetime | None = None) -> str:
    """Relative age of an ISO timestamp, e.g. ``3 hours ago``."""
    if now is None:
        now = datetime.now(tz=timezone.utc)

    seconds = (now - _parse_iso(value)).total_seconds()
    minutes = int(seconds // 60)
    hours = int(seconds // 3600)
    days = int(seconds // 86400)
    weeks = days // 7
    months = days // 30
    years = days // 365

    if minutes < 1:
        return "just now"
    if minutes < 60:
        return _ago(minutes, "minute")
    if hours < 24:
        return _ago(hours, "hour")
    if days < 7:
        return _ago(days, "day")
    if weeks < 5:
        return _ago(weeks, "week")
    if months < 12:
        return _ago(months, "month")
    return _ago(years, "year")


def total_stars(repos: Iterable[dict[str, Any]]) -> int:
    return sum(r.get("stargazers_count") or 0 for r in repos)


def total_forks(repos: Iterable[dict[str, Any]]) -> int:
    return sum(r.get("forks_count") or 0 for r in repos)


def language_weights(repos: Iterable[dict[str, Any]]) -> list[tuple[str, int]]:
    """Repository size per primary language, heaviest first."""
    weights: dict[str, int] = defaultdict(int)
    for repo in repos:
        language = repo.get("language")
        if language:
            weights[language] += repo.get("size") or 1
    return sorted(weights.items(), key=lambda item: item[1], reverse=True)


def language_breakdown(
    repos: Iterable[dict[str, Any]],
    limit: int = TOP_LANGUAGES,
    registry: DisplayRegistry = DEFAULT_REGISTRY,
) -> list[LanguageShare]:
    """
    Top languages by repository size.

    Percentages are relative to all languages, not only the ones returned,
    so they may sum to less than 100.
    """
    weights = language_weights(repos)
    grand_total = sum(w for _, w in weights)
    return [
        LanguageShare(
            language=language,
            weight=weight,
            percent=round(weight / grand_total * 100, 1),
            color=registry.language_color(language),
        )
        for language, weight in weights[:limit]
    ]


def commit_count(events: Iterable[dict[str, Any]]) -> int:
    """Commits carried by push events."""
    return sum(
        len((e.get("payload") or {}).get("commits") or [])
        for e in events
        if e.get("type") == "PushEvent"
    )


def activity_summary(
    events: Sequence[dict[str, Any]],
    recent: int = RECENT_EVENTS,
    registry: DisplayRegistry = DEFAULT_REGISTRY,
) -> ActivitySummary:
    items = [
        ActivityItem(
            icon=registry.event_icon(e.get("type", "")),
            label=registry.event_label(e.get("type", "")),
            repo=(e.get("repo") or {}).get("name", ""),
            created_at=e.get("created_at", ""),
        )
        for e in events[:recent]
    ]
    return ActivitySummary(
        total_events=len(events),
        total_commits=commit_count(events),
        recent=items,
    )


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _updated_at(repo: dict[str, Any]) -> datetime:
    value = repo.get("updated_at")
    return _parse_iso(value) if value else _EPOCH


def filter_repos(
    repos: Iterable[dict[str, Any]],
    language: str | None = None,
    search: str = "",
    sort_by: str = "updated",
) -> list[dict[str, Any]]:
    """
    Filter and sort repositories for the list view.

    Args:
        repos: Repository records
        language: Keep only repositories with this primary language
        search: Case-insensitive substring of name or description
        sort_by: One of "stars", "updated", "name", "forks"

    Raises:
        ValueError: If ``sort_by`` is unknown
    """
    if sort_by not in SORT_KEYS:
        raise ValueError(f"Unknown sort key {sort_by!r}. Must be one of {', '.join(SORT_KEYS)}")

    result = list(repos)

    if language:
        result = [r for r in result if r.get("language") == language]

    term = search.strip().lower()
    if term:
        result = [
            r for r in result
            if term in (r.get("name") or "").lower()
            or term in (r.get("description") or "").lower()
        ]

    if sort_by == "stars":
        result.sort(key=lambda r: r.get("stargazers_count") or 0, reverse=True)
    elif sort_by == "updated":
        result.sort(key=_updated_at, reverse=True)
    elif sort_by == "name":
        result.sort(key=lambda r: (r.get("name") or "").casefold())
    else:
        result.sort(key=lambda r: r.get("forks_count") or 0, reverse=True)

    return result


def reveal(
    repos: Sequence[dict[str, Any]],
    shown: int,
    per_reveal: int = REPOS_PER_REVEAL,
) -> list[dict[str, Any]]:
    """Next batch of the list view after ``shown`` items are already visible."""
    return list(repos[shown:shown + per_reveal])


def export_payload(
    user: dict[str, Any],
    repos: Sequence[dict[str, Any]],
    now: datetime | None = None,
) -> dict[str, Any]:
    """JSON document offered as the dashboard's data export."""
    if now is None:
        now = datetime.now(tz=timezone.utc)

    return {
        "user": user,
        "repos": [
            {
                "name": r.get("name"),
                "description": r.get("description"),
                "language": r.get("language"),
                "stars": r.get("stargazers_count"),
                "forks": r.get("forks_count"),
                "updated": r.get("updated_at"),
                "url": r.get("html_url"),
                "topics": r.get("topics"),
            }
            for r in repos
        ],
        "stats": {
            "totalStars": total_stars(repos),
            "totalForks": total_forks(repos),
        },
        "exportedAt": now.astimezone(timezone.utc).isoformat().replace("+00:00", "Z"),
    }


__all__ = [
    "REPOS_PER_REVEAL",
    "format_number",
    "format_date",
    "time_ago",
    "total_stars",
    "total_forks",
    "language_weights",
    "language_breakdown",
    "commit_count",
    "activity_summary",
    "filter_repos",
    "reveal",
    "export_payload",
]
