"""Summary data models derived from repositories and events."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LanguageShare:
    """One slice of the language breakdown."""

    language: str
    weight: int
    percent: float
    color: str


@dataclass(frozen=True)
class ActivityItem:
    """A recent event prepared for display."""

    icon: str
    label: str
    repo: str
    created_at: str


@dataclass(frozen=True)
class ActivitySummary:
    """Event and commit totals plus the most recent items."""

    total_events: int
    total_commits: int
    recent: list[ActivityItem]
