"""Contribution calendar data models.

A calendar comes either from the GraphQL contribution calendar (exact) or is
reconstructed from the public event stream (approximate).
"""

from dataclasses import dataclass
from datetime import date
from typing import Union


@dataclass(frozen=True)
class ContributionDay:
    """Contribution count for one calendar day."""

    date: date
    count: int


def _validate_days(days: tuple[ContributionDay, ...]) -> None:
    seen: set[date] = set()
    for day in days:
        if day.count < 0:
            raise ValueError(f"negative contribution count on {day.date.isoformat()}")
        if day.date in seen:
            raise ValueError(f"duplicate contribution day {day.date.isoformat()}")
        seen.add(day.date)


@dataclass(frozen=True)
class ExactContributions:
    """Calendar reported by the GraphQL API, with its own total."""

    total_contributions: int
    days: tuple[ContributionDay, ...]

    def __post_init__(self) -> None:
        _validate_days(self.days)

    is_exact = True

    @property
    def total(self) -> int:
        return self.total_contributions

    def counts(self) -> dict[date, int]:
        return {day.date: day.count for day in self.days}


@dataclass(frozen=True)
class ApproximateContributions:
    """Calendar inferred from recent public events."""

    days: tuple[ContributionDay, ...]

    def __post_init__(self) -> None:
        _validate_days(self.days)

    is_exact = False

    @property
    def total(self) -> int:
        return sum(day.count for day in self.days)

    def counts(self) -> dict[date, int]:
        return {day.date: day.count for day in self.days}


ContributionSource = Union[ExactContributions, ApproximateContributions]
