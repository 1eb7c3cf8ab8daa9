"""Heatmap layout data models."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class HeatmapCell:
    """One day of the grid, placed by column (week) and row (weekday)."""

    date: str  # ISO format, YYYY-MM-DD
    count: int
    level: int  # 0-4
    column: int
    row: int


@dataclass(frozen=True)
class HeatmapLabel:
    """Axis label. ``index`` is a column for months and a row for weekdays."""

    text: str
    index: int


@dataclass(frozen=True)
class HeatmapLayout:
    """Everything a renderer needs to draw the contribution calendar."""

    cells: list[HeatmapCell]
    month_labels: list[HeatmapLabel]
    weekday_labels: list[HeatmapLabel]
    columns: int
    max_count: int
    total: int
    is_exact: bool
    start: date
    end: date
