"""
Contribution calendar layout.

Turns a ContributionSource into a 7-row grid covering the trailing year.
Columns are weeks and rows are weekdays, starting at ``week_start``
(Sunday by default). Cells carry their grid position, so a renderer only maps
``column``/``row`` to coordinates and ``level`` to a color.
"""

from datetime import date, datetime, timedelta, timezone

from ghdash.registry import DEFAULT_REGISTRY, DisplayRegistry
from ghdash.types.contributions import ContributionSource
from ghdash.types.heatmap import HeatmapCell, HeatmapLabel, HeatmapLayout

MONDAY, WEDNESDAY, FRIDAY, SUNDAY = 0, 2, 4, 6

WINDOW_DAYS = 365
MONTH_LABEL_MAX_ROW = 3
LABELED_WEEKDAYS = (MONDAY, WEDNESDAY, FRIDAY)


def get_level(count: int, max_count: int) -> int:
    """
    Bucket a day's count relative to the busiest day of the window.

    Args:
        count: Contributions on the day
        max_count: Largest count in the window (at least 1)

    Returns:
        0 for no contributions, else 1-4 by quartile of ``count / max_count``
    """
    if count <= 0:
        return 0
    ratio = count / max_count
    if ratio <= 0.25:
        return 1
    if ratio <= 0.5:
        return 2
    if ratio <= 0.75:
        return 3
    return 4


def window_bounds(today: date, week_start: int = SUNDAY) -> tuple[date, date]:
    """First (week-aligned) and last day of the window ending on ``today``."""
    first = today - timedelta(days=WINDOW_DAYS - 1)
    aligned = first - timedelta(days=(first.weekday() - week_start) % 7)
    return aligned, today


def weekday_row(weekday: int, week_start: int = SUNDAY) -> int:
    return (weekday - week_start) % 7


def build_heatmap(
    source: ContributionSource,
    today: date | None = None,
    registry: DisplayRegistry = DEFAULT_REGISTRY,
    week_start: int = SUNDAY,
) -> HeatmapLayout:
    """
    Lay out the contribution calendar for the year ending on ``today``.

    Args:
        source: Exact or approximate per-day counts
        today: Last day of the window (default: current UTC date)
        registry: Month and weekday names
        week_start: Weekday of row 0 (``date.weekday()`` numbering)

    Returns:
        HeatmapLayout with one cell per day from the aligned start to today
    """
    if today is None:
        today = datetime.now(tz=timezone.utc).date()

    start, end = window_bounds(today, week_start)
    counts = source.counts()

    days = [start + timedelta(days=i) for i in range((end - start).days + 1)]
    day_counts = [counts.get(d, 0) for d in days]
    max_count = max([*day_counts, 1])

    cells: list[HeatmapCell] = []
    month_labels: list[HeatmapLabel] = []
    last_month: int | None = None

    for offset, (day, count) in enumerate(zip(days, day_counts)):
        column, row = divmod(offset, 7)

        if day.month != last_month and row <= MONTH_LABEL_MAX_ROW:
            last_month = day.month
            month_labels.append(HeatmapLabel(text=registry.month_names[day.month - 1], index=column))

        cells.append(
            HeatmapCell(
                date=day.isoformat(),
                count=count,
                level=get_level(count, max_count),
                column=column,
                row=row,
            )
        )

    weekday_labels = sorted(
        (
            HeatmapLabel(text=registry.weekday_names[wd], index=weekday_row(wd, week_start))
            for wd in LABELED_WEEKDAYS
        ),
        key=lambda label: label.index,
    )

    return HeatmapLayout(
        cells=cells,
        month_labels=month_labels,
        weekday_labels=weekday_labels,
        columns=(len(days) + 6) // 7,
        max_count=max_count,
        total=source.total,
        is_exact=source.is_exact,
        start=start,
        end=end,
    )


__all__ = [
    "SUNDAY",
    "MONDAY",
    "get_level",
    "window_bounds",
    "weekday_row",
    "build_heatmap",
]
