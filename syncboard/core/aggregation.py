"""
Aggregation engine: chart series and summary statistics over a date window.

The dashboard window is independent of the table's search, category and
sort state; it only looks at record dates.
"""

import datetime as dt
from typing import Iterable

from syncboard.core.models import (
    AggregationWindow,
    CategoryCount,
    DashboardView,
    DateCount,
    Record,
    SummaryStats,
)
from syncboard.core.query import in_date_range


def windowed_subset(
    collection: Iterable[Record],
    window: AggregationWindow,
    now: dt.datetime,
) -> list[Record]:
    """
    Records whose date lies inside the window.

    An explicit window replaces the default trailing window; the two are
    never intersected.
    """
    start, end = window.bounds(now)
    return [record for record in collection if in_date_range(record.date, start, end)]


def category_counts(subset: Iterable[Record]) -> list[CategoryCount]:
    """Record count per category, in the order categories are first seen."""
    counts: dict[str, int] = {}
    for record in subset:
        counts[record.category] = counts.get(record.category, 0) + 1
    return [CategoryCount(category=category, count=count) for category, count in counts.items()]


def date_series(subset: Iterable[Record]) -> list[DateCount]:
    """Record count per date, oldest date first."""
    counts: dict[dt.date, int] = {}
    for record in subset:
        counts[record.date] = counts.get(record.date, 0) + 1
    return [DateCount(date=day, count=counts[day]) for day in sorted(counts)]


def summary_stats(subset: Iterable[Record]) -> SummaryStats:
    """
    Total, most frequent category and latest date of a subset.

    Ties for the top category go to the category seen first. An empty
    subset gives total 0 and None for the other two.
    """
    records = list(subset)
    if not records:
        return SummaryStats()

    top: CategoryCount | None = None
    for entry in category_counts(records):
        if top is None or entry.count > top.count:
            top = entry

    return SummaryStats(
        total=len(records),
        top_category=top.category,
        latest_date=max(record.date for record in records),
    )


def dashboard(
    collection: Iterable[Record],
    window: AggregationWindow,
    now: dt.datetime,
) -> DashboardView:
    """All dashboard aggregates for one window."""
    start, end = window.bounds(now)
    subset = windowed_subset(collection, window, now)
    return DashboardView(
        window_start=start,
        window_end=end,
        summary=summary_stats(subset),
        categories=category_counts(subset),
        dates=date_series(subset),
    )
