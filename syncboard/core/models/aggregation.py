"""
Aggregation window and chart-ready result models.
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict

DEFAULT_WINDOW_DAYS = 30


class AggregationWindow(BaseModel):
    """
    Date window for dashboard statistics.

    With both bounds set the window is explicit and replaces the default
    trailing window entirely; otherwise the trailing `days` ending today apply.
    """

    model_config = ConfigDict(frozen=True)

    start: dt.date | None = None
    end: dt.date | None = None
    days: int = DEFAULT_WINDOW_DAYS

    @property
    def is_explicit(self) -> bool:
        return self.start is not None and self.end is not None

    def bounds(self, now: dt.datetime) -> tuple[dt.date, dt.date]:
        """Resolve the inclusive (start, end) dates relative to now."""
        if self.is_explicit:
            return self.start, self.end
        today = now.date()
        return today - dt.timedelta(days=self.days), today


class CategoryCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: str
    count: int


class DateCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: dt.date
    count: int


class SummaryStats(BaseModel):
    """
    Headline numbers for the dashboard.

    top_category and latest_date are None when there is no data.
    """

    model_config = ConfigDict(frozen=True)

    total: int = 0
    top_category: str | None = None
    latest_date: dt.date | None = None


class DashboardView(BaseModel):
    model_config = ConfigDict(frozen=True)

    window_start: dt.date
    window_end: dt.date
    summary: SummaryStats
    categories: list[CategoryCount]
    dates: list[DateCount]
