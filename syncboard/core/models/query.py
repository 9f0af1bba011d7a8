"""
Query models: transient search, filter and sort state.
"""

import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict

SortKey = Literal["title", "body", "category", "date", "created_at", "updated_at", "remote_id"]
SortDirection = Literal["asc", "desc"]


class DateRange(BaseModel):
    """
    Inclusive calendar-date range.

    The range only constrains anything when both bounds are set.
    """

    model_config = ConfigDict(frozen=True)

    start: dt.date | None = None
    end: dt.date | None = None

    @property
    def is_bounded(self) -> bool:
        return self.start is not None and self.end is not None

    def contains(self, value: dt.date) -> bool:
        if not self.is_bounded:
            return True
        return self.start <= value <= self.end


class SortSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: SortKey = "updated_at"
    direction: SortDirection = "desc"


class QuerySpec(BaseModel):
    """
    Everything that drives the visible table.

    Attributes:
        search: Case-insensitive substring matched against title and body
        category: Exact category to keep, None or "" for all
        date_range: Inclusive date filter, applied only when fully bounded
        sort: Sort key and direction
    """

    model_config = ConfigDict(frozen=True)

    search: str = ""
    category: str | None = None
    date_range: DateRange = DateRange()
    sort: SortSpec = SortSpec()
