"""
Core data models for syncboard.

All models use Pydantic for runtime validation and type safety.
"""

from .aggregation import (
    DEFAULT_WINDOW_DAYS,
    AggregationWindow,
    CategoryCount,
    DashboardView,
    DateCount,
    SummaryStats,
)
from .query import DateRange, QuerySpec, SortDirection, SortKey, SortSpec
from .record import CATEGORIES, Category, Record, RemoteItem
from .validation_result import ValidationResult

Collection = tuple[Record, ...]

__all__ = [
    "CATEGORIES",
    "Category",
    "Collection",
    "Record",
    "RemoteItem",
    "DateRange",
    "QuerySpec",
    "SortDirection",
    "SortKey",
    "SortSpec",
    "DEFAULT_WINDOW_DAYS",
    "AggregationWindow",
    "CategoryCount",
    "DateCount",
    "SummaryStats",
    "DashboardView",
    "ValidationResult",
]
