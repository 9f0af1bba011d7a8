"""
Query pipeline: text search, category filter, date range and sort.

Stages always run in the same order (text, category, date range, sort);
an unset stage passes records through unchanged. Everything here is pure.
"""

import datetime as dt
from typing import Any, Callable, Iterable

from syncboard.core.models import QuerySpec, Record, SortKey, SortSpec
from syncboard.utils.dates import to_comparable_instant

TEXT_KEYS = frozenset({"title", "body", "category"})
TIME_KEYS = frozenset({"date", "created_at", "updated_at"})


def matches_search(record: Record, term: str) -> bool:
    """Case-insensitive substring match on title or body."""
    needle = term.casefold()
    return needle in record.title.casefold() or needle in record.body.casefold()


def remote_id_order(remote_id: str) -> tuple:
    """Numeric remote ids compare as numbers and precede any non-numeric ones."""
    if remote_id.isascii() and remote_id.isdigit():
        return (0, int(remote_id), remote_id)
    return (1, 0, remote_id)


def sort_value(key: SortKey) -> Callable[[Record], Any]:
    """
    Key function giving the natural order of a sort key.

    Text compares lexicographically; dates and timestamps compare
    chronologically after normalization to aware UTC datetimes, so a
    date and a timestamp never hit a TypeError or compare as equal by
    accident.

    Remote ids follow remote_id_order, so "9" sorts before "10".
    """
    if key in TIME_KEYS:
        return lambda record: to_comparable_instant(getattr(record, key))
    if key in TEXT_KEYS:
        return lambda record: str(getattr(record, key))
    if key == "remote_id":
        return lambda record: remote_id_order(record.remote_id)
    raise ValueError(f"Unknown sort key: {key}")


def sort_records(records: Iterable[Record], sort: SortSpec) -> list[Record]:
    """
    Stable sort by one key.

    Ties keep their encounter order in both directions. Records without a
    value for the key (remote_id on user records) follow all others.
    """
    present = []
    missing = []
    for record in records:
        (missing if getattr(record, sort.key) is None else present).append(record)

    # sorted() with reverse=True stays stable for equal keys
    ordered = sorted(present, key=sort_value(sort.key), reverse=sort.direction == "desc")
    return ordered + missing


def filter_and_sort(collection: Iterable[Record], spec: QuerySpec) -> list[Record]:
    """
    Produce the ordered visible subset of a collection.

    Args:
        collection: Records to query (never modified)
        spec: Search, filter and sort settings

    Returns:
        A new list holding a subset of the input records
    """
    records = list(collection)

    if spec.search:
        records = [record for record in records if matches_search(record, spec.search)]

    if spec.category:
        records = [record for record in records if record.category == spec.category]

    if spec.date_range.is_bounded:
        records = [record for record in records if spec.date_range.contains(record.date)]

    return sort_records(records, spec.sort)


def toggle_sort(current: SortSpec, key: SortKey) -> SortSpec:
    """
    Sort state after the user picks a column.

    Picking the active key while ascending flips to descending; every other
    pick sorts ascending on the picked key.
    """
    if current.key == key and current.direction == "asc":
        return SortSpec(key=key, direction="desc")
    return SortSpec(key=key, direction="asc")


def in_date_range(value: dt.date, start: dt.date, end: dt.date) -> bool:
    """Inclusive calendar-date containment."""
    return start <= value <= end
