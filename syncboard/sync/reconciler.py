"""
Reconciliation of a remote fetch with the local collection.

The remote-sourced part of the collection is replaced by exactly the
capped fetch, matched to existing records by remote_id so their local
identity and enrichment survive. User-authored records are carried over
untouched.
"""

import datetime as dt
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from syncboard.core.models import Collection, Record, RemoteItem
from syncboard.core.records import new_record_id

from .enrichment import EnrichmentPolicy

DEFAULT_FETCH_LIMIT = 30


@dataclass(frozen=True)
class ReconcileReport:
    inserted: int = 0
    updated: int = 0
    retained: int = 0
    dropped: int = 0


def cap_remote(remote: Sequence[RemoteItem], limit: int = DEFAULT_FETCH_LIMIT) -> list[RemoteItem]:
    """
    The first `limit` items of a fetch, without repeated ids.

    A repeated id keeps its first occurrence.
    """
    seen: set[str] = set()
    capped = []
    for item in remote[:limit]:
        if item.id in seen:
            continue
        seen.add(item.id)
        capped.append(item)
    return capped


def reconcile_with_report(
    local: Iterable[Record],
    remote: Sequence[RemoteItem],
    now: dt.datetime,
    *,
    enrichment: EnrichmentPolicy,
    id_factory: Callable[[], str] = new_record_id,
    limit: int = DEFAULT_FETCH_LIMIT,
) -> tuple[Collection, ReconcileReport]:
    """
    Merge a remote fetch into the local collection.

    Args:
        local: The current collection
        remote: Items from the remote source, in source order
        now: Instant stamped on created and updated records
        enrichment: Supplies category and date for new remote records
        id_factory: Supplies ids for new remote records
        limit: Maximum number of remote items considered

    Returns:
        The next collection (remote-derived records in fetch order, then
        user-authored records in local order) and the outcome counts
    """
    local = tuple(local)
    by_remote_id = {record.remote_id: record for record in local if record.remote_id is not None}
    taken_ids = {record.id for record in local}

    merged: list[Record] = []
    inserted = updated = 0
    for item in cap_remote(remote, limit):
        existing = by_remote_id.get(item.id)
        if existing is not None:
            merged.append(existing.model_copy(update={
                "title": item.title,
                "body": item.body,
                "updated_at": max(now, existing.created_at),
            }))
            updated += 1
            continue

        record_id = id_factory()
        if record_id in taken_ids:
            raise ValueError(f"Id factory produced an id already in use: {record_id}")
        taken_ids.add(record_id)
        merged.append(Record(
            id=record_id,
            remote_id=item.id,
            title=item.title,
            body=item.body,
            category=enrichment.category(item),
            date=enrichment.date(item, now),
            created_at=now,
            updated_at=now,
        ))
        inserted += 1

    merged_ids = {record.id for record in merged}
    retained = [
        record for record in local
        if record.remote_id is None and record.id not in merged_ids
    ]

    fetched_remote_ids = {record.remote_id for record in merged}
    dropped = sum(1 for remote_id in by_remote_id if remote_id not in fetched_remote_ids)

    report = ReconcileReport(inserted=inserted, updated=updated, retained=len(retained), dropped=dropped)
    return tuple(merged + retained), report


def reconcile(
    local: Iterable[Record],
    remote: Sequence[RemoteItem],
    now: dt.datetime,
    *,
    enrichment: EnrichmentPolicy,
    id_factory: Callable[[], str] = new_record_id,
    limit: int = DEFAULT_FETCH_LIMIT,
) -> Collection:
    """Merge a remote fetch into the local collection; see reconcile_with_report."""
    collection, _ = reconcile_with_report(
        local, remote, now, enrichment=enrichment, id_factory=id_factory, limit=limit
    )
    return collection
