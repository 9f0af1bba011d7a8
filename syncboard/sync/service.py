"""
Sync service: single-flight fetch, reconcile and save.
"""

import asyncio
import datetime as dt
from dataclasses import dataclass
from typing import Callable

from syncboard.core.errors import SyncError, SyncInProgressError
from syncboard.core.records import new_record_id
from syncboard.observability import metrics
from syncboard.observability.logger import get_logger, log_operation
from syncboard.store import RecordStore
from syncboard.utils.dates import utc_now
from syncboard.utils.validation import validate_limit

from .enrichment import EnrichmentPolicy, RandomEnrichment
from .reconciler import DEFAULT_FETCH_LIMIT, ReconcileReport, reconcile_with_report
from .remote_source import RemoteSource

logger = get_logger(__name__)


@dataclass(frozen=True)
class SyncResult:
    synced_at: dt.datetime
    fetched: int
    report: ReconcileReport
    total: int


class SyncService:
    """
    Runs synchronizations against a record store.

    Only one sync may be outstanding at a time; a second request is
    rejected with SyncInProgressError. The fetch is the only suspension
    point, and the collection reconciled is the store's snapshot at the
    moment the fetch returns, never one captured before it started.
    """

    def __init__(
        self,
        store: RecordStore,
        source: RemoteSource,
        *,
        enrichment: EnrichmentPolicy | None = None,
        id_factory: Callable[[], str] = new_record_id,
        limit: int = DEFAULT_FETCH_LIMIT,
        clock: Callable[[], dt.datetime] = utc_now,
    ):
        self.store = store
        self.source = source
        self.enrichment = enrichment or RandomEnrichment()
        self.id_factory = id_factory
        self.limit = validate_limit(limit, "limit")
        self.clock = clock
        self._in_flight = False
        self._closed = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def close(self) -> None:
        """Stop accepting syncs; a fetch still outstanding will be discarded."""
        self._closed = True

    async def trigger_sync(self) -> SyncResult:
        """
        Fetch remote items and merge them into the store.

        Returns:
            What was fetched and how it was merged

        Raises:
            SyncInProgressError: If another sync is outstanding
            SyncError: If the fetch fails or the service was closed before
                it completed; the store is left untouched
            PersistenceWriteError: If the merged snapshot cannot be saved
        """
        if self._closed:
            raise SyncError("Sync service is closed")
        if self._in_flight:
            metrics.increment_counter(metrics.sync_attempts_total, status="rejected")
            raise SyncInProgressError("A sync is already in progress")

        self._in_flight = True
        try:
            with log_operation("sync", logger=logger), metrics.track_duration(metrics.sync_duration_seconds):
                try:
                    items = await self.source.fetch_remote_items()
                except SyncError:
                    metrics.increment_counter(metrics.sync_attempts_total, status="failure")
                    raise
                except asyncio.CancelledError:
                    metrics.increment_counter(metrics.sync_attempts_total, status="discarded")
                    logger.info("Sync cancelled before the fetch completed; result discarded")
                    raise

                if self._closed:
                    metrics.increment_counter(metrics.sync_attempts_total, status="discarded")
                    raise SyncError("Sync service closed while fetching; result discarded")

                now = self.clock()
                collection, report = reconcile_with_report(
                    self.store.snapshot,
                    items,
                    now,
                    enrichment=self.enrichment,
                    id_factory=self.id_factory,
                    limit=self.limit,
                )
                self.store.save(collection)
                self.store.record_sync_time(now)
        finally:
            self._in_flight = False

        metrics.increment_counter(metrics.sync_attempts_total, status="success")
        metrics.record_reconcile_report(report.inserted, report.updated, report.retained, report.dropped)
        logger.info(
            "Sync complete",
            extra={
                "fetched": len(items),
                "inserted": report.inserted,
                "updated": report.updated,
                "retained": report.retained,
                "dropped": report.dropped,
            },
        )
        return SyncResult(synced_at=now, fetched=len(items), report=report, total=len(collection))
