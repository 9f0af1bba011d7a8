"""
Prometheus metrics collection for syncboard

This module provides metrics instrumentation for monitoring
synchronization, record mutations and persistence health.
"""
import os
import time
from typing import Optional

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
)

# Global registry for metrics
REGISTRY = CollectorRegistry()


# =======================
# SYNC METRICS
# =======================

# Sync attempts counter
sync_attempts_total = Counter(
    name="syncboard_sync_attempts_total",
    documentation="Total number of sync attempts",
    labelnames=["status"],  # status: success, failure, rejected, discarded
    registry=REGISTRY,
)

# Sync duration histogram
sync_duration_seconds = Histogram(
    name="syncboard_sync_duration_seconds",
    documentation="Time spent fetching and reconciling remote items in seconds",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0],
    registry=REGISTRY,
)

# Reconciled records counter
records_reconciled_total = Counter(
    name="syncboard_records_reconciled_total",
    documentation="Records produced by reconciliation",
    labelnames=["outcome"],  # outcome: inserted, updated, retained, dropped
    registry=REGISTRY,
)

# Remote items that could not be turned into records
remote_items_skipped_total = Counter(
    name="syncboard_remote_items_skipped_total",
    documentation="Remote items skipped because they were malformed",
    registry=REGISTRY,
)

# =======================
# COLLECTION METRICS
# =======================

collection_size = Gauge(
    name="syncboard_collection_size",
    documentation="Number of records in the current snapshot",
    registry=REGISTRY,
)

record_mutations_total = Counter(
    name="syncboard_record_mutations_total",
    documentation="User record mutations",
    labelnames=["operation"],  # operation: create, update, delete
    registry=REGISTRY,
)

validation_failures_total = Counter(
    name="syncboard_validation_failures_total",
    documentation="Total number of field validation failures on create/edit",
    labelnames=["field_name"],
    registry=REGISTRY,
)

# =======================
# PERSISTENCE METRICS
# =======================

persistence_errors_total = Counter(
    name="syncboard_persistence_errors_total",
    documentation="Persistence failures",
    labelnames=["operation"],  # operation: read, write
    registry=REGISTRY,
)


# =======================
# HELPER FUNCTIONS
# =======================

def start_metrics_server(port: Optional[int] = None) -> None:
    """
    Start HTTP server for Prometheus metrics

    Args:
        port: Port to listen on (defaults to env var SYNCBOARD_METRICS_PORT or 8000)
    """
    # Lazy import: HTTP server only needed when the endpoint is enabled
    from prometheus_client import start_http_server

    metrics_port = port or int(os.getenv("SYNCBOARD_METRICS_PORT", "8000"))
    start_http_server(metrics_port, registry=REGISTRY)


class track_duration:
    """
    Context manager for tracking operation duration

    Usage:
        with track_duration(sync_duration_seconds):
            # do work
            pass
    """

    def __init__(self, histogram: Histogram, **labels):
        self.histogram = histogram
        self.labels = labels
        self.start_time: float | None = None

    def __enter__(self):
        self.start_time = time.monotonic()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = time.monotonic() - (self.start_time or time.monotonic())
        if self.labels:
            self.histogram.labels(**self.labels).observe(duration)
        else:
            self.histogram.observe(duration)
        return False


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """Increment a counter, with labels when the metric declares them"""
    if labels:
        counter.labels(**labels).inc(value)
    else:
        counter.inc(value)


def record_reconcile_report(inserted: int, updated: int, retained: int, dropped: int) -> None:
    """
    Record the outcome counts of one reconciliation

    Args:
        inserted: New remote-derived records
        updated: Existing remote-derived records refreshed
        retained: User-authored records carried over
        dropped: Remote-derived records that left the fetch window
    """
    for outcome, value in (
        ("inserted", inserted),
        ("updated", updated),
        ("retained", retained),
        ("dropped", dropped),
    ):
        if value:
            records_reconciled_total.labels(outcome=outcome).inc(value)


def record_validation_failures(field_names: list[str]) -> None:
    """Count one validation failure per failed field"""
    for field_name in field_names:
        validation_failures_total.labels(field_name=field_name).inc()
