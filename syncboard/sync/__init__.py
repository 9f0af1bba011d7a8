"""
Synchronization with the remote source.
"""

from .enrichment import EnrichmentPolicy, FixedEnrichment, RandomEnrichment
from .reconciler import (
    DEFAULT_FETCH_LIMIT,
    ReconcileReport,
    cap_remote,
    reconcile,
    reconcile_with_report,
)
from .remote_source import DEFAULT_REMOTE_URL, HttpRemoteSource, RemoteSource, parse_items
from .service import SyncResult, SyncService

__all__ = [
    "EnrichmentPolicy",
    "FixedEnrichment",
    "RandomEnrichment",
    "DEFAULT_FETCH_LIMIT",
    "ReconcileReport",
    "cap_remote",
    "reconcile",
    "reconcile_with_report",
    "DEFAULT_REMOTE_URL",
    "HttpRemoteSource",
    "RemoteSource",
    "parse_items",
    "SyncResult",
    "SyncService",
]
