"""
Record store: the single owner of the record collection.

Holds the current snapshot in memory and mirrors it to a key-value
backend. The snapshot is an immutable tuple that is only ever replaced
as a whole.
"""

import datetime as dt
import json
from typing import Iterable

from pydantic import ValidationError as PydanticValidationError

from syncboard.core.errors import (
    PersistenceReadError,
    PersistenceWriteError,
    RecordNotFoundError,
)
from syncboard.core.models import Collection, Record
from syncboard.observability import metrics
from syncboard.observability.logger import get_logger
from syncboard.utils.dates import parse_instant

from .backends import KeyValueBackend

logger = get_logger(__name__)

RECORDS_SLOT = "records"
LAST_SYNC_SLOT = "last_sync"


def encode_collection(collection: Iterable[Record]) -> str:
    """Serialize a collection to the persisted JSON form."""
    return json.dumps([record.to_payload() for record in collection], indent=2, ensure_ascii=False)


def decode_collection(payload: str) -> Collection:
    """
    Parse a persisted collection.

    Raises:
        PersistenceReadError: If the payload is not a JSON list of valid,
            uniquely identified records
    """
    try:
        raw = json.loads(payload)
    except json.JSONDecodeError as e:
        raise PersistenceReadError(f"Snapshot is not valid JSON: {e}") from e

    if not isinstance(raw, list):
        raise PersistenceReadError(f"Snapshot must be a JSON list, got {type(raw).__name__}")

    try:
        records = tuple(Record.model_validate(item) for item in raw)
    except PydanticValidationError as e:
        raise PersistenceReadError(f"Snapshot contains an invalid record: {e}") from e

    ids = [record.id for record in records]
    if len(set(ids)) != len(ids):
        raise PersistenceReadError("Snapshot contains duplicate record ids")

    return records


class RecordStore:
    """
    Owns the record collection and its last-sync timestamp.

    Every other component receives either a read view (snapshot) or
    proposes a replacement through save().
    """

    def __init__(
        self,
        backend: KeyValueBackend,
        records_slot: str = RECORDS_SLOT,
        sync_slot: str = LAST_SYNC_SLOT,
    ):
        """
        Initialize the record store.

        Args:
            backend: Persistence collaborator
            records_slot: Slot name for the collection
            sync_slot: Slot name for the last successful sync instant
        """
        self.backend = backend
        self.records_slot = records_slot
        self.sync_slot = sync_slot
        self._snapshot: Collection = ()

    @property
    def snapshot(self) -> Collection:
        """The current collection."""
        return self._snapshot

    def load(self) -> Collection:
        """
        Load the last saved snapshot into memory.

        Returns:
            The saved collection, or an empty one when nothing was saved
            or the saved payload cannot be read
        """
        try:
            payload = self.backend.read(self.records_slot)
            collection = decode_collection(payload) if payload is not None else ()
        except (OSError, PersistenceReadError) as e:
            metrics.increment_counter(metrics.persistence_errors_total, operation="read")
            logger.warning(
                f"Ignoring unreadable snapshot in slot '{self.records_slot}': {e}",
                extra={"slot": self.records_slot, "error_type": type(e).__name__},
            )
            collection = ()

        self._snapshot = collection
        metrics.collection_size.set(len(collection))
        logger.info(f"Loaded {len(collection)} records", extra={"slot": self.records_slot})
        return collection

    def save(self, collection: Iterable[Record]) -> Collection:
        """
        Durably replace the saved snapshot, then the in-memory one.

        Args:
            collection: The complete next collection

        Returns:
            The new snapshot

        Raises:
            ValueError: If two records share an id
            PersistenceWriteError: If the backend write fails; the in-memory
                snapshot is left unchanged
        """
        snapshot = tuple(collection)
        ids = [record.id for record in snapshot]
        if len(set(ids)) != len(ids):
            raise ValueError("Collection contains duplicate record ids")

        try:
            self.backend.write(self.records_slot, encode_collection(snapshot))
        except OSError as e:
            metrics.increment_counter(metrics.persistence_errors_total, operation="write")
            logger.error(
                f"Failed to save snapshot to slot '{self.records_slot}': {e}",
                extra={"slot": self.records_slot},
            )
            raise PersistenceWriteError(f"Could not save records: {e}") from e

        self._snapshot = snapshot
        metrics.collection_size.set(len(snapshot))
        return snapshot

    def get(self, record_id: str) -> Record:
        """
        Look up a record in the current snapshot.

        Raises:
            RecordNotFoundError: If no record has this id
        """
        for record in self._snapshot:
            if record.id == record_id:
                return record
        raise RecordNotFoundError(record_id)

    def last_sync_time(self) -> dt.datetime | None:
        """The instant of the last successful sync, or None if there was none."""
        try:
            payload = self.backend.read(self.sync_slot)
        except (OSError, PersistenceReadError) as e:
            logger.warning(f"Cannot read last sync time: {e}", extra={"slot": self.sync_slot})
            return None

        if payload is None or not payload.strip():
            return None

        try:
            return parse_instant(payload.strip().strip('"'))
        except ValueError:
            logger.warning(
                f"Ignoring malformed last sync time: {payload!r}",
                extra={"slot": self.sync_slot},
            )
            return None

    def record_sync_time(self, instant: dt.datetime) -> None:
        """
        Persist the instant of a successful sync.

        Raises:
            PersistenceWriteError: If the backend write fails
        """
        try:
            self.backend.write(self.sync_slot, parse_instant(instant).isoformat())
        except OSError as e:
            metrics.increment_counter(metrics.persistence_errors_total, operation="write")
            raise PersistenceWriteError(f"Could not save last sync time: {e}") from e
