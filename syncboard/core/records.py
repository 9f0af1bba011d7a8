"""
User-facing record operations: create, edit and delete.

Each operation validates its input, builds the next collection and hands
it to the record store as a whole-snapshot replacement.
"""

import datetime as dt
import uuid
from typing import Any, Callable

from pydantic import ValidationError as PydanticValidationError

from syncboard.core.errors import ValidationError
from syncboard.core.models import CATEGORIES, Record
from syncboard.core.rules import RuleEngine, default_record_rules
from syncboard.observability import metrics
from syncboard.observability.logger import get_logger
from syncboard.store import RecordStore
from syncboard.utils.dates import utc_now

logger = get_logger(__name__)

EDITABLE_FIELDS = ("title", "body", "category", "date")


def new_record_id() -> str:
    """A fresh, practically collision-free record id."""
    return uuid.uuid4().hex


def blank_fields(today: dt.date) -> dict[str, Any]:
    """Defaults for a new-record form: empty text, first category, today's date."""
    return {"title": "", "body": "", "category": CATEGORIES[0], "date": today}


class RecordService:
    """
    Create, edit and delete records in a RecordStore.

    No partial record is ever saved: validation runs before the next
    snapshot is built, and a failed save leaves the store unchanged.
    """

    def __init__(
        self,
        store: RecordStore,
        rule_engine: RuleEngine | None = None,
        id_factory: Callable[[], str] = new_record_id,
        clock: Callable[[], dt.datetime] = utc_now,
    ):
        self.store = store
        self.rule_engine = rule_engine or RuleEngine(default_record_rules())
        self.id_factory = id_factory
        self.clock = clock

    def _validated(self, fields: dict[str, Any]) -> dict[str, Any]:
        try:
            cleaned = self.rule_engine.validate_or_raise(fields)
        except ValidationError as e:
            metrics.record_validation_failures(e.field_names)
            logger.warning(
                "Rejected record fields",
                extra={"failed_fields": e.field_names, "failures": e.failures},
            )
            raise
        # fields no rule covers pass through unchanged and are checked by the model
        return {
            name: cleaned.get(name, fields.get(name))
            for name in EDITABLE_FIELDS
            if name in cleaned or name in fields
        }

    def _build(self, data: dict[str, Any]) -> Record:
        try:
            return Record.model_validate(data)
        except PydanticValidationError as e:
            failures = [
                {
                    "rule_name": "record",
                    "field_name": ".".join(str(part) for part in error["loc"]) or "record",
                    "message": error["msg"],
                }
                for error in e.errors()
            ]
            metrics.record_validation_failures([f["field_name"] for f in failures])
            logger.warning("Rejected record", extra={"failures": failures})
            raise ValidationError(failures) from e

    def _fresh_id(self) -> str:
        record_id = self.id_factory()
        if any(record.id == record_id for record in self.store.snapshot):
            raise ValueError(f"Id factory produced an id already in use: {record_id}")
        return record_id

    def create_record(self, fields: dict[str, Any], now: dt.datetime | None = None) -> Record:
        """
        Add a user-authored record.

        Args:
            fields: title, body, category and date
            now: Creation instant (defaults to the service clock)

        Returns:
            The created record

        Raises:
            ValidationError: If a field is missing or invalid
            PersistenceWriteError: If the new snapshot cannot be saved
        """
        values = self._validated(fields)
        now = now or self.clock()

        record = self._build({"id": self._fresh_id(), "created_at": now, "updated_at": now, **values})
        self.store.save(self.store.snapshot + (record,))

        metrics.increment_counter(metrics.record_mutations_total, operation="create")
        logger.info("Created record", extra={"record_id": record.id})
        return record

    def update_record(
        self,
        record_id: str,
        fields: dict[str, Any],
        now: dt.datetime | None = None,
    ) -> Record:
        """
        Overwrite the editable fields of a record.

        id, remote_id and created_at are kept; updated_at is refreshed and
        never set earlier than created_at.

        Raises:
            RecordNotFoundError: If record_id is unknown
            ValidationError: If a field is missing or invalid
            PersistenceWriteError: If the new snapshot cannot be saved
        """
        existing = self.store.get(record_id)
        values = self._validated(fields)
        now = now or self.clock()

        updated = self._build({
            **existing.model_dump(),
            **values,
            "updated_at": max(now, existing.created_at),
        })
        self.store.save(
            tuple(updated if record.id == record_id else record for record in self.store.snapshot)
        )

        metrics.increment_counter(metrics.record_mutations_total, operation="update")
        logger.info("Updated record", extra={"record_id": record_id})
        return updated

    def delete_record(self, record_id: str, confirm: Callable[[Record], bool]) -> bool:
        """
        Remove a record after explicit confirmation.

        Args:
            record_id: Record to delete
            confirm: Asked with the record; deletion only proceeds on True

        Returns:
            True if the record was deleted, False if confirmation was refused

        Raises:
            RecordNotFoundError: If record_id is unknown
            PersistenceWriteError: If the new snapshot cannot be saved
        """
        record = self.store.get(record_id)
        if not confirm(record):
            logger.info("Delete not confirmed", extra={"record_id": record_id})
            return False

        self.store.save(tuple(r for r in self.store.snapshot if r.id != record_id))

        metrics.increment_counter(metrics.record_mutations_total, operation="delete")
        logger.info("Deleted record", extra={"record_id": record_id})
        return True
