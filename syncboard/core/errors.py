"""
Error taxonomy for syncboard.

Every error the core raises derives from SyncboardError so callers
(the CLI, an embedding UI) can report them uniformly.
"""

from typing import Any


class SyncboardError(Exception):
    """Base class for all syncboard errors."""


class ValidationError(SyncboardError):
    """
    Raised when a create/edit request is missing or has invalid fields.

    Nothing is persisted when this is raised.

    Attributes:
        failures: One entry per failed rule, with rule_name, field_name and message
    """

    def __init__(self, failures: list[dict[str, Any]]):
        self.failures = failures
        details = "; ".join(f"{f['field_name']}: {f['message']}" for f in failures)
        super().__init__(f"Invalid record fields ({details})")

    @property
    def field_names(self) -> list[str]:
        """Names of the fields that failed, in rule order, without repeats."""
        seen: list[str] = []
        for failure in self.failures:
            if failure["field_name"] not in seen:
                seen.append(failure["field_name"])
        return seen


class SyncError(SyncboardError):
    """Raised when fetching or parsing the remote source fails."""


class SyncInProgressError(SyncError):
    """Raised when a sync is requested while another one is still outstanding."""


class PersistenceReadError(SyncboardError):
    """The saved snapshot could not be read or decoded."""


class PersistenceWriteError(SyncboardError):
    """The snapshot could not be written; in-memory and saved state may diverge."""


class RecordNotFoundError(SyncboardError):
    """Raised when an update or delete targets an unknown record id."""

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"Record not found: {record_id}")
