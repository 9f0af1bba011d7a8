"""
Shared test data builders.

Plain functions rather than fixtures so hypothesis tests can use them.
"""
import datetime as dt

from syncboard.core.models import Record, RemoteItem
from syncboard.store import InMemoryBackend

NOW = dt.datetime(2024, 3, 15, 12, 0, tzinfo=dt.timezone.utc)


def make_record(
    id: str = "u1",
    title: str = "Hi",
    body: str = "Body",
    category: str = "Sports",
    date: dt.date | str = dt.date(2024, 1, 1),
    remote_id: str | None = None,
    created_at: dt.datetime = dt.datetime(2024, 1, 1, 8, 0, tzinfo=dt.timezone.utc),
    updated_at: dt.datetime | None = None,
) -> Record:
    """Build a valid Record with overridable fields"""
    return Record(
        id=id,
        remote_id=remote_id,
        title=title,
        body=body,
        category=category,
        date=date,
        created_at=created_at,
        updated_at=updated_at or created_at,
    )


def make_item(id, title: str = "T", body: str = "B") -> RemoteItem:
    return RemoteItem(id=id, title=title, body=body)


class FailingBackend(InMemoryBackend):
    """In-memory backend whose writes can be switched to fail"""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.fail_writes = False

    def write(self, slot: str, payload: str) -> None:
        if self.fail_writes:
            raise OSError("disk full")
        super().write(slot, payload)
