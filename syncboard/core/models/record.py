"""
Record model representing a single unit of stored data.
"""

import datetime as dt
from typing import Any, Literal, get_args

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

Category = Literal["Technology", "Business", "Science", "Health", "Entertainment", "Sports"]

CATEGORIES: tuple[str, ...] = get_args(Category)


def _coerce_identifier(value: Any) -> Any:
    """Numeric identifiers (as written by older snapshots and the remote API) become strings."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    return value


def _ensure_aware(value: dt.datetime) -> dt.datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value


class Record(BaseModel):
    """
    A single record, either user-authored or produced by reconciliation.

    Records are immutable; every mutation produces a new instance and a new
    collection snapshot.

    Attributes:
        id: Locally unique identifier, never reused
        remote_id: Identifier at the remote source (reconciled records only)
        title: Free text, non-empty
        body: Free text, non-empty
        category: One of CATEGORIES
        date: Logical calendar date of the record
        created_at: Creation instant
        updated_at: Last mutation instant, never before created_at
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1)
    remote_id: str | None = Field(
        None,
        validation_alias=AliasChoices("remote_id", "remoteId", "apiId"),
        serialization_alias="remoteId",
    )
    title: str = Field(..., min_length=1)
    body: str = Field(..., min_length=1)
    category: Category
    date: dt.date
    created_at: dt.datetime = Field(
        ..., validation_alias=AliasChoices("created_at", "createdAt"), serialization_alias="createdAt"
    )
    updated_at: dt.datetime = Field(
        ..., validation_alias=AliasChoices("updated_at", "updatedAt"), serialization_alias="updatedAt"
    )

    @field_validator("id", "remote_id", mode="before")
    @classmethod
    def coerce_identifier(cls, v):
        return _coerce_identifier(v)

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, v: dt.datetime) -> dt.datetime:
        return _ensure_aware(v)

    @model_validator(mode="after")
    def check_timestamps(self) -> "Record":
        if self.updated_at < self.created_at:
            raise ValueError("updated_at must not be earlier than created_at")
        return self

    @property
    def is_remote(self) -> bool:
        return self.remote_id is not None

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict using the persisted (camelCase) field names."""
        return self.model_dump(mode="json", by_alias=True)


class RemoteItem(BaseModel):
    """One item as delivered by the remote source."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    body: str = Field(..., min_length=1)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_identifier(cls, v):
        return _coerce_identifier(v)
