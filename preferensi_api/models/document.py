# preferensi_api/models/document.py
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Document(SQLModel, table=True):
    """
    A JSON document addressed by collection path + id.

    Collections:
      - "users"                        : user documents, id = user id
      - "users/{userId}/preferensi"    : a user's preferences, id assigned
                                         by the store

    The `data` column holds the document body as stored; the id lives only
    in the key, callers add it back when shaping responses.
    """

    __tablename__ = "documents"

    collection: str = Field(
        primary_key=True,
        max_length=255,
        description="Collection path, e.g. users or users/{id}/preferensi",
    )

    id: str = Field(
        primary_key=True,
        max_length=64,
        description="Document id, unique within its collection",
    )

    data: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON, nullable=False),
    )

    created_at: datetime = Field(
        default_factory=_utcnow,
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=_utcnow,
        description="Last write timestamp (UTC)",
    )

    def to_dict(self) -> dict[str, Any]:
        """Document body with its id attached."""
        body = dict(self.data)
        body["id"] = self.id
        return body
