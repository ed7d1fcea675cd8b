"""
Note Schemas.

Pydantic schemas for note API request/response validation.

Title emptiness and the reserved "Clipboard" title are checked by
NoteService, not here, so they surface as policy errors (400) rather
than request-shape errors (422).
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class FlagChange(str, Enum):
    """Requested change to a 0/1 flag in an update."""

    UNSPECIFIED = "unspecified"
    ON = "on"
    OFF = "off"

    @classmethod
    def from_value(cls, value: bool | None) -> "FlagChange":
        if value is None:
            return cls.UNSPECIFIED
        return cls.ON if value else cls.OFF

    @property
    def as_int(self) -> int | None:
        if self is FlagChange.UNSPECIFIED:
            return None
        return 1 if self is FlagChange.ON else 0


class NoteCreate(BaseModel):
    """Schema for creating a new note."""

    title: str | None = Field(
        default=None,
        description="Note title",
        examples=["Shopping"],
    )
    content: str | None = Field(
        default=None,
        description="Note content",
        examples=["milk, eggs"],
    )
    pinned: bool | None = Field(default=None, description="Pin the note")
    hidden: bool | None = Field(default=None, description="Hide the note behind the PIN")


class NoteUpdate(BaseModel):
    """
    Schema for replacing a note's title and content.

    pinned and hidden are optional; omitted or null leaves them unchanged.
    """

    title: str | None = Field(
        default=None,
        description="Note title",
    )
    content: str | None = Field(
        default=None,
        description="Note content",
    )
    pinned: bool | None = Field(default=None, description="New pinned state")
    hidden: bool | None = Field(default=None, description="New hidden state")

    @property
    def pinned_change(self) -> FlagChange:
        return FlagChange.from_value(self.pinned)

    @property
    def hidden_change(self) -> FlagChange:
        return FlagChange.from_value(self.hidden)


class NoteBatchDelete(BaseModel):
    """
    Schema for deleting several notes at once.

    Entries are validated by NoteService so every bad id is reported.
    """

    ids: list[Any] = Field(
        ...,
        description="IDs of the notes to delete",
        examples=[[3, 4, 7]],
    )


class NoteResponse(BaseModel):
    """Schema for a note row in API responses."""

    id: int = Field(description="Note identifier")
    title: str = Field(description="Note title")
    content: str | None = Field(description="Note content")
    created_at: datetime = Field(
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
        description="Creation timestamp",
    )
    updated_at: datetime = Field(
        validation_alias=AliasChoices("updated_at", "updatedAt"),
        serialization_alias="updatedAt",
        description="Last update timestamp",
    )
    pinned: int = Field(description="1 when pinned, else 0")
    hidden: int = Field(description="1 when hidden, else 0")

    model_config = ConfigDict(from_attributes=True)


class BatchDeleteResult(BaseModel):
    """Outcome of a batch delete."""

    deleted_count: int
    deleted_ids: list[int]
