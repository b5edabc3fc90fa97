"""
Note Schemas.

Pydantic schemas for note API request/response validation.
Request schemas reject unknown fields so malformed bodies never reach
the service layer.
"""

from datetime import datetime
from typing import Annotated

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    computed_field,
)

TITLE_MAX_LENGTH = 255

NoteId = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1),
]


class NoteCreate(BaseModel):
    """Schema for creating a new note."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=TITLE_MAX_LENGTH,
        description="Note title",
        examples=["My First Note"],
    )
    content: str | None = Field(
        default=None,
        description="Serialized document body; stored as-is",
        examples=['{"type": "doc", "content": []}'],
    )

    model_config = ConfigDict(extra="forbid")


class NoteUpdate(BaseModel):
    """
    Schema for updating an existing note.

    Only fields present in the request body are applied. Sending
    ``content: null`` clears the content.
    """

    title: str | None = Field(
        default=None,
        min_length=1,
        max_length=TITLE_MAX_LENGTH,
        description="Note title",
    )
    content: str | None = Field(
        default=None,
        description="Serialized document body",
    )

    model_config = ConfigDict(extra="forbid")


class NoteResponse(BaseModel):
    """Schema for note in API responses."""

    id: str = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content: str | None = Field(description="Serialized document body")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")
    deleted_at: datetime | None = Field(description="When the note was moved to the trash")

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def is_deleted(self) -> bool:
        """Whether the note is in the trash."""
        return self.deleted_at is not None


class BulkRestoreRequest(BaseModel):
    """Schema for restoring several trashed notes at once."""

    ids: list[NoteId] = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("ids", "note_ids", "noteIds"),
        description="IDs of the notes to restore",
    )

    model_config = ConfigDict(extra="forbid")


class BulkRestoreResponse(BaseModel):
    """Schema for the outcome of a bulk restore."""

    restored_count: int = Field(description="Number of notes moved out of the trash")
    restored_ids: list[str] = Field(description="IDs of the notes that were restored")

    model_config = ConfigDict(from_attributes=True)
