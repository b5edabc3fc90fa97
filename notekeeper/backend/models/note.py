"""
Note Model.

Database model for notes. A note is either active (``deleted_at`` is
NULL) or in the trash (``deleted_at`` holds the time it was trashed).
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from notekeeper.backend.models.base import Base, OwnedMixin, TimestampMixin, UUIDMixin


class Note(UUIDMixin, OwnedMixin, TimestampMixin, Base):
    """
    Note database model.

    ``deleted_at`` doubles as the trash flag and as the ordering key of
    the trash view. Rows are never removed.
    """

    __tablename__ = "notes"
    __table_args__ = (
        Index("ix_notes_owner_id_deleted_at", "owner_id", "deleted_at"),
        Index("ix_notes_owner_id_created_at", "owner_id", "created_at"),
        CheckConstraint(
            "deleted_at IS NULL OR deleted_at >= created_at",
            name="deleted_after_created",
        ),
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    content: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime,
        nullable=True,
        default=None,
    )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, deleted={self.is_deleted})>"
