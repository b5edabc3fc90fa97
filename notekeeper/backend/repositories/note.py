"""
Note Repository.

Data access layer for notes. Builds the partition, ownership and
keyset predicates for the active and trash views, and performs the
lifecycle transitions as single guarded UPDATE statements.
"""

from datetime import datetime

from sqlalchemy import ColumnElement, and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from notekeeper.backend.core.pagination import KeysetCursor
from notekeeper.backend.core.utils import utc_now
from notekeeper.backend.models.note import Note
from notekeeper.backend.repositories.base import BaseRepository


def partition_criteria(deleted: bool) -> ColumnElement[bool]:
    """Predicate selecting the trash partition or the active partition."""
    if deleted:
        return Note.deleted_at.is_not(None)
    return Note.deleted_at.is_(None)


def ordering_key(deleted: bool) -> InstrumentedAttribute[datetime]:
    """Column a partition is ordered by: trash time or creation time."""
    return Note.deleted_at if deleted else Note.created_at


def position_of(note: Note, deleted: bool) -> datetime | None:
    """A note's ordering-key value within the given partition."""
    return note.deleted_at if deleted else note.created_at


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Inherits owner-scoped CRUD from BaseRepository and adds the
    visibility filter and lifecycle transitions.
    """

    model = Note

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def list_page(
        self,
        owner_id: str,
        deleted: bool,
        limit: int,
        after: KeysetCursor | None = None,
    ) -> list[Note]:
        """
        Fetch one page of a partition, newest first.

        Args:
            owner_id: Owner whose notes are listed
            deleted: True for the trash view, False for the active view
            limit: Maximum number of rows
            after: Position of the last row of the previous page

        Returns:
            Notes ordered by the partition's key descending, then id
        """
        key = ordering_key(deleted)
        criteria = [partition_criteria(deleted)]

        if after is not None:
            criteria.append(
                or_(
                    key < after.position,
                    and_(key == after.position, Note.id < after.id),
                )
            )

        result = await self.session.execute(
            select(Note)
            .where(*self._owned(owner_id, *criteria))
            .order_by(key.desc(), Note.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def find_cursor_position(
        self,
        owner_id: str,
        note_id: str,
        deleted: bool,
    ) -> KeysetCursor | None:
        """
        Look up a note's position in a partition by id.

        Used for cursors that carry only a row id. Returns None when the
        note does not exist, is not owned by ``owner_id``, or has no
        value for the partition's ordering key.
        """
        key = ordering_key(deleted)
        result = await self.session.execute(
            select(key).where(*self._owned(owner_id, Note.id == note_id))
        )
        position = result.scalar_one_or_none()
        if position is None:
            return None
        return KeysetCursor(position=position, id=note_id)

    async def count_partition(self, owner_id: str, deleted: bool) -> int:
        """Count the owner's notes in one partition."""
        return await self.count(owner_id, partition_criteria(deleted))

    async def update_content(self, id: str, owner_id: str, **fields: str | None) -> Note:
        """
        Merge title/content changes into a note, in either partition.

        Raises:
            NotFoundError: If note not found
        """
        return await self.update(id, owner_id, **fields, updated_at=utc_now())

    async def soft_delete(self, id: str, owner_id: str) -> Note:
        """
        Move a note to the trash.

        Deleting a note that is already in the trash moves its
        ``deleted_at`` forward.

        Raises:
            NotFoundError: If note not found
        """
        now = utc_now()
        return await self.update(id, owner_id, deleted_at=now, updated_at=now)

    async def restore(self, id: str, owner_id: str) -> Note:
        """
        Move a note out of the trash.

        Raises:
            NotFoundError: If note not found or not currently in the trash
        """
        return await self.update(
            id,
            owner_id,
            partition_criteria(deleted=True),
            deleted_at=None,
            updated_at=utc_now(),
        )

    async def restore_many(self, ids: list[str], owner_id: str) -> list[str]:
        """
        Move every listed note that is owned and in the trash out of it.

        Ids that do not qualify are skipped.

        Returns:
            IDs of the notes that were restored
        """
        return await self.update_where(
            owner_id,
            Note.id.in_(ids),
            partition_criteria(deleted=True),
            deleted_at=None,
            updated_at=utc_now(),
        )
