"""
Note Service.

Business logic layer for notes: creation and edits, the active and
trash views, and the trash lifecycle (soft delete, restore, bulk
restore). Every method takes the caller's ``owner_id`` explicitly and
passes it down to the repository, which filters on it in SQL.
"""

from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.backend.core.config import get_app_config
from notekeeper.backend.core.exceptions import ValidationError
from notekeeper.backend.core.pagination import (
    KeysetCursor,
    PagedResult,
    clamp_limit,
    decode_keyset_cursor,
    paginate_keyset,
)
from notekeeper.backend.models.note import Note
from notekeeper.backend.repositories.note import NoteRepository, position_of
from notekeeper.backend.schemas.note import TITLE_MAX_LENGTH, NoteCreate, NoteUpdate
from notekeeper.backend.services.base import BaseService


@dataclass
class BulkRestoreResult:
    """Outcome of a bulk restore. Skipped ids are not reported individually."""

    restored_ids: list[str] = field(default_factory=list)

    @property
    def restored_count(self) -> int:
        return len(self.restored_ids)


class NoteService(BaseService):
    """
    Service for note business logic.

    A note is in exactly one of two partitions: active or trash.
    Lifecycle operations only ever change ``deleted_at`` and
    ``updated_at``.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)

    def _validate_title(self, title: str | None) -> None:
        self._validate_required({"title": title}, ["title"])
        self._validate_string_length(title, "title", max_length=TITLE_MAX_LENGTH)

    async def create_note(self, owner_id: str, data: NoteCreate) -> Note:
        """
        Create a new active note.

        Raises:
            ValidationError: If the title is empty or blank
        """
        self._validate_title(data.title)
        self._log_operation("Creating note", owner_id=owner_id)

        note = await self._execute_db_operation(
            "create_note",
            self.repo.create(
                owner_id=owner_id,
                title=data.title,
                content=data.content,
            ),
        )

        self._log_debug("Note created", note_id=note.id)
        return note

    async def get_note(self, owner_id: str, note_id: str) -> Note:
        """
        Get an owned note by ID, active or trashed.

        Raises:
            NotFoundError: If note not found or owned by someone else
        """
        return await self._execute_db_operation(
            "get_note",
            self.repo.get_by_id(note_id, owner_id),
        )

    async def _resolve_cursor(
        self,
        owner_id: str,
        cursor: str | None,
        deleted: bool,
    ) -> KeysetCursor | None:
        """
        Turn a client cursor into a keyset bound.

        Cursors we issue carry the bound directly. Anything else is taken
        to be a bare note id and looked up; if it cannot be resolved the
        bound is dropped and the listing starts from the top.
        """
        if cursor is None:
            return None

        try:
            return decode_keyset_cursor(cursor)
        except ValueError:
            pass

        position = await self._execute_db_operation(
            "resolve_cursor",
            self.repo.find_cursor_position(owner_id, cursor, deleted),
        )
        if position is None:
            self._log_debug("Cursor not resolved, restarting listing", owner_id=owner_id)
        return position

    async def list_notes(
        self,
        owner_id: str,
        deleted: bool = False,
        limit: int | None = None,
        cursor: str | None = None,
    ) -> PagedResult[Note]:
        """
        List one page of the active view or the trash view.

        The active view is ordered by creation time, the trash view by
        the time notes were trashed, both newest first.

        Args:
            owner_id: Owner whose notes are listed
            deleted: True for the trash view
            limit: Page size; None means the configured default, and
                values above the configured maximum are capped
            cursor: ``next_cursor`` from a previous page

        Returns:
            PagedResult with the notes and the cursor for the next page
        """
        bounds = get_app_config().application.pagination
        page_size = clamp_limit(limit, bounds.default_limit, bounds.max_limit)
        after = await self._resolve_cursor(owner_id, cursor, deleted)

        self._log_debug(
            "Listing notes",
            owner_id=owner_id,
            deleted=deleted,
            limit=page_size,
            has_cursor=after is not None,
        )

        return await self._execute_db_operation(
            "list_notes",
            paginate_keyset(
                query_func=lambda n: self.repo.list_page(owner_id, deleted, n, after),
                limit=page_size,
                position_of=lambda note: position_of(note, deleted),
                cursor=cursor,
                count_func=lambda: self.repo.count_partition(owner_id, deleted),
            ),
        )

    async def update_note(self, owner_id: str, note_id: str, data: NoteUpdate) -> Note:
        """
        Update an owned note's title and/or content.

        Only fields present in ``data`` are applied; ``updated_at`` is
        bumped even when no fields are given. The trash state is never
        changed here.

        Raises:
            ValidationError: If a title is given but empty or blank
            NotFoundError: If note not found
        """
        update_data = data.model_dump(exclude_unset=True)

        if "title" in update_data:
            self._validate_title(update_data["title"])

        self._log_operation(
            "Updating note",
            note_id=note_id,
            fields=list(update_data.keys()),
        )

        return await self._execute_db_operation(
            "update_note",
            self.repo.update_content(note_id, owner_id, **update_data),
        )

    async def delete_note(self, owner_id: str, note_id: str) -> Note:
        """
        Move a note to the trash.

        Returns:
            The note with ``deleted_at`` set

        Raises:
            NotFoundError: If note not found
        """
        self._log_operation("Moving note to trash", note_id=note_id)

        return await self._execute_db_operation(
            "delete_note",
            self.repo.soft_delete(note_id, owner_id),
        )

    async def restore_note(self, owner_id: str, note_id: str) -> Note:
        """
        Restore a note from the trash.

        Restoring a note that is not in the trash fails the same way as
        restoring a note that does not exist, and changes nothing.

        Raises:
            NotFoundError: If note not found or not in the trash
        """
        self._log_operation("Restoring note", note_id=note_id)

        return await self._execute_db_operation(
            "restore_note",
            self.repo.restore(note_id, owner_id),
        )

    async def restore_notes(self, owner_id: str, note_ids: list[str]) -> BulkRestoreResult:
        """
        Restore several notes from the trash in one statement.

        Ids that are unknown, owned by someone else, or not in the trash
        are skipped; the call still succeeds.

        Raises:
            ValidationError: If ``note_ids`` is empty or holds anything
                other than non-blank strings
        """
        if not note_ids:
            raise ValidationError(
                "At least one note id is required",
                details={"ids": "must not be empty"},
            )
        if not all(isinstance(note_id, str) and note_id.strip() for note_id in note_ids):
            raise ValidationError(
                "Note ids must be non-empty strings",
                details={"ids": "must contain only non-empty strings"},
            )

        unique_ids = list(dict.fromkeys(note_id.strip() for note_id in note_ids))

        restored_ids = await self._execute_db_operation(
            "restore_notes",
            self.repo.restore_many(unique_ids, owner_id),
        )

        self._log_operation(
            "Restored notes",
            requested=len(unique_ids),
            restored=len(restored_ids),
        )
        return BulkRestoreResult(restored_ids=restored_ids)
