"""
Notes API Endpoints.

REST API endpoints for notes and the trash. The caller's identity comes
from the bearer token and scopes every operation.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from notekeeper.backend.core.dependencies import DbSession, OwnerId, RequestId
from notekeeper.backend.core.pagination import (
    CursorParams,
    create_paginated_response,
    get_cursor_params,
)
from notekeeper.backend.schemas.base import ApiResponse, ResponseMetadata
from notekeeper.backend.schemas.note import (
    BulkRestoreRequest,
    BulkRestoreResponse,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
)
from notekeeper.backend.services.note import NoteService

router = APIRouter()


def _note_response(note: Any, request_id: str) -> ApiResponse[NoteResponse]:
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "",
    response_model=ApiResponse[NoteResponse],
    status_code=201,
    summary="Create a note",
    description="Create a new note with title and optional content.",
)
async def create_note(
    data: NoteCreate,
    owner_id: OwnerId,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Create a new note."""
    service = NoteService(db)
    note = await service.create_note(owner_id, data)
    return _note_response(note, request_id)


@router.get(
    "",
    summary="List notes (paginated)",
    description=(
        "List active notes newest first, or the trash (deleted=true) "
        "most recently trashed first."
    ),
)
async def list_notes(
    owner_id: OwnerId,
    db: DbSession,
    request_id: RequestId,
    pagination: CursorParams = Depends(get_cursor_params),
    deleted: str | None = Query(
        default=None,
        description="\"true\" lists the trash; any other value lists active notes",
    ),
) -> dict[str, Any]:
    """List one page of active or trashed notes."""
    service = NoteService(db)

    page = await service.list_notes(
        owner_id,
        deleted=deleted == "true",
        limit=pagination.limit,
        cursor=pagination.cursor,
    )

    return create_paginated_response(
        result=page,
        item_schema=NoteResponse,
        request_id=request_id,
    )


@router.post(
    "/restore",
    response_model=ApiResponse[BulkRestoreResponse],
    summary="Restore notes",
    description=(
        "Restore several notes from the trash. Notes that are unknown or "
        "not in the trash are skipped."
    ),
)
async def restore_notes(
    data: BulkRestoreRequest,
    owner_id: OwnerId,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[BulkRestoreResponse]:
    """Restore several notes from the trash."""
    service = NoteService(db)
    result = await service.restore_notes(owner_id, data.ids)
    return ApiResponse(
        data=BulkRestoreResponse(
            restored_count=result.restored_count,
            restored_ids=result.restored_ids,
        ),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Get a note",
    description="Get a single note by ID, whether active or in the trash.",
)
async def get_note(
    note_id: str,
    owner_id: OwnerId,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Get a note by ID."""
    service = NoteService(db)
    note = await service.get_note(owner_id, note_id)
    return _note_response(note, request_id)


@router.put(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Update a note",
    description="Update an existing note. Only provided fields are updated.",
)
@router.patch(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Update a note",
    description="Update an existing note. Only provided fields are updated.",
)
async def update_note(
    note_id: str,
    data: NoteUpdate,
    owner_id: OwnerId,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Update a note."""
    service = NoteService(db)
    note = await service.update_note(owner_id, note_id, data)
    return _note_response(note, request_id)


@router.delete(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Move a note to the trash",
    description="Soft delete: the note moves to the trash and can be restored.",
)
async def delete_note(
    note_id: str,
    owner_id: OwnerId,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Move a note to the trash."""
    service = NoteService(db)
    note = await service.delete_note(owner_id, note_id)
    return _note_response(note, request_id)


@router.post(
    "/{note_id}/restore",
    response_model=ApiResponse[NoteResponse],
    summary="Restore a note",
    description="Restore a note from the trash. Returns 404 if it is not in the trash.",
)
async def restore_note(
    note_id: str,
    owner_id: OwnerId,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Restore a note from the trash."""
    service = NoteService(db)
    note = await service.restore_note(owner_id, note_id)
    return _note_response(note, request_id)
