"""
Pagination Utilities.

Keyset (cursor-based) pagination for list endpoints.

A page is fetched with ``limit + 1`` rows; the extra row tells us
whether another page exists and is trimmed before returning. The cursor
handed to clients encodes the ordering-key value and id of the last row
on the page, so the next page can be requested with a strict bound and
without re-reading the cursor row.
"""

import base64
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Generic, TypeVar

from fastapi import Query
from pydantic import BaseModel

from notekeeper.backend.core.utils import as_naive_utc
from notekeeper.backend.schemas.base import PaginatedResponse, PaginationInfo, ResponseMetadata

T = TypeVar("T")

CURSOR_SEPARATOR = "|"


# =============================================================================
# Pagination Parameters
# =============================================================================


@dataclass
class CursorParams:
    """Pagination parameters extracted from query string."""

    limit: int | None
    cursor: str | None


def clamp_limit(limit: int | None, default: int, maximum: int) -> int:
    """
    Resolve a requested page size.

    Missing values fall back to ``default``; values above ``maximum``
    are capped rather than rejected.
    """
    if limit is None:
        return min(default, maximum)
    return max(1, min(limit, maximum))


def get_cursor_params(
    limit: int | None = Query(
        default=None,
        ge=1,
        description="Maximum number of items to return (capped at the configured maximum)",
    ),
    cursor: str | None = Query(
        default=None,
        description="Cursor from a previous page's next_cursor",
    ),
) -> CursorParams:
    """
    FastAPI dependency for pagination parameters.

    The limit is passed through as given; the service resolves it
    against the configured default and maximum.

    Usage:
        @router.get("/items")
        async def list_items(
            pagination: CursorParams = Depends(get_cursor_params),
        ):
            ...
    """
    return CursorParams(limit=limit, cursor=cursor or None)


# =============================================================================
# Cursor Encoding/Decoding
# =============================================================================


def encode_cursor(value: str | int) -> str:
    """
    Encode a value as a pagination cursor.

    Returns:
        Base64-encoded cursor string
    """
    return base64.urlsafe_b64encode(str(value).encode()).decode()


def decode_cursor(cursor: str) -> str:
    """
    Decode a pagination cursor.

    Raises:
        ValueError: If cursor is invalid
    """
    try:
        return base64.urlsafe_b64decode(cursor.encode()).decode()
    except ValueError as exc:
        raise ValueError(f"Invalid cursor: {cursor}") from exc


@dataclass(frozen=True)
class KeysetCursor:
    """Position of the last row of a page: its ordering-key value and id."""

    position: datetime
    id: str


def encode_keyset_cursor(position: datetime, id: str) -> str:
    """Encode an ordering-key value and row id as an opaque cursor."""
    return encode_cursor(f"{position.isoformat()}{CURSOR_SEPARATOR}{id}")


def decode_keyset_cursor(cursor: str) -> KeysetCursor:
    """
    Decode a cursor produced by ``encode_keyset_cursor``.

    Raises:
        ValueError: If the cursor is not a keyset cursor
    """
    raw = decode_cursor(cursor)
    position_text, separator, row_id = raw.partition(CURSOR_SEPARATOR)
    if not separator or not row_id:
        raise ValueError(f"Invalid cursor: {cursor}")

    try:
        position = datetime.fromisoformat(position_text)
    except ValueError as exc:
        raise ValueError(f"Invalid cursor: {cursor}") from exc

    return KeysetCursor(position=as_naive_utc(position), id=row_id)


# =============================================================================
# Paginated Result Builder
# =============================================================================


@dataclass
class PagedResult(Generic[T]):
    """
    Result container for paginated queries.

    Contains the items and pagination metadata needed to build
    a PaginatedResponse.
    """

    items: list[T]
    limit: int
    has_more: bool
    total: int | None = None
    cursor: str | None = None
    next_cursor: str | None = None


def create_paginated_response(
    result: PagedResult[Any],
    item_schema: type[BaseModel],
    request_id: str | None = None,
) -> dict[str, Any]:
    """
    Create a standardized paginated response.

    Usage:
        return create_paginated_response(
            result=page,
            item_schema=NoteResponse,
            request_id=request_id,
        )
    """
    validated_items = [
        item_schema.model_validate(item).model_dump(mode="json")
        for item in result.items
    ]

    pagination = PaginationInfo(
        total=result.total,
        limit=result.limit,
        cursor=result.cursor,
        next_cursor=result.next_cursor,
        has_more=result.has_more,
    )

    response = PaginatedResponse(
        data=validated_items,
        pagination=pagination,
        metadata=ResponseMetadata(request_id=request_id),
    )

    return response.model_dump(mode="json")


# =============================================================================
# Pagination Helper for Repositories
# =============================================================================


async def paginate_keyset(
    query_func: Callable[[int], Awaitable[list[T]]],
    limit: int,
    position_of: Callable[[T], datetime | None],
    cursor: str | None = None,
    count_func: Callable[[], Awaitable[int]] | None = None,
) -> PagedResult[T]:
    """
    Execute a keyset-paginated query.

    Args:
        query_func: Async function taking a row limit and returning rows
            already filtered past the cursor bound and ordered
        limit: Page size
        position_of: Returns a row's ordering-key value
        cursor: Cursor the page was requested with (echoed back)
        count_func: Optional async function returning the total count

    Usage:
        result = await paginate_keyset(
            query_func=lambda n: repo.list_page(owner_id, deleted, n, after),
            limit=20,
            position_of=lambda note: note.created_at,
        )
    """
    # One extra row tells us whether another page exists
    items = await query_func(limit + 1)

    has_more = len(items) > limit
    if has_more:
        items = items[:limit]

    total = None
    if count_func is not None:
        total = await count_func()

    next_cursor = None
    if has_more and items:
        last_item = items[-1]
        position = position_of(last_item)
        if position is not None:
            next_cursor = encode_keyset_cursor(position, last_item.id)

    return PagedResult(
        items=items,
        limit=limit,
        has_more=has_more,
        total=total,
        cursor=cursor,
        next_cursor=next_cursor,
    )
