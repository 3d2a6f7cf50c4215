"""Journal API endpoints.

Provides REST API for journal entries and their likes and comments.

Endpoints:
    GET /api/journals - List entries (public feed or dashboard)
    GET /api/journals/{id} - Get entry by ID
    POST /api/journals - Create entry
    PUT /api/journals/{id} - Replace the editable fields of an entry
    DELETE /api/journals/{id} - Delete entry
    POST /api/journals/{id}/likes - Toggle the caller's like
    POST /api/journals/{id}/comments - Add a comment
    DELETE /api/journals/{id}/comments/{comment_id} - Delete a comment

Likes and comments are only changed through the dedicated endpoints; the
PUT body cannot carry them, so no client can overwrite them with a stale copy.

Tests:
    - tests/integration/test_api_journals.py
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Response, status

from travel_journal.api.dependencies import (
    get_caller,
    get_social_service,
    get_store,
    require_caller,
)
from travel_journal.core.access import FeedMode, can_manage, can_view, visible_set
from travel_journal.core.social import SocialService
from travel_journal.errors import PermissionDeniedError
from travel_journal.schemas import (
    Caller,
    Comment,
    CommentCreate,
    CommentsResponse,
    Entry,
    EntryCreate,
    EntryUpdate,
    LikesResponse,
)
from travel_journal.store.base import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/journals", tags=["journals"])


async def _get_viewable(store: DocumentStore, entry_id: str, caller: Caller | None) -> Entry:
    entry = await store.get(entry_id)
    if not can_view(entry, caller):
        raise PermissionDeniedError(f"Entry {entry_id} is private")
    return entry


async def _get_manageable(store: DocumentStore, entry_id: str, caller: Caller) -> Entry:
    entry = await store.get(entry_id)
    if not can_manage(entry, caller):
        raise PermissionDeniedError(f"Caller {caller.id} cannot manage entry {entry_id}")
    return entry


@router.get("", response_model=list[Entry])
async def list_journals(
    view: FeedMode = Query(FeedMode.PUBLIC, description="public feed or personal dashboard"),
    caller: Caller | None = Depends(get_caller),
    store: DocumentStore = Depends(get_store),
) -> list[Entry]:
    """List entries newest first, filtered for the caller."""
    return visible_set(await store.list_by_date(), caller, view)


@router.get("/{entry_id}", response_model=Entry)
async def get_journal(
    entry_id: str,
    caller: Caller | None = Depends(get_caller),
    store: DocumentStore = Depends(get_store),
) -> Entry:
    """Get entry by ID.

    Raises:
        NotFoundError: If the entry does not exist.
        PermissionDeniedError: If the entry is private to someone else.
    """
    return await _get_viewable(store, entry_id, caller)


@router.post("", response_model=Entry, status_code=status.HTTP_201_CREATED)
async def create_journal(
    payload: EntryCreate,
    caller: Caller = Depends(require_caller),
    store: DocumentStore = Depends(get_store),
) -> Entry:
    """Create an entry authored by the caller.

    The author fields always come from the caller identity, never the body.
    """
    doc = payload.model_copy(
        update={"author_id": caller.id, "author_name": caller.username or caller.id}
    )
    return await store.create(doc)


@router.put("/{entry_id}", response_model=Entry)
async def update_journal(
    entry_id: str,
    payload: EntryUpdate,
    caller: Caller = Depends(require_caller),
    store: DocumentStore = Depends(get_store),
) -> Entry:
    """Replace the editable fields of an entry.

    Author, likes and comments are carried over from the stored document,
    and so is visibility when ``isPrivate`` is omitted.
    """
    current = await _get_manageable(store, entry_id, caller)
    changes = payload.model_dump()
    if changes["is_private"] is None:
        del changes["is_private"]
    updated = current.model_copy(update=changes)
    entry = await store.replace(entry_id, updated)
    logger.info(f"Updated journal entry: {entry_id}")
    return entry


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_journal(
    entry_id: str,
    caller: Caller = Depends(require_caller),
    store: DocumentStore = Depends(get_store),
) -> Response:
    """Delete an entry with its likes and comments."""
    await _get_manageable(store, entry_id, caller)
    await store.delete(entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{entry_id}/likes", response_model=LikesResponse)
async def toggle_like(
    entry_id: str,
    caller: Caller = Depends(require_caller),
    store: DocumentStore = Depends(get_store),
    social: SocialService = Depends(get_social_service),
) -> LikesResponse:
    """Toggle the caller's like on an entry."""
    await _get_viewable(store, entry_id, caller)
    return LikesResponse(likes=await social.toggle_like(entry_id, caller.id))


@router.post(
    "/{entry_id}/comments",
    response_model=Comment,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    entry_id: str,
    payload: CommentCreate,
    caller: Caller = Depends(require_caller),
    store: DocumentStore = Depends(get_store),
    social: SocialService = Depends(get_social_service),
) -> Comment:
    """Add a comment by the caller."""
    await _get_viewable(store, entry_id, caller)
    return await social.add_comment(entry_id, caller.id, caller.username, payload.text or "")


@router.delete("/{entry_id}/comments/{comment_id}", response_model=CommentsResponse)
async def delete_comment(
    entry_id: str,
    comment_id: str,
    caller: Caller = Depends(require_caller),
    store: DocumentStore = Depends(get_store),
    social: SocialService = Depends(get_social_service),
) -> CommentsResponse:
    """Delete a comment. Entry author or admin only; unknown ids are a no-op."""
    await _get_manageable(store, entry_id, caller)
    return CommentsResponse(comments=await social.delete_comment(entry_id, comment_id))
