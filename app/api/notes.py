"""Notes API endpoints"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app import config
from app.middleware.auth import get_current_user
from app.models.identity import Identity
from app.models.note import (
    AutosaveRequest,
    AutosaveResponse,
    MessageResponse,
    NoteCreateRequest,
    NoteDetail,
    NoteFilters,
    NoteListResponse,
    NoteUpdateRequest,
    PublishResponse,
    VisibilityRequest,
    VisibilityResponse,
)
from app.api.dependencies import get_note_query_service, get_note_service
from app.services.notes import NoteNotFoundError, NoteQueryService, NoteService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notes", tags=["notes"])


def parse_label_ids(labels: Optional[str]) -> Optional[List[int]]:
    """Comma separated ids to ints; tokens that are not integers are ignored"""
    if not labels:
        return None
    return [int(part) for part in (p.strip() for p in labels.split(",")) if part.isdigit()]


def parse_flag(value: Optional[str], true_token: str, false_token: str) -> Optional[bool]:
    if value == true_token:
        return True
    if value == false_token:
        return False
    return None


@router.get("", response_model=NoteListResponse)
async def list_notes(
    category: Optional[int] = Query(None, description="Category id"),
    labels: Optional[str] = Query(None, description="Comma separated label ids"),
    search: Optional[str] = Query(None, description="Substring of title or content"),
    drafts: Optional[str] = Query(None, description="'true' or 'false'"),
    visibility: Optional[str] = Query(None, description="'public' or 'private'"),
    page: int = Query(1, ge=1),
    limit: int = Query(config.NOTES_PAGE_SIZE, ge=1, le=config.NOTES_MAX_PAGE_SIZE),
    user: Identity = Depends(get_current_user),
    query_service: NoteQueryService = Depends(get_note_query_service),
):
    """
    List the authenticated user's notes, newest first.

    Label filtering happens after the page is fetched, so a page can hold
    fewer than `limit` notes. `totalCount` counts all of the user's notes
    regardless of the other filters.
    """
    filters = NoteFilters(
        category_id=category,
        label_ids=parse_label_ids(labels),
        search=search or None,
        is_draft=parse_flag(drafts, "true", "false"),
        is_public=parse_flag(visibility, "public", "private"),
        page=page,
        limit=limit,
    )

    try:
        return await query_service.list(user.id, filters)
    except Exception as e:
        logger.error(f"Error listing notes for user {user.id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.post("", response_model=NoteDetail, status_code=201)
async def create_note(
    request: NoteCreateRequest,
    user: Identity = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
):
    try:
        return await note_service.create(user.id, request)
    except Exception as e:
        logger.error(f"Error creating note for user {user.id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{note_id}", response_model=NoteDetail)
async def get_note(
    note_id: int,
    user: Identity = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
):
    try:
        return await note_service.get(note_id, user.id)
    except NoteNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error fetching note {note_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/{note_id}", response_model=NoteDetail)
async def update_note(
    note_id: int,
    request: NoteUpdateRequest,
    user: Identity = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
):
    """
    Update title, content, category and labels.

    Only fields present in the body are written. When `label_ids` is
    present the note's labels are replaced by exactly that set.
    """
    try:
        return await note_service.update(note_id, user.id, request)
    except NoteNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error updating note {note_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{note_id}", response_model=MessageResponse)
async def delete_note(
    note_id: int,
    user: Identity = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
):
    try:
        await note_service.delete(note_id, user.id)
        return MessageResponse(message="Note deleted successfully")
    except NoteNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error deleting note {note_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.patch("/{note_id}/visibility", response_model=VisibilityResponse)
async def set_note_visibility(
    note_id: int,
    request: VisibilityRequest,
    user: Identity = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
):
    try:
        record = await note_service.set_visibility(note_id, user.id, request.is_public)
        return VisibilityResponse(
            message=f"Note {'made public' if request.is_public else 'made private'}",
            public_share_token=record.public_share_token,
            is_public=record.is_public,
        )
    except NoteNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error changing visibility of note {note_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.patch("/{note_id}/publish", response_model=PublishResponse)
async def publish_note(
    note_id: int,
    user: Identity = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
):
    """Turn a draft into a published note. 404 if the note is not a draft."""
    try:
        note = await note_service.publish(note_id, user.id)
        return PublishResponse(message="Draft published successfully", note=note)
    except NoteNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error publishing note {note_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/{note_id}/autosave", response_model=AutosaveResponse)
async def autosave_note(
    note_id: int,
    request: AutosaveRequest,
    user: Identity = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
):
    try:
        record = await note_service.autosave(note_id, user.id, request)
        return AutosaveResponse(message="Autosaved successfully", last_autosave=record.last_autosave)
    except NoteNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error autosaving note {note_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
