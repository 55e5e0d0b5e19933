"""Public (unauthenticated) note sharing endpoints"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from app.api.dependencies import get_note_service
from app.infra.supabase.errors import SchemaNotReadyError
from app.models.note import PublicNote
from app.services.notes import NoteNotFoundError, NoteService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/public", tags=["public"])


@router.get("/{token}", response_model=PublicNote)
async def get_public_note(
    token: str,
    note_service: NoteService = Depends(get_note_service),
):
    """Fetch a note by its share token. 404 once the note is made private again."""
    try:
        return await note_service.get_public(token)
    except (NoteNotFoundError, SchemaNotReadyError):
        raise HTTPException(status_code=404, detail="Public note not found")
    except Exception as e:
        logger.error(f"Error fetching public note: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
