"""Owner-scoped note commands"""
import logging
import secrets
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from app.infra.supabase.repositories.notes import NoteRepository
from app.models.note import (
    AutosaveRequest,
    NoteCreateRequest,
    NoteDetail,
    NoteRecord,
    NoteUpdateRequest,
    PublicNote,
)
from app.services.notes.note_transformer import to_detail, to_public

logger = logging.getLogger(__name__)


class NoteNotFoundError(Exception):
    """The note does not exist or is owned by someone else"""


def generate_share_token() -> str:
    return secrets.token_hex(32)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _content_fields(is_encrypted: bool, content: Optional[str], encrypted_content: Optional[str]) -> Dict[str, Any]:
    """Exactly one of content / encrypted_content is stored"""
    return {
        "content": None if is_encrypted else content,
        "encrypted_content": encrypted_content if is_encrypted else None,
        "is_encrypted": is_encrypted,
    }


class NoteService:
    """Every write is keyed by (note id, owner id)"""

    def __init__(self, notes: NoteRepository):
        self._notes = notes

    async def _load_detail(self, note_id: int, owner_id: str) -> NoteDetail:
        record = await self._notes.find_joined_by_id(note_id, owner_id)
        if record is None:
            raise NoteNotFoundError("Note not found or access denied")
        return to_detail(record)

    async def get(self, note_id: int, owner_id: str) -> NoteDetail:
        return await self._load_detail(note_id, owner_id)

    async def create(self, owner_id: str, request: NoteCreateRequest) -> NoteDetail:
        now = _now()
        values = {
            "title": request.title,
            **_content_fields(request.is_encrypted, request.content, request.encrypted_content),
            "category_id": request.category_id or None,
            "user_id": owner_id,
            "is_draft": request.is_draft,
            "is_public": request.is_public,
            "public_share_token": generate_share_token() if request.is_public else None,
            "last_autosave": now,
            "updated_at": now,
        }
        record = await self._notes.create(values)
        logger.info(f"Created note {record.id} for user {owner_id}")

        if request.label_ids:
            await self._notes.add_labels(record.id, request.label_ids)

        return await self._load_detail(record.id, owner_id)

    async def update(self, note_id: int, owner_id: str, request: NoteUpdateRequest) -> NoteDetail:
        values = request.model_dump(exclude_unset=True, exclude={"label_ids"})
        values.update(updated_at=_now(), is_updated=True)

        record = await self._notes.update_owned(note_id, owner_id, values)
        if record is None:
            raise NoteNotFoundError("Note not found or access denied")

        if request.label_ids is not None:
            await self._notes.replace_labels(note_id, request.label_ids)

        return await self._load_detail(note_id, owner_id)

    async def delete(self, note_id: int, owner_id: str) -> None:
        deleted = await self._notes.delete_owned(note_id, owner_id)
        if not deleted:
            raise NoteNotFoundError("Note not found or access denied")

    async def set_visibility(self, note_id: int, owner_id: str, is_public: bool) -> NoteRecord:
        """Making a note public always issues a fresh share token; private clears it"""
        record = await self._notes.update_owned(
            note_id,
            owner_id,
            {
                "is_public": is_public,
                "public_share_token": generate_share_token() if is_public else None,
                "updated_at": _now(),
            },
        )
        if record is None:
            raise NoteNotFoundError("Note not found or access denied")
        return record

    async def publish(self, note_id: int, owner_id: str) -> NoteDetail:
        record = await self._notes.update_owned(
            note_id,
            owner_id,
            {"is_draft": False, "updated_at": _now(), "is_updated": True},
            extra_filters={"is_draft": True},  # only actual drafts can be published
        )
        if record is None:
            raise NoteNotFoundError("Draft not found or access denied")
        return await self._load_detail(note_id, owner_id)

    async def autosave(self, note_id: int, owner_id: str, request: AutosaveRequest) -> NoteRecord:
        now = _now()
        values = {
            "title": request.title,
            **_content_fields(request.is_encrypted, request.content, request.encrypted_content),
            "last_autosave": now,
            "updated_at": now,
            "is_updated": True,
        }
        record = await self._notes.update_owned(note_id, owner_id, values)
        if record is None:
            raise NoteNotFoundError("Note not found or access denied")
        return record

    async def get_public(self, token: str) -> PublicNote:
        record = await self._notes.find_public_by_token(token)
        if record is None:
            raise NoteNotFoundError("Public note not found")
        return to_public(record)
