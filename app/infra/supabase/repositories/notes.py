"""Notes repository"""
from typing import Any, Dict, List, Optional

from supabase import AsyncClient  # type: ignore

from app.models.note import NoteFilters, NoteRecord

from .base import BaseRepository

# Note row with its category and labels embedded
JOINED_SELECT = """
    *,
    category:categories(id, name, color, icon),
    post_labels(
        label:labels(id, name, color)
    )
"""

PUBLIC_SELECT = """
    id,
    title,
    content,
    encrypted_content,
    is_encrypted,
    is_updated,
    created_at,
    updated_at,
    category:categories(id, name, color, icon),
    post_labels(
        label:labels(id, name, color)
    )
"""


def build_search_filter(term: str) -> str:
    """Case-insensitive substring match over title OR content"""
    # Quoting keeps commas and parentheses in the term from breaking the or= syntax
    escaped = term.replace("\\", "\\\\").replace('"', '\\"')
    return f'title.ilike."%{escaped}%",content.ilike."%{escaped}%"'


class NoteRepository(BaseRepository[NoteRecord]):
    """Repository for notes (the posts table) and their label links"""

    def __init__(self, client: AsyncClient):
        super().__init__(client, "posts", NoteRecord)

    def _apply_filters(self, query, user_id: str, filters: NoteFilters):
        query = query.eq("user_id", user_id)

        if filters.is_draft is not None:
            query = query.eq("is_draft", filters.is_draft)

        if filters.is_public is not None:
            query = query.eq("is_public", filters.is_public)

        if filters.category_id is not None:
            query = query.eq("category_id", filters.category_id)

        if filters.search:
            query = query.or_(build_search_filter(filters.search))

        return query.order("created_at", desc=True)

    async def count_for_owner(self, user_id: str) -> int:
        """Count every note of a user, ignoring all other listing filters"""
        return await self.count({"user_id": user_id})

    async def find_page_joined(self, user_id: str, filters: NoteFilters) -> List[NoteRecord]:
        """One page of notes with category and labels embedded"""
        query = self._apply_filters(self._table().select(JOINED_SELECT), user_id, filters)
        query = query.range(filters.offset, filters.offset + filters.limit - 1)

        response = await self._execute(query)
        return self._to_models(response.data)

    async def find_flat(self, user_id: str, filters: NoteFilters) -> List[NoteRecord]:
        """All matching notes of a user without any embedded relation"""
        query = self._apply_filters(self._table().select("*"), user_id, filters)

        response = await self._execute(query)
        return self._to_models(response.data)

    async def find_joined_by_id(self, note_id: int, user_id: str) -> Optional[NoteRecord]:
        response = await self._execute(
            self._table()
            .select(JOINED_SELECT)
            .eq("id", note_id)
            .eq("user_id", user_id)
            .limit(1)
        )

        if not response.data:
            return None

        return self._to_model(response.data[0])

    async def find_public_by_token(self, token: str) -> Optional[NoteRecord]:
        response = await self._execute(
            self._table()
            .select(PUBLIC_SELECT)
            .eq("public_share_token", token)
            .eq("is_public", True)
            .limit(1)
        )

        if not response.data:
            return None

        return self._to_model(response.data[0])

    async def update_owned(
        self,
        note_id: int,
        user_id: str,
        values: Dict[str, Any],
        extra_filters: Optional[Dict[str, Any]] = None,
    ) -> Optional[NoteRecord]:
        """
        Update a note only if it belongs to user_id.

        Returns None when no row matched, which covers both a missing note
        and a note owned by someone else.
        """
        query = self._table().update(values).eq("id", note_id).eq("user_id", user_id)

        for key, value in (extra_filters or {}).items():
            query = query.eq(key, value)

        response = await self._execute(query)

        if not response.data:
            return None

        return self._to_model(response.data[0])

    async def delete_owned(self, note_id: int, user_id: str) -> bool:
        response = await self._execute(
            self._table().delete().eq("id", note_id).eq("user_id", user_id)
        )
        return len(response.data) > 0

    async def add_labels(self, note_id: int, label_ids: List[int]) -> None:
        if not label_ids:
            return

        rows = [{"post_id": note_id, "label_id": label_id} for label_id in label_ids]
        await self._execute(self._client.table("post_labels").insert(rows))

    async def replace_labels(self, note_id: int, label_ids: List[int]) -> None:
        """Delete every label link of the note, then insert the new set"""
        await self._execute(self._client.table("post_labels").delete().eq("post_id", note_id))
        await self.add_labels(note_id, label_ids)
