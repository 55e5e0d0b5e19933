"""Listing query for notes with graceful degradation on a partial schema"""
import logging
import math
from typing import List, Optional

from app.infra.supabase.errors import (
    RelationshipUnresolvedError,
    SchemaNotReadyError,
    StoreError,
)
from app.infra.supabase.repositories.notes import NoteRepository
from app.models.note import NoteFilters, NoteListResponse, NoteRecord, NoteSummary, Pagination
from app.services.notes.note_transformer import to_list_item

logger = logging.getLogger(__name__)


def build_pagination(page: int, limit: int, total_count: int) -> Pagination:
    total_pages = math.ceil(total_count / limit) if limit > 0 else 0
    return Pagination(
        current_page=page,
        total_pages=total_pages,
        total_count=total_count,
        limit=limit,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
    )


def filter_by_labels(items: List[NoteSummary], label_ids: Optional[List[int]]) -> List[NoteSummary]:
    """Keep notes whose label set intersects label_ids"""
    if not label_ids:
        return items
    wanted = set(label_ids)
    return [item for item in items if any(label.id in wanted for label in item.labels)]


class NoteQueryService:
    """
    Builds and runs the notes listing query.

    Strategies, in order:
    1. existence probe - an absent posts table yields an empty page
    2. joined query - category and labels embedded, paginated in the store
    3. flat query - used only when the embed relationship is undeclared;
       labels and category are left empty and pagination is computed in memory

    Label filtering is applied to the fetched page, after pagination. The flat
    query has no label data, so it ignores the label filter.
    Any other store failure propagates.
    """

    def __init__(self, notes: NoteRepository):
        self._notes = notes

    async def list(self, owner_id: str, filters: NoteFilters) -> NoteListResponse:
        try:
            await self._notes.probe()
        except SchemaNotReadyError:
            logger.info("Posts table not found, returning empty notes page")
            return self._empty_page(filters)

        try:
            return await self._list_joined(owner_id, filters)
        except RelationshipUnresolvedError as e:
            logger.info(f"Relationship error, falling back to flat query: {e.message}")
            return await self._list_flat(owner_id, filters)

    @staticmethod
    def _empty_page(filters: NoteFilters) -> NoteListResponse:
        return NoteListResponse(data=[], pagination=build_pagination(1, filters.limit, 0))

    async def _count(self, owner_id: str) -> Optional[int]:
        # Counts every note of the owner; the other filters are not applied
        try:
            return await self._notes.count_for_owner(owner_id)
        except StoreError as e:
            logger.warning(f"Count error: {e.message}")
            return None

    async def _list_joined(self, owner_id: str, filters: NoteFilters) -> NoteListResponse:
        count = await self._count(owner_id)
        records = await self._notes.find_page_joined(owner_id, filters)

        items = filter_by_labels([to_list_item(r) for r in records], filters.label_ids)

        total_count = count or len(items)
        return NoteListResponse(
            data=items,
            pagination=build_pagination(filters.page, filters.limit, total_count),
        )

    async def _list_flat(self, owner_id: str, filters: NoteFilters) -> NoteListResponse:
        records: List[NoteRecord] = await self._notes.find_flat(owner_id, filters)

        for record in records:
            record.category = None
            record.post_labels = []

        # Label membership is unknown here
        items = [to_list_item(r) for r in records]

        page_items = items[filters.offset:filters.offset + filters.limit]
        return NoteListResponse(
            data=page_items,
            pagination=build_pagination(filters.page, filters.limit, len(items)),
        )
