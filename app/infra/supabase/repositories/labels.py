"""Labels repository"""
from typing import List

from supabase import AsyncClient  # type: ignore

from app.models.label import Label

from .base import BaseRepository


class LabelRepository(BaseRepository[Label]):
    """Repository for per-user labels"""

    def __init__(self, client: AsyncClient):
        super().__init__(client, "labels", Label)

    async def find_by_owner(self, user_id: str) -> List[Label]:
        """All labels of a user, ordered by name"""
        return await self.find_by_filters({"user_id": user_id}, order_by="name")
