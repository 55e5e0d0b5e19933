"""Categories repository"""
from typing import List

from supabase import AsyncClient  # type: ignore

from app.models.category import Category

from .base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """Repository for per-user note categories"""

    def __init__(self, client: AsyncClient):
        super().__init__(client, "categories", Category)

    async def find_by_owner(self, user_id: str) -> List[Category]:
        """All categories of a user, ordered by name"""
        return await self.find_by_filters({"user_id": user_id}, order_by="name")
