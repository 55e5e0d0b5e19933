"""Local users repository"""
from typing import Optional

from supabase import AsyncClient  # type: ignore

from app.models.user import LocalUserCreate, LocalUserRecord

from .base import BaseRepository


class UserRepository(BaseRepository[LocalUserRecord]):
    """Repository for the local mirror of authenticated identities"""

    def __init__(self, client: AsyncClient):
        super().__init__(client, "users", LocalUserRecord)

    async def find_by_id(self, id: str) -> Optional[LocalUserRecord]:
        response = await self._execute(self._table().select("*").eq("id", id).limit(1))

        if not response.data:
            return None

        return self._to_model(response.data[0])

    async def insert_if_absent(self, data: LocalUserCreate) -> Optional[LocalUserRecord]:
        """
        Insert a user unless a row with the same id already exists.

        Returns the created record, or None when another request won the race
        and the insert was ignored.
        """
        response = await self._execute(
            self._table().upsert(
                data.model_dump(mode="json"),
                on_conflict="id",
                ignore_duplicates=True,
            )
        )

        if not response.data:
            return None

        return self._to_model(response.data[0])
