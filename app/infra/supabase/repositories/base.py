"""Base repository with common CRUD operations"""
from typing import Generic, TypeVar, Type, Optional, List, Dict, Any
from pydantic import BaseModel
from postgrest.exceptions import APIError  # type: ignore
from supabase import AsyncClient  # type: ignore

from app.infra.supabase.errors import classify_api_error

T = TypeVar('T', bound=BaseModel)


class BaseRepository(Generic[T]):
    """
    Base repository providing common database operations.
    Hides Supabase implementation details from the rest of the application.

    Every PostgREST failure leaves the repository as a StoreError subclass,
    so callers can tell an absent table or an undeclared relationship apart
    from any other failure.
    """

    def __init__(self, client: AsyncClient, table_name: str, model_class: Type[T]):
        self._client = client
        self._table_name = table_name
        self._model_class = model_class

    def _table(self):
        return self._client.table(self._table_name)

    async def _execute(self, query):
        """Run a query builder, translating PostgREST errors"""
        try:
            return await query.execute()
        except APIError as e:
            raise classify_api_error(e) from e

    def _to_model(self, data: Dict[str, Any]) -> T:
        """Convert database dict to domain model"""
        return self._model_class.model_validate(data)

    def _to_models(self, data: List[Dict[str, Any]]) -> List[T]:
        """Convert list of database dicts to domain models"""
        return [self._to_model(item) for item in data]

    async def probe(self) -> None:
        """Trivial query that fails when the table is not provisioned"""
        await self._execute(self._table().select("id").limit(1))

    async def find_by_id(self, id: int) -> Optional[T]:
        """Find a single record by ID"""
        response = await self._execute(self._table().select("*").eq("id", id))

        if not response.data:
            return None

        return self._to_model(response.data[0])

    async def find_by_filters(
        self,
        filters: Dict[str, Any],
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[T]:
        """Find records matching equality filters"""
        query = self._table().select("*")

        for key, value in filters.items():
            query = query.eq(key, value)

        if order_by:
            query = query.order(order_by)

        if limit:
            query = query.limit(limit)

        response = await self._execute(query)
        return self._to_models(response.data)

    async def create(self, data: Dict[str, Any]) -> T:
        """Create a new record"""
        response = await self._execute(self._table().insert(data))

        if not response.data:
            raise ValueError("Failed to create record")

        return self._to_model(response.data[0])

    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count records matching filters"""
        query = self._table().select("*", count="exact", head=True)

        if filters:
            for key, value in filters.items():
                query = query.eq(key, value)

        response = await self._execute(query)
        return response.count or 0
