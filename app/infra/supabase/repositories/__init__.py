"""Repository factory and exports"""
from supabase import AsyncClient  # type: ignore
from .base import BaseRepository
from .users import UserRepository
from .notes import NoteRepository
from .categories import CategoryRepository
from .labels import LabelRepository


class RepositoryFactory:
    """Factory for creating repository instances"""

    def __init__(self, client: AsyncClient):
        self._client = client
        self._users: UserRepository = None
        self._notes: NoteRepository = None
        self._categories: CategoryRepository = None
        self._labels: LabelRepository = None

    @property
    def users(self) -> UserRepository:
        """Get users repository"""
        if self._users is None:
            self._users = UserRepository(self._client)
        return self._users

    @property
    def notes(self) -> NoteRepository:
        """Get notes repository"""
        if self._notes is None:
            self._notes = NoteRepository(self._client)
        return self._notes

    @property
    def categories(self) -> CategoryRepository:
        """Get categories repository"""
        if self._categories is None:
            self._categories = CategoryRepository(self._client)
        return self._categories

    @property
    def labels(self) -> LabelRepository:
        """Get labels repository"""
        if self._labels is None:
            self._labels = LabelRepository(self._client)
        return self._labels

    def table_probe(self, table_name: str) -> BaseRepository:
        """Bare repository used only to check that a table exists"""
        return BaseRepository(self._client, table_name, None)


__all__ = [
    'RepositoryFactory',
    'BaseRepository',
    'UserRepository',
    'NoteRepository',
    'CategoryRepository',
    'LabelRepository',
]
