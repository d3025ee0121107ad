"""
Base Repository Pattern

Provides generic async CRUD operations for all repositories.
Implements the Repository pattern for clean separation between
domain logic and data access.
"""

from typing import Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pulih.infrastructure.database.connection import Base

# Type variable for model types
ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """
    Generic base repository with async CRUD operations.

    Subclass and specify the model type for entity-specific repositories.

    Usage:
        class UserRepository(BaseRepository[UserModel]):
            pass

        repo = UserRepository(session)
        user = await repo.get_by_id(user_id)
    """

    def __init__(self, model: Type[ModelT], session: AsyncSession) -> None:
        """
        Initialize repository with model class and session.

        Args:
            model: SQLAlchemy model class
            session: Async database session
        """
        self._model = model
        self._session = session

    async def get_by_id(self, id: UUID) -> Optional[ModelT]:
        """
        Get entity by primary key ID.

        Returns:
            Entity if found, None otherwise
        """
        result = await self._session.execute(
            select(self._model).where(self._model.id == id)
        )
        return result.scalar_one_or_none()

    async def create(self, entity: ModelT) -> ModelT:
        """
        Create a new entity.

        Returns:
            Created entity
        """
        self._session.add(entity)
        await self._session.flush()
        await self._session.refresh(entity)
        return entity

    async def delete(self, id: UUID) -> bool:
        """
        Delete entity by ID.

        Returns:
            True if deleted, False if not found
        """
        result = await self._session.execute(
            delete(self._model).where(self._model.id == id)
        )
        return result.rowcount > 0

    async def count(self) -> int:
        """Count all entities."""
        result = await self._session.execute(
            select(func.count()).select_from(self._model)
        )
        return result.scalar_one()
