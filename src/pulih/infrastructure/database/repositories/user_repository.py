"""
User Repository

SQL-backed account storage with lookups by username and email.
"""

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pulih.domain.models.user import User
from pulih.infrastructure.database.models.user_model import UserModel
from pulih.infrastructure.database.repositories.base import BaseRepository
from pulih.infrastructure.storage.base import UserStore


class UserRepository(BaseRepository[UserModel], UserStore):
    """
    Repository for user data access.

    Provides user-specific queries beyond basic CRUD.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize with user model."""
        super().__init__(UserModel, session)

    async def get(self, user_id: UUID) -> Optional[User]:
        model = await self.get_by_id(user_id)
        return model.to_domain() if model else None

    async def get_by_username(self, username: str) -> Optional[User]:
        """
        Get user by username.

        Returns:
            User if found, None otherwise
        """
        result = await self._session.execute(
            select(UserModel).where(UserModel.username == username)
        )
        model = result.scalar_one_or_none()
        return model.to_domain() if model else None

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Returns:
            User if found, None otherwise
        """
        result = await self._session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        model = result.scalar_one_or_none()
        return model.to_domain() if model else None

    async def list_all(self) -> Sequence[User]:
        result = await self._session.execute(
            select(UserModel).order_by(UserModel.created_at.asc())
        )
        return [model.to_domain() for model in result.scalars().all()]

    async def add(self, user: User) -> User:
        model = await self.create(UserModel.from_domain(user))
        return model.to_domain()

    async def replace(self, user: User) -> User:
        model = await self.get_by_id(user.id)
        if model is None:
            raise KeyError(user.id)
        model.username = user.username
        model.email = user.email
        model.password_hash = user.password_hash
        model.role = user.role.value
        await self._session.flush()
        return model.to_domain()
