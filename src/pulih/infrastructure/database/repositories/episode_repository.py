"""
Episode Repository

SQL-backed journal entry storage.
"""

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pulih.domain.models.episode import EpisodeRecord
from pulih.infrastructure.database.models.episode_model import EpisodeModel
from pulih.infrastructure.database.repositories.base import BaseRepository
from pulih.infrastructure.storage.base import EpisodeStore


class EpisodeRepository(BaseRepository[EpisodeModel], EpisodeStore):
    """
    Repository for journal entries.

    Converts between ORM rows and domain records at the boundary.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize with episode model."""
        super().__init__(EpisodeModel, session)

    async def get(self, entry_id: UUID) -> Optional[EpisodeRecord]:
        model = await self.get_by_id(entry_id)
        return model.to_domain() if model else None

    async def list_for_owner(self, owner_id: UUID) -> Sequence[EpisodeRecord]:
        result = await self._session.execute(
            select(EpisodeModel).where(EpisodeModel.owner_id == owner_id)
        )
        return [model.to_domain() for model in result.scalars().all()]

    async def add(self, record: EpisodeRecord) -> EpisodeRecord:
        model = await self.create(EpisodeModel.from_domain(record))
        return model.to_domain()

    async def replace(self, record: EpisodeRecord) -> EpisodeRecord:
        model = await self.get_by_id(record.id)
        if model is None:
            raise KeyError(record.id)
        if model.owner_id != record.owner_id:
            raise ValueError("owner_id is immutable")
        model.apply(record)
        await self._session.flush()
        return model.to_domain()

    async def delete_for_owner(self, owner_id: UUID) -> int:
        result = await self._session.execute(
            delete(EpisodeModel).where(EpisodeModel.owner_id == owner_id)
        )
        return result.rowcount

    async def count_for_owner(self, owner_id: UUID) -> int:
        result = await self._session.execute(
            select(func.count())
            .select_from(EpisodeModel)
            .where(EpisodeModel.owner_id == owner_id)
        )
        return result.scalar_one()
