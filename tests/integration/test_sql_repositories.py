"""
Integration Tests - SQL Repositories

Runs the SQLAlchemy repositories against in-memory SQLite (aiosqlite).
"""

from typing import AsyncGenerator
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from pulih.domain.enums.condition import Condition
from pulih.domain.enums.user_role import UserRole
from pulih.domain.models.episode import EpisodeDraft, EpisodeRecord
from pulih.domain.models.user import User
from pulih.infrastructure.database import DatabaseManager
from pulih.infrastructure.database.repositories import EpisodeRepository, UserRepository


@pytest.fixture
async def db() -> AsyncGenerator[DatabaseManager, None]:
    manager = DatabaseManager("sqlite+aiosqlite:///:memory:")
    await manager.initialize()
    await manager.create_all()
    yield manager
    await manager.close()


@pytest.fixture
async def session(db: DatabaseManager) -> AsyncGenerator[AsyncSession, None]:
    async with db.session() as session:
        yield session


@pytest.fixture
async def stored_user(session: AsyncSession) -> User:
    user = User(username="rani", email="rani@example.com", password_hash="hash")
    return await UserRepository(session).add(user)


class TestUserRepository:
    """Tests for account persistence."""

    async def test_lookups(self, session, stored_user) -> None:
        users = UserRepository(session)

        assert (await users.get(stored_user.id)).username == "rani"
        assert (await users.get_by_username("rani")).id == stored_user.id
        assert (await users.get_by_email("rani@example.com")).id == stored_user.id
        assert await users.get_by_username("budi") is None
        assert await users.count() == 1

    async def test_replace(self, session, stored_user) -> None:
        users = UserRepository(session)

        await users.replace(stored_user.updated(email="new@example.com"))

        assert (await users.get(stored_user.id)).email == "new@example.com"

    async def test_role_round_trip(self, session) -> None:
        users = UserRepository(session)
        admin = await users.add(
            User(username="admin", email="a@example.com", password_hash="h", role=UserRole.ADMIN)
        )

        assert (await users.get(admin.id)).role is UserRole.ADMIN

    async def test_delete(self, session, stored_user) -> None:
        users = UserRepository(session)

        assert await users.delete(stored_user.id) is True
        assert await users.get(stored_user.id) is None


class TestEpisodeRepository:
    """Tests for journal entry persistence."""

    async def test_add_and_list(self, session, stored_user) -> None:
        episodes = EpisodeRepository(session)
        for occurred_at in ("2024-05-01T09:00:00", "2024-05-03T08:00:00+07:00", "2024-04-30"):
            await episodes.add(
                EpisodeRecord.create(stored_user.id, EpisodeDraft(occurred_at=occurred_at))
            )

        listed = await episodes.list_for_owner(stored_user.id)

        assert sorted(r.occurred_at for r in listed) == [
            "2024-04-30",
            "2024-05-01T09:00:00",
            "2024-05-03T08:00:00+07:00",
        ]
        assert await episodes.count_for_owner(stored_user.id) == 3

    async def test_replace_keeps_identity(self, session, stored_user) -> None:
        episodes = EpisodeRepository(session)
        record = await episodes.add(
            EpisodeRecord.create(stored_user.id, EpisodeDraft(occurred_at="2024-05-01", triggers="work"))
        )

        await episodes.replace(
            record.with_draft(EpisodeDraft(occurred_at="2024-05-02", condition=Condition.CALM))
        )
        stored = await episodes.get(record.id)

        assert stored.id == record.id
        assert stored.owner_id == stored_user.id
        assert stored.triggers == ""
        assert stored.condition is Condition.CALM

    async def test_delete_for_owner(self, session, stored_user) -> None:
        episodes = EpisodeRepository(session)
        for day in (1, 2):
            await episodes.add(
                EpisodeRecord.create(stored_user.id, EpisodeDraft(occurred_at=f"2024-05-0{day}"))
            )

        assert await episodes.delete_for_owner(stored_user.id) == 2
        assert await episodes.list_for_owner(stored_user.id) == []

    async def test_missing_entry(self, session) -> None:
        assert await EpisodeRepository(session).get(uuid4()) is None


class TestDatabaseManager:
    async def test_health_check(self, db: DatabaseManager) -> None:
        assert await db.health_check() is True

    async def test_uninitialized_health_check(self) -> None:
        assert await DatabaseManager("sqlite+aiosqlite:///:memory:").health_check() is False
