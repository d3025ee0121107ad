"""
In-Memory Stores

Dictionary-backed implementations of the storage interfaces.
Used when ``PULIH_STORAGE_BACKEND=memory`` and in tests.

Data lives for the lifetime of the process only.
"""

from typing import Optional, Sequence
from uuid import UUID

from pulih.domain.models.episode import EpisodeRecord
from pulih.domain.models.user import User
from pulih.infrastructure.storage.base import EpisodeStore, UserStore


class InMemoryEpisodeStore(EpisodeStore):
    """Journal entries keyed by entry ID."""

    def __init__(self) -> None:
        self._entries: dict[UUID, EpisodeRecord] = {}

    async def get(self, entry_id: UUID) -> Optional[EpisodeRecord]:
        return self._entries.get(entry_id)

    async def list_for_owner(self, owner_id: UUID) -> Sequence[EpisodeRecord]:
        return [e for e in self._entries.values() if e.owner_id == owner_id]

    async def add(self, record: EpisodeRecord) -> EpisodeRecord:
        if record.id in self._entries:
            raise ValueError(f"Entry {record.id} already exists")
        self._entries[record.id] = record
        return record

    async def replace(self, record: EpisodeRecord) -> EpisodeRecord:
        existing = self._entries.get(record.id)
        if existing is None:
            raise KeyError(record.id)
        if existing.owner_id != record.owner_id:
            raise ValueError("owner_id is immutable")
        self._entries[record.id] = record
        return record

    async def delete(self, entry_id: UUID) -> bool:
        return self._entries.pop(entry_id, None) is not None

    async def delete_for_owner(self, owner_id: UUID) -> int:
        owned = [entry_id for entry_id, e in self._entries.items() if e.owner_id == owner_id]
        for entry_id in owned:
            del self._entries[entry_id]
        return len(owned)

    async def count_for_owner(self, owner_id: UUID) -> int:
        return sum(1 for e in self._entries.values() if e.owner_id == owner_id)


class InMemoryUserStore(UserStore):
    """User accounts keyed by user ID."""

    def __init__(self) -> None:
        self._users: dict[UUID, User] = {}

    async def get(self, user_id: UUID) -> Optional[User]:
        return self._users.get(user_id)

    async def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.username == username), None)

    async def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.email == email), None)

    async def list_all(self) -> Sequence[User]:
        return sorted(self._users.values(), key=lambda u: u.created_at)

    async def add(self, user: User) -> User:
        if user.id in self._users:
            raise ValueError(f"User {user.id} already exists")
        self._users[user.id] = user
        return user

    async def replace(self, user: User) -> User:
        if user.id not in self._users:
            raise KeyError(user.id)
        self._users[user.id] = user
        return user

    async def delete(self, user_id: UUID) -> bool:
        return self._users.pop(user_id, None) is not None

    async def count(self) -> int:
        return len(self._users)
