"""
Storage Interfaces

Abstract interfaces for journal and account storage.
Enables swapping between the SQL repositories and the in-memory
stores used in development and tests.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from uuid import UUID

from pulih.domain.models.episode import EpisodeRecord
from pulih.domain.models.user import User


class EpisodeStore(ABC):
    """
    Journal entry storage.

    Implementations store whole records and never filter by the
    caller's identity; ownership checks belong to the journal service.
    """

    @abstractmethod
    async def get(self, entry_id: UUID) -> Optional[EpisodeRecord]:
        """
        Get an entry by ID.

        Returns:
            The entry, or None if it does not exist
        """
        pass

    @abstractmethod
    async def list_for_owner(self, owner_id: UUID) -> Sequence[EpisodeRecord]:
        """
        List all entries of one owner.

        Returns:
            Entries in no particular order; callers sort on their
            own timeline
        """
        pass

    @abstractmethod
    async def add(self, record: EpisodeRecord) -> EpisodeRecord:
        """Store a new entry."""
        pass

    @abstractmethod
    async def replace(self, record: EpisodeRecord) -> EpisodeRecord:
        """Overwrite the editable fields of an existing entry."""
        pass

    @abstractmethod
    async def delete(self, entry_id: UUID) -> bool:
        """
        Delete an entry permanently.

        Returns:
            True if an entry was deleted
        """
        pass

    @abstractmethod
    async def delete_for_owner(self, owner_id: UUID) -> int:
        """Delete every entry of one owner, returning how many were removed."""
        pass

    @abstractmethod
    async def count_for_owner(self, owner_id: UUID) -> int:
        """Count entries of one owner."""
        pass


class UserStore(ABC):
    """User account storage."""

    @abstractmethod
    async def get(self, user_id: UUID) -> Optional[User]:
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    async def list_all(self) -> Sequence[User]:
        """All accounts, oldest first."""
        pass

    @abstractmethod
    async def add(self, user: User) -> User:
        pass

    @abstractmethod
    async def replace(self, user: User) -> User:
        pass

    @abstractmethod
    async def delete(self, user_id: UUID) -> bool:
        pass

    @abstractmethod
    async def count(self) -> int:
        pass
