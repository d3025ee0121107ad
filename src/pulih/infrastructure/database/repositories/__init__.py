"""
Repository pattern implementations package.
"""

from pulih.infrastructure.database.repositories.base import BaseRepository
from pulih.infrastructure.database.repositories.episode_repository import EpisodeRepository
from pulih.infrastructure.database.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "EpisodeRepository",
    "UserRepository",
]
