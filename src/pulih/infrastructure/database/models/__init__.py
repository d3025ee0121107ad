"""
Database ORM models package.
"""

from pulih.infrastructure.database.models.user_model import UserModel
from pulih.infrastructure.database.models.episode_model import EpisodeModel

__all__ = [
    "UserModel",
    "EpisodeModel",
]
