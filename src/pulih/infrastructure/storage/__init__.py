"""Storage interfaces and in-memory implementations."""

from pulih.infrastructure.storage.base import EpisodeStore, UserStore
from pulih.infrastructure.storage.memory import InMemoryEpisodeStore, InMemoryUserStore

__all__ = [
    "EpisodeStore",
    "UserStore",
    "InMemoryEpisodeStore",
    "InMemoryUserStore",
]
