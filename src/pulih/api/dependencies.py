"""
API Dependencies

FastAPI providers for storage, services and the authenticated caller.

Storage follows ``Settings.storage_backend``: SQL repositories share
one session per request; the in-memory stores are process-wide.
"""

from functools import lru_cache
from typing import AsyncGenerator, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from pulih.config import Settings, get_settings
from pulih.domain.exceptions import NotAuthenticatedError
from pulih.domain.models.user import OwnerContext
from pulih.infrastructure.database import get_db_manager
from pulih.infrastructure.database.repositories import EpisodeRepository, UserRepository
from pulih.infrastructure.storage import (
    EpisodeStore,
    InMemoryEpisodeStore,
    InMemoryUserStore,
    UserStore,
)
from pulih.services.auth import AuthService, PasswordHasher, TokenService, UserAdminService
from pulih.services.journal import JournalService

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache()
def get_memory_user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@lru_cache()
def get_memory_episode_store() -> InMemoryEpisodeStore:
    return InMemoryEpisodeStore()


@lru_cache()
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher()


async def get_store_session(
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[Optional[AsyncSession], None]:
    """Request-scoped database session, or None for in-memory storage."""
    if settings.storage_backend == "memory":
        yield None
        return

    async with get_db_manager().session() as session:
        yield session


async def get_user_store(
    session: Optional[AsyncSession] = Depends(get_store_session),
) -> UserStore:
    if session is None:
        return get_memory_user_store()
    return UserRepository(session)


async def get_episode_store(
    session: Optional[AsyncSession] = Depends(get_store_session),
) -> EpisodeStore:
    if session is None:
        return get_memory_episode_store()
    return EpisodeRepository(session)


def get_token_service(settings: Settings = Depends(get_settings)) -> TokenService:
    return TokenService(settings.jwt)


def get_auth_service(
    users: UserStore = Depends(get_user_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(users, hasher, tokens, settings.safety)


def get_journal_service(
    episodes: EpisodeStore = Depends(get_episode_store),
    settings: Settings = Depends(get_settings),
) -> JournalService:
    return JournalService(
        episodes,
        tz=settings.journal.tzinfo,
        locale=settings.journal.chart_locale,
        default_top_n=settings.journal.default_top_n,
    )


def get_user_admin_service(
    users: UserStore = Depends(get_user_store),
    episodes: EpisodeStore = Depends(get_episode_store),
    auth: AuthService = Depends(get_auth_service),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserAdminService:
    return UserAdminService(users, episodes, auth, hasher)


async def get_current_owner(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> OwnerContext:
    """
    Resolve the bearer token into the caller's OwnerContext.

    Raises:
        NotAuthenticatedError: Missing, invalid or expired token
    """
    if credentials is None:
        raise NotAuthenticatedError()
    return await auth.authenticate(credentials.credentials)
