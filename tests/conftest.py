"""Tests configuration and fixtures."""

import os

# Keep imports of pulih.main from pointing at a real database
os.environ.setdefault("PULIH_STORAGE_BACKEND", "memory")
os.environ.setdefault("PULIH_JWT_SECRET_KEY", "test_secret_key_for_jwt_signing_min_32_chars")

from typing import Callable
from uuid import uuid4

import pytest

from pulih.config import Settings
from pulih.config.settings import JournalSettings, JWTSettings, SafetySettings
from pulih.domain.enums.condition import Condition
from pulih.domain.enums.user_role import UserRole
from pulih.domain.models.episode import EpisodeRecord
from pulih.domain.models.user import OwnerContext
from pulih.infrastructure.storage import InMemoryEpisodeStore, InMemoryUserStore
from pulih.services.auth import AuthService, PasswordHasher, TokenService, UserAdminService
from pulih.services.journal import JournalService


@pytest.fixture
def test_settings() -> Settings:
    """Settings for tests: in-memory storage, Jakarta time."""
    return Settings(
        env="development",
        debug=True,
        storage_backend="memory",
        jwt=JWTSettings(secret_key="test_secret_key_for_jwt_signing_min_32_chars"),
        journal=JournalSettings(timezone="Asia/Jakarta", chart_locale="id", default_top_n=3),
        safety=SafetySettings(rate_limit_requests_per_minute=1000),
    )


@pytest.fixture
def owner() -> OwnerContext:
    return OwnerContext(user_id=uuid4(), username="rani")


@pytest.fixture
def other_owner() -> OwnerContext:
    return OwnerContext(user_id=uuid4(), username="budi")


@pytest.fixture
def admin_ctx() -> OwnerContext:
    return OwnerContext(user_id=uuid4(), username="admin", role=UserRole.ADMIN)


@pytest.fixture
def make_record(owner: OwnerContext) -> Callable[..., EpisodeRecord]:
    """Factory for journal entries owned by ``owner`` unless told otherwise."""

    def _make(
        occurred_at: str,
        condition: Condition | int = Condition.STILL_ANXIOUS,
        triggers: str = "",
        symptoms: str = "",
        strategies: str = "",
        owner_id=None,
    ) -> EpisodeRecord:
        return EpisodeRecord(
            owner_id=owner_id or owner.user_id,
            occurred_at=occurred_at,
            triggers=triggers,
            symptoms=symptoms,
            strategies=strategies,
            condition=condition,
        )

    return _make


@pytest.fixture
def episode_store() -> InMemoryEpisodeStore:
    return InMemoryEpisodeStore()


@pytest.fixture
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture(scope="session")
def password_hasher() -> PasswordHasher:
    return PasswordHasher()


@pytest.fixture
def token_service(test_settings: Settings) -> TokenService:
    return TokenService(test_settings.jwt)


@pytest.fixture
def auth_service(
    user_store: InMemoryUserStore,
    password_hasher: PasswordHasher,
    token_service: TokenService,
    test_settings: Settings,
) -> AuthService:
    return AuthService(user_store, password_hasher, token_service, test_settings.safety)


@pytest.fixture
def user_admin_service(
    user_store: InMemoryUserStore,
    episode_store: InMemoryEpisodeStore,
    auth_service: AuthService,
    password_hasher: PasswordHasher,
) -> UserAdminService:
    return UserAdminService(user_store, episode_store, auth_service, password_hasher)


@pytest.fixture
def journal_service(
    episode_store: InMemoryEpisodeStore,
    test_settings: Settings,
) -> JournalService:
    return JournalService(
        episode_store,
        tz=test_settings.journal.tzinfo,
        locale=test_settings.journal.chart_locale,
    )
