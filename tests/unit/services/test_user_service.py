"""
Unit Tests for User Administration

Tests role checks, account updates and cascading deletion.
"""

from uuid import uuid4

import pytest

from pulih.domain.enums.user_role import UserRole
from pulih.domain.exceptions import (
    DuplicateUserError,
    NotAuthenticatedError,
    PermissionDeniedError,
    UserNotFoundError,
    ValidationError,
)
from pulih.domain.models.episode import EpisodeDraft, EpisodeRecord


class TestAdminOnly:
    async def test_regular_user_denied(self, user_admin_service, owner) -> None:
        with pytest.raises(PermissionDeniedError):
            await user_admin_service.list_users(owner)
        with pytest.raises(PermissionDeniedError):
            await user_admin_service.add_user(owner, "budi", "secret1")

    async def test_anonymous_denied(self, user_admin_service) -> None:
        with pytest.raises(NotAuthenticatedError):
            await user_admin_service.list_users(None)


class TestAddUser:
    async def test_default_email(self, user_admin_service, admin_ctx) -> None:
        user = await user_admin_service.add_user(admin_ctx, "budi", "secret1")

        assert user.email == "budi@pulihalami.app"
        assert user.role == UserRole.USER

    async def test_admin_role(self, user_admin_service, admin_ctx) -> None:
        user = await user_admin_service.add_user(
            admin_ctx, "sari", "secret1", UserRole.ADMIN, "sari@example.com"
        )

        assert user.is_admin
        assert [u.username for u in await user_admin_service.list_users(admin_ctx)] == ["sari"]

    async def test_duplicate_username(self, user_admin_service, admin_ctx) -> None:
        await user_admin_service.add_user(admin_ctx, "budi", "secret1")

        with pytest.raises(DuplicateUserError):
            await user_admin_service.add_user(admin_ctx, "budi", "secret2", email="b2@example.com")


class TestUpdateUser:
    """Tests for account changes."""

    async def test_change_username_and_password(
        self, user_admin_service, auth_service, admin_ctx
    ) -> None:
        user = await user_admin_service.add_user(admin_ctx, "budi", "secret1")

        updated = await user_admin_service.update_user(
            admin_ctx, user.id, username="budi2", password="newsecret"
        )

        assert updated.username == "budi2"
        assert updated.email == user.email
        logged_in, _ = await auth_service.login("budi2", "newsecret")
        assert logged_in.id == user.id

    async def test_keeping_own_username_is_not_a_duplicate(
        self, user_admin_service, admin_ctx
    ) -> None:
        user = await user_admin_service.add_user(admin_ctx, "budi", "secret1")

        updated = await user_admin_service.update_user(admin_ctx, user.id, username="budi")

        assert updated.username == "budi"

    async def test_taken_email(self, user_admin_service, admin_ctx) -> None:
        await user_admin_service.add_user(admin_ctx, "budi", "secret1", email="budi@example.com")
        sari = await user_admin_service.add_user(admin_ctx, "sari", "secret1")

        with pytest.raises(DuplicateUserError):
            await user_admin_service.update_user(admin_ctx, sari.id, email="budi@example.com")

    async def test_short_password(self, user_admin_service, admin_ctx) -> None:
        user = await user_admin_service.add_user(admin_ctx, "budi", "secret1")

        with pytest.raises(ValidationError):
            await user_admin_service.update_user(admin_ctx, user.id, password="123")

    async def test_missing_user(self, user_admin_service, admin_ctx) -> None:
        with pytest.raises(UserNotFoundError):
            await user_admin_service.update_user(admin_ctx, uuid4(), username="x")


class TestDeleteUser:
    async def test_deletes_journal_entries(
        self, user_admin_service, episode_store, user_store, admin_ctx
    ) -> None:
        user = await user_admin_service.add_user(admin_ctx, "budi", "secret1")
        await episode_store.add(EpisodeRecord.create(user.id, EpisodeDraft(occurred_at="2024-05-01")))

        await user_admin_service.delete_user(admin_ctx, user.id)

        assert await user_store.get(user.id) is None
        assert await episode_store.count_for_owner(user.id) == 0

    async def test_missing_user(self, user_admin_service, admin_ctx) -> None:
        with pytest.raises(UserNotFoundError):
            await user_admin_service.delete_user(admin_ctx, uuid4())
