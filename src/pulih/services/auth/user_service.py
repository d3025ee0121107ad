"""
User Administration Service

Account management for administrators. Every operation checks the
caller's role before touching storage.
"""

from typing import Optional, Sequence
from uuid import UUID

from pulih.config.logging_config import get_logger
from pulih.domain.enums.user_role import UserRole
from pulih.domain.exceptions import (
    NotAuthenticatedError,
    PermissionDeniedError,
    UserNotFoundError,
    ValidationError,
)
from pulih.domain.models.user import OwnerContext, User
from pulih.infrastructure.storage.base import EpisodeStore, UserStore
from pulih.services.auth.auth_service import AuthService
from pulih.services.auth.security import PasswordHasher

logger = get_logger(__name__)


def _require_admin(ctx: Optional[OwnerContext]) -> OwnerContext:
    if ctx is None:
        raise NotAuthenticatedError()
    if not ctx.is_admin:
        logger.warning("Admin operation denied", user_id=str(ctx.user_id))
        raise PermissionDeniedError("Administrator role required")
    return ctx


class UserAdminService:
    """
    Admin-only account management.

    Deleting an account also deletes its journal entries.
    """

    def __init__(
        self,
        users: UserStore,
        episodes: EpisodeStore,
        auth: AuthService,
        hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._episodes = episodes
        self._auth = auth
        self._hasher = hasher

    async def _get_user(self, user_id: UUID) -> User:
        user = await self._users.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def list_users(self, ctx: Optional[OwnerContext]) -> Sequence[User]:
        _require_admin(ctx)
        return await self._users.list_all()

    async def add_user(
        self,
        ctx: Optional[OwnerContext],
        username: str,
        password: str,
        role: UserRole = UserRole.USER,
        email: Optional[str] = None,
    ) -> User:
        """Create an account with any role; email defaults to the app domain."""
        ctx = _require_admin(ctx)
        user = await self._auth.register(username, password, role, email)
        logger.info("User added by admin", user_id=str(user.id), admin_id=str(ctx.user_id))
        return user

    async def update_user(
        self,
        ctx: Optional[OwnerContext],
        user_id: UUID,
        *,
        username: Optional[str] = None,
        email: Optional[str] = None,
        password: Optional[str] = None,
    ) -> User:
        """
        Change username, email or password of an account.

        Omitted (None or blank) fields are left unchanged.

        Raises:
            UserNotFoundError: No such account
            DuplicateUserError: New username or email taken
            ValidationError: Password too short or invalid email
        """
        ctx = _require_admin(ctx)
        user = await self._get_user(user_id)

        username = username.strip() if username and username.strip() else None
        email = email.strip().lower() if email and email.strip() else None
        await self._auth.ensure_unique(
            username if username != user.username else None,
            email if email != user.email else None,
        )

        password_hash = None
        if password:
            self._auth.validate_password(password)
            password_hash = self._hasher.hash(password)

        try:
            updated = user.updated(username=username, email=email, password_hash=password_hash)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        updated = await self._users.replace(updated)
        logger.info("User updated by admin", user_id=str(user_id), admin_id=str(ctx.user_id))
        return updated

    async def delete_user(self, ctx: Optional[OwnerContext], user_id: UUID) -> None:
        """Delete an account together with its journal entries."""
        ctx = _require_admin(ctx)
        await self._get_user(user_id)
        removed = await self._episodes.delete_for_owner(user_id)
        await self._users.delete(user_id)
        logger.info(
            "User deleted by admin",
            user_id=str(user_id),
            admin_id=str(ctx.user_id),
            entries_removed=removed,
        )
