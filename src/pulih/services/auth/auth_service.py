"""
Authentication Service

Signup, login and token verification. Produces the OwnerContext
that every other service receives explicitly.
"""

from typing import Optional

from pulih.config.logging_config import get_logger
from pulih.config.settings import AdminBootstrapSettings, SafetySettings
from pulih.domain.enums.user_role import UserRole
from pulih.domain.exceptions import (
    DuplicateUserError,
    InvalidCredentialsError,
    NotAuthenticatedError,
    ValidationError,
)
from pulih.domain.models.user import OwnerContext, User
from pulih.infrastructure.metrics import track_auth_event
from pulih.infrastructure.storage.base import UserStore
from pulih.services.auth.security import PasswordHasher, TokenService

logger = get_logger(__name__)


class AuthService:
    """
    Account authentication.

    Usage:
        auth = AuthService(users, hasher, tokens, safety_settings)
        user = await auth.signup("rani", "rani@example.com", "secret1")
        user, token = await auth.login("rani", "secret1")
        ctx = await auth.authenticate(token)
    """

    def __init__(
        self,
        users: UserStore,
        hasher: PasswordHasher,
        tokens: TokenService,
        safety: SafetySettings,
    ) -> None:
        self._users = users
        self._hasher = hasher
        self._tokens = tokens
        self._safety = safety

    @property
    def tokens(self) -> TokenService:
        return self._tokens

    def validate_password(self, password: str) -> None:
        """
        Enforce the minimum password length.

        Raises:
            ValidationError: Password too short
        """
        minimum = self._safety.min_password_length
        if len(password) < minimum:
            raise ValidationError(f"Password must be at least {minimum} characters")

    def default_email(self, username: str) -> str:
        return f"{username}@{self._safety.default_email_domain}"

    async def ensure_unique(self, username: Optional[str], email: Optional[str]) -> None:
        """
        Reject a username or email that is already registered.

        Raises:
            DuplicateUserError: Username or email taken
        """
        if username is not None and await self._users.get_by_username(username):
            raise DuplicateUserError("Username already exists")
        if email is not None and await self._users.get_by_email(email):
            raise DuplicateUserError("Email already in use")

    async def register(
        self,
        username: str,
        password: str,
        role: UserRole = UserRole.USER,
        email: Optional[str] = None,
    ) -> User:
        """
        Create an account after uniqueness and password checks.

        Email defaults to ``<username>@<default domain>``.
        """
        username = username.strip()
        email = (email or self.default_email(username)).strip().lower()
        self.validate_password(password)
        await self.ensure_unique(username, email)

        try:
            user = User(
                username=username,
                email=email,
                password_hash=self._hasher.hash(password),
                role=role,
            )
        except ValueError as e:
            raise ValidationError(str(e)) from e

        user = await self._users.add(user)
        logger.info("User registered", user_id=str(user.id), role=user.role.value)
        return user

    async def signup(self, username: str, email: str, password: str) -> User:
        """Self-service registration; new accounts get the user role."""
        try:
            user = await self.register(username, password, UserRole.USER, email)
        except (DuplicateUserError, ValidationError):
            track_auth_event("signup", success=False)
            raise
        track_auth_event("signup", success=True)
        return user

    async def login(self, username: str, password: str) -> tuple[User, str]:
        """
        Verify credentials and issue an access token.

        Raises:
            InvalidCredentialsError: Unknown user or wrong password
        """
        user = await self._users.get_by_username(username.strip())
        if user is None or not self._hasher.verify(password, user.password_hash):
            track_auth_event("login", success=False)
            logger.info("Login rejected")
            raise InvalidCredentialsError()

        track_auth_event("login", success=True)
        logger.info("User logged in", user_id=str(user.id))
        return user, self._tokens.create_access_token(user)

    async def authenticate(self, token: Optional[str]) -> OwnerContext:
        """
        Resolve a bearer token into the caller's context.

        The role comes from the stored account, not from the token, so
        role changes apply immediately.

        Raises:
            NotAuthenticatedError: Missing/invalid token or unknown user
        """
        if not token:
            raise NotAuthenticatedError()
        claims = self._tokens.decode(token)
        user = await self._users.get(claims.user_id)
        if user is None:
            raise NotAuthenticatedError("User no longer exists")
        return OwnerContext.for_user(user)

    async def current_user(self, ctx: Optional[OwnerContext]) -> User:
        """Account of the authenticated caller."""
        if ctx is None:
            raise NotAuthenticatedError()
        user = await self._users.get(ctx.user_id)
        if user is None:
            raise NotAuthenticatedError("User no longer exists")
        return user

    async def ensure_default_admin(self, bootstrap: AdminBootstrapSettings) -> Optional[User]:
        """
        Create the configured administrator when no accounts exist.

        Returns:
            The created admin, or None when bootstrap is disabled or
            accounts already exist
        """
        if bootstrap.password is None:
            return None
        if await self._users.count() > 0:
            return None

        admin = await self.register(
            bootstrap.username,
            bootstrap.password.get_secret_value(),
            UserRole.ADMIN,
            bootstrap.email,
        )
        logger.info("Default admin created", user_id=str(admin.id))
        return admin
