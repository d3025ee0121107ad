"""
Password Hashing and Access Tokens

- Passwords hashed with bcrypt through passlib
- Stateless HS256 JWT access tokens through python-jose

SECURITY: Raw passwords and tokens are never logged.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt
from passlib.context import CryptContext

from pulih.config.settings import JWTSettings
from pulih.domain.enums.user_role import UserRole
from pulih.domain.exceptions import NotAuthenticatedError
from pulih.domain.models.user import User


class PasswordHasher:
    """Bcrypt password hashing."""

    def __init__(self) -> None:
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto")

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a password; malformed hashes count as a mismatch."""
        try:
            return self._context.verify(password, password_hash)
        except (ValueError, TypeError):
            return False


@dataclass(frozen=True)
class TokenClaims:
    """Decoded access token."""

    user_id: UUID
    role: UserRole
    expires_at: datetime


class TokenService:
    """
    Issues and verifies access tokens.

    Claims: ``sub`` (user ID), ``role``, ``iat`` and ``exp``.
    """

    def __init__(self, settings: JWTSettings) -> None:
        self._secret = settings.secret_key.get_secret_value()
        self._algorithm = settings.algorithm
        self._ttl = timedelta(minutes=settings.access_token_expire_minutes)

    @property
    def expires_in_seconds(self) -> int:
        return int(self._ttl.total_seconds())

    def create_access_token(self, user: User, now: Optional[datetime] = None) -> str:
        """
        Issue an access token for ``user``.

        Args:
            user: Authenticated user
            now: Issue time (defaults to the current time)
        """
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": str(user.id),
            "role": user.role.value,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._ttl).timestamp()),
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> TokenClaims:
        """
        Verify a token and return its claims.

        Raises:
            NotAuthenticatedError: Token invalid, expired or malformed
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
            return TokenClaims(
                user_id=UUID(payload["sub"]),
                role=UserRole(payload.get("role", UserRole.USER)),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (JWTError, KeyError, ValueError) as e:
            raise NotAuthenticatedError("Invalid or expired token") from e
