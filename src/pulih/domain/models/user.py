"""
User Domain Model

Represents an account in the PULIH system. Password hashes live
on the entity but are never serialized.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from pulih.domain.enums.user_role import UserRole


@dataclass(frozen=True)
class User:
    """
    Core user entity.

    Attributes:
        id: Unique user identifier
        username: Unique login name
        email: Unique email address
        role: Account role
        password_hash: Hashed password (never serialized)
        created_at: Account creation timestamp
    """

    username: str
    email: str
    password_hash: str = field(repr=False)
    role: UserRole = UserRole.USER
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """Validate user data after initialization."""
        if not self.username or not self.username.strip():
            raise ValueError("Username must not be empty")
        if not self._is_valid_email(self.email):
            raise ValueError(f"Invalid email format: {self.email}")
        object.__setattr__(self, "role", UserRole(self.role))

    @staticmethod
    def _is_valid_email(email: str) -> bool:
        """Basic email format validation."""
        return "@" in email and "." in email.split("@")[-1]

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def updated(
        self,
        *,
        username: Optional[str] = None,
        email: Optional[str] = None,
        password_hash: Optional[str] = None,
    ) -> "User":
        """Return a copy with the given fields changed."""
        changes = {
            key: value
            for key, value in (
                ("username", username),
                ("email", email),
                ("password_hash", password_hash),
            )
            if value is not None
        }
        return replace(self, **changes)

    def to_dict(self) -> dict:
        """Serialize user to dictionary (no password hash)."""
        return {
            "id": str(self.id),
            "username": self.username,
            "email": self.email,
            "role": self.role.value,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class OwnerContext:
    """
    Authenticated identity for a single call.

    Passed explicitly to every storage-accessing service operation
    instead of being read from process-wide session state.
    """

    user_id: UUID
    username: str
    role: UserRole = UserRole.USER

    @classmethod
    def for_user(cls, user: User) -> "OwnerContext":
        return cls(user_id=user.id, username=user.username, role=user.role)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
