"""User role enumeration."""

from enum import StrEnum


class UserRole(StrEnum):
    """Account roles. Admins may manage other accounts."""

    ADMIN = "admin"
    USER = "user"
