"""Authentication and account administration."""

from pulih.services.auth.auth_service import AuthService
from pulih.services.auth.security import PasswordHasher, TokenClaims, TokenService
from pulih.services.auth.user_service import UserAdminService

__all__ = [
    "AuthService",
    "PasswordHasher",
    "TokenClaims",
    "TokenService",
    "UserAdminService",
]
