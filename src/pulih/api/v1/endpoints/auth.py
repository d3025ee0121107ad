"""
Auth Endpoints

Signup, login and the current account.
"""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from pulih.api.dependencies import get_auth_service, get_current_owner
from pulih.domain.models.user import OwnerContext, User
from pulih.services.auth import AuthService

router = APIRouter()


# Request/Response Models

class SignupRequest(BaseModel):
    """New account details."""

    username: str = Field(..., min_length=1, max_length=64)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class LoginRequest(BaseModel):
    """Login credentials."""

    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1, max_length=128)


class UserResponse(BaseModel):
    """Public account information."""

    id: UUID
    username: str
    email: str
    role: str
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            role=user.role.value,
            created_at=user.created_at,
        )


class TokenResponse(BaseModel):
    """Issued access token."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse


@router.post(
    "/signup",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
)
async def signup(
    request: SignupRequest,
    auth: AuthService = Depends(get_auth_service),
) -> UserResponse:
    user = await auth.signup(request.username, request.email, request.password)
    return UserResponse.from_user(user)


@router.post("/login", response_model=TokenResponse, summary="Log in")
async def login(
    request: LoginRequest,
    auth: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Exchange username and password for a bearer token."""
    user, token = await auth.login(request.username, request.password)
    return TokenResponse(
        access_token=token,
        expires_in=auth.tokens.expires_in_seconds,
        user=UserResponse.from_user(user),
    )


@router.get("/me", response_model=UserResponse, summary="Current account")
async def me(
    owner: OwnerContext = Depends(get_current_owner),
    auth: AuthService = Depends(get_auth_service),
) -> UserResponse:
    return UserResponse.from_user(await auth.current_user(owner))
