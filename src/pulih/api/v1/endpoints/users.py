"""
User Administration Endpoints

Admin-only account management.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field

from pulih.api.dependencies import get_current_owner, get_user_admin_service
from pulih.api.v1.endpoints.auth import UserResponse
from pulih.domain.enums.user_role import UserRole
from pulih.domain.models.user import OwnerContext
from pulih.services.auth import UserAdminService

router = APIRouter()


class CreateUserRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1, max_length=128)
    role: UserRole = UserRole.USER
    email: Optional[str] = Field(default=None, max_length=255)


class UpdateUserRequest(BaseModel):
    """Fields to change; omitted fields stay as they are."""

    username: Optional[str] = Field(default=None, max_length=64)
    email: Optional[str] = Field(default=None, max_length=255)
    password: Optional[str] = Field(default=None, max_length=128)


@router.get("", response_model=list[UserResponse], summary="List accounts")
async def list_users(
    owner: OwnerContext = Depends(get_current_owner),
    admin: UserAdminService = Depends(get_user_admin_service),
) -> list[UserResponse]:
    return [UserResponse.from_user(u) for u in await admin.list_users(owner)]


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
)
async def create_user(
    request: CreateUserRequest,
    owner: OwnerContext = Depends(get_current_owner),
    admin: UserAdminService = Depends(get_user_admin_service),
) -> UserResponse:
    user = await admin.add_user(
        owner,
        request.username,
        request.password,
        request.role,
        request.email,
    )
    return UserResponse.from_user(user)


@router.patch("/{user_id}", response_model=UserResponse, summary="Update an account")
async def update_user(
    user_id: UUID,
    request: UpdateUserRequest,
    owner: OwnerContext = Depends(get_current_owner),
    admin: UserAdminService = Depends(get_user_admin_service),
) -> UserResponse:
    user = await admin.update_user(
        owner,
        user_id,
        username=request.username,
        email=request.email,
        password=request.password,
    )
    return UserResponse.from_user(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an account")
async def delete_user(
    user_id: UUID,
    owner: OwnerContext = Depends(get_current_owner),
    admin: UserAdminService = Depends(get_user_admin_service),
) -> Response:
    """Delete the account and all of its journal entries."""
    await admin.delete_user(owner, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
