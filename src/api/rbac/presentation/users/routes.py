"""HTTP routes for user management."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from rbac.application.services import UserService
from rbac.dependencies.user import get_user_service
from rbac.domain.value_objects import UserId
from rbac.ports.exceptions import ConflictError, InternalError, NotFoundError
from rbac.presentation.models import MessageResponse, parse_id
from rbac.presentation.users.models import (
    CreateUserRequest,
    UpdateUserRequest,
    UserResponse,
)

router = APIRouter(
    prefix="/users",
    tags=["users"],
)


@router.get(
    "",
    response_model=list[UserResponse],
    summary="List users",
    description="List all users with the groups they belong to",
    responses={
        200: {"description": "Users listed successfully"},
        500: {"description": "Internal server error"},
    },
)
async def list_users(
    service: Annotated[UserService, Depends(get_user_service)],
) -> list[UserResponse]:
    """List all users."""
    try:
        users = await service.list_users()
        return [UserResponse.from_domain(user) for user in users]

    except InternalError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch users",
        )


@router.get("/{user_id}")
async def get_user(
    user_id: str,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Get a user by ID.

    Raises:
        HTTPException: 404 if the user does not exist
        HTTPException: 500 for unexpected errors
    """
    user_id_obj = parse_id(UserId, user_id, "user")

    try:
        user = await service.get_user(user_id_obj)
        return UserResponse.from_domain(user)

    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    except InternalError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch user",
        )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    request: CreateUserRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Create a new user.

    Args:
        request: User creation request
        service: User service

    Returns:
        UserResponse with the created user

    Raises:
        HTTPException: 409 if the username or email already exists
        HTTPException: 500 for unexpected errors
    """
    try:
        user = await service.create_user(
            username=request.username,
            email=request.email,
            name=request.name,
        )
        return UserResponse.from_domain(user)

    except ConflictError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    except InternalError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create user",
        )


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update user",
    description="Update the provided fields of a user; omitted fields are kept.",
    responses={
        200: {"description": "User updated successfully"},
        400: {"description": "Invalid user ID or body"},
        404: {"description": "User not found"},
        409: {"description": "Username or email already exists"},
        500: {"description": "Internal server error"},
    },
)
async def update_user(
    user_id: str,
    request: UpdateUserRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Update a user's fields."""
    user_id_obj = parse_id(UserId, user_id, "user")

    try:
        user = await service.update_user(user_id_obj, request.to_changes())
        return UserResponse.from_domain(user)

    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    except ConflictError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    except InternalError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update user",
        )


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    service: Annotated[UserService, Depends(get_user_service)],
) -> MessageResponse:
    """Delete a user and remove it from every group.

    Raises:
        HTTPException: 404 if the user does not exist
        HTTPException: 500 for unexpected errors
    """
    user_id_obj = parse_id(UserId, user_id, "user")

    try:
        await service.delete_user(user_id_obj)
        return MessageResponse(message="User deleted successfully")

    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    except InternalError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete user",
        )
