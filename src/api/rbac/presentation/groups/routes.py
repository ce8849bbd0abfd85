"""HTTP routes for group management and group membership."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from rbac.application.services import GroupService
from rbac.dependencies.group import get_group_service
from rbac.domain.value_objects import GroupId, UserId
from rbac.ports.exceptions import ConflictError, InternalError, NotFoundError
from rbac.presentation.groups.models import (
    AddGroupMemberRequest,
    CreateGroupRequest,
    GroupMembershipResponse,
    GroupResponse,
    UpdateGroupRequest,
)
from rbac.presentation.models import MessageResponse, parse_id

router = APIRouter(
    prefix="/groups",
    tags=["groups"],
)


@router.get(
    "",
    response_model=list[GroupResponse],
    summary="List groups",
    description="List all groups with their members and permissions",
    responses={
        200: {"description": "Groups listed successfully"},
        500: {"description": "Internal server error"},
    },
)
async def list_groups(
    service: Annotated[GroupService, Depends(get_group_service)],
) -> list[GroupResponse]:
    """List all groups."""
    try:
        groups = await service.list_groups()
        return [GroupResponse.from_domain(group) for group in groups]

    except InternalError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch groups",
        )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_group(
    request: CreateGroupRequest,
    service: Annotated[GroupService, Depends(get_group_service)],
) -> GroupResponse:
    """Create a new group.

    Args:
        request: Group creation request
        service: Group service

    Returns:
        GroupResponse with created group details

    Raises:
        HTTPException: 409 if group name already exists
        HTTPException: 500 for unexpected errors
    """
    try:
        group = await service.create_group(
            name=request.name,
            description=request.description,
        )
        return GroupResponse.from_domain(group)

    except ConflictError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    except InternalError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create group",
        )


@router.get("/{group_id}")
async def get_group(
    group_id: str,
    service: Annotated[GroupService, Depends(get_group_service)],
) -> GroupResponse:
    """Get group by ID with its members and permissions.

    Raises:
        HTTPException: 400 if group ID is invalid
        HTTPException: 404 if group not found
        HTTPException: 500 for unexpected errors
    """
    group_id_obj = parse_id(GroupId, group_id, "group")

    try:
        group = await service.get_group(group_id_obj)
        return GroupResponse.from_domain(group)

    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Group not found",
        )
    except InternalError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch group",
        )


@router.put(
    "/{group_id}",
    response_model=GroupResponse,
    summary="Update group",
    description="Update group name and/or description.",
    responses={
        200: {"description": "Group updated successfully"},
        400: {"description": "Invalid group ID or body"},
        404: {"description": "Group not found"},
        409: {"description": "Group name already exists"},
        500: {"description": "Internal server error"},
    },
)
async def update_group(
    group_id: str,
    request: UpdateGroupRequest,
    service: Annotated[GroupService, Depends(get_group_service)],
) -> GroupResponse:
    """Update a group's metadata."""
    group_id_obj = parse_id(GroupId, group_id, "group")

    try:
        group = await service.update_group(group_id_obj, request.to_changes())
        return GroupResponse.from_domain(group)

    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Group not found",
        )
    except ConflictError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    except InternalError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update group",
        )


@router.delete("/{group_id}")
async def delete_group(
    group_id: str,
    service: Annotated[GroupService, Depends(get_group_service)],
) -> MessageResponse:
    """Delete a group with its memberships and permissions.

    Raises:
        HTTPException: 404 if group not found
        HTTPException: 500 for unexpected errors
    """
    group_id_obj = parse_id(GroupId, group_id, "group")

    try:
        await service.delete_group(group_id_obj)
        return MessageResponse(message="Group deleted successfully")

    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Group not found",
        )
    except InternalError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete group",
        )


@router.post("/{group_id}/users", status_code=status.HTTP_201_CREATED)
async def add_group_member(
    group_id: str,
    request: AddGroupMemberRequest,
    service: Annotated[GroupService, Depends(get_group_service)],
) -> GroupMembershipResponse:
    """Assign a user to a group.

    Args:
        group_id: Group ID
        request: Body naming the user to add
        service: Group service

    Returns:
        GroupMembershipResponse for the new link

    Raises:
        HTTPException: 404 if the group or the user does not exist
        HTTPException: 409 if the user is already in the group
        HTTPException: 500 for unexpected errors
    """
    group_id_obj = parse_id(GroupId, group_id, "group")

    try:
        membership = await service.add_member(group_id_obj, request.to_domain_id())
        return GroupMembershipResponse.from_domain(membership)

    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found" if e.entity == "user" else "Group not found",
        )
    except ConflictError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    except InternalError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to assign user to group",
        )


@router.delete("/{group_id}/users/{user_id}")
async def remove_group_member(
    group_id: str,
    user_id: str,
    service: Annotated[GroupService, Depends(get_group_service)],
) -> MessageResponse:
    """Remove a user from a group.

    Raises:
        HTTPException: 404 if the user is not in the group
        HTTPException: 500 for unexpected errors
    """
    group_id_obj = parse_id(GroupId, group_id, "group")
    user_id_obj = parse_id(UserId, user_id, "user")

    try:
        await service.remove_member(group_id_obj, user_id_obj)
        return MessageResponse(message="User removed from group successfully")

    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except InternalError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to remove user from group",
        )
