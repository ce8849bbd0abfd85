"""HTTP routes for permission grants and access queries."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from rbac.application.services import (
    PermissionAggregator,
    PermissionEvaluator,
    PermissionService,
)
from rbac.dependencies.permission import (
    get_permission_aggregator,
    get_permission_evaluator,
    get_permission_service,
)
from rbac.domain.value_objects import Action, GroupId, ResourceId, UserId
from rbac.ports.exceptions import ConflictError, InternalError, NotFoundError
from rbac.presentation.models import MessageResponse, PermissionResponse, parse_id
from rbac.presentation.permissions.models import (
    CreatePermissionRequest,
    PermissionCheckResponse,
    UpdatePermissionRequest,
    UserPermissionsResponse,
)

router = APIRouter(
    prefix="/permissions",
    tags=["permissions"],
)


@router.get(
    "/check",
    response_model=PermissionCheckResponse,
    summary="Check permission",
    description=(
        "Check whether a user may perform an action on a resource. "
        "Any of the user's groups granting the action is sufficient."
    ),
    responses={
        200: {"description": "Decision computed"},
        400: {"description": "Invalid user ID, resource or action"},
        404: {"description": "User not found"},
        500: {"description": "Internal server error"},
    },
)
async def check_permission(
    evaluator: Annotated[PermissionEvaluator, Depends(get_permission_evaluator)],
    user_id: Annotated[str, Query(description="User ID")],
    resource: Annotated[str, Query(min_length=1, description="Resource key")],
    action: Annotated[Action, Query(description="Action to check")],
) -> PermissionCheckResponse:
    """Answer a single access check."""
    user_id_obj = parse_id(UserId, user_id, "user")

    try:
        allowed = await evaluator.check(user_id_obj, resource, action)
        return PermissionCheckResponse(allowed=allowed)

    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    except InternalError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to check permission",
        )


@router.get("/users/{user_id}")
async def get_user_permissions(
    user_id: str,
    aggregator: Annotated[PermissionAggregator, Depends(get_permission_aggregator)],
) -> UserPermissionsResponse:
    """List a user's groups and every grant those groups hold.

    Raises:
        HTTPException: 404 if the user does not exist
        HTTPException: 500 for unexpected errors
    """
    user_id_obj = parse_id(UserId, user_id, "user")

    try:
        effective = await aggregator.effective_permissions(user_id_obj)
        return UserPermissionsResponse.from_domain(effective)

    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    except InternalError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch user permissions",
        )


@router.get("/groups/{group_id}")
async def list_group_permissions(
    group_id: str,
    service: Annotated[PermissionService, Depends(get_permission_service)],
) -> list[PermissionResponse]:
    """List the grants held by a group."""
    group_id_obj = parse_id(GroupId, group_id, "group")

    try:
        permissions = await service.list_group_permissions(group_id_obj)
        return [PermissionResponse.from_domain(p) for p in permissions]

    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Group not found",
        )
    except InternalError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch group permissions",
        )


@router.post("/groups/{group_id}", status_code=status.HTTP_201_CREATED)
async def create_permission(
    group_id: str,
    request: CreatePermissionRequest,
    service: Annotated[PermissionService, Depends(get_permission_service)],
) -> PermissionResponse:
    """Grant a group permissions on a resource.

    Raises:
        HTTPException: 404 if the group or the resource does not exist
        HTTPException: 409 if the group already has a grant on the resource
        HTTPException: 500 for unexpected errors
    """
    group_id_obj = parse_id(GroupId, group_id, "group")

    try:
        permission = await service.grant(
            group_id=group_id_obj,
            resource_id=request.to_domain_id(),
            flags=request.to_flags(),
        )
        return PermissionResponse.from_domain(permission)

    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Resource not found" if e.entity == "resource" else "Group not found",
        )
    except ConflictError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    except InternalError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create permission",
        )


@router.put("/groups/{group_id}/resources/{resource_id}")
async def update_permission(
    group_id: str,
    resource_id: str,
    request: UpdatePermissionRequest,
    service: Annotated[PermissionService, Depends(get_permission_service)],
) -> PermissionResponse:
    """Change the flags of an existing grant."""
    group_id_obj = parse_id(GroupId, group_id, "group")
    resource_id_obj = parse_id(ResourceId, resource_id, "resource")

    try:
        permission = await service.update_grant(
            group_id=group_id_obj,
            resource_id=resource_id_obj,
            changes=request.to_changes(),
        )
        return PermissionResponse.from_domain(permission)

    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Permission not found",
        )
    except InternalError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update permission",
        )


@router.delete("/groups/{group_id}/resources/{resource_id}")
async def delete_permission(
    group_id: str,
    resource_id: str,
    service: Annotated[PermissionService, Depends(get_permission_service)],
) -> MessageResponse:
    """Revoke a group's grant on a resource."""
    group_id_obj = parse_id(GroupId, group_id, "group")
    resource_id_obj = parse_id(ResourceId, resource_id, "resource")

    try:
        await service.revoke(group_id=group_id_obj, resource_id=resource_id_obj)
        return MessageResponse(message="Permission deleted successfully")

    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Permission not found",
        )
    except InternalError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete permission",
        )
