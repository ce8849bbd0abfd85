"""HTTP routes for resource management."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from rbac.application.services import ResourceService
from rbac.dependencies.resource import get_resource_service
from rbac.domain.value_objects import ResourceId
from rbac.ports.exceptions import ConflictError, InternalError, NotFoundError
from rbac.presentation.models import MessageResponse, parse_id
from rbac.presentation.resources.models import (
    CreateResourceRequest,
    ResourceResponse,
    UpdateResourceRequest,
)

router = APIRouter(
    prefix="/resources",
    tags=["resources"],
)


@router.get("", response_model=list[ResourceResponse], summary="List resources")
async def list_resources(
    service: Annotated[ResourceService, Depends(get_resource_service)],
) -> list[ResourceResponse]:
    """List all resources with their grants."""
    try:
        resources = await service.list_resources()
        return [ResourceResponse.from_domain(r) for r in resources]

    except InternalError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch resources",
        )


@router.get("/{resource_id}")
async def get_resource(
    resource_id: str,
    service: Annotated[ResourceService, Depends(get_resource_service)],
) -> ResourceResponse:
    resource_id_obj = parse_id(ResourceId, resource_id, "resource")

    try:
        resource = await service.get_resource(resource_id_obj)
        return ResourceResponse.from_domain(resource)

    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Resource not found",
        )
    except InternalError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch resource",
        )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_resource(
    request: CreateResourceRequest,
    service: Annotated[ResourceService, Depends(get_resource_service)],
) -> ResourceResponse:
    """Create a new resource.

    Raises:
        HTTPException: 409 if the key already exists
        HTTPException: 500 for unexpected errors
    """
    try:
        resource = await service.create_resource(
            key=request.key,
            name=request.name,
            description=request.description,
        )
        return ResourceResponse.from_domain(resource)

    except ConflictError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    except InternalError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create resource",
        )


@router.put("/{resource_id}", response_model=ResourceResponse, summary="Update resource")
async def update_resource(
    resource_id: str,
    request: UpdateResourceRequest,
    service: Annotated[ResourceService, Depends(get_resource_service)],
) -> ResourceResponse:
    resource_id_obj = parse_id(ResourceId, resource_id, "resource")

    try:
        resource = await service.update_resource(
            resource_id_obj, request.to_changes()
        )
        return ResourceResponse.from_domain(resource)

    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Resource not found",
        )
    except ConflictError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    except InternalError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update resource",
        )


@router.delete("/{resource_id}")
async def delete_resource(
    resource_id: str,
    service: Annotated[ResourceService, Depends(get_resource_service)],
) -> MessageResponse:
    """Delete a resource and every grant on it."""
    resource_id_obj = parse_id(ResourceId, resource_id, "resource")

    try:
        await service.delete_resource(resource_id_obj)
        return MessageResponse(message="Resource deleted successfully")

    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Resource not found",
        )
    except InternalError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete resource",
        )
