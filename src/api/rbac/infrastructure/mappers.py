"""Translation from ORM rows to domain aggregates.

Relationships on the ORM models are ``lazy="raise"``; callers must load
every relationship a mapper touches (see the ``*_LOAD`` option tuples).
"""

from __future__ import annotations

from sqlalchemy.orm import joinedload, selectinload

from rbac.domain.aggregates import Group, Permission, Resource, User
from rbac.domain.value_objects import (
    GroupId,
    GroupRef,
    PermissionFlags,
    ResourceId,
    UserId,
    UserRef,
)
from rbac.infrastructure.models import (
    GroupModel,
    PermissionModel,
    ResourceModel,
    UserModel,
)

USER_LOAD = (selectinload(UserModel.groups),)
GROUP_LOAD = (
    selectinload(GroupModel.members),
    selectinload(GroupModel.permissions).joinedload(PermissionModel.resource),
)
RESOURCE_LOAD = (
    selectinload(ResourceModel.permissions).joinedload(PermissionModel.resource),
)
PERMISSION_LOAD = (joinedload(PermissionModel.resource),)


def to_permission(model: PermissionModel) -> Permission:
    """Map a permissions row (with its resource loaded) to a Permission."""
    return Permission(
        id=model.id,
        group_id=GroupId(value=model.group_id),
        resource_id=ResourceId(value=model.resource_id),
        resource_key=model.resource.key,
        flags=PermissionFlags(
            can_read=model.can_read,
            can_create=model.can_create,
            can_update=model.can_update,
            can_delete=model.can_delete,
        ),
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def to_group_ref(model: GroupModel) -> GroupRef:
    return GroupRef(id=GroupId(value=model.id), name=model.name)


def to_user_ref(model: UserModel) -> UserRef:
    return UserRef(id=UserId(value=model.id), username=model.username)


def to_user(model: UserModel) -> User:
    """Map a users row (with groups loaded) to a User."""
    return User(
        id=UserId(value=model.id),
        username=model.username,
        email=model.email,
        name=model.name,
        groups=[to_group_ref(g) for g in model.groups],
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def to_group(model: GroupModel) -> Group:
    """Map a groups row (with members and permissions loaded) to a Group."""
    return Group(
        id=GroupId(value=model.id),
        name=model.name,
        description=model.description,
        members=[to_user_ref(u) for u in model.members],
        permissions=[to_permission(p) for p in model.permissions],
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def to_resource(model: ResourceModel) -> Resource:
    """Map a resources row (with permissions loaded) to a Resource."""
    return Resource(
        id=ResourceId(value=model.id),
        key=model.key,
        name=model.name,
        description=model.description,
        permissions=[to_permission(p) for p in model.permissions],
        created_at=model.created_at,
        updated_at=model.updated_at,
    )
