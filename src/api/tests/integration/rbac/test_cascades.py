"""Integration tests for delete cascades and concurrent writes.

Deleting a parent removes the rows that reference it and nothing else;
no membership or grant is ever left pointing at a missing row.
"""

import asyncio
from types import SimpleNamespace

import pytest
import pytest_asyncio
from sqlalchemy import select

from rbac.domain.value_objects import PermissionFlags
from rbac.infrastructure import membership_repository, permission_repository
from rbac.infrastructure.models import (
    GroupModel,
    MembershipModel,
    PermissionModel,
    ResourceModel,
    UserModel,
)
from rbac.ports.exceptions import ConflictError, NotFoundError

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


@pytest_asyncio.fixture
async def populated(rbac):
    """Two users in one group holding grants on two resources."""
    async with rbac.users() as users:
        alice = await users.create_user(username="alice", email="alice@example.com")
    async with rbac.users() as users:
        bob = await users.create_user(username="bob", email="bob@example.com")
    async with rbac.groups() as groups:
        editors = await groups.create_group(name="editors")
    async with rbac.resources() as resources:
        first = await resources.create_resource(key="account/change-password")
    async with rbac.resources() as resources:
        second = await resources.create_resource(key="billing/invoices")

    for user in (alice, bob):
        async with rbac.groups() as groups:
            await groups.add_member(editors.id, user.id)
    for resource in (first, second):
        async with rbac.permissions() as permissions:
            await permissions.grant(
                group_id=editors.id,
                resource_id=resource.id,
                flags=PermissionFlags(can_read=True),
            )

    return {
        "alice": alice,
        "bob": bob,
        "editors": editors,
        "first": first,
        "second": second,
    }


async def _orphans(database) -> list:
    """Memberships and grants whose parent row is missing."""
    async with database.session() as session:
        memberships = await session.execute(
            select(MembershipModel.user_id, MembershipModel.group_id)
            .outerjoin(UserModel, UserModel.id == MembershipModel.user_id)
            .outerjoin(GroupModel, GroupModel.id == MembershipModel.group_id)
            .where((UserModel.id.is_(None)) | (GroupModel.id.is_(None)))
        )
        grants = await session.execute(
            select(PermissionModel.id)
            .outerjoin(GroupModel, GroupModel.id == PermissionModel.group_id)
            .outerjoin(ResourceModel, ResourceModel.id == PermissionModel.resource_id)
            .where((GroupModel.id.is_(None)) | (ResourceModel.id.is_(None)))
        )
        return [*memberships.all(), *grants.all()]


class TestDeleteCascades:
    async def test_delete_user_removes_only_its_memberships(
        self, rbac, database, populated
    ):
        async with rbac.users() as users:
            await users.delete_user(populated["alice"].id)

        async with rbac.groups() as groups:
            group = await groups.get_group(populated["editors"].id)
        assert [m.username for m in group.members] == ["bob"]
        assert len(group.permissions) == 2
        assert await _orphans(database) == []

    async def test_delete_group_removes_memberships_and_grants(
        self, rbac, database, populated
    ):
        async with rbac.groups() as groups:
            await groups.delete_group(populated["editors"].id)

        assert await rbac.count(MembershipModel) == 0
        assert await rbac.count(PermissionModel) == 0
        assert await rbac.count(UserModel) == 2
        assert await rbac.count(ResourceModel) == 2
        async with rbac.users() as users:
            assert (await users.get_user(populated["alice"].id)).groups == []
        assert await _orphans(database) == []

    async def test_delete_resource_removes_only_its_grants(
        self, rbac, database, populated
    ):
        async with rbac.resources() as resources:
            await resources.delete_resource(populated["first"].id)

        async with rbac.permissions() as permissions:
            remaining = await permissions.list_group_permissions(
                populated["editors"].id
            )
        assert [p.resource_key for p in remaining] == ["billing/invoices"]
        assert await rbac.count(MembershipModel) == 2
        assert await _orphans(database) == []

    async def test_deleted_group_no_longer_grants_access(self, rbac, populated):
        from rbac.domain.value_objects import Action

        async with rbac.groups() as groups:
            await groups.delete_group(populated["editors"].id)

        async with rbac.evaluator() as evaluator:
            allowed = await evaluator.check(
                populated["alice"].id, "account/change-password", Action.READ
            )
        assert allowed is False

    async def test_delete_twice_is_not_found(self, rbac, populated):
        async with rbac.groups() as groups:
            await groups.delete_group(populated["editors"].id)

        with pytest.raises(NotFoundError):
            async with rbac.groups() as groups:
                await groups.delete_group(populated["editors"].id)

    async def test_foreign_keys_are_enforced(self, database):
        """The store itself refuses rows pointing at missing parents."""
        from sqlalchemy.exc import IntegrityError

        async with database.session() as session:
            session.add(MembershipModel(user_id=999, group_id=999))
            with pytest.raises(IntegrityError):
                await session.flush()


class TestConcurrentWrites:
    async def test_concurrent_membership_adds_yield_one_row(self, rbac):
        async with rbac.users() as users:
            alice = await users.create_user(username="alice", email="alice@example.com")
        async with rbac.groups() as groups:
            editors = await groups.create_group(name="editors")

        async def add():
            async with rbac.groups() as groups:
                return await groups.add_member(editors.id, alice.id)

        results = await asyncio.gather(add(), add(), return_exceptions=True)

        successes = [r for r in results if not isinstance(r, BaseException)]
        failures = [r for r in results if isinstance(r, BaseException)]
        assert len(successes) == 1
        assert len(failures) == 1
        assert isinstance(failures[0], ConflictError)
        assert await rbac.count(MembershipModel) == 1

    async def test_concurrent_grants_yield_one_row(self, rbac):
        async with rbac.groups() as groups:
            editors = await groups.create_group(name="editors")
        async with rbac.resources() as resources:
            billing = await resources.create_resource(key="billing")

        async def grant(flags):
            async with rbac.permissions() as permissions:
                return await permissions.grant(
                    group_id=editors.id, resource_id=billing.id, flags=flags
                )

        results = await asyncio.gather(
            grant(PermissionFlags(can_read=True)),
            grant(PermissionFlags(can_delete=True)),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, BaseException)]
        assert len(failures) == 1
        assert isinstance(failures[0], ConflictError)
        assert await rbac.count(PermissionModel) == 1

    async def test_concurrent_user_creates_with_same_username(self, rbac):
        async def create(email):
            async with rbac.users() as users:
                return await users.create_user(username="alice", email=email)

        results = await asyncio.gather(
            create("a1@example.com"), create("a2@example.com"), return_exceptions=True
        )

        failures = [r for r in results if isinstance(r, BaseException)]
        assert [type(f) for f in failures] == [ConflictError]
        assert await rbac.count(UserModel) == 1


def _delete_after_parent_check(module, parent_model, delete):
    """Wrap a repository's ``require_row`` to start ``delete`` mid-insert.

    Once the inserting transaction has verified ``parent_model`` exists, the
    delete is launched in its own session and given time to reach the store
    before the insert continues. Returns a holder whose ``task`` is the
    running delete.
    """
    real_require_row = module.require_row
    holder = SimpleNamespace(task=None)

    async def require_row(session, model, row_id, **kwargs):
        row = await real_require_row(session, model, row_id, **kwargs)
        if model is parent_model and holder.task is None:
            holder.task = asyncio.create_task(delete())
            await asyncio.sleep(0.1)
        return row

    return require_row, holder


class TestDeleteRacingInsert:
    """A parent deleted while a child row referencing it is being inserted.

    Either the insert commits first and the delete cascades it away, or the
    insert reports the parent as missing. It never reports a conflict and
    never leaves an orphan behind.
    """

    async def test_group_deleted_during_grant(self, rbac, database, monkeypatch):
        async with rbac.groups() as groups:
            editors = await groups.create_group(name="editors")
        async with rbac.resources() as resources:
            billing = await resources.create_resource(key="billing")

        async def delete_group():
            async with rbac.groups() as groups:
                await groups.delete_group(editors.id)

        require_row, deletion = _delete_after_parent_check(
            permission_repository, GroupModel, delete_group
        )
        monkeypatch.setattr(permission_repository, "require_row", require_row)

        try:
            async with rbac.permissions() as permissions:
                await permissions.grant(
                    group_id=editors.id,
                    resource_id=billing.id,
                    flags=PermissionFlags(can_read=True),
                )
        except NotFoundError as e:
            assert e.entity in ("group", None)
        await deletion.task

        assert await rbac.count(GroupModel) == 0
        assert await rbac.count(PermissionModel) == 0
        assert await _orphans(database) == []

    async def test_user_deleted_during_membership_add(
        self, rbac, database, monkeypatch
    ):
        async with rbac.users() as users:
            alice = await users.create_user(username="alice", email="alice@example.com")
        async with rbac.groups() as groups:
            editors = await groups.create_group(name="editors")

        async def delete_user():
            async with rbac.users() as users:
                await users.delete_user(alice.id)

        require_row, deletion = _delete_after_parent_check(
            membership_repository, UserModel, delete_user
        )
        monkeypatch.setattr(membership_repository, "require_row", require_row)

        try:
            async with rbac.groups() as groups:
                await groups.add_member(editors.id, alice.id)
        except NotFoundError as e:
            assert e.entity in ("user", None)
        await deletion.task

        assert await rbac.count(UserModel) == 0
        assert await rbac.count(MembershipModel) == 0
        assert await _orphans(database) == []
