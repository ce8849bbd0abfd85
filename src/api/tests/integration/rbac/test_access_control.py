"""Integration tests for grants, memberships, and access decisions."""

import pytest
import pytest_asyncio

from rbac.domain.changes import PermissionFlagChanges
from rbac.domain.value_objects import (
    Action,
    GroupId,
    PermissionFlags,
    ResourceId,
    UserId,
)
from rbac.infrastructure.models import MembershipModel, PermissionModel
from rbac.ports.exceptions import ConflictError, NotFoundError

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]

KEY = "account/change-password"


@pytest_asyncio.fixture
async def alice(rbac):
    async with rbac.users() as users:
        return await users.create_user(username="alice", email="alice@example.com")


@pytest_asyncio.fixture
async def editors(rbac):
    async with rbac.groups() as groups:
        return await groups.create_group(name="editors")


@pytest_asyncio.fixture
async def change_password(rbac):
    async with rbac.resources() as resources:
        return await resources.create_resource(key=KEY, name="Change password")


async def _check(rbac, user_id: UserId, action: Action, key: str = KEY) -> bool:
    async with rbac.evaluator() as evaluator:
        return await evaluator.check(user_id, key, action)


class TestGrants:
    async def test_grant_and_list(self, rbac, editors, change_password):
        async with rbac.permissions() as permissions:
            granted = await permissions.grant(
                group_id=editors.id,
                resource_id=change_password.id,
                flags=PermissionFlags(can_read=True, can_update=True),
            )

        assert granted.resource_key == KEY
        async with rbac.permissions() as permissions:
            listed = await permissions.list_group_permissions(editors.id)
        assert [p.flags for p in listed] == [
            PermissionFlags(can_read=True, can_update=True)
        ]

    async def test_duplicate_grant_conflicts_and_keeps_original(
        self, rbac, editors, change_password
    ):
        async with rbac.permissions() as permissions:
            await permissions.grant(
                group_id=editors.id,
                resource_id=change_password.id,
                flags=PermissionFlags(can_read=True),
            )

        with pytest.raises(ConflictError) as exc_info:
            async with rbac.permissions() as permissions:
                await permissions.grant(
                    group_id=editors.id,
                    resource_id=change_password.id,
                    flags=PermissionFlags(can_delete=True),
                )

        assert str(exc_info.value) == (
            "Permission for this group and resource already exists"
        )
        async with rbac.permissions() as permissions:
            listed = await permissions.list_group_permissions(editors.id)
        assert [p.flags for p in listed] == [PermissionFlags(can_read=True)]

    async def test_grant_for_missing_resource(self, rbac, editors):
        with pytest.raises(NotFoundError) as exc_info:
            async with rbac.permissions() as permissions:
                await permissions.grant(
                    group_id=editors.id,
                    resource_id=ResourceId(value=999),
                    flags=PermissionFlags(),
                )

        assert exc_info.value.entity == "resource"
        assert await rbac.count(PermissionModel) == 0

    async def test_grant_for_missing_group(self, rbac, change_password):
        with pytest.raises(NotFoundError) as exc_info:
            async with rbac.permissions() as permissions:
                await permissions.grant(
                    group_id=GroupId(value=999),
                    resource_id=change_password.id,
                    flags=PermissionFlags(),
                )

        assert exc_info.value.entity == "group"

    async def test_update_merges_flags(self, rbac, editors, change_password):
        async with rbac.permissions() as permissions:
            await permissions.grant(
                group_id=editors.id,
                resource_id=change_password.id,
                flags=PermissionFlags(can_read=True, can_update=True),
            )
        async with rbac.permissions() as permissions:
            updated = await permissions.update_grant(
                group_id=editors.id,
                resource_id=change_password.id,
                changes=PermissionFlagChanges(can_update=False, can_delete=True),
            )

        assert updated.flags == PermissionFlags(can_read=True, can_delete=True)

    async def test_revoke_then_revoke_again(self, rbac, editors, change_password):
        async with rbac.permissions() as permissions:
            await permissions.grant(
                group_id=editors.id,
                resource_id=change_password.id,
                flags=PermissionFlags(can_read=True),
            )
        async with rbac.permissions() as permissions:
            await permissions.revoke(group_id=editors.id, resource_id=change_password.id)

        with pytest.raises(NotFoundError):
            async with rbac.permissions() as permissions:
                await permissions.revoke(
                    group_id=editors.id, resource_id=change_password.id
                )

    async def test_list_for_missing_group(self, rbac):
        with pytest.raises(NotFoundError):
            async with rbac.permissions() as permissions:
                await permissions.list_group_permissions(GroupId(value=42))


class TestMemberships:
    async def test_add_member_shows_on_both_sides(self, rbac, alice, editors):
        async with rbac.groups() as groups:
            membership = await groups.add_member(editors.id, alice.id)

        assert membership.user.username == "alice"
        assert membership.group.name == "editors"
        async with rbac.users() as users:
            assert [g.name for g in (await users.get_user(alice.id)).groups] == [
                "editors"
            ]
        async with rbac.groups() as groups:
            assert [m.username for m in (await groups.get_group(editors.id)).members] == [
                "alice"
            ]

    async def test_add_twice_conflicts(self, rbac, alice, editors):
        async with rbac.groups() as groups:
            await groups.add_member(editors.id, alice.id)

        with pytest.raises(ConflictError) as exc_info:
            async with rbac.groups() as groups:
                await groups.add_member(editors.id, alice.id)

        assert str(exc_info.value) == "User is already assigned to this group"
        assert await rbac.count(MembershipModel) == 1

    async def test_add_missing_user(self, rbac, editors):
        with pytest.raises(NotFoundError) as exc_info:
            async with rbac.groups() as groups:
                await groups.add_member(editors.id, UserId(value=999))

        assert exc_info.value.entity == "user"

    async def test_add_to_missing_group(self, rbac, alice):
        with pytest.raises(NotFoundError) as exc_info:
            async with rbac.groups() as groups:
                await groups.add_member(GroupId(value=999), alice.id)

        assert exc_info.value.entity == "group"

    async def test_remove_non_member(self, rbac, alice, editors):
        with pytest.raises(NotFoundError) as exc_info:
            async with rbac.groups() as groups:
                await groups.remove_member(editors.id, alice.id)

        assert str(exc_info.value) == "User-group relationship not found"


class TestEvaluation:
    async def test_round_trip(self, rbac, alice, editors, change_password):
        """Grant via a group, check, audit, then lose access by leaving."""
        async with rbac.permissions() as permissions:
            await permissions.grant(
                group_id=editors.id,
                resource_id=change_password.id,
                flags=PermissionFlags(can_read=True, can_update=True),
            )

        assert await _check(rbac, alice.id, Action.UPDATE) is False

        async with rbac.groups() as groups:
            await groups.add_member(editors.id, alice.id)

        assert await _check(rbac, alice.id, Action.READ) is True
        assert await _check(rbac, alice.id, Action.UPDATE) is True
        assert await _check(rbac, alice.id, Action.CREATE) is False
        assert await _check(rbac, alice.id, Action.DELETE) is False

        async with rbac.aggregator() as aggregator:
            effective = await aggregator.effective_permissions(alice.id)
        assert [g.name for g in effective.groups] == ["editors"]
        assert len(effective.permissions) == 1
        entry = effective.permissions[0]
        assert entry.group_id == editors.id
        assert entry.resource_key == KEY
        assert entry.flags == PermissionFlags(can_read=True, can_update=True)

        async with rbac.groups() as groups:
            await groups.remove_member(editors.id, alice.id)

        assert await _check(rbac, alice.id, Action.UPDATE) is False

    async def test_or_across_groups(self, rbac, alice, editors, change_password):
        async with rbac.groups() as groups:
            auditors = await groups.create_group(name="auditors")
        for group, flags in [
            (editors, PermissionFlags(can_read=True)),
            (auditors, PermissionFlags(can_delete=True)),
        ]:
            async with rbac.permissions() as permissions:
                await permissions.grant(
                    group_id=group.id, resource_id=change_password.id, flags=flags
                )
            async with rbac.groups() as groups:
                await groups.add_member(group.id, alice.id)

        assert await _check(rbac, alice.id, Action.READ) is True
        assert await _check(rbac, alice.id, Action.DELETE) is True
        assert await _check(rbac, alice.id, Action.UPDATE) is False

        async with rbac.aggregator() as aggregator:
            effective = await aggregator.effective_permissions(alice.id)
        assert len(effective.permissions) == 2

    async def test_exact_key_match_only(self, rbac, alice, editors, change_password):
        async with rbac.permissions() as permissions:
            await permissions.grant(
                group_id=editors.id,
                resource_id=change_password.id,
                flags=PermissionFlags(can_read=True),
            )
        async with rbac.groups() as groups:
            await groups.add_member(editors.id, alice.id)

        assert await _check(rbac, alice.id, Action.READ, key="account") is False
        assert await _check(rbac, alice.id, Action.READ, key="account/*") is False
        assert await _check(rbac, alice.id, Action.READ, key=KEY.upper()) is False

    async def test_unknown_key_denies(self, rbac, alice):
        assert await _check(rbac, alice.id, Action.READ, key="no/such/key") is False

    async def test_unknown_user_is_not_found(self, rbac):
        with pytest.raises(NotFoundError):
            await _check(rbac, UserId(value=999), Action.READ)

        with pytest.raises(NotFoundError):
            async with rbac.aggregator() as aggregator:
                await aggregator.effective_permissions(UserId(value=999))

    async def test_group_without_grants_still_listed(self, rbac, alice, editors):
        async with rbac.groups() as groups:
            await groups.add_member(editors.id, alice.id)

        async with rbac.aggregator() as aggregator:
            effective = await aggregator.effective_permissions(alice.id)

        assert [g.name for g in effective.groups] == ["editors"]
        assert effective.permissions == []
