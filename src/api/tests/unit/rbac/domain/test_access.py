"""Unit tests for access decisions and the effective permissions view."""

from rbac.domain.access import EffectivePermission, EffectivePermissions, is_allowed
from rbac.domain.aggregates import Permission
from rbac.domain.value_objects import (
    Action,
    GroupId,
    GroupRef,
    PermissionFlags,
    ResourceId,
    UserId,
)


def _grant(group_id: int, key: str = "account/change-password", **flags) -> Permission:
    return Permission(
        id=group_id,
        group_id=GroupId(value=group_id),
        resource_id=ResourceId(value=1),
        resource_key=key,
        flags=PermissionFlags(**flags),
    )


class TestIsAllowed:
    """Tests for the OR-across-grants decision."""

    def test_no_grants_denies(self):
        assert is_allowed([], Action.READ) is False

    def test_single_grant_allows_its_flag(self):
        assert is_allowed([_grant(1, can_update=True)], Action.UPDATE) is True

    def test_single_grant_denies_other_flags(self):
        assert is_allowed([_grant(1, can_update=True)], Action.DELETE) is False

    def test_any_group_granting_is_sufficient(self):
        """A grant without the flag never overrides one that has it."""
        grants = [_grant(1, can_read=True), _grant(2, can_read=True, can_delete=True)]

        assert is_allowed(grants, Action.DELETE) is True
        assert is_allowed(grants, Action.CREATE) is False

    def test_all_false_grant_allows_nothing(self):
        grants = [_grant(1)]
        assert not any(is_allowed(grants, action) for action in Action)

    def test_accepts_generators(self):
        assert is_allowed((g for g in [_grant(1, can_create=True)]), Action.CREATE)


class TestEffectivePermissions:
    """Tests for building the provenance-tagged audit view."""

    def test_empty_when_user_has_no_groups(self):
        view = EffectivePermissions.from_group_grants(UserId(value=1), [], [])

        assert view.user_id == UserId(value=1)
        assert view.groups == []
        assert view.permissions == []

    def test_one_entry_per_grant_tagged_with_group(self):
        groups = [
            GroupRef(id=GroupId(value=1), name="editors"),
            GroupRef(id=GroupId(value=2), name="auditors"),
        ]
        grants = [
            _grant(1, can_read=True, can_update=True),
            _grant(2, can_read=True),
        ]

        view = EffectivePermissions.from_group_grants(UserId(value=5), groups, grants)

        assert view.groups == groups
        assert view.permissions == [
            EffectivePermission(
                group_id=GroupId(value=1),
                resource_key="account/change-password",
                flags=PermissionFlags(can_read=True, can_update=True),
            ),
            EffectivePermission(
                group_id=GroupId(value=2),
                resource_key="account/change-password",
                flags=PermissionFlags(can_read=True),
            ),
        ]

    def test_does_not_merge_grants_on_same_resource(self):
        """Two groups granting on one key produce two entries."""
        grants = [_grant(1, can_read=True), _grant(2, can_delete=True)]

        view = EffectivePermissions.from_group_grants(UserId(value=5), [], grants)

        assert len(view.permissions) == 2
        assert {p.group_id.value for p in view.permissions} == {1, 2}

    def test_user_with_groups_but_no_grants(self):
        groups = [GroupRef(id=GroupId(value=3), name="empty")]

        view = EffectivePermissions.from_group_grants(UserId(value=5), groups, [])

        assert view.groups == groups
        assert view.permissions == []
