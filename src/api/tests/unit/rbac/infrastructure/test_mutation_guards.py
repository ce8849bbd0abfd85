"""Unit tests for the shared mutation guards."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from rbac.infrastructure.models import GroupModel
from rbac.infrastructure.mutation_guards import require_row, translate_integrity_errors
from rbac.ports.exceptions import ConflictError, NotFoundError


def _session_returning(row):
    result = MagicMock()
    result.scalar_one_or_none.return_value = row
    session = AsyncMock()
    session.execute.return_value = result
    return session


class TestRequireRow:
    @pytest.mark.asyncio
    async def test_returns_row(self):
        row = GroupModel(id=3, name="editors")
        session = _session_returning(row)

        assert await require_row(session, GroupModel, 3, entity="group") is row

    @pytest.mark.asyncio
    async def test_missing_row_raises_not_found(self):
        session = _session_returning(None)

        with pytest.raises(NotFoundError) as exc_info:
            await require_row(session, GroupModel, 3, entity="group")

        assert str(exc_info.value) == "Group 3 not found"
        assert exc_info.value.entity == "group"

    @pytest.mark.asyncio
    async def test_shared_lock_by_default(self):
        session = _session_returning(GroupModel(id=3, name="editors"))

        await require_row(session, GroupModel, 3, entity="group")

        stmt = session.execute.call_args[0][0]
        assert stmt._for_update_arg is not None
        assert stmt._for_update_arg.read is True

    @pytest.mark.asyncio
    async def test_exclusive_lock(self):
        session = _session_returning(GroupModel(id=3, name="editors"))

        await require_row(session, GroupModel, 3, entity="group", exclusive=True)

        stmt = session.execute.call_args[0][0]
        assert stmt._for_update_arg.read is False


class TestTranslateIntegrityErrors:
    def test_integrity_error_becomes_conflict(self):
        with pytest.raises(ConflictError) as exc_info:
            with translate_integrity_errors("Group with this name already exists"):
                raise IntegrityError("INSERT", {}, Exception("duplicate key"))

        assert str(exc_info.value) == "Group with this name already exists"
        assert isinstance(exc_info.value.__cause__, IntegrityError)

    def test_sqlite_foreign_key_failure_is_not_found(self):
        """A parent deleted under a pending insert is reported as missing."""
        with pytest.raises(NotFoundError) as exc_info:
            with translate_integrity_errors("User is already assigned to this group"):
                raise IntegrityError(
                    "INSERT", {}, Exception("FOREIGN KEY constraint failed")
                )

        assert exc_info.value.entity is None
        assert isinstance(exc_info.value.__cause__, IntegrityError)

    def test_postgres_foreign_key_names_the_missing_parent(self):
        detail = (
            'insert or update on table "permissions" violates foreign key '
            'constraint "fk_permissions_resource_id_resources"'
        )

        with pytest.raises(NotFoundError) as exc_info:
            with translate_integrity_errors("Permission already exists"):
                raise IntegrityError("INSERT", {}, Exception(detail))

        assert exc_info.value.entity == "resource"
        assert str(exc_info.value) == "Resource not found"

    def test_other_errors_pass_through(self):
        with pytest.raises(ValueError):
            with translate_integrity_errors("unused"):
                raise ValueError("boom")

    def test_no_error(self):
        with translate_integrity_errors("unused"):
            pass
