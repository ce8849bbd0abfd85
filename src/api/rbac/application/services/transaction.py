"""Transaction boundary shared by the RBAC application services."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rbac.ports.exceptions import InternalError, constraint_violation


@asynccontextmanager
async def unit_of_work(session: AsyncSession) -> AsyncIterator[None]:
    """Run the block in one transaction, committing on success.

    Domain errors raised inside the block roll the transaction back and
    propagate unchanged. Store errors that escape the repositories are
    converted: a constraint violation at commit becomes ConflictError, or
    NotFoundError for a foreign key; anything else becomes InternalError.

    Raises:
        ConflictError: If the commit violates a unique constraint
        NotFoundError: If the commit violates a foreign key
        InternalError: On any other SQLAlchemy failure
    """
    try:
        async with session.begin():
            yield
    except IntegrityError as e:
        raise constraint_violation(
            str(e.orig), "Operation conflicts with existing data"
        ) from e
    except SQLAlchemyError as e:
        raise InternalError("Database operation failed") from e
