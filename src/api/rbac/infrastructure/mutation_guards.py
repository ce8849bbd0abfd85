"""Order-of-checks discipline shared by every RBAC write path.

Every mutation that references another row follows the same sequence
inside one transaction:

1. Lock the referenced parent rows (``require_row``). Parents are locked
   FOR SHARE when a child row is about to be inserted and FOR UPDATE when
   the row itself is about to change or be deleted. A concurrent delete of
   a parent therefore either waits for the insert to commit or makes the
   insert see the parent as missing.
2. Write, flushing under ``translate_integrity_errors`` so a uniqueness race
   lost against a concurrent transaction surfaces as ``ConflictError`` and a
   vanished parent as ``NotFoundError``.

SQLite has no row locks; there every transaction starts with BEGIN IMMEDIATE
(see ``infrastructure.database.engines``) and holds the database write lock
from its first statement until commit, which serializes the same sequences.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rbac.ports.exceptions import NotFoundError, constraint_violation

ModelT = TypeVar("ModelT")


async def require_row(
    session: AsyncSession,
    model: type[ModelT],
    row_id: int,
    *,
    entity: str,
    exclusive: bool = False,
) -> ModelT:
    """Load a row by primary key under a row lock, or raise NotFoundError.

    Args:
        session: Session with an open transaction
        model: ORM model class with an integer ``id`` primary key
        row_id: Primary key value
        entity: Human-readable entity name used in the error message
        exclusive: Lock FOR UPDATE instead of FOR SHARE

    Returns:
        The locked ORM instance

    Raises:
        NotFoundError: If no row has the given id
    """
    stmt = (
        select(model)
        .where(model.id == row_id)  # type: ignore[attr-defined]
        .with_for_update(read=not exclusive)
        .execution_options(populate_existing=True)
    )
    result = await session.execute(stmt)
    row = result.scalar_one_or_none()
    if row is None:
        raise NotFoundError(f"{entity.capitalize()} {row_id} not found", entity=entity)
    return row


@contextmanager
def translate_integrity_errors(message: str) -> Iterator[None]:
    """Convert an IntegrityError raised inside the block into a domain error.

    Args:
        message: Message for the ConflictError

    Raises:
        ConflictError: If the wrapped statements violate a unique constraint
        NotFoundError: If they violate a foreign key, i.e. a referenced row
            was deleted by a concurrent transaction
    """
    try:
        yield
    except IntegrityError as e:
        raise constraint_violation(str(e.orig), message) from e
