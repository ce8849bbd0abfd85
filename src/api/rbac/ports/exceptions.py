"""Domain exceptions for the RBAC bounded context.

A closed taxonomy: every failure the store, the evaluator, or the
aggregator reports is one of the four subclasses of ``RBACError`` below.
The presentation layer maps each one to exactly one HTTP status.
"""

import re


class RBACError(Exception):
    """Base class for all errors surfaced by the RBAC core."""

    pass


class InvalidInputError(RBACError):
    """Raised when input is malformed or missing.

    Detected at the boundary before any core logic runs (maps to 400).
    """

    pass


class NotFoundError(RBACError):
    """Raised when a referenced id, key, or pair does not exist (maps to 404).

    Attributes:
        entity: Kind of thing that was looked up ("user", "group", ...)
    """

    def __init__(self, message: str, entity: str | None = None):
        super().__init__(message)
        self.entity = entity


class ConflictError(RBACError):
    """Raised when an operation would violate a uniqueness invariant (maps to 409).

    Covers duplicate usernames, emails, group names, resource keys,
    (group, resource) grants and (user, group) memberships.
    """

    pass


class InternalError(RBACError):
    """Raised on an unexpected store failure (maps to 500).

    The original exception is chained as ``__cause__``.
    """

    pass


_MISSING_PARENT_MESSAGE = "Referenced record not found"

# Foreign keys are named fk_<table>_<column>_<referred table>
_REFERRED_TABLE = re.compile(r"fk_\w+?_(users|groups|resources)\b")
_ENTITY_BY_TABLE = {"users": "user", "groups": "group", "resources": "resource"}


def constraint_violation(detail: str, conflict_message: str) -> RBACError:
    """Classify a store constraint violation.

    A foreign key violation means a referenced row disappeared and is
    reported as NotFoundError; PostgreSQL names the constraint, so the
    missing entity is recovered from it. Anything else is a uniqueness
    violation.

    Args:
        detail: The driver's error text
        conflict_message: Message for the ConflictError case
    """
    if "foreign key" not in detail.lower():
        return ConflictError(conflict_message)

    match = _REFERRED_TABLE.search(detail)
    if match is None:
        return NotFoundError(_MISSING_PARENT_MESSAGE)
    entity = _ENTITY_BY_TABLE[match.group(1)]
    return NotFoundError(f"{entity.capitalize()} not found", entity=entity)
