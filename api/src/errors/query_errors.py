"""Errors raised while building or running list queries."""


class QueryError(Exception):
    """Base class for list query failures.

    Each subclass carries a ``kind`` that is reported in the failure
    envelope returned by the paginated query builder.
    """

    kind = "QueryError"


class InvalidTargetError(QueryError):
    """The requested table or view is not in the allow-list."""

    kind = "InvalidTarget"


class InvalidIdentifierError(QueryError):
    """A sort column or filter key is not a plain identifier."""

    kind = "InvalidIdentifier"


class StoreError(QueryError):
    """The storage engine failed to execute a statement."""

    kind = "StoreError"


class ConstraintViolationError(StoreError):
    """A write was rejected by a foreign key, unique or check constraint."""
