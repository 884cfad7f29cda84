"""Error handling module for the CRM API."""

from .problem_details import (
    ProblemDetail,
    ProblemDetailException,
    NotFoundError,
    ConflictError,
    PayloadTooLargeError,
    InternalServerError,
    ServiceUnavailableError,
    create_problem_response
)
from .query_errors import (
    QueryError,
    InvalidTargetError,
    InvalidIdentifierError,
    StoreError,
    ConstraintViolationError
)
from .handlers import register_exception_handlers

__all__ = [
    "ProblemDetail",
    "ProblemDetailException",
    "NotFoundError",
    "ConflictError",
    "PayloadTooLargeError",
    "InternalServerError",
    "ServiceUnavailableError",
    "create_problem_response",
    "QueryError",
    "InvalidTargetError",
    "InvalidIdentifierError",
    "StoreError",
    "ConstraintViolationError",
    "register_exception_handlers"
]
