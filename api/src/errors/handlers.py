"""Exception handlers for the CRM API."""

import logging
from typing import Union, List, Dict, Any
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from pydantic import ValidationError

from .problem_details import (
    ProblemDetailException,
    create_problem_response
)
from .query_errors import StoreError

logger = logging.getLogger(__name__)


# Titles for status codes raised through HTTPException
STATUS_TITLES = {
    400: "Bad Request",
    404: "Not Found",
    405: "Method Not Allowed",
    409: "Conflict",
    413: "Payload Too Large",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
    503: "Service Unavailable"
}


def _summarize_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Reduce pydantic error dicts to JSON-safe loc/msg/type triples."""
    return [
        {
            "loc": [str(x) for x in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", "")
        }
        for error in errors
    ]


def _format_errors(errors: List[Dict[str, Any]]) -> str:
    error_messages = []
    for error in errors:
        loc = " -> ".join(str(x) for x in error["loc"])
        error_messages.append(f"{loc}: {error['msg']}")
    return "; ".join(error_messages)


async def problem_detail_exception_handler(
    request: Request,
    exc: ProblemDetailException
) -> JSONResponse:
    """Handle ProblemDetailException instances."""
    logger.info(
        f"Problem detail exception: {exc.status} - {exc.title}",
        extra={
            "status_code": exc.status,
            "path": str(request.url.path),
            "method": request.method,
            "detail": exc.detail
        }
    )
    return exc.to_response(request)


async def http_exception_handler(
    request: Request,
    exc: Union[HTTPException, StarletteHTTPException]
) -> JSONResponse:
    """Handle FastAPI HTTPException and Starlette HTTPException."""
    logger.info(
        f"HTTP exception: {exc.status_code} - {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": str(request.url.path),
            "method": request.method
        }
    )

    title = STATUS_TITLES.get(exc.status_code, "HTTP Error")
    detail = str(exc.detail) if exc.detail else None

    response = create_problem_response(
        status=exc.status_code,
        title=title,
        detail=detail,
        request=request
    )

    if getattr(exc, "headers", None):
        for key, value in exc.headers.items():
            response.headers[key] = value

    return response


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle request body and parameter validation errors."""
    errors = _summarize_errors(exc.errors())
    logger.info(
        f"Validation error: {len(errors)} errors",
        extra={
            "path": str(request.url.path),
            "method": request.method,
            "errors": errors
        }
    )

    return create_problem_response(
        status=422,
        title="Validation Error",
        detail="Validation failed: " + _format_errors(errors),
        request=request,
        validation_errors=errors
    )


async def pydantic_validation_exception_handler(
    request: Request,
    exc: ValidationError
) -> JSONResponse:
    """Handle direct Pydantic validation errors."""
    errors = _summarize_errors(exc.errors())
    logger.info(
        f"Pydantic validation error: {len(errors)} errors",
        extra={
            "path": str(request.url.path),
            "method": request.method,
            "errors": errors
        }
    )

    return create_problem_response(
        status=400,
        title="Validation Error",
        detail="Data validation failed: " + _format_errors(errors),
        request=request,
        validation_errors=errors
    )


async def store_exception_handler(
    request: Request,
    exc: StoreError
) -> JSONResponse:
    """Handle storage failures that escaped a write path."""
    logger.error(
        f"Store error: {exc}",
        extra={
            "path": str(request.url.path),
            "method": request.method
        }
    )

    return create_problem_response(
        status=500,
        title="Internal Server Error",
        detail="Database error",
        request=request
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(
        f"Unhandled exception: {type(exc).__name__} - {str(exc)}",
        extra={
            "path": str(request.url.path),
            "method": request.method,
            "exception_type": type(exc).__name__
        },
        exc_info=True
    )

    # Internal details stay in the log
    return create_problem_response(
        status=500,
        title="Internal Server Error",
        detail="An unexpected error occurred",
        request=request
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app."""

    app.add_exception_handler(ProblemDetailException, problem_detail_exception_handler)

    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ValidationError, pydantic_validation_exception_handler)

    app.add_exception_handler(StoreError, store_exception_handler)

    # Catch-all for unexpected exceptions
    app.add_exception_handler(Exception, general_exception_handler)
