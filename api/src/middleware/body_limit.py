"""Request body size limit middleware."""

import logging
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from fastapi import Request

from ..config import get_settings
from ..errors.problem_details import PayloadTooLargeError

logger = logging.getLogger(__name__)


class BodyLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests whose body exceeds the configured limit.

    A declared ``Content-Length`` is checked before anything is read.
    Bodies sent without one (chunked transfer encoding) are read in full
    and measured; the cached body is then replayed to the route.
    """

    def __init__(self, app, max_bytes: Optional[int] = None):
        super().__init__(app)
        self.max_bytes = max_bytes if max_bytes is not None else get_settings().body_limit

    async def dispatch(self, request: Request, call_next):
        content_length = request.headers.get("content-length")
        if content_length is None:
            size = len(await request.body())
        else:
            try:
                size = int(content_length)
            except ValueError:
                size = 0

        if size > self.max_bytes:
            logger.warning(
                f"Rejected {request.method} {request.url.path}: "
                f"body of {size} bytes exceeds {self.max_bytes}"
            )
            error = PayloadTooLargeError(
                f"Request body exceeds the {self.max_bytes} byte limit",
                limit=self.max_bytes
            )
            return error.to_response(request)

        return await call_next(request)
