"""HTTP middleware for the CRM API."""

from .body_limit import BodyLimitMiddleware
from .request_logging import RequestLoggingMiddleware

__all__ = ["BodyLimitMiddleware", "RequestLoggingMiddleware"]
