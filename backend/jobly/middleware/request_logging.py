"""
Request Logging Middleware

Logs method, path, status code and duration of every API request.
"""

import time
from typing import Iterable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from jobly.utils.logger import get_logger, log_api_request

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request logging."""

    def __init__(self, app: ASGIApp, exclude_paths: Optional[Iterable[str]] = None):
        super().__init__(app)
        self.exclude_paths = set(exclude_paths or ())

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.exclude_paths:
            return await call_next(request)

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error("Request failed", path=request.url.path, error_type=type(e).__name__)
            raise

        log_api_request(
            request.method,
            request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            query=str(request.query_params) or None,
        )
        return response
