"""
Request logging middleware for FastAPI using Loguru.

Every request gets an ``X-Request-ID`` header and one log record at the
custom REQUEST level with method, path, status and latency.
"""

import time
import uuid

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from shortlink.core.logging import REQUEST_LEVEL, ensure_request_level


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per handled request."""

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        ensure_request_level()

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        start_time = time.time()
        response = await call_next(request)
        process_time_ms = round((time.time() - start_time) * 1000, 2)

        response.headers["X-Request-ID"] = request_id

        # Get client IP with forwarded headers consideration
        client_ip = request.client.host if request.client else "unknown"
        if "X-Forwarded-For" in request.headers:
            forwarded_ips = request.headers["X-Forwarded-For"].split(",")
            if forwarded_ips:
                client_ip = forwarded_ips[0].strip()

        logger.log(
            REQUEST_LEVEL,
            "{method} {path} {status_code} {process_time_ms}ms {client_ip} {request_id}",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            process_time_ms=process_time_ms,
            client_ip=client_ip,
            request_id=request_id,
        )
        return response


def add_logging_middleware(app) -> None:
    """Add the request logging middleware to the FastAPI application."""
    app.add_middleware(LoggingMiddleware)
