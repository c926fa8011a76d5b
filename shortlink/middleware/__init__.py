"""HTTP middleware for the link shortening service."""

from shortlink.middleware.logging import LoggingMiddleware, add_logging_middleware

__all__ = ["LoggingMiddleware", "add_logging_middleware"]
