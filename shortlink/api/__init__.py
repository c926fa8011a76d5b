"""API package for the link shortening service.

This package contains the API layer components including routes,
request/response schemas, and dependency providers.
"""

from shortlink.api.routes import build_api_router

__all__ = ["build_api_router"]
