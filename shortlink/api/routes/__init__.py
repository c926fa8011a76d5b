"""Routes package initialization.

This module assembles the route collection for the application.
"""

from fastapi import APIRouter

from shortlink.api.routes import shortener, redirect, health, web


def build_api_router(api_prefix: str) -> APIRouter:
    """Create the root router with the JSON API mounted under ``api_prefix``."""
    api_router = APIRouter()

    # Form endpoint used by the browser client lives at the root
    api_router.include_router(web.router)

    api_router.include_router(shortener.router, prefix=api_prefix)
    api_router.include_router(health.router, prefix=api_prefix)

    # Redirect routes go last: /{code} would otherwise shadow everything above
    api_router.include_router(redirect.router)

    return api_router


__all__ = ["build_api_router"]
