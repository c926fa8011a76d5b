"""API dependencies for FastAPI.

This module provides dependency injection functions giving endpoints access
to the services and store owned by the running application.
"""

from fastapi import Depends, Request

from shortlink.core.config import Settings
from shortlink.repositories.base import LinkStore
from shortlink.services.redirect import RedirectService
from shortlink.services.shortener import ShorteningService


def get_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


def get_link_store(request: Request) -> LinkStore:
    """Get the link store owned by the application."""
    return request.app.state.link_store


def get_shortening_service(request: Request) -> ShorteningService:
    """Get the link shortening service."""
    return request.app.state.shortening_service


def get_redirect_service(request: Request) -> RedirectService:
    """Get the redirect service."""
    return request.app.state.redirect_service


def get_base_url(settings: Settings = Depends(get_settings)) -> str:
    """Get the base URL for shortened links."""
    return settings.BASE_URL.rstrip("/")
