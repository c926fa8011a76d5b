"""Application factory.

This module builds the FastAPI application: it creates the link store and
hands the same instance to both services, includes routes, and configures
middleware and exception handlers.
"""

import random
import time
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from shortlink.api import build_api_router
from shortlink.core.config import Settings, settings as default_settings
from shortlink.core.logging import setup_logging
from shortlink.middleware.logging import add_logging_middleware
from shortlink.repositories import LinkStore, build_link_store
from shortlink.services.codegen import CodeGenerator, build_code_generator
from shortlink.services.redirect import RedirectService
from shortlink.services.shortener import ShorteningService


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[LinkStore] = None,
    generator: Optional[CodeGenerator] = None,
    rng: Optional[random.Random] = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        settings: Settings to use (module defaults when omitted)
        store: Link store to use (built from settings when omitted)
        generator: Code generator to use (built from settings when omitted)
        rng: Random source for the default random generator

    Returns:
        FastAPI: The configured application
    """
    settings = settings or default_settings
    setup_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    link_store = store if store is not None else build_link_store(settings)
    code_generator = generator if generator is not None else build_code_generator(settings, rng=rng)

    app.state.settings = settings
    app.state.link_store = link_store
    app.state.shortening_service = ShorteningService(
        store=link_store,
        generator=code_generator,
        max_attempts=settings.CODE_MAX_ATTEMPTS,
        default_scheme=settings.DEFAULT_SCHEME,
        allowed_schemes=settings.ALLOWED_SCHEMES,
        max_url_length=settings.MAX_URL_LENGTH,
    )
    app.state.redirect_service = RedirectService(store=link_store)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if settings.REQUEST_LOGGING_ENABLED:
        add_logging_middleware(app)

    app.include_router(build_api_router(settings.API_PREFIX))

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle validation errors with detailed information."""
        logger.warning(f"Request validation error: {exc}")
        return JSONResponse(
            status_code=422,
            content={"detail": "Validation error", "errors": jsonable_encoder(exc.errors())}
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler to catch and log all unhandled exceptions."""
        error_id = f"error-{time.time()}"
        logger.bind(error_id=error_id, url=str(request.url)).opt(exception=exc).error(
            f"Unhandled exception in {request.method} {request.url.path}"
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error occurred",
                "error_id": error_id,
                "message": str(exc) if settings.DEBUG else "Internal server error"
            }
        )

    @app.on_event("startup")
    async def startup_event():
        """Run startup tasks."""
        logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
        logger.info(f"Environment: {settings.ENVIRONMENT.value}")
        logger.info(f"Link store: {type(link_store).__name__}")
        await link_store.initialize()

    @app.on_event("shutdown")
    async def shutdown_event():
        """Run cleanup tasks."""
        logger.info(f"Shutting down {settings.APP_NAME}")
        await link_store.close()

    return app

