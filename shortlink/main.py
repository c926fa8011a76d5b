"""Main application module.

Exposes the ASGI application built from environment settings, e.g.
``uvicorn shortlink.main:app``.
"""

from shortlink.app_factory import create_app

app = create_app()
