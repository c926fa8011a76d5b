"""Database module for the link shortening service."""
from shortlink.db.base import get_engine, get_engine_config, get_session_factory, create_schema
from shortlink.db.session import transaction_context

__all__ = [
    "get_engine",
    "get_engine_config",
    "get_session_factory",
    "create_schema",
    "transaction_context",
]
