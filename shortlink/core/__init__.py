"""Core module for the link shortening service."""

from shortlink.core.config import settings, Settings

__all__ = ["settings", "Settings"]
