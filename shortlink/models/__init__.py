"""
Data models for the link shortening service.

This module imports and exports all SQLModel models used in the application.
"""

from shortlink.models.link import Link, LinkBase

__all__ = [
    "Link",
    "LinkBase",
]
