"""Link data models.

This module defines the Link model mapping a short code to its target URL.
"""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LinkBase(SQLModel):
    """Base model for link data."""

    code: str = Field(
        max_length=64,
        description="Unique short code used in the redirect path",
        unique=True,
    )
    target_url: str = Field(
        min_length=1,
        description="The absolute URL the short code redirects to"
    )


class Link(LinkBase, table=True):
    """
    Link model for storing issued short codes.

    A Link is created once, when a submission succeeds, and never mutated.
    The code column carries a unique constraint so the database itself
    rejects a second Link claiming the same code.
    """

    __tablename__ = "links"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        description="UTC timestamp when this link was created"
    )

    __table_args__ = (
        Index("ix_links_created_at", "created_at"),
    )
