"""
Bookmarks API - Bookmark SQLAlchemy Model
==========================================

What:  ORM model for the `bookmarks` table.
Who:   Used by BookmarkService for CRUD scoped to the owning user.

Table Design:
    - user_id: FK to users.id with ON DELETE CASCADE; every query filters on it
    - title, link: required; link is stored exactly as submitted
    - description: optional free text

Query Patterns:
    - List a user's bookmarks: WHERE user_id = :uid ORDER BY id
      → idx_bookmarks_user_id
    - Fetch one: WHERE id = :id AND user_id = :uid → primary key lookup
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bookmarks_api.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Bookmark(Base):
    """
    A saved link owned by exactly one user.

    State: absent → present (create) → present (edit) → absent (delete).
    Edits never change `id` or `user_id`.
    """

    __tablename__ = "bookmarks"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Owning user",
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    link: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    __table_args__ = (
        Index("idx_bookmarks_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Bookmark(id={self.id}, user_id={self.user_id}, title='{self.title}')>"
