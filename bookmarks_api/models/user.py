"""
Bookmarks API - User SQLAlchemy Model
======================================

What:  ORM model for the `users` table (the credential store).
Who:   Used by AuthService, UserService and the bearer-token dependency.

Table Design:
    - Integer primary key, generated by the database on insert
    - email: unique; the signin key
    - hash: salted password hash, never serialized into a response
    - first_name / last_name: optional profile fields
    - created_at / updated_at: UTC timestamps, updated_at refreshed on UPDATE
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from bookmarks_api.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """
    A registered account.

    Lifecycle:
        1. Created on signup
        2. Mutated by profile edits (PATCH /users)
        3. Never deleted through the API
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Signin key; unique across all users",
    )

    # Stored in the "hash" column
    password_hash: Mapped[str] = mapped_column(
        "hash",
        String(255),
        nullable=False,
        comment="PBKDF2-HMAC-SHA256 salt and digest",
    )

    first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

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

    def __repr__(self) -> str:
        # Never include the password hash
        return f"<User(id={self.id}, email='{self.email}')>"
