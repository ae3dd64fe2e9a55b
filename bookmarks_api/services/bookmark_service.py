"""
Bookmarks API - Bookmark Service
=================================

What:  Create/read/update/delete of bookmarks, always scoped to one owner.
Who:   Called by the /bookmarks route handlers with the caller's user id.

Ownership rule:
    Every lookup filters on both `id` and `user_id`. A bookmark that exists
    but belongs to someone else is indistinguishable from a missing one and
    raises NotFoundError (→ 404).

Ordering:
    Lists are returned in creation order (ascending id).
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookmarks_api.exceptions import DatabaseError, NotFoundError
from bookmarks_api.models import Bookmark
from bookmarks_api.schemas.bookmark import (
    BookmarkResponse,
    CreateBookmarkRequest,
    EditBookmarkRequest,
)
from bookmarks_api.services.field_mask import FieldMask

logger = logging.getLogger(__name__)


class BookmarkService:
    """
    Business logic for bookmark operations.

    Methods only flush; the request's session dependency commits, so a
    failed request leaves the store untouched.
    """

    async def _get_owned(self, db: AsyncSession, user_id: int, bookmark_id: int) -> Bookmark:
        """Fetch a bookmark owned by `user_id` or raise NotFoundError."""
        result = await db.execute(
            select(Bookmark).where(
                Bookmark.id == bookmark_id,
                Bookmark.user_id == user_id,
            )
        )
        bookmark = result.scalar_one_or_none()
        if bookmark is None:
            raise NotFoundError(resource="bookmark", resource_id=str(bookmark_id))
        return bookmark

    async def list_bookmarks(self, db: AsyncSession, user_id: int) -> List[BookmarkResponse]:
        """All bookmarks owned by `user_id`, oldest first; empty list when none."""
        try:
            result = await db.execute(
                select(Bookmark)
                .where(Bookmark.user_id == user_id)
                .order_by(Bookmark.id.asc())
            )
            bookmarks = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing bookmarks for user %s: %s", user_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve bookmarks. Please try again.",
                context={"user_id": user_id, "error_type": type(e).__name__},
            )
        return [BookmarkResponse.model_validate(b) for b in bookmarks]

    async def create_bookmark(
        self,
        db: AsyncSession,
        user_id: int,
        data: CreateBookmarkRequest,
    ) -> BookmarkResponse:
        """
        Persist a new bookmark owned by `user_id`.

        Returns:
            The created bookmark including its generated id.
        """
        bookmark = Bookmark(
            user_id=user_id,
            title=data.title,
            link=data.link,
            description=data.description,
        )
        try:
            db.add(bookmark)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating bookmark for user %s: %s", user_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the bookmark. Please try again.",
                context={"user_id": user_id, "error_type": type(e).__name__},
            )

        logger.info("Bookmark %s created for user %s", bookmark.id, user_id)
        return BookmarkResponse.model_validate(bookmark)

    async def get_bookmark_by_id(
        self,
        db: AsyncSession,
        user_id: int,
        bookmark_id: int,
    ) -> BookmarkResponse:
        """
        Retrieve one of the caller's bookmarks.

        Raises:
            NotFoundError: No bookmark with that id is owned by `user_id`.
            DatabaseError: Query failed.
        """
        try:
            bookmark = await self._get_owned(db, user_id, bookmark_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching bookmark %s: %s", bookmark_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the bookmark. Please try again.",
                context={"bookmark_id": bookmark_id},
            )
        return BookmarkResponse.model_validate(bookmark)

    async def edit_bookmark(
        self,
        db: AsyncSession,
        user_id: int,
        bookmark_id: int,
        patch: EditBookmarkRequest,
    ) -> BookmarkResponse:
        """
        Apply a partial update to one of the caller's bookmarks.

        Fields absent from the request body keep their values; `id` and
        `user_id` are never part of the mask.
        """
        mask = FieldMask.from_model(patch)
        try:
            bookmark = await self._get_owned(db, user_id, bookmark_id)
            if mask:
                mask.apply(bookmark)
                await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error editing bookmark %s: %s", bookmark_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the bookmark. Please try again.",
                context={"bookmark_id": bookmark_id, "error_type": type(e).__name__},
            )

        logger.info("Bookmark %s updated fields: %s", bookmark_id, sorted(mask.fields))
        return BookmarkResponse.model_validate(bookmark)

    async def delete_bookmark(self, db: AsyncSession, user_id: int, bookmark_id: int) -> None:
        """Remove one of the caller's bookmarks; NotFoundError if not owned."""
        try:
            bookmark = await self._get_owned(db, user_id, bookmark_id)
            await db.delete(bookmark)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting bookmark %s: %s", bookmark_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the bookmark. Please try again.",
                context={"bookmark_id": bookmark_id, "error_type": type(e).__name__},
            )

        logger.info("Bookmark %s deleted by user %s", bookmark_id, user_id)


# ── Singleton Instance ────────────────────────────────────────────────────
bookmark_service = BookmarkService()
