"""
Bookmarks API - Bookmark Route Handlers
========================================

What:  CRUD over the caller's bookmarks.
How:   Every handler depends on `get_current_user`; the resolved user id is
       passed to BookmarkService, which scopes every query to it.

Status codes:
    GET    /bookmarks       200 (empty array when none)
    POST   /bookmarks       201
    GET    /bookmarks/{id}  200 | 404
    PATCH  /bookmarks/{id}  200 | 404
    DELETE /bookmarks/{id}  204 (empty body) | 404

A path id outside 1..MAX_BOOKMARK_ID is rejected with 400 before any query.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, Response
from sqlalchemy.ext.asyncio import AsyncSession

from bookmarks_api.database import get_db_session
from bookmarks_api.dependencies import get_current_user
from bookmarks_api.models import User
from bookmarks_api.schemas.bookmark import (
    BookmarkResponse,
    CreateBookmarkRequest,
    EditBookmarkRequest,
)
from bookmarks_api.schemas.common import ErrorResponse
from bookmarks_api.services.bookmark_service import bookmark_service

router = APIRouter(
    prefix="/bookmarks",
    tags=["Bookmarks"],
    responses={401: {"description": "Missing or invalid bearer token", "model": ErrorResponse}},
)

_NOT_FOUND = {404: {"description": "Bookmark not found for this user", "model": ErrorResponse}}

# Largest value the INTEGER primary key can hold (PostgreSQL int4)
MAX_BOOKMARK_ID = 2_147_483_647


@router.get(
    "",
    response_model=List[BookmarkResponse],
    summary="List the current user's bookmarks",
)
async def list_bookmarks(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[BookmarkResponse]:
    return await bookmark_service.list_bookmarks(db=db, user_id=user.id)


@router.post(
    "",
    status_code=201,
    response_model=BookmarkResponse,
    responses={400: {"description": "Missing title or link", "model": ErrorResponse}},
    summary="Create a bookmark",
)
async def create_bookmark(
    body: CreateBookmarkRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> BookmarkResponse:
    return await bookmark_service.create_bookmark(db=db, user_id=user.id, data=body)


@router.get(
    "/{bookmark_id}",
    response_model=BookmarkResponse,
    responses=_NOT_FOUND,
    summary="Get one of the current user's bookmarks",
)
async def get_bookmark_by_id(
    bookmark_id: int = Path(..., ge=1, le=MAX_BOOKMARK_ID, description="Bookmark id"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> BookmarkResponse:
    return await bookmark_service.get_bookmark_by_id(db=db, user_id=user.id, bookmark_id=bookmark_id)


@router.patch(
    "/{bookmark_id}",
    response_model=BookmarkResponse,
    responses=_NOT_FOUND,
    summary="Edit one of the current user's bookmarks",
)
async def edit_bookmark(
    body: EditBookmarkRequest,
    bookmark_id: int = Path(..., ge=1, le=MAX_BOOKMARK_ID, description="Bookmark id"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> BookmarkResponse:
    """Only fields present in the body change."""
    return await bookmark_service.edit_bookmark(
        db=db,
        user_id=user.id,
        bookmark_id=bookmark_id,
        patch=body,
    )


@router.delete(
    "/{bookmark_id}",
    status_code=204,
    response_class=Response,
    responses=_NOT_FOUND,
    summary="Delete one of the current user's bookmarks",
)
async def delete_bookmark(
    bookmark_id: int = Path(..., ge=1, le=MAX_BOOKMARK_ID, description="Bookmark id"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await bookmark_service.delete_bookmark(db=db, user_id=user.id, bookmark_id=bookmark_id)
    return Response(status_code=204)
