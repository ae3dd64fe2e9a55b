"""
Bookmarks API - User Route Handlers
====================================

What:  GET /users/me and PATCH /users for the authenticated caller.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bookmarks_api.database import get_db_session
from bookmarks_api.dependencies import get_current_user
from bookmarks_api.models import User
from bookmarks_api.schemas.common import ErrorResponse
from bookmarks_api.schemas.user import EditUserRequest, UserResponse
from bookmarks_api.services.user_service import user_service

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    responses={401: {"description": "Missing or invalid bearer token", "model": ErrorResponse}},
)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get the current user's profile",
)
async def get_me(user: User = Depends(get_current_user)) -> UserResponse:
    return await user_service.get_me(user)


@router.patch(
    "",
    response_model=UserResponse,
    responses={
        400: {"description": "Invalid patch body", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
    },
    summary="Edit the current user's profile",
)
async def edit_user(
    body: EditUserRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    """Apply firstName/lastName/email, changing only the fields supplied."""
    return await user_service.edit_user(db=db, user_id=user.id, patch=body)
