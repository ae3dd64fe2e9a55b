"""
Bookmarks API - Auth Route Handlers
====================================

What:  POST /auth/signup and POST /auth/signin.
Who:   Unauthenticated clients obtaining an account and a bearer token.

Bodies missing `email` or `password` (or with empty values) are rejected
with 400 by request validation before the store is touched.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bookmarks_api.database import get_db_session
from bookmarks_api.schemas.auth import AccessTokenResponse, AuthRequest
from bookmarks_api.schemas.common import ErrorResponse
from bookmarks_api.schemas.user import UserResponse
from bookmarks_api.services.auth_service import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/signup",
    status_code=201,
    response_model=UserResponse,
    responses={
        201: {"description": "Account created", "model": UserResponse},
        400: {"description": "Missing or invalid email/password", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
    },
    summary="Create an account",
)
async def signup(
    body: AuthRequest,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    """Register a user; the response never contains the password hash."""
    return await auth_service.signup(db=db, credentials=body)


@router.post(
    "/signin",
    status_code=200,
    response_model=AccessTokenResponse,
    responses={
        200: {"description": "Bearer token issued", "model": AccessTokenResponse},
        400: {"description": "Missing email/password", "model": ErrorResponse},
        401: {"description": "Credentials incorrect", "model": ErrorResponse},
    },
    summary="Exchange credentials for an access token",
)
async def signin(
    body: AuthRequest,
    db: AsyncSession = Depends(get_db_session),
) -> AccessTokenResponse:
    """
    Verify credentials and issue a bearer token.

    Returns 200 (not 201): no resource is created.
    """
    return await auth_service.signin(db=db, credentials=body)
