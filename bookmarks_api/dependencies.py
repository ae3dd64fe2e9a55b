"""
Bookmarks API - Request Dependencies
=====================================

What:  Bearer-token guard shared by every /users and /bookmarks route.
How:   Reads `Authorization: Bearer <token>`, verifies it with
       `decode_access_token`, loads the user and stores its id on
       `request.state.user_id` for logging.

Failure modes (all → 401 AuthError):
    - Header missing, or a scheme other than Bearer
    - Token invalid or expired
    - Token names a user that no longer exists
"""

import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bookmarks_api.database import get_db_session
from bookmarks_api.exceptions import AuthError
from bookmarks_api.models import User
from bookmarks_api.security import decode_access_token

logger = logging.getLogger(__name__)

# auto_error=False: a missing header reaches our AuthError handler instead of
# FastAPI's built-in 403
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> User:
    """Resolve the authenticated caller or raise AuthError."""
    if credentials is None:
        raise AuthError(message="Not authenticated")

    user_id = decode_access_token(credentials.credentials)

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        logger.info("Token for unknown user %s rejected", user_id)
        raise AuthError(message="User no longer exists")

    request.state.user_id = user.id
    return user
