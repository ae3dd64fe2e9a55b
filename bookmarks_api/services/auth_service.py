"""
Bookmarks API - Auth Service
=============================

What:  Account creation and credential exchange for bearer tokens.
Who:   Called by the /auth route handlers.

Flows:
    signup: check email free → hash password → insert user → UserResponse
    signin: load user by email → verify password → AccessTokenResponse

Error mapping:
    Duplicate email (service check or unique-constraint race) → ConflictError
    Unknown email or wrong password (same message)            → AuthError
    Any other store failure                                   → DatabaseError
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookmarks_api.exceptions import AuthError, ConflictError, DatabaseError
from bookmarks_api.models import User
from bookmarks_api.schemas.auth import AccessTokenResponse, AuthRequest
from bookmarks_api.schemas.user import UserResponse
from bookmarks_api.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    """Stateless; receives the request's session on every call."""

    async def signup(self, db: AsyncSession, credentials: AuthRequest) -> UserResponse:
        """
        Register a new user.

        Args:
            db: Request-scoped session; commit happens in `get_db_session`.
            credentials: Validated email and password.

        Returns:
            The created user (without password hash).

        Raises:
            ConflictError: Email already registered.
            DatabaseError: Insert failed for another reason.
        """
        email = str(credentials.email)
        try:
            existing = await db.execute(select(User.id).where(User.email == email))
            if existing.scalar_one_or_none() is not None:
                raise ConflictError(message="Credentials taken", field="email")

            user = User(email=email, password_hash=hash_password(credentials.password))
            db.add(user)
            await db.flush()
        except IntegrityError:
            # Concurrent signup won the unique index
            raise ConflictError(message="Credentials taken", field="email")
        except SQLAlchemyError as e:
            logger.error("Database error during signup: %s", type(e).__name__, exc_info=True)
            raise DatabaseError(
                message="Could not create the account. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("User %s signed up", user.id)
        return UserResponse.model_validate(user)

    async def signin(self, db: AsyncSession, credentials: AuthRequest) -> AccessTokenResponse:
        """Exchange valid credentials for an access token; AuthError otherwise."""
        email = str(credentials.email)
        try:
            result = await db.execute(select(User).where(User.email == email))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error during signin: %s", type(e).__name__, exc_info=True)
            raise DatabaseError(
                message="Could not sign in. Please try again.",
                context={"error_type": type(e).__name__},
            )

        if user is None or not verify_password(credentials.password, user.password_hash):
            logger.info("Failed signin attempt")
            raise AuthError(message="Credentials incorrect")

        logger.info("User %s signed in", user.id)
        return AccessTokenResponse(access_token=create_access_token(user.id, user.email))


auth_service = AuthService()
