"""
Bookmarks API - User Service
=============================

What:  Reads and patches the authenticated user's profile.
Who:   Called by the /users route handlers with the user resolved by
       `get_current_user`.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookmarks_api.exceptions import ConflictError, DatabaseError, NotFoundError
from bookmarks_api.models import User
from bookmarks_api.schemas.user import EditUserRequest, UserResponse
from bookmarks_api.services.field_mask import FieldMask

logger = logging.getLogger(__name__)


class UserService:

    async def get_me(self, user: User) -> UserResponse:
        return UserResponse.model_validate(user)

    async def edit_user(
        self,
        db: AsyncSession,
        user_id: int,
        patch: EditUserRequest,
    ) -> UserResponse:
        """
        Apply a profile patch to the user.

        Only fields present in the request body change. An email already used
        by a different account raises ConflictError; re-submitting the
        caller's own email is a no-op for that field.

        Raises:
            NotFoundError: The user row disappeared mid-request.
            ConflictError: Requested email belongs to another user.
            DatabaseError: Update failed for another reason.
        """
        mask = FieldMask.from_model(patch)
        try:
            result = await db.execute(select(User).where(User.id == user_id))
            user = result.scalar_one_or_none()
            if user is None:
                raise NotFoundError(resource="user", resource_id=str(user_id))

            if "email" in mask and mask.get("email") != user.email:
                taken = await db.execute(
                    select(User.id).where(User.email == mask.get("email"), User.id != user_id)
                )
                if taken.scalar_one_or_none() is not None:
                    raise ConflictError(message="Credentials taken", field="email")

            if mask:
                mask.apply(user)
                await db.flush()
        except IntegrityError:
            raise ConflictError(message="Credentials taken", field="email")
        except SQLAlchemyError as e:
            logger.error("Database error editing user %s: %s", user_id, type(e).__name__, exc_info=True)
            raise DatabaseError(
                message="Could not update the profile. Please try again.",
                context={"user_id": user_id, "error_type": type(e).__name__},
            )

        logger.info("User %s updated fields: %s", user_id, sorted(mask.fields))
        return UserResponse.model_validate(user)


user_service = UserService()
