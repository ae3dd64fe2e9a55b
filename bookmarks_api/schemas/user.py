"""
Bookmarks API - User Schemas
=============================

What:  Public user representation and the profile patch body.

The password hash has no field here, so it can never be serialized.
"""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from bookmarks_api.schemas.common import CamelModel


class UserResponse(CamelModel):
    """Returned by signup, GET /users/me and PATCH /users."""
    id: int = Field(description="User identifier")
    email: str = Field(description="Signin email")
    first_name: Optional[str] = Field(default=None, description="Given name")
    last_name: Optional[str] = Field(default=None, description="Family name")
    created_at: datetime = Field(description="When the account was created (UTC)")
    updated_at: datetime = Field(description="Last profile change (UTC)")


class EditUserRequest(CamelModel):
    """
    Profile patch for PATCH /users.

    Every field is optional; only the fields present in the request body are
    applied. `firstName`/`lastName` may be set to null to clear them, `email`
    may not.
    """
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    email: Optional[EmailStr] = Field(default=None)

    @field_validator("email")
    @classmethod
    def email_not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("email cannot be null")
        return v
