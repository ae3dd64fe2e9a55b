"""
Bookmarks API - Bookmark Schemas
=================================

What:  Bookmark representation plus the create and patch bodies.

Validation rules:
    - title, link: required on create, non-empty; never nullable on edit
    - description: optional; may be cleared with null on edit
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, ValidationInfo, field_validator

from bookmarks_api.schemas.common import CamelModel


class BookmarkResponse(CamelModel):
    """Full bookmark as returned by every /bookmarks endpoint."""
    id: int = Field(description="Bookmark identifier")
    title: str
    description: Optional[str] = None
    link: str
    user_id: int = Field(description="Owning user")
    created_at: datetime
    updated_at: datetime


class CreateBookmarkRequest(CamelModel):
    """Body for POST /bookmarks."""
    title: str = Field(min_length=1, max_length=255, examples=["First bookmark"])
    link: str = Field(min_length=1, examples=["http://github.com/imef-femi"])
    description: Optional[str] = Field(default=None)


class EditBookmarkRequest(CamelModel):
    """
    Body for PATCH /bookmarks/{id}.

    Only fields present in the body change; omitted fields keep their values.
    """
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None)
    link: Optional[str] = Field(default=None, min_length=1)

    @field_validator("title", "link")
    @classmethod
    def required_fields_not_null(cls, v: Optional[str], info: ValidationInfo) -> str:
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v
