"""
Bookmarks API - Authentication Schemas
=======================================

What:  Request and response bodies for /auth/signup and /auth/signin.

Validation (enforced before any store access, reported as HTTP 400):
    - email: required, non-empty, syntactically valid address
    - password: required, non-empty string
"""

from pydantic import BaseModel, EmailStr, Field


class AuthRequest(BaseModel):
    """Credentials submitted to both signup and signin."""
    email: EmailStr = Field(description="Account email address", examples=["femi@example.com"])
    password: str = Field(min_length=1, description="Plaintext password", examples=["123"])


class AccessTokenResponse(BaseModel):
    """Returned by POST /auth/signin."""
    access_token: str = Field(description="Signed bearer token for the Authorization header")
