"""
Bookmarks API - Password Hashing and Access Tokens
===================================================

What:  Pure helpers for salted password hashing and bearer-token issuing
       and verification. No HTTP or database access happens here.
Who:   AuthService (hash, verify, issue) and the `get_current_user`
       dependency (decode).

Password format:
    "pbkdf2_sha256$<iterations>$<salt hex>$<digest hex>"
    Iterations are stored per hash, so raising PASSWORD_HASH_ITERATIONS
    does not invalidate existing accounts.

Token format:
    HS256 JWT (PyJWT) with claims:
        sub    user id (string)
        email  user email at issue time
        iat    issued-at (UNIX seconds)
        exp    expiry (UNIX seconds), ACCESS_TOKEN_EXPIRE_MINUTES after iat
"""

import hashlib
import hmac
import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from bookmarks_api.config import settings
from bookmarks_api.exceptions import AuthError

logger = logging.getLogger(__name__)

_HASH_SCHEME = "pbkdf2_sha256"
_SALT_BYTES = 16
# Upper bound of the INTEGER users.id column
_MAX_USER_ID = 2_147_483_647


# ══════════════════════════════════════════════════════════════════════════
# Password Hashing
# ══════════════════════════════════════════════════════════════════════════

def _pbkdf2(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)


def hash_password(password: str, iterations: Optional[int] = None) -> str:
    """
    Hash a password with PBKDF2-HMAC-SHA256 and a fresh random salt.

    Args:
        password: Plaintext password.
        iterations: Override for the configured round count (tests use a
                    small value to stay fast).

    Returns:
        Encoded string holding scheme, iterations, salt and digest.
    """
    rounds = iterations or settings.password_hash_iterations
    salt = os.urandom(_SALT_BYTES)
    digest = _pbkdf2(password, salt, rounds)
    return f"{_HASH_SCHEME}${rounds}${salt.hex()}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    """
    Check a plaintext password against a stored hash.

    Returns False (never raises) for a wrong password or a malformed hash.
    The digest comparison is constant-time.
    """
    try:
        scheme, rounds, salt_hex, digest_hex = encoded.split("$")
        if scheme != _HASH_SCHEME:
            return False
        expected = bytes.fromhex(digest_hex)
        actual = _pbkdf2(password, bytes.fromhex(salt_hex), int(rounds))
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False
    return hmac.compare_digest(expected, actual)


# ══════════════════════════════════════════════════════════════════════════
# Access Tokens
# ══════════════════════════════════════════════════════════════════════════

def create_access_token(
    user_id: int,
    email: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Issue a signed access token for a user.

    Args:
        user_id: Identity stored in the `sub` claim.
        email: Informational `email` claim.
        expires_delta: Token lifetime; defaults to ACCESS_TOKEN_EXPIRE_MINUTES.
                       A negative value yields an already-expired token.
    """
    now = datetime.now(timezone.utc)
    lifetime = expires_delta if expires_delta is not None else timedelta(
        minutes=settings.access_token_expire_minutes
    )
    payload = {
        "sub": str(user_id),
        "email": email,
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> int:
    """
    Verify a bearer token and return the user id it carries.

    Checks the signature, the `exp` claim and that `sub` is a user id.

    Raises:
        AuthError: Token is empty, malformed, expired, signed with another
                   key or algorithm, or lacks a usable `sub`/`exp`.
    """
    if not token:
        raise AuthError(message="Not authenticated")

    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthError(message="Token has expired")
    except jwt.InvalidTokenError as e:
        raise AuthError(message="Invalid token", context={"reason": type(e).__name__})

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise AuthError(message="Invalid token", context={"reason": "bad_subject"})
    if not 1 <= user_id <= _MAX_USER_ID:
        raise AuthError(message="Invalid token", context={"reason": "bad_subject"})
    return user_id
