"""
Bookmarks API - Auth Service Unit Tests
========================================

What:  Tests for AuthService signup and signin.
How:   Uses the mock DB session; password hashing and token signing are real.

What we test:
    ✅ Signup inserts a user with a hashed password and returns it
    ✅ Duplicate email (pre-check or unique-index race) raises ConflictError
    ✅ Other store failures raise DatabaseError
    ✅ Signin returns a token for the right user
    ✅ Unknown email and wrong password both raise AuthError
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from bookmarks_api.exceptions import AuthError, ConflictError, DatabaseError
from bookmarks_api.schemas.auth import AuthRequest
from bookmarks_api.security import decode_access_token, verify_password
from bookmarks_api.services.auth_service import AuthService


def _assign_identity(session):
    """Flush side effect that fills server-generated columns on the added row."""

    async def _flush():
        row = session.add.call_args.args[0]
        now = datetime.now(timezone.utc)
        row.id = 1
        row.created_at = now
        row.updated_at = now

    return _flush


class TestAuthServiceSignup:
    """Tests for account creation."""

    def setup_method(self):
        self.service = AuthService()
        self.credentials = AuthRequest(email="femi@example.com", password="123")

    @pytest.mark.asyncio
    async def test_signup_success(self, mock_db_session, query_result):
        mock_db_session.execute.return_value = query_result(None)
        mock_db_session.flush = AsyncMock(side_effect=_assign_identity(mock_db_session))

        result = await self.service.signup(mock_db_session, self.credentials)

        assert result.id == 1
        assert result.email == "femi@example.com"
        assert result.first_name is None
        stored = mock_db_session.add.call_args.args[0]
        assert stored.password_hash != "123"
        assert verify_password("123", stored.password_hash)
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_signup_response_has_no_hash(self, mock_db_session, query_result):
        mock_db_session.execute.return_value = query_result(None)
        mock_db_session.flush = AsyncMock(side_effect=_assign_identity(mock_db_session))

        result = await self.service.signup(mock_db_session, self.credentials)

        dumped = result.model_dump(by_alias=True)
        assert "hash" not in dumped
        assert "passwordHash" not in dumped

    @pytest.mark.asyncio
    async def test_signup_existing_email_conflicts(self, mock_db_session, query_result):
        mock_db_session.execute.return_value = query_result(7)

        with pytest.raises(ConflictError) as exc_info:
            await self.service.signup(mock_db_session, self.credentials)

        assert exc_info.value.message == "Credentials taken"
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_signup_unique_index_race_conflicts(self, mock_db_session, query_result):
        mock_db_session.execute.return_value = query_result(None)
        mock_db_session.flush = AsyncMock(
            side_effect=IntegrityError("INSERT INTO users", {}, Exception("UNIQUE constraint failed"))
        )

        with pytest.raises(ConflictError):
            await self.service.signup(mock_db_session, self.credentials)

    @pytest.mark.asyncio
    async def test_signup_database_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection refused"))
        )

        with pytest.raises(DatabaseError):
            await self.service.signup(mock_db_session, self.credentials)


class TestAuthServiceSignin:
    """Tests for credential exchange."""

    def setup_method(self):
        self.service = AuthService()

    @pytest.mark.asyncio
    async def test_signin_success(self, mock_db_session, make_user, query_result):
        mock_db_session.execute.return_value = query_result(make_user(user_id=5))

        result = await self.service.signin(
            mock_db_session, AuthRequest(email="femi@example.com", password="123")
        )

        assert decode_access_token(result.access_token) == 5

    @pytest.mark.asyncio
    async def test_signin_wrong_password(self, mock_db_session, make_user, query_result):
        mock_db_session.execute.return_value = query_result(make_user())

        with pytest.raises(AuthError) as exc_info:
            await self.service.signin(
                mock_db_session, AuthRequest(email="femi@example.com", password="1234")
            )

        assert exc_info.value.message == "Credentials incorrect"

    @pytest.mark.asyncio
    async def test_signin_unknown_email(self, mock_db_session, query_result):
        mock_db_session.execute.return_value = query_result(None)

        with pytest.raises(AuthError) as exc_info:
            await self.service.signin(
                mock_db_session, AuthRequest(email="nobody@example.com", password="123")
            )

        assert exc_info.value.message == "Credentials incorrect"

    @pytest.mark.asyncio
    async def test_signin_database_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection refused"))
        )

        with pytest.raises(DatabaseError):
            await self.service.signin(
                mock_db_session, AuthRequest(email="femi@example.com", password="123")
            )
