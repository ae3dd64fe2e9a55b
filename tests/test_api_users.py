"""
Bookmarks API - User Endpoint Tests
====================================

What:  GET /users/me and PATCH /users, plus the bearer guard in front of them.

What we test:
    ✅ /users/me returns the caller's profile
    ✅ Missing, malformed, expired and orphaned tokens → 401
    ✅ PATCH changes only supplied fields
    ✅ PATCH to another user's email → 409; to your own email → 200
"""

from datetime import timedelta

import pytest

from bookmarks_api.security import create_access_token


class TestGetMe:

    @pytest.mark.asyncio
    async def test_get_me(self, client, auth_headers):
        response = await client.get("/users/me", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["email"] == "femi@example.com"
        assert body["firstName"] is None
        assert "hash" not in body

    @pytest.mark.asyncio
    async def test_get_me_without_token(self, client):
        response = await client.get("/users/me")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
        assert response.json()["error"] == "unauthorized"

    @pytest.mark.asyncio
    async def test_get_me_wrong_scheme(self, client, auth_headers):
        token = auth_headers["Authorization"].split(" ", 1)[1]
        response = await client.get("/users/me", headers={"Authorization": f"Basic {token}"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_get_me_garbage_token(self, client):
        response = await client.get("/users/me", headers={"Authorization": "Bearer abc.def.ghi"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_get_me_expired_token(self, client, auth_headers):
        me = await client.get("/users/me", headers=auth_headers)
        expired = create_access_token(me.json()["id"], "femi@example.com", expires_delta=timedelta(seconds=-5))

        response = await client.get("/users/me", headers={"Authorization": f"Bearer {expired}"})

        assert response.status_code == 401
        assert response.json()["message"] == "Token has expired"

    @pytest.mark.asyncio
    async def test_get_me_token_for_missing_user(self, client):
        token = create_access_token(999, "ghost@example.com")
        response = await client.get("/users/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_get_me_token_with_oversized_user_id(self, client):
        token = create_access_token(99999999999999999999, "ghost@example.com")
        response = await client.get("/users/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401


class TestEditUser:

    @pytest.mark.asyncio
    async def test_edit_user(self, client, auth_headers):
        response = await client.patch(
            "/users",
            headers=auth_headers,
            json={"firstName": "Femi", "email": "femi@gmail.com"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["firstName"] == "Femi"
        assert body["email"] == "femi@gmail.com"
        assert body["lastName"] is None

    @pytest.mark.asyncio
    async def test_edit_user_keeps_omitted_fields(self, client, auth_headers):
        await client.patch("/users", headers=auth_headers, json={"lastName": "Ade"})

        response = await client.patch("/users", headers=auth_headers, json={"firstName": "Femi"})

        assert response.json()["lastName"] == "Ade"
        assert response.json()["firstName"] == "Femi"

    @pytest.mark.asyncio
    async def test_edit_user_email_taken(self, client, auth_headers, other_auth_headers):
        response = await client.patch("/users", headers=auth_headers, json={"email": "ada@example.com"})

        assert response.status_code == 409
        me = await client.get("/users/me", headers=auth_headers)
        assert me.json()["email"] == "femi@example.com"

    @pytest.mark.asyncio
    async def test_edit_user_own_email(self, client, auth_headers):
        response = await client.patch("/users", headers=auth_headers, json={"email": "femi@example.com"})
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_edit_user_null_email_rejected(self, client, auth_headers):
        response = await client.patch("/users", headers=auth_headers, json={"email": None})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_edit_user_without_token(self, client):
        response = await client.patch("/users", json={"firstName": "Femi"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_signin_with_new_email(self, client, auth_headers):
        await client.patch("/users", headers=auth_headers, json={"email": "femi@gmail.com"})

        response = await client.post("/auth/signin", json={"email": "femi@gmail.com", "password": "123"})

        assert response.status_code == 200
