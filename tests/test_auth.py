"""
Tests for the Authentication Service

Tests:
- User lookups never expose the password hash
- Sign-up uniqueness checks, hashing and session token
- Login with valid and invalid credentials
- bcrypt hashing and verification run in the threadpool
"""

import json
from unittest.mock import patch

import pytest
from fastapi.concurrency import run_in_threadpool

from bookgraph.errors import AuthenticationFailed, InvalidArgument
from bookgraph.services import auth
from bookgraph.services.security import (
    Identity,
    decode_token,
    hash_password,
    verify_password,
)
from tests.conftest import ADA_PASSWORD


class TestUserLookup:
    @pytest.mark.asyncio
    async def test_get_user(self, rest):
        user = await auth.get_user(rest, 1)

        assert user["username"] == "ada"
        assert "password" not in user

    @pytest.mark.asyncio
    async def test_get_missing_user(self, rest):
        assert await auth.get_user(rest, 99) is None

    @pytest.mark.asyncio
    async def test_get_user_by_username(self, rest):
        user = await auth.get_user_by_username(rest, "terryj")

        assert user["name"] == "Terry Jones"
        assert "password" not in user

    @pytest.mark.asyncio
    async def test_unknown_username(self, rest):
        assert await auth.get_user_by_username(rest, "nobody") is None


class TestSignUp:
    @pytest.mark.asyncio
    async def test_sign_up(self, rest, json_server):
        payload = await auth.sign_up(
            rest,
            email="grace@example.com",
            name="Grace Hopper",
            password="Cobol-1959",
            username="grace",
        )

        assert payload.viewer == {
            "id": 3,
            "email": "grace@example.com",
            "name": "Grace Hopper",
            "username": "grace",
        }
        assert decode_token(payload.token) == Identity(user_id=3, username="grace")

        stored = json_server.rows("users")[-1]
        assert stored["password"] != "Cobol-1959"
        assert verify_password("Cobol-1959", stored["password"])

    @pytest.mark.asyncio
    async def test_email_taken(self, rest, json_server):
        with pytest.raises(InvalidArgument) as exc_info:
            await auth.sign_up(
                rest,
                email="ada@example.com",
                name="Another Ada",
                password="Cobol-1959",
                username="ada2",
            )

        assert "email" in exc_info.value.message
        assert json_server.calls("POST") == []

    @pytest.mark.asyncio
    async def test_username_taken(self, rest, json_server):
        with pytest.raises(InvalidArgument) as exc_info:
            await auth.sign_up(
                rest,
                email="new@example.com",
                name="Another Ada",
                password="Cobol-1959",
                username="ada",
            )

        assert "username" in exc_info.value.message
        assert json_server.calls("POST") == []

    @pytest.mark.asyncio
    async def test_email_is_reported_before_username(self, rest):
        with pytest.raises(InvalidArgument) as exc_info:
            await auth.sign_up(
                rest,
                email="ada@example.com",
                name="Ada Again",
                password="Cobol-1959",
                username="ada",
            )

        assert "email" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_email_lookup_is_an_exact_filter(self, rest, json_server):
        await auth.sign_up(
            rest,
            email="grace+books@example.com",
            name="Grace Hopper",
            password="Cobol-1959",
            username="grace",
        )

        lookup = json_server.calls("GET", "/users")[0]
        assert lookup.url.params["email"] == "grace+books@example.com"
        assert json.loads(json_server.calls("POST", "/users")[0].content)["email"] == (
            "grace+books@example.com"
        )


class TestLogin:
    @pytest.mark.asyncio
    async def test_login(self, rest):
        payload = await auth.login(rest, "ada", ADA_PASSWORD)

        assert payload.viewer["id"] == 1
        assert "password" not in payload.viewer
        assert decode_token(payload.token) == Identity(user_id=1, username="ada")

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_user_look_the_same(self, rest):
        with pytest.raises(AuthenticationFailed) as wrong_password:
            await auth.login(rest, "ada", "Not-Her-Password1")
        with pytest.raises(AuthenticationFailed) as unknown_user:
            await auth.login(rest, "nobody", ADA_PASSWORD)

        assert wrong_password.value.message == auth.INVALID_CREDENTIALS
        assert unknown_user.value.message == auth.INVALID_CREDENTIALS
        assert wrong_password.value.extensions == {"code": "UNAUTHENTICATED"}

    @pytest.mark.asyncio
    async def test_user_without_password_cannot_log_in(self, rest, json_server):
        del json_server.rows("users")[1]["password"]

        with pytest.raises(AuthenticationFailed):
            await auth.login(rest, "terryj", "Flying-Circus9")


class TestBcryptThreadpool:
    @pytest.mark.asyncio
    async def test_sign_up_hashes_in_threadpool(self, rest, json_server):
        with patch("bookgraph.services.auth.run_in_threadpool", wraps=run_in_threadpool) as pool:
            await auth.sign_up(
                rest,
                email="grace@example.com",
                name="Grace Hopper",
                password="Cobol-1959",
                username="grace",
            )

        pool.assert_called_once_with(hash_password, "Cobol-1959")
        assert verify_password("Cobol-1959", json_server.rows("users")[-1]["password"])

    @pytest.mark.asyncio
    async def test_login_verifies_in_threadpool(self, rest, json_server):
        stored_hash = json_server.rows("users")[0]["password"]

        with patch("bookgraph.services.auth.run_in_threadpool", wraps=run_in_threadpool) as pool:
            await auth.login(rest, "ada", ADA_PASSWORD)

        pool.assert_called_once_with(verify_password, ADA_PASSWORD, stored_hash)
