"""
Authentication Service

User lookup, sign-up and login on top of the REST store.

Sign-up policy:
- email and username must be unused (email is checked and reported first)
- the password is hashed with bcrypt before it reaches the store

bcrypt hashing and verification run in the threadpool so they do not stall
the event loop serving other requests.
- a session token is minted immediately, so sign-up yields a usable session

Login never tells the caller whether the username or the password was
wrong; both cases fail with the same AuthenticationFailed message.

The stored password hash is stripped from every user record returned here.
"""

import logging
from dataclasses import dataclass
from typing import Any

from fastapi.concurrency import run_in_threadpool

from bookgraph.errors import AuthenticationFailed, InvalidArgument
from bookgraph.services.catalog import get_record_or_none
from bookgraph.services.query import build_query_string
from bookgraph.services.rest_client import RestClient
from bookgraph.services.security import (
    create_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Username or password is incorrect"


@dataclass(frozen=True)
class AuthPayload:
    """A freshly minted session token and the user it belongs to."""

    token: str
    viewer: dict[str, Any]


def public_user(record: dict[str, Any] | None) -> dict[str, Any] | None:
    """Return a copy of a user record without its password hash."""
    if record is None:
        return None
    return {key: value for key, value in record.items() if key != "password"}


async def _find_user(rest: RestClient, **filters: Any) -> dict[str, Any] | None:
    response = await rest.get(f"/users{build_query_string(filters)}")
    matches = response.body or []
    return matches[0] if matches else None


async def get_user(rest: RestClient, user_id: int | str) -> dict[str, Any] | None:
    """Get a single user by ID (None if the store has no such user)."""
    return public_user(await get_record_or_none(rest, f"/users/{user_id}"))


async def get_user_by_username(rest: RestClient, username: str) -> dict[str, Any] | None:
    """Get a user by username (None if nobody has that username)."""
    return public_user(await _find_user(rest, username=username))


async def sign_up(
    rest: RestClient,
    email: str,
    name: str,
    password: str,
    username: str,
) -> AuthPayload:
    """
    Register a new user and start a session.

    Raises:
        InvalidArgument: If the email or username is already taken
    """
    if await _find_user(rest, email=email) is not None:
        raise InvalidArgument("A user with this email already exists")
    if await _find_user(rest, username=username) is not None:
        raise InvalidArgument("A user with this username already exists")

    password_hash = await run_in_threadpool(hash_password, password)
    response = await rest.post(
        "/users",
        {
            "email": email,
            "name": name,
            "password": password_hash,
            "username": username,
        },
    )
    user = response.body
    logger.info(f"User {user['id']} signed up as '{username}'")

    token = create_access_token(user["id"], username)
    return AuthPayload(token=token, viewer=public_user(user))


async def login(rest: RestClient, username: str, password: str) -> AuthPayload:
    """
    Verify credentials and start a session.

    Raises:
        AuthenticationFailed: Unknown username or wrong password
    """
    user = await _find_user(rest, username=username)

    if not user or not user.get("password"):
        raise AuthenticationFailed(INVALID_CREDENTIALS)

    if not await run_in_threadpool(verify_password, password, user["password"]):
        raise AuthenticationFailed(INVALID_CREDENTIALS)

    logger.info(f"User {user['id']} logged in")
    token = create_access_token(user["id"], user["username"])
    return AuthPayload(token=token, viewer=public_user(user))
