"""
GraphQL Scalars

Custom scalars validating user input before it reaches a resolver:
- Rating: integer from 1 to 5, inclusive
- Password: at least 8 characters with a lowercase letter, an uppercase
  letter, a number and a symbol
"""

import re
from typing import NewType

import strawberry

from bookgraph.errors import InvalidArgument

RATING_MESSAGE = "Rating must be an integer from 1 to 5"
PASSWORD_MESSAGE = (
    "Password must be a minimum of 8 characters in length and contain "
    "1 lowercase letter, 1 uppercase letter, 1 number, and 1 special character"
)


def is_valid_rating(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 5


def parse_rating(value) -> int:
    if not is_valid_rating(value):
        raise InvalidArgument(RATING_MESSAGE)
    return value


def serialize_rating(value) -> int:
    try:
        rating = int(value)
    except (TypeError, ValueError):
        raise InvalidArgument(RATING_MESSAGE)
    return parse_rating(rating)


def is_strong_password(value) -> bool:
    if not isinstance(value, str) or len(value) < 8:
        return False
    return all(
        re.search(pattern, value)
        for pattern in (r"[a-z]", r"[A-Z]", r"[0-9]", r"[^A-Za-z0-9]")
    )


def parse_password(value) -> str:
    if not is_strong_password(value):
        raise InvalidArgument(PASSWORD_MESSAGE)
    return value


Rating = strawberry.scalar(
    NewType("Rating", int),
    name="Rating",
    description="An integer representing a user rating from 1 and 5, inclusive.",
    serialize=serialize_rating,
    parse_value=parse_rating,
)

Password = strawberry.scalar(
    NewType("Password", str),
    name="Password",
    description="A strong password.",
    serialize=parse_password,
    parse_value=parse_password,
)
