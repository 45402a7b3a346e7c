"""
Utilities Package

Timestamp and ID helpers shared by the mediation layer.

The REST store keeps timestamps as ISO-8601 strings in UTC with millisecond
precision and a trailing "Z" (e.g. "2024-01-20T12:00:00.000Z").
"""

from datetime import UTC, datetime

from bookgraph.errors import InvalidArgument


def utc_timestamp(moment: datetime | None = None) -> str:
    """
    Format a moment (default: now) the way the store records timestamps.

    Example:
        >>> utc_timestamp(datetime(2024, 1, 20, 12, 0, tzinfo=UTC))
        '2024-01-20T12:00:00.000Z'
    """
    moment = moment or datetime.now(UTC)
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a stored ISO-8601 timestamp; None stays None."""
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_id(value: int | str) -> int:
    """
    Convert a GraphQL ID argument into the store's numeric record id.

    Raises:
        InvalidArgument: If the value is not a non-negative integer
    """
    text = str(value).strip()
    if not (text.isascii() and text.isdigit()):
        raise InvalidArgument(f"Invalid ID: {value!r}")
    return int(text)
