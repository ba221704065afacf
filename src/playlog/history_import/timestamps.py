"""Timestamp parsing and canonical UTC rendering for export records."""

from datetime import UTC, datetime

CANONICAL_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def to_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime truncated to whole seconds.

    Naive datetimes are taken to already be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).replace(microsecond=0)


def _parse_utc(value: object) -> datetime | None:
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return to_utc(datetime.fromisoformat(value.strip().replace("Z", "+00:00")))
    except (ValueError, OverflowError):
        # OverflowError: offset pushes the instant outside year 1..9999
        return None


def parse_absolute_timestamp(value: object) -> datetime | None:
    """Parse an ISO 8601 instant such as ``2023-01-15T10:30:00Z``.

    Returns None for non-strings and unparseable text.
    """
    return _parse_utc(value)


def parse_local_end_time(value: object) -> datetime | None:
    """Parse a wall-clock end time such as ``2023-01-15 10:30``.

    The value carries no zone, and is read as if it were UTC.
    """
    return _parse_utc(value)


def format_utc(value: datetime) -> str:
    """Render a datetime in the stored form, e.g. ``2024-01-15T10:00:00Z``."""
    return to_utc(value).strftime(CANONICAL_FORMAT)


def canonical_timestamp(value: str) -> str:
    """Normalize user-supplied timestamp text to the stored form.

    Raises ValueError if ``value`` is not an ISO 8601 date or datetime.
    """
    parsed = parse_absolute_timestamp(value)
    if parsed is None:
        raise ValueError(f"Invalid timestamp: {value!r}")
    return format_utc(parsed)
