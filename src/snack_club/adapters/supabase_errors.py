"""Translate Supabase client failures into domain errors."""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime

import httpx
from postgrest.exceptions import APIError

from snack_club.domain.errors import StorageUnavailableError

UNIQUE_VIOLATION = "23505"
EARLIEST = datetime.min.replace(tzinfo=UTC)


@contextmanager
def storage_errors(action: str) -> Iterator[None]:
    """Re-raise PostgREST and transport errors as StorageUnavailableError."""
    try:
        yield
    except (APIError, httpx.HTTPError) as exc:
        raise StorageUnavailableError(f"We couldn't {action} right now.") from exc


def is_unique_violation(exc: APIError) -> bool:
    """Return True when the error is a Postgres duplicate-key violation."""
    return str(getattr(exc, "code", "")) == UNIQUE_VIOLATION


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO timestamp column, returning None when empty."""
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None


def format_timestamp(value: datetime | None) -> str | None:
    """Format a timestamp for a PostgREST payload."""
    return value.isoformat() if value else None
