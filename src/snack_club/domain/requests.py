"""Domain models for member snack requests."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID

MAX_SNACK_NAME_LENGTH = 120
MAX_TEXT_FIELD_LENGTH = 500


class SnackRequestStatus(StrEnum):
    """Triage status of a snack request."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    FULFILLED = "fulfilled"
    DECLINED = "declined"

    @property
    def label(self) -> str:
        """Human readable label used by admin views."""
        return _LABELS[self]


_LABELS = {
    SnackRequestStatus.PENDING: "Pending review",
    SnackRequestStatus.ACCEPTED: "Accepted",
    SnackRequestStatus.FULFILLED: "Fulfilled",
    SnackRequestStatus.DECLINED: "Declined",
}

ALLOWED_TRANSITIONS: dict[SnackRequestStatus, frozenset[SnackRequestStatus]] = {
    SnackRequestStatus.PENDING: frozenset(
        {
            SnackRequestStatus.ACCEPTED,
            SnackRequestStatus.FULFILLED,
            SnackRequestStatus.DECLINED,
        }
    ),
    SnackRequestStatus.ACCEPTED: frozenset(
        {
            SnackRequestStatus.FULFILLED,
            SnackRequestStatus.PENDING,
            SnackRequestStatus.DECLINED,
        }
    ),
    SnackRequestStatus.FULFILLED: frozenset({SnackRequestStatus.PENDING}),
    SnackRequestStatus.DECLINED: frozenset({SnackRequestStatus.PENDING}),
}


@dataclass(frozen=True)
class Requester:
    """Requester contact details joined from the profile."""

    full_name: str | None
    email: str | None


@dataclass(frozen=True)
class SnackRequest:
    """A member's request to add a snack to the catalog."""

    id: UUID
    requester_id: UUID
    snack_name: str
    details: str | None
    source: str | None
    status: SnackRequestStatus
    created_at: datetime
    updated_at: datetime
    requester: Requester | None = None


def can_transition(current: SnackRequestStatus, target: SnackRequestStatus) -> bool:
    """Return True when the transition table allows current -> target."""
    return target in ALLOWED_TRANSITIONS[current]


def parse_status(value: str) -> SnackRequestStatus | None:
    """Return the status for a wire value, or None when unknown."""
    try:
        return SnackRequestStatus(value.strip())
    except ValueError:
        return None


def parse_status_filter(values: Iterable[str] | None) -> set[SnackRequestStatus]:
    """Parse a status filter, dropping unrecognized values."""
    statuses: set[SnackRequestStatus] = set()
    for value in values or []:
        status = parse_status(value)
        if status is not None:
            statuses.add(status)
    return statuses
