"""Snack request triage state machine."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from snack_club.domain.errors import (
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from snack_club.domain.models import Profile
from snack_club.domain.requests import (
    MAX_SNACK_NAME_LENGTH,
    MAX_TEXT_FIELD_LENGTH,
    SnackRequest,
    SnackRequestStatus,
    can_transition,
    parse_status,
    parse_status_filter,
)
from snack_club.services.authorization import Action, authorize, ensure_allowed

_logger = logging.getLogger(__name__)

_MIN_TICK = timedelta(microseconds=1)


class SnackRequestRepository(Protocol):
    """Persistence interface for snack requests."""

    def create_request(  # noqa: PLR0913
        self,
        requester_id: UUID,
        snack_name: str,
        details: str | None,
        source: str | None,
        status: SnackRequestStatus,
    ) -> SnackRequest:
        """Create a request and return it."""

    def get_request(self, request_id: UUID) -> SnackRequest | None:
        """Return a request by id, if present."""

    def list_requests(
        self,
        requester_id: UUID | None,
        statuses: set[SnackRequestStatus],
    ) -> list[SnackRequest]:
        """Return requests newest first, optionally narrowed by owner and status."""

    def update_status(
        self,
        request_id: UUID,
        expected: SnackRequestStatus,
        status: SnackRequestStatus,
        updated_at: datetime,
    ) -> SnackRequest | None:
        """Set the status if it still equals ``expected``; None when no row matched."""


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class SnackRequestService:
    """Create, list and triage snack requests."""

    repository: SnackRequestRepository
    clock: Callable[[], datetime] = field(default=_utcnow)

    def create(
        self,
        actor: Profile,
        snack_name: str,
        details: str | None = None,
        source: str | None = None,
    ) -> SnackRequest:
        """Validate and store a new pending request for the actor."""
        ensure_allowed(authorize(actor, Action.CREATE_REQUEST, actor.id))
        name = (snack_name or "").strip()
        if not name:
            raise ValidationError("Please share the snack name before submitting.")
        if len(name) > MAX_SNACK_NAME_LENGTH:
            raise ValidationError(
                f"Snack names can be at most {MAX_SNACK_NAME_LENGTH} characters."
            )
        request = self.repository.create_request(
            requester_id=actor.id,
            snack_name=name,
            details=_clean_text(details),
            source=_clean_text(source),
            status=SnackRequestStatus.PENDING,
        )
        _logger.info(
            "Snack request created: request_id=%s requester_id=%s",
            request.id,
            actor.id,
        )
        return request

    def list_requests(
        self, actor: Profile, status_filter: Iterable[str] | None = None
    ) -> list[SnackRequest]:
        """List requests; members only ever see their own."""
        statuses = parse_status_filter(status_filter)
        if actor.is_admin:
            ensure_allowed(authorize(actor, Action.LIST_ALL_REQUESTS))
            return self.repository.list_requests(None, statuses)
        ensure_allowed(authorize(actor, Action.READ_REQUESTS, actor.id))
        return self.repository.list_requests(actor.id, statuses)

    def transition(
        self, actor: Profile, request_id: UUID, next_status: str | SnackRequestStatus
    ) -> SnackRequest:
        """Move a request along the triage table."""
        ensure_allowed(authorize(actor, Action.TRANSITION_REQUEST))
        target = (
            next_status
            if isinstance(next_status, SnackRequestStatus)
            else parse_status(next_status)
        )
        if target is None:
            raise InvalidTransitionError(
                "Status must be one of: pending, accepted, fulfilled, or declined."
            )

        current = self.repository.get_request(request_id)
        if current is None:
            raise NotFoundError("That snack request could not be found.")
        if not can_transition(current.status, target):
            raise InvalidTransitionError(
                f"A {current.status.value} request can't move to {target.value}."
            )

        updated_at = max(self.clock(), current.updated_at + _MIN_TICK)
        updated = self.repository.update_status(
            request_id, current.status, target, updated_at
        )
        if updated is None:
            if self.repository.get_request(request_id) is None:
                raise NotFoundError("That snack request could not be found.")
            raise InvalidTransitionError(
                "That request was updated by someone else. Refresh and try again."
            )
        _logger.info(
            "Snack request %s -> %s: request_id=%s actor_id=%s",
            current.status.value,
            target.value,
            request_id,
            actor.id,
        )
        return updated


def _clean_text(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip()[:MAX_TEXT_FIELD_LENGTH] or None
