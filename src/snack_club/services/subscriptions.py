"""Subscription state machine for per-period payment and pause state."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from snack_club.domain.errors import InvalidActionError
from snack_club.domain.models import Profile
from snack_club.domain.subscriptions import (
    PAYMENT_ACTIONS,
    SELF_SERVICE_ACTIONS,
    SubscriptionAction,
    SubscriptionRecord,
    action_fields,
    parse_action,
    validate_period,
)
from snack_club.services.authorization import Action, authorize, ensure_allowed

_logger = logging.getLogger(__name__)

ADMIN_PAYMENT_NOTE = "Marked by admin"
ADMIN_UPDATE_NOTE = "Updated by admin"


class SubscriptionRepository(Protocol):
    """Persistence interface for subscription records."""

    def get_record(self, member_id: UUID, period: str) -> SubscriptionRecord | None:
        """Return the stored record for a member and period, if present."""

    def list_records(self, period: str) -> list[SubscriptionRecord]:
        """Return every stored record for a period."""

    def upsert_fields(
        self, member_id: UUID, period: str, fields: dict[str, object]
    ) -> SubscriptionRecord:
        """Atomically insert or update the given fields on (member, period)."""


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class SubscriptionService:
    """Applies subscription actions after consulting the authorization gate."""

    repository: SubscriptionRepository
    clock: Callable[[], datetime] = field(default=_utcnow)

    def get_record(
        self, actor: Profile, member_id: UUID, period: str
    ) -> SubscriptionRecord:
        """Return a member's record, or the baseline when nothing is stored."""
        ensure_allowed(authorize(actor, Action.READ_SUBSCRIPTION, member_id))
        period = validate_period(period)
        stored = self.repository.get_record(member_id, period)
        return stored or SubscriptionRecord.baseline(member_id, period)

    def apply(
        self,
        actor: Profile,
        member_id: UUID,
        period: str,
        action: str | SubscriptionAction,
        note: str | None = None,
    ) -> SubscriptionRecord:
        """Apply a subscription action as a single upsert."""
        parsed = (
            action if isinstance(action, SubscriptionAction) else parse_action(action)
        )
        gate_action = (
            Action.RECORD_PAYMENT
            if parsed in PAYMENT_ACTIONS
            else Action.UPDATE_SUBSCRIPTION
        )
        ensure_allowed(authorize(actor, gate_action, member_id))
        period = validate_period(period)

        fields = action_fields(parsed, self.clock())
        if parsed is SubscriptionAction.MARK_PAID:
            fields["note"] = note or ADMIN_PAYMENT_NOTE
        elif note is not None:
            fields["note"] = note
        elif parsed not in PAYMENT_ACTIONS and actor.id != member_id:
            existing = self.repository.get_record(member_id, period)
            if existing is None or existing.note is None:
                fields["note"] = ADMIN_UPDATE_NOTE

        record = self.repository.upsert_fields(member_id, period, fields)
        _logger.info(
            "Subscription %s: member_id=%s period=%s actor_id=%s",
            parsed.value,
            member_id,
            period,
            actor.id,
        )
        return record

    def apply_self_service(
        self,
        actor: Profile,
        member_id: UUID,
        period: str,
        action: str,
    ) -> SubscriptionRecord:
        """Apply pause, cancel or reactivate; payment actions are rejected."""
        parsed = parse_action(action)
        if parsed not in SELF_SERVICE_ACTIONS:
            raise InvalidActionError(
                "A valid action of pause, cancel, or reactivate is required."
            )
        return self.apply(actor, member_id, period, parsed)

    def mark_paid(
        self, actor: Profile, member_id: UUID, period: str, note: str | None = None
    ) -> SubscriptionRecord:
        """Record that a member paid for the period."""
        return self.apply(actor, member_id, period, SubscriptionAction.MARK_PAID, note)

    def mark_unpaid(
        self, actor: Profile, member_id: UUID, period: str, note: str | None = None
    ) -> SubscriptionRecord:
        """Clear the paid flag for the period."""
        return self.apply(
            actor, member_id, period, SubscriptionAction.MARK_UNPAID, note
        )

    def pause(self, actor: Profile, member_id: UUID, period: str) -> SubscriptionRecord:
        """Pause the subscription, clearing any cancellation."""
        return self.apply(actor, member_id, period, SubscriptionAction.PAUSE)

    def cancel(
        self, actor: Profile, member_id: UUID, period: str
    ) -> SubscriptionRecord:
        """Cancel the subscription, clearing any pause."""
        return self.apply(actor, member_id, period, SubscriptionAction.CANCEL)

    def reactivate(
        self, actor: Profile, member_id: UUID, period: str
    ) -> SubscriptionRecord:
        """Clear pause and cancellation without touching payment."""
        return self.apply(actor, member_id, period, SubscriptionAction.REACTIVATE)
