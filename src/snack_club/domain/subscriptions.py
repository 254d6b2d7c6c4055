"""Domain models for per-period subscription state."""

import re
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID
from zoneinfo import ZoneInfo

from snack_club.domain.errors import InvalidActionError, ValidationError

_PERIOD_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


class SubscriptionStatus(StrEnum):
    """Composite status shown on badges."""

    PENDING = "pending"
    PAID = "paid"
    PAUSED = "paused"
    CANCELED = "canceled"


class SubscriptionAction(StrEnum):
    """Transitions available on a subscription record."""

    MARK_PAID = "mark_paid"
    MARK_UNPAID = "mark_unpaid"
    PAUSE = "pause"
    CANCEL = "cancel"
    REACTIVATE = "reactivate"


SELF_SERVICE_ACTIONS = frozenset(
    {
        SubscriptionAction.PAUSE,
        SubscriptionAction.CANCEL,
        SubscriptionAction.REACTIVATE,
    }
)
PAYMENT_ACTIONS = frozenset(
    {SubscriptionAction.MARK_PAID, SubscriptionAction.MARK_UNPAID}
)


@dataclass(frozen=True)
class SubscriptionRecord:
    """Subscription state for one member in one period."""

    member_id: UUID
    period: str
    paid: bool = False
    paused: bool = False
    paused_at: datetime | None = None
    canceled: bool = False
    canceled_at: datetime | None = None
    note: str | None = None

    @classmethod
    def baseline(cls, member_id: UUID, period: str) -> "SubscriptionRecord":
        """Return the implicit record used when nothing is stored."""
        return cls(member_id=member_id, period=period)

    @property
    def status(self) -> SubscriptionStatus:
        """Return the display status, canceled first then paused then paid."""
        if self.canceled:
            return SubscriptionStatus.CANCELED
        if self.paused:
            return SubscriptionStatus.PAUSED
        if self.paid:
            return SubscriptionStatus.PAID
        return SubscriptionStatus.PENDING


def parse_action(value: str) -> SubscriptionAction:
    """Parse an action token, raising InvalidActionError when unknown."""
    try:
        return SubscriptionAction(value)
    except ValueError as exc:
        raise InvalidActionError(
            "A valid action of pause, cancel, or reactivate is required."
        ) from exc


def action_fields(action: SubscriptionAction, now: datetime) -> dict[str, object]:
    """Return the fields an action owns, keyed by record attribute."""
    match action:
        case SubscriptionAction.MARK_PAID:
            return {"paid": True}
        case SubscriptionAction.MARK_UNPAID:
            return {"paid": False}
        case SubscriptionAction.PAUSE:
            return {
                "paused": True,
                "paused_at": now,
                "canceled": False,
                "canceled_at": None,
            }
        case SubscriptionAction.CANCEL:
            return {
                "canceled": True,
                "canceled_at": now,
                "paused": False,
                "paused_at": None,
            }
        case SubscriptionAction.REACTIVATE:
            return {
                "paused": False,
                "paused_at": None,
                "canceled": False,
                "canceled_at": None,
            }


def current_period(timezone_name: str = "UTC", now: datetime | None = None) -> str:
    """Return the YYYY-MM period key for now in the given timezone."""
    moment = now or datetime.now(tz=ZoneInfo(timezone_name))
    return moment.astimezone(ZoneInfo(timezone_name)).strftime("%Y-%m")


def validate_period(period: str) -> str:
    """Return the period key if it is well formed."""
    cleaned = period.strip()
    if not _PERIOD_PATTERN.match(cleaned):
        raise ValidationError("Period must look like YYYY-MM.")
    return cleaned
