"""Authorization gate shared by every mutating entry point.

The gate is a pure function: it never touches storage and never raises.
Services call ``authorize`` before any write and turn a denial into a
``NotAuthorizedError`` through ``ensure_allowed``.
"""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID

from snack_club.domain.errors import DenyReason, NotAuthorizedError
from snack_club.domain.models import Profile


class Action(StrEnum):
    """Operations the gate knows how to classify."""

    READ_SUBSCRIPTION = "read_subscription"
    READ_REQUESTS = "read_requests"
    LIST_MEMBERS = "list_members"
    LIST_ALL_REQUESTS = "list_all_requests"
    CREATE_REQUEST = "create_request"
    TRANSITION_REQUEST = "transition_request"
    UPDATE_SUBSCRIPTION = "update_subscription"
    RECORD_PAYMENT = "record_payment"
    UPDATE_PROFILE = "update_profile"
    ADD_CATALOG_ITEM = "add_catalog_item"


@dataclass(frozen=True)
class Decision:
    """Outcome of an authorization check."""

    allowed: bool
    reason: DenyReason | None = None
    message: str | None = None

    @classmethod
    def allow(cls) -> "Decision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenyReason, message: str) -> "Decision":
        return cls(allowed=False, reason=reason, message=message)


_OWN_READS = {Action.READ_SUBSCRIPTION, Action.READ_REQUESTS}
_ADMIN_READS = {Action.LIST_MEMBERS, Action.LIST_ALL_REQUESTS}
_ADMIN_ONLY = {
    Action.TRANSITION_REQUEST,
    Action.RECORD_PAYMENT,
    Action.ADD_CATALOG_ITEM,
}

_ADMIN_MESSAGES = {
    Action.TRANSITION_REQUEST: "Only admins can update snack request statuses.",
    Action.RECORD_PAYMENT: "Only admins can record payments.",
    Action.ADD_CATALOG_ITEM: "Only admins can add snacks to the catalog.",
    Action.LIST_MEMBERS: "Only admins can view the member list.",
    Action.LIST_ALL_REQUESTS: "Only admins can view every snack request.",
    Action.READ_SUBSCRIPTION: "Only admins can view other members' subscriptions.",
    Action.READ_REQUESTS: "Only admins can view other members' requests.",
    Action.UPDATE_SUBSCRIPTION: "Only admins can modify other members' subscriptions.",
}


def authorize(actor: Profile, action: Action, target: UUID | None = None) -> Decision:
    """Decide whether ``actor`` may perform ``action`` on ``target``.

    ``target`` is the member whose data is touched; ``None`` means the actor.
    Rules are evaluated in order and same-identity targets always take the
    self-service path, admins included.
    """
    is_self = target is None or target == actor.id

    if action in _OWN_READS:
        if is_self or actor.is_admin:
            return Decision.allow()
        return _insufficient_role(action)

    if action in _ADMIN_READS or action in _ADMIN_ONLY:
        if actor.is_admin:
            return Decision.allow()
        return _insufficient_role(action)

    if action is Action.UPDATE_SUBSCRIPTION:
        if is_self or actor.is_admin:
            return Decision.allow()
        return _insufficient_role(action)

    if action is Action.UPDATE_PROFILE:
        if is_self:
            return Decision.allow()
        return Decision.deny(
            DenyReason.NOT_OWNER, "You can only update your own profile."
        )

    # Action.CREATE_REQUEST: any resolved profile may submit for itself.
    if is_self:
        return Decision.allow()
    return Decision.deny(
        DenyReason.NOT_OWNER, "You can only submit requests for yourself."
    )


def ensure_allowed(decision: Decision) -> None:
    """Raise NotAuthorizedError when the decision is a denial."""
    if decision.allowed:
        return
    raise NotAuthorizedError(
        decision.message, reason=decision.reason or DenyReason.INSUFFICIENT_ROLE
    )


def _insufficient_role(action: Action) -> Decision:
    return Decision.deny(DenyReason.INSUFFICIENT_ROLE, _ADMIN_MESSAGES[action])
