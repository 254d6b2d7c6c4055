"""Subscription status endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, Request

from snack_club.api.dependencies import get_current_profile, resolve_period
from snack_club.api.models import SubscriptionStatusBody
from snack_club.api.serializers import serialize_record
from snack_club.domain.models import Profile  # noqa: TC001

if TYPE_CHECKING:
    from snack_club.containers import AppContainer

router = APIRouter(prefix="/subscription-status", tags=["subscriptions"])


@router.get("")
async def get_subscription_status(
    request: Request,
    user_id: UUID | None = Query(default=None, alias="userId"),
    period: str | None = None,
    profile: Profile = Depends(get_current_profile),
) -> dict[str, object]:
    """Return a member's record for a period; defaults to the caller and now."""
    container: AppContainer = request.app.state.container
    record = container.subscription_service.get_record(
        profile, user_id or profile.id, resolve_period(period, container)
    )
    return {"data": serialize_record(record)}


@router.patch("")
async def update_subscription_status(
    body: SubscriptionStatusBody,
    request: Request,
    profile: Profile = Depends(get_current_profile),
) -> dict[str, object]:
    """Pause, cancel or reactivate the current period's subscription."""
    container: AppContainer = request.app.state.container
    record = container.subscription_service.apply_self_service(
        profile,
        body.user_id or profile.id,
        resolve_period(None, container),
        body.action,
    )
    return {"data": serialize_record(record)}
