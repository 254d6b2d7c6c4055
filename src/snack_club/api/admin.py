"""Admin API endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, Request

from snack_club.api.dependencies import require_admin, resolve_period
from snack_club.api.models import PaymentBody
from snack_club.api.serializers import (
    serialize_record,
    serialize_request,
    serialize_summary,
)
from snack_club.api.snack_requests import split_status_query
from snack_club.domain.models import Profile  # noqa: TC001

if TYPE_CHECKING:
    from snack_club.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/summary")
async def admin_summary(
    request: Request,
    period: str | None = None,
    admin: Profile = Depends(require_admin),
) -> dict[str, object]:
    """Return payment totals and member statuses for a period."""
    container: AppContainer = request.app.state.container
    summary = container.aggregation_service.admin_summary(
        admin, resolve_period(period, container)
    )
    return {"data": serialize_summary(summary)}


@router.get("/snack-requests")
async def admin_snack_requests(
    request: Request,
    status_query: str | None = Query(default=None, alias="status"),
    admin: Profile = Depends(require_admin),
) -> dict[str, object]:
    """Return every snack request, optionally filtered by status."""
    container: AppContainer = request.app.state.container
    requests = container.aggregation_service.admin_request_view(
        admin, split_status_query(status_query)
    )
    return {"data": [serialize_request(item) for item in requests]}


@router.put("/members/{member_id}/payment")
async def record_payment(
    member_id: UUID,
    body: PaymentBody,
    request: Request,
    admin: Profile = Depends(require_admin),
) -> dict[str, object]:
    """Mark a member paid or unpaid for a period."""
    container: AppContainer = request.app.state.container
    period = resolve_period(body.period, container)
    service = container.subscription_service
    if body.paid:
        record = service.mark_paid(admin, member_id, period, note=body.note)
    else:
        record = service.mark_unpaid(admin, member_id, period, note=body.note)
    return {"data": serialize_record(record)}
