"""Snack request endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, Request, status

from snack_club.api.dependencies import get_current_profile
from snack_club.api.models import CreateSnackRequestBody, UpdateSnackRequestBody
from snack_club.api.serializers import serialize_request, serialize_viewer
from snack_club.domain.models import Profile  # noqa: TC001

if TYPE_CHECKING:
    from snack_club.containers import AppContainer

router = APIRouter(prefix="/snack-requests", tags=["snack-requests"])


def split_status_query(raw: str | None) -> list[str]:
    """Split a comma-separated ``status`` query value."""
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


@router.get("")
async def list_snack_requests(
    request: Request,
    status_query: str | None = Query(default=None, alias="status"),
    profile: Profile = Depends(get_current_profile),
) -> dict[str, object]:
    """List requests visible to the caller."""
    container: AppContainer = request.app.state.container
    requests = container.snack_request_service.list_requests(
        profile, split_status_query(status_query)
    )
    return {
        "data": [serialize_request(item) for item in requests],
        "viewer": serialize_viewer(profile),
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_snack_request(
    body: CreateSnackRequestBody,
    request: Request,
    profile: Profile = Depends(get_current_profile),
) -> dict[str, object]:
    """Submit a new snack request."""
    container: AppContainer = request.app.state.container
    created = container.snack_request_service.create(
        profile, body.snack_name, details=body.details, source=body.source
    )
    return {"data": serialize_request(created)}


@router.patch("/{request_id}")
async def update_snack_request(
    request_id: UUID,
    body: UpdateSnackRequestBody,
    request: Request,
    profile: Profile = Depends(get_current_profile),
) -> dict[str, object]:
    """Move a request to a new triage status (admins only)."""
    container: AppContainer = request.app.state.container
    updated = container.snack_request_service.transition(
        profile, request_id, body.status
    )
    return {"data": serialize_request(updated)}
