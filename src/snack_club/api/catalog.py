"""Snack catalog endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Query, Request, status

from snack_club.api.dependencies import get_current_profile
from snack_club.api.models import CatalogItemBody
from snack_club.api.serializers import serialize_catalog_item
from snack_club.domain.models import Profile  # noqa: TC001

if TYPE_CHECKING:
    from snack_club.containers import AppContainer

router = APIRouter(prefix="/snacks", tags=["catalog"])


@router.get("")
async def list_snacks(
    request: Request,
    limit: int | None = Query(default=None, ge=1, le=100),
    _profile: Profile = Depends(get_current_profile),
) -> dict[str, object]:
    """Return catalog snacks, newest first."""
    container: AppContainer = request.app.state.container
    items = container.catalog_service.list_items(limit)
    return {"data": [serialize_catalog_item(item) for item in items]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_snack(
    body: CatalogItemBody,
    request: Request,
    profile: Profile = Depends(get_current_profile),
) -> dict[str, object]:
    """Add a snack to the catalog (admins only)."""
    container: AppContainer = request.app.state.container
    item = container.catalog_service.add_item(
        profile, body.name, description=body.description, photo_url=body.photo_url
    )
    return {"data": serialize_catalog_item(item)}
