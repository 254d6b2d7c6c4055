"""Member-facing profile and dashboard endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from snack_club.api.dependencies import (
    get_current_profile,
    get_session,
    resolve_period,
)
from snack_club.api.models import PendingRegistrationBody, ProfileUpdateBody
from snack_club.api.serializers import serialize_dashboard, serialize_profile
from snack_club.domain.models import PendingRegistration, Profile
from snack_club.services.identity import SessionContext  # noqa: TC001

if TYPE_CHECKING:
    from snack_club.containers import AppContainer

router = APIRouter(tags=["member"])


@router.post("/auth/bootstrap")
async def bootstrap_profile(
    body: PendingRegistrationBody,
    request: Request,
    session: SessionContext = Depends(get_session),
) -> dict[str, object]:
    """Resolve the session, creating the profile from sign-up details if absent."""
    container: AppContainer = request.app.state.container
    session.pending = PendingRegistration(
        full_name=body.full_name,
        dietary_preferences=body.dietary_preferences,
    )
    profile = await container.identity_resolver.resolve(session)
    return {"data": serialize_profile(profile)}


@router.get("/me")
async def get_me(profile: Profile = Depends(get_current_profile)) -> dict[str, object]:
    """Return the caller's profile."""
    return {"data": serialize_profile(profile)}


@router.patch("/me")
async def update_me(
    body: ProfileUpdateBody,
    request: Request,
    profile: Profile = Depends(get_current_profile),
) -> dict[str, object]:
    """Update the caller's name and dietary note."""
    container: AppContainer = request.app.state.container
    updated = container.profile_service.update_profile(
        profile, body.full_name, body.dietary_preferences
    )
    return {"data": serialize_profile(updated)}


@router.get("/dashboard")
async def dashboard(
    request: Request,
    period: str | None = None,
    profile: Profile = Depends(get_current_profile),
) -> dict[str, object]:
    """Return the caller's subscription status and the newest snacks."""
    container: AppContainer = request.app.state.container
    view = container.aggregation_service.member_dashboard(
        profile, resolve_period(period, container)
    )
    return {"data": serialize_dashboard(view)}
