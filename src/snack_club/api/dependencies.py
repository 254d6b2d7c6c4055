"""FastAPI dependencies for sessions and resolved profiles."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends, Header, Request

from snack_club.domain.errors import NotAuthorizedError
from snack_club.domain.models import Profile  # noqa: TC001
from snack_club.domain.subscriptions import current_period, validate_period
from snack_club.services.identity import SessionContext

if TYPE_CHECKING:
    from snack_club.containers import AppContainer


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_session(authorization: str | None = Header(default=None)) -> SessionContext:
    """Build the per-request session context."""
    return SessionContext(token=bearer_token(authorization))


async def get_current_profile(
    request: Request,
    session: SessionContext = Depends(get_session),
) -> Profile:
    """Resolve the caller's profile, creating it on first sign-in."""
    container: AppContainer = request.app.state.container
    return await container.identity_resolver.resolve(session)


async def require_admin(profile: Profile = Depends(get_current_profile)) -> Profile:
    """Ensure the caller is an admin."""
    if not profile.is_admin:
        raise NotAuthorizedError("Only admins can access this area.")
    return profile


def resolve_period(period: str | None, container: AppContainer) -> str:
    """Return the requested period, or the current one when omitted."""
    if period is None or not period.strip():
        return current_period(container.settings.period_timezone)
    return validate_period(period)
