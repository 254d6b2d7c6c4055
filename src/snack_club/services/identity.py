"""Identity resolution and first sign-in profile bootstrap."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Generic, Protocol, TypeVar
from uuid import UUID

from snack_club.adapters.supabase_auth_client import AuthClient
from snack_club.domain.errors import UnauthenticatedError
from snack_club.domain.models import Identity, PendingRegistration, Profile, Role

_logger = logging.getLogger(__name__)

FALLBACK_DISPLAY_NAME = "Snack Lover"

T = TypeVar("T")


class ProfileRepository(Protocol):
    """Persistence interface for member profiles."""

    def get_profile(self, profile_id: UUID) -> Profile | None:
        """Return the profile for an identity id, if present."""

    def insert_or_get(self, profile: Profile) -> Profile:
        """Insert the profile, or return the row already stored for its id."""

    def update_profile(
        self, profile_id: UUID, full_name: str, dietary_preferences: str | None
    ) -> Profile | None:
        """Update name and note for a profile and return it."""

    def list_profiles(self) -> list[Profile]:
        """Return every profile."""


@dataclass
class SessionContext:
    """Per-call session state passed explicitly to the resolver."""

    token: str | None
    pending: PendingRegistration | None = None
    profile: Profile | None = None


class SingleFlight(Generic[T]):
    """Share one in-flight task per key between concurrent callers."""

    def __init__(self) -> None:
        self._tasks: dict[object, asyncio.Task[T]] = {}

    async def run(self, key: object, func: Callable[[], Awaitable[T]]) -> T:
        """Run ``func`` for ``key`` unless a run is already in flight, then await it."""
        task = self._tasks.get(key)
        if task is None:
            task = asyncio.ensure_future(func())
            self._tasks[key] = task
            task.add_done_callback(lambda done: self._forget(key, done))
        # A caller that gives up must not cancel the run other callers await.
        return await asyncio.shield(task)

    def in_flight(self, key: object) -> bool:
        """Return True while a run for ``key`` has not finished."""
        return key in self._tasks

    def _forget(self, key: object, done: "asyncio.Task[T]") -> None:
        if self._tasks.get(key) is done:
            del self._tasks[key]


@dataclass
class IdentityResolver:
    """Resolve a session to a profile, creating the profile exactly once."""

    auth_client: AuthClient
    repository: ProfileRepository
    inflight: SingleFlight[Profile] = field(default_factory=SingleFlight)

    async def resolve(self, session: SessionContext) -> Profile:
        """Return the caller's profile, bootstrapping it on first sign-in."""
        if session.profile is not None:
            return session.profile
        if not session.token:
            raise UnauthenticatedError("You must be signed in.")

        identity = await self.auth_client.get_user(session.token)
        if identity is None:
            raise UnauthenticatedError(
                "We couldn't verify your session. Please sign in again."
            )

        profile = await self.inflight.run(
            identity.id, lambda: self._load_or_create(identity, session.pending)
        )
        session.profile = profile
        return profile

    async def _load_or_create(
        self, identity: Identity, pending: PendingRegistration | None
    ) -> Profile:
        existing = self.repository.get_profile(identity.id)
        if existing is not None:
            return existing

        draft = build_default_profile(identity, pending)
        profile = self.repository.insert_or_get(draft)
        _logger.info("Bootstrapped profile: profile_id=%s", profile.id)
        return profile


def build_default_profile(
    identity: Identity, pending: PendingRegistration | None
) -> Profile:
    """Build the profile stored for an identity on first sign-in."""
    return Profile(
        id=identity.id,
        email=identity.email or "",
        full_name=_default_name(identity, pending),
        dietary_preferences=_default_dietary(identity, pending),
        role=Role.MEMBER,
    )


def _default_name(identity: Identity, pending: PendingRegistration | None) -> str:
    candidates = [
        pending.full_name if pending else None,
        identity.metadata.get("full_name"),
        identity.email.split("@")[0] if identity.email else None,
    ]
    for candidate in candidates:
        if isinstance(candidate, str) and candidate.strip():
            return candidate.strip()
    return FALLBACK_DISPLAY_NAME


def _default_dietary(
    identity: Identity, pending: PendingRegistration | None
) -> str | None:
    if pending and pending.dietary_preferences is not None:
        return pending.dietary_preferences.strip() or None
    value = identity.metadata.get("dietary_preferences")
    if value is None:
        return None
    return str(value).strip() or None
