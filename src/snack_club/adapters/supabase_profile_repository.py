"""Supabase-backed profile repository."""

import logging
from dataclasses import dataclass
from uuid import UUID

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from snack_club.adapters.supabase_errors import is_unique_violation, storage_errors
from snack_club.domain.errors import StorageUnavailableError
from snack_club.domain.models import Profile, Role
from snack_club.services.identity import ProfileRepository

_logger = logging.getLogger(__name__)

_COLUMNS = "id, email, full_name, dietary_preferences, role"


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    client: Client

    def get_profile(self, profile_id: UUID) -> Profile | None:
        """Return the profile for an identity id, if present."""
        with storage_errors("load your profile"):
            response = (
                self.client.table("profiles")
                .select(_COLUMNS)
                .eq("id", str(profile_id))
                .limit(1)
                .execute()
            )
        if response.data:
            return _parse_row(response.data[0])
        return None

    def insert_or_get(self, profile: Profile) -> Profile:
        """Insert the profile; a duplicate id means another caller won, so refetch."""
        payload = {
            "id": str(profile.id),
            "email": profile.email,
            "full_name": profile.full_name,
            "dietary_preferences": profile.dietary_preferences,
            "role": profile.role.value,
        }
        data: list[dict[str, object]] = []
        try:
            response = (
                self.client.table("profiles")
                .upsert(payload, on_conflict="id", ignore_duplicates=True)
                .execute()
            )
            data = response.data or []
        except APIError as exc:
            if not is_unique_violation(exc):
                raise StorageUnavailableError(
                    "Your profile could not be created. Please try signing in again."
                ) from exc
        except httpx.HTTPError as exc:
            raise StorageUnavailableError(
                "Your profile could not be created. Please try signing in again."
            ) from exc
        if data:
            return _parse_row(data[0])

        _logger.info("Profile already existed, refetching: profile_id=%s", profile.id)
        existing = self.get_profile(profile.id)
        if existing is None:
            raise StorageUnavailableError(
                "Your profile could not be created. Please try signing in again."
            )
        return existing

    def update_profile(
        self, profile_id: UUID, full_name: str, dietary_preferences: str | None
    ) -> Profile | None:
        """Update name and dietary note."""
        with storage_errors("update your profile"):
            response = (
                self.client.table("profiles")
                .update(
                    {
                        "full_name": full_name,
                        "dietary_preferences": dietary_preferences,
                    }
                )
                .eq("id", str(profile_id))
                .execute()
            )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def list_profiles(self) -> list[Profile]:
        """Return every profile ordered by creation."""
        with storage_errors("load members"):
            response = (
                self.client.table("profiles")
                .select(_COLUMNS)
                .order("created_at", desc=False)
                .execute()
            )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> Profile:
    raw_role = row.get("role")
    role = Role.ADMIN if raw_role == Role.ADMIN.value else Role.MEMBER
    return Profile(
        id=UUID(str(row["id"])),
        email=str(row.get("email") or ""),
        full_name=row.get("full_name"),
        dietary_preferences=row.get("dietary_preferences"),
        role=role,
    )
