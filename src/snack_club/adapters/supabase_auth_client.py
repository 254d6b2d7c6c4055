"""Supabase Auth (GoTrue) client adapter."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

import httpx

from snack_club.domain.errors import StorageUnavailableError
from snack_club.domain.models import Identity

_REJECTED_STATUSES = {401, 403, 404}


class AuthClient(Protocol):
    """Interface for validating session tokens."""

    async def get_user(self, access_token: str) -> Identity | None:
        """Return the identity for a session token, or None when invalid."""


@dataclass
class HttpxSupabaseAuthClient(AuthClient):
    """Auth client backed by the GoTrue REST API."""

    base_url: str
    api_key: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 10

    @classmethod
    def create(
        cls, supabase_url: str, api_key: str, timeout_seconds: float = 10
    ) -> "HttpxSupabaseAuthClient":
        """Create an auth client with a managed httpx session."""
        return cls(
            base_url=supabase_url.rstrip("/"),
            api_key=api_key,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def get_user(self, access_token: str) -> Identity | None:
        """Validate the token with GoTrue's /user endpoint."""
        url = f"{self.base_url}/auth/v1/user"
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {access_token}",
        }
        try:
            response = await self.http_client.get(
                url, headers=headers, timeout=self.timeout_seconds
            )
        except httpx.HTTPError as exc:
            raise StorageUnavailableError(
                "We couldn't verify your session right now."
            ) from exc
        if response.status_code in _REJECTED_STATUSES:
            return None
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise StorageUnavailableError(
                "We couldn't verify your session right now."
            ) from exc
        payload = response.json()
        raw_id = payload.get("id")
        if not raw_id:
            return None
        metadata = payload.get("user_metadata")
        return Identity(
            id=UUID(raw_id),
            email=payload.get("email"),
            metadata=metadata if isinstance(metadata, dict) else {},
        )

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()
