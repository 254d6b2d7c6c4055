"""Tests for HTTP-based adapters."""

import asyncio
from uuid import uuid4

import httpx
import pytest

from snack_club.adapters.supabase_auth_client import HttpxSupabaseAuthClient
from snack_club.domain.errors import StorageUnavailableError


def _client(handler) -> HttpxSupabaseAuthClient:  # type: ignore[no-untyped-def]
    transport = httpx.MockTransport(handler)
    return HttpxSupabaseAuthClient(
        base_url="https://example.supabase.co",
        api_key="anon-key",
        http_client=httpx.AsyncClient(transport=transport),
    )


def test_auth_client_returns_identity() -> None:
    user_id = uuid4()

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/auth/v1/user"
        assert request.headers["apikey"] == "anon-key"
        assert request.headers["Authorization"] == "Bearer session-token"
        return httpx.Response(
            200,
            json={
                "id": str(user_id),
                "email": "kiwi@example.com",
                "user_metadata": {"full_name": "Kiwi"},
            },
        )

    client = _client(handler)
    identity = asyncio.run(client.get_user("session-token"))

    assert identity is not None
    assert identity.id == user_id
    assert identity.metadata == {"full_name": "Kiwi"}


def test_auth_client_rejected_token_returns_none() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"msg": "invalid JWT"})

    assert asyncio.run(_client(handler).get_user("expired")) is None


def test_auth_client_server_error_is_storage_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={})

    with pytest.raises(StorageUnavailableError):
        asyncio.run(_client(handler).get_user("token"))


def test_auth_client_transport_error_is_storage_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("down", request=request)

    with pytest.raises(StorageUnavailableError):
        asyncio.run(_client(handler).get_user("token"))


def test_auth_client_create_and_close() -> None:
    client = HttpxSupabaseAuthClient.create(
        "https://example.supabase.co/", "key", timeout_seconds=3
    )

    assert client.base_url == "https://example.supabase.co"
    assert client.timeout_seconds == 3
    asyncio.run(client.close())
