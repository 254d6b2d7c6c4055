"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from snack_club.adapters.supabase_auth_client import HttpxSupabaseAuthClient
from snack_club.adapters.supabase_catalog_repository import SupabaseCatalogRepository
from snack_club.adapters.supabase_profile_repository import SupabaseProfileRepository
from snack_club.adapters.supabase_snack_request_repository import (
    SupabaseSnackRequestRepository,
)
from snack_club.adapters.supabase_subscription_repository import (
    SupabaseSubscriptionRepository,
)
from snack_club.config import Settings
from snack_club.services.aggregation import AggregationService
from snack_club.services.catalog import CatalogService
from snack_club.services.identity import IdentityResolver
from snack_club.services.profiles import ProfileService
from snack_club.services.snack_requests import SnackRequestService
from snack_club.services.subscriptions import SubscriptionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    identity_resolver: IdentityResolver
    profile_service: ProfileService
    subscription_service: SubscriptionService
    snack_request_service: SnackRequestService
    catalog_service: CatalogService
    aggregation_service: AggregationService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_repository = SupabaseProfileRepository(supabase_client)
    subscription_repository = SupabaseSubscriptionRepository(supabase_client)
    snack_request_repository = SupabaseSnackRequestRepository(supabase_client)
    catalog_repository = SupabaseCatalogRepository(supabase_client)
    auth_client = HttpxSupabaseAuthClient.create(
        resolved_settings.supabase_url,
        resolved_settings.auth_api_key,
        timeout_seconds=resolved_settings.auth_timeout_seconds,
    )
    snack_request_service = SnackRequestService(snack_request_repository)
    aggregation_service = AggregationService(
        profile_repository=profile_repository,
        subscription_repository=subscription_repository,
        snack_request_service=snack_request_service,
        catalog_repository=catalog_repository,
    )

    async def close_resources() -> None:
        await auth_client.close()

    return AppContainer(
        settings=resolved_settings,
        identity_resolver=IdentityResolver(auth_client, profile_repository),
        profile_service=ProfileService(profile_repository),
        subscription_service=SubscriptionService(subscription_repository),
        snack_request_service=snack_request_service,
        catalog_service=CatalogService(catalog_repository),
        aggregation_service=aggregation_service,
        close_resources=close_resources,
    )
