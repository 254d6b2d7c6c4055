"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from snack_club.adapters.supabase_auth_client import AuthClient
from snack_club.config import Settings
from snack_club.containers import AppContainer
from snack_club.domain.catalog import CatalogItem
from snack_club.domain.models import Identity, Profile, Role
from snack_club.domain.requests import Requester, SnackRequest, SnackRequestStatus
from snack_club.domain.subscriptions import SubscriptionRecord
from snack_club.services.aggregation import AggregationService
from snack_club.services.catalog import CatalogRepository, CatalogService
from snack_club.services.identity import IdentityResolver, ProfileRepository
from snack_club.services.profiles import ProfileService
from snack_club.services.snack_requests import (
    SnackRequestRepository,
    SnackRequestService,
)
from snack_club.services.subscriptions import (
    SubscriptionRepository,
    SubscriptionService,
)

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
MEMBER_TOKEN = "member-token"
ADMIN_TOKEN = "admin-token"


def make_profile(
    role: Role = Role.MEMBER,
    full_name: str | None = "Mochi Fan",
    email: str = "member@example.com",
    profile_id: UUID | None = None,
) -> Profile:
    return Profile(
        id=profile_id or uuid4(),
        email=email,
        full_name=full_name,
        dietary_preferences=None,
        role=role,
    )


@dataclass
class Clock:
    """Deterministic clock that can be pinned or advanced."""

    now: datetime = BASE_TIME

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, Profile] = field(default_factory=dict)
    insert_calls: int = 0
    rows_created: int = 0

    def add(self, profile: Profile) -> Profile:
        self.profiles[profile.id] = profile
        return profile

    def get_profile(self, profile_id: UUID) -> Profile | None:
        return self.profiles.get(profile_id)

    def insert_or_get(self, profile: Profile) -> Profile:
        self.insert_calls += 1
        existing = self.profiles.get(profile.id)
        if existing is not None:
            return existing
        self.profiles[profile.id] = profile
        self.rows_created += 1
        return profile

    def update_profile(
        self, profile_id: UUID, full_name: str, dietary_preferences: str | None
    ) -> Profile | None:
        existing = self.profiles.get(profile_id)
        if existing is None:
            return None
        updated = replace(
            existing, full_name=full_name, dietary_preferences=dietary_preferences
        )
        self.profiles[profile_id] = updated
        return updated

    def list_profiles(self) -> list[Profile]:
        return list(self.profiles.values())


@dataclass
class InMemorySubscriptionRepository(SubscriptionRepository):
    """In-memory record store with partial-field upserts."""

    records: dict[tuple[UUID, str], SubscriptionRecord] = field(default_factory=dict)
    upserts: list[dict[str, object]] = field(default_factory=list)

    def get_record(self, member_id: UUID, period: str) -> SubscriptionRecord | None:
        return self.records.get((member_id, period))

    def list_records(self, period: str) -> list[SubscriptionRecord]:
        return [record for record in self.records.values() if record.period == period]

    def upsert_fields(
        self, member_id: UUID, period: str, fields: dict[str, object]
    ) -> SubscriptionRecord:
        self.upserts.append(dict(fields))
        current = self.records.get(
            (member_id, period)
        ) or SubscriptionRecord.baseline(member_id, period)
        updated = replace(current, **fields)
        self.records[(member_id, period)] = updated
        return updated


@dataclass
class InMemorySnackRequestRepository(SnackRequestRepository):
    """In-memory snack requests with a conditional status update."""

    requests: dict[UUID, SnackRequest] = field(default_factory=dict)
    profiles: InMemoryProfileRepository | None = None
    clock: Clock = field(default_factory=Clock)

    def create_request(  # noqa: PLR0913
        self,
        requester_id: UUID,
        snack_name: str,
        details: str | None,
        source: str | None,
        status: SnackRequestStatus,
    ) -> SnackRequest:
        self.clock.advance(1)
        request = SnackRequest(
            id=uuid4(),
            requester_id=requester_id,
            snack_name=snack_name,
            details=details,
            source=source,
            status=status,
            created_at=self.clock.now,
            updated_at=self.clock.now,
        )
        self.requests[request.id] = request
        return request

    def get_request(self, request_id: UUID) -> SnackRequest | None:
        request = self.requests.get(request_id)
        return self._with_requester(request) if request else None

    def list_requests(
        self,
        requester_id: UUID | None,
        statuses: set[SnackRequestStatus],
    ) -> list[SnackRequest]:
        rows = [
            request
            for request in self.requests.values()
            if (requester_id is None or request.requester_id == requester_id)
            and (not statuses or request.status in statuses)
        ]
        rows.sort(key=lambda request: request.created_at, reverse=True)
        return [self._with_requester(request) for request in rows]

    def update_status(
        self,
        request_id: UUID,
        expected: SnackRequestStatus,
        status: SnackRequestStatus,
        updated_at: datetime,
    ) -> SnackRequest | None:
        current = self.requests.get(request_id)
        if current is None or current.status is not expected:
            return None
        updated = replace(current, status=status, updated_at=updated_at)
        self.requests[request_id] = updated
        return self._with_requester(updated)

    def _with_requester(self, request: SnackRequest) -> SnackRequest:
        if self.profiles is None:
            return request
        profile = self.profiles.get_profile(request.requester_id)
        if profile is None:
            return request
        return replace(
            request,
            requester=Requester(full_name=profile.full_name, email=profile.email),
        )


@dataclass
class InMemoryCatalogRepository(CatalogRepository):
    """In-memory catalog for tests."""

    items: list[CatalogItem] = field(default_factory=list)
    clock: Clock = field(default_factory=Clock)

    def create_item(
        self, name: str, description: str | None, photo_url: str | None
    ) -> CatalogItem:
        self.clock.advance(1)
        item = CatalogItem(
            id=uuid4(),
            name=name,
            description=description,
            photo_url=photo_url,
            created_at=self.clock.now,
        )
        self.items.append(item)
        return item

    def list_items(self, limit: int | None) -> list[CatalogItem]:
        ordered = sorted(self.items, key=lambda item: item.created_at, reverse=True)
        return ordered if limit is None else ordered[:limit]


@dataclass
class FakeAuthClient(AuthClient):
    """Maps session tokens to identities and counts lookups."""

    identities: dict[str, Identity] = field(default_factory=dict)
    calls: int = 0

    async def get_user(self, access_token: str) -> Identity | None:
        self.calls += 1
        await asyncio.sleep(0)
        return self.identities.get(access_token)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiJ9.eyJyb2xlIjoic2VydmljZV9yb2xlIn0.signature"
        ),
        environment="test",
    )


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def subscription_repository() -> InMemorySubscriptionRepository:
    return InMemorySubscriptionRepository()


@pytest.fixture
def snack_request_repository(
    profile_repository: InMemoryProfileRepository,
) -> InMemorySnackRequestRepository:
    return InMemorySnackRequestRepository(profiles=profile_repository)


@pytest.fixture
def catalog_repository() -> InMemoryCatalogRepository:
    return InMemoryCatalogRepository()


@pytest.fixture
def auth_client() -> FakeAuthClient:
    return FakeAuthClient()


@pytest.fixture
def member(profile_repository: InMemoryProfileRepository) -> Profile:
    return profile_repository.add(make_profile())


@pytest.fixture
def admin(profile_repository: InMemoryProfileRepository) -> Profile:
    return profile_repository.add(
        make_profile(role=Role.ADMIN, full_name="Club Admin", email="admin@example.com")
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    clock: Clock,
    auth_client: FakeAuthClient,
    profile_repository: InMemoryProfileRepository,
    subscription_repository: InMemorySubscriptionRepository,
    snack_request_repository: InMemorySnackRequestRepository,
    catalog_repository: InMemoryCatalogRepository,
) -> AppContainer:
    snack_request_service = SnackRequestService(snack_request_repository, clock=clock)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        identity_resolver=IdentityResolver(auth_client, profile_repository),
        profile_service=ProfileService(profile_repository),
        subscription_service=SubscriptionService(subscription_repository, clock=clock),
        snack_request_service=snack_request_service,
        catalog_service=CatalogService(catalog_repository),
        aggregation_service=AggregationService(
            profile_repository=profile_repository,
            subscription_repository=subscription_repository,
            snack_request_service=snack_request_service,
            catalog_repository=catalog_repository,
        ),
        close_resources=close_resources,
    )


@pytest.fixture
def member_headers(auth_client: FakeAuthClient, member: Profile) -> dict[str, str]:
    auth_client.identities[MEMBER_TOKEN] = Identity(id=member.id, email=member.email)
    return {"Authorization": f"Bearer {MEMBER_TOKEN}"}


@pytest.fixture
def admin_headers(auth_client: FakeAuthClient, admin: Profile) -> dict[str, str]:
    auth_client.identities[ADMIN_TOKEN] = Identity(id=admin.id, email=admin.email)
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}
