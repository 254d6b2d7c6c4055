"""Read-only views composed from profiles, subscriptions and requests."""

import math
from collections.abc import Iterable
from dataclasses import dataclass

from snack_club.domain.models import Profile
from snack_club.domain.requests import SnackRequest
from snack_club.domain.subscriptions import SubscriptionRecord, validate_period
from snack_club.domain.summary import AdminSummary, MemberDashboard, MemberStatus
from snack_club.services.authorization import Action, authorize, ensure_allowed
from snack_club.services.catalog import CatalogRepository
from snack_club.services.identity import ProfileRepository
from snack_club.services.snack_requests import SnackRequestService
from snack_club.services.subscriptions import SubscriptionRepository

DASHBOARD_SNACK_LIMIT = 10


@dataclass
class AggregationService:
    """Recomputes admin and member views on every call."""

    profile_repository: ProfileRepository
    subscription_repository: SubscriptionRepository
    snack_request_service: SnackRequestService
    catalog_repository: CatalogRepository

    def admin_summary(self, actor: Profile, period: str) -> AdminSummary:
        """Return payment totals and per-member status for a period."""
        ensure_allowed(authorize(actor, Action.LIST_MEMBERS))
        period = validate_period(period)
        profiles = self.profile_repository.list_profiles()
        records = {
            record.member_id: record
            for record in self.subscription_repository.list_records(period)
        }
        members = [
            MemberStatus(
                profile=profile,
                record=records.get(profile.id)
                or SubscriptionRecord.baseline(profile.id, period),
            )
            for profile in sorted(profiles, key=_profile_sort_key)
        ]
        total = len(members)
        paid = sum(1 for member in members if member.record.paid)
        return AdminSummary(
            period=period,
            total_members=total,
            paid_members=paid,
            pending_members=max(total - paid, 0),
            payment_rate=payment_rate(paid, total),
            members=members,
        )

    def admin_request_view(
        self, actor: Profile, status_filter: Iterable[str] | None = None
    ) -> list[SnackRequest]:
        """Return all requests for admins, optionally narrowed by status."""
        ensure_allowed(authorize(actor, Action.LIST_ALL_REQUESTS))
        return self.snack_request_service.list_requests(actor, status_filter)

    def member_dashboard(self, actor: Profile, period: str) -> MemberDashboard:
        """Return the actor's own status with the newest catalog snacks."""
        ensure_allowed(authorize(actor, Action.READ_SUBSCRIPTION, actor.id))
        period = validate_period(period)
        record = self.subscription_repository.get_record(actor.id, period)
        return MemberDashboard(
            period=period,
            record=record or SubscriptionRecord.baseline(actor.id, period),
            latest_snacks=self.catalog_repository.list_items(DASHBOARD_SNACK_LIMIT),
        )


def payment_rate(paid: int, total: int) -> int:
    """Return paid/total as a whole percent, rounding halves up."""
    if total <= 0:
        return 0
    return math.floor(paid * 100 / total + 0.5)


def _profile_sort_key(profile: Profile) -> tuple[str, str]:
    return ((profile.full_name or "").lower(), profile.email.lower())
