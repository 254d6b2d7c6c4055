"""Read models composed for admin and member views."""

from dataclasses import dataclass

from snack_club.domain.catalog import CatalogItem
from snack_club.domain.models import Profile
from snack_club.domain.subscriptions import SubscriptionRecord, SubscriptionStatus


@dataclass(frozen=True)
class MemberStatus:
    """A member joined with their record for a period."""

    profile: Profile
    record: SubscriptionRecord

    @property
    def status(self) -> SubscriptionStatus:
        return self.record.status


@dataclass(frozen=True)
class AdminSummary:
    """Payment totals for a period."""

    period: str
    total_members: int
    paid_members: int
    pending_members: int
    payment_rate: int
    members: list[MemberStatus]


@dataclass(frozen=True)
class MemberDashboard:
    """What a member sees on their dashboard."""

    period: str
    record: SubscriptionRecord
    latest_snacks: list[CatalogItem]

    @property
    def status(self) -> SubscriptionStatus:
        return self.record.status
