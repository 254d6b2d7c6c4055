"""JSON serializers for API responses."""

from snack_club.domain.catalog import CatalogItem
from snack_club.domain.models import Profile
from snack_club.domain.requests import SnackRequest
from snack_club.domain.subscriptions import SubscriptionRecord
from snack_club.domain.summary import AdminSummary, MemberDashboard, MemberStatus


def serialize_profile(profile: Profile) -> dict[str, object]:
    return {
        "id": str(profile.id),
        "email": profile.email,
        "full_name": profile.full_name,
        "dietary_preferences": profile.dietary_preferences,
        "role": profile.role.value,
    }


def serialize_viewer(profile: Profile) -> dict[str, object]:
    return {
        "id": str(profile.id),
        "role": profile.role.value,
        "full_name": profile.full_name,
        "email": profile.email,
    }


def serialize_request(request: SnackRequest) -> dict[str, object]:
    return {
        "id": str(request.id),
        "user_id": str(request.requester_id),
        "snack_name": request.snack_name,
        "details": request.details,
        "source": request.source,
        "status": request.status.value,
        "status_label": request.status.label,
        "created_at": request.created_at.isoformat(),
        "updated_at": request.updated_at.isoformat(),
        "requester": {
            "full_name": request.requester.full_name,
            "email": request.requester.email,
        }
        if request.requester
        else None,
    }


def serialize_record(record: SubscriptionRecord) -> dict[str, object]:
    return {
        "user_id": str(record.member_id),
        "month": record.period,
        "paid": record.paid,
        "note": record.note,
        "paused": record.paused,
        "paused_at": record.paused_at.isoformat() if record.paused_at else None,
        "canceled": record.canceled,
        "canceled_at": record.canceled_at.isoformat() if record.canceled_at else None,
        "status": record.status.value,
    }


def serialize_catalog_item(item: CatalogItem) -> dict[str, object]:
    return {
        "id": str(item.id),
        "name": item.name,
        "description": item.description,
        "photo_url": item.photo_url,
        "created_at": item.created_at.isoformat(),
    }


def serialize_summary(summary: AdminSummary) -> dict[str, object]:
    return {
        "month": summary.period,
        "total_members": summary.total_members,
        "paid_members": summary.paid_members,
        "pending_members": summary.pending_members,
        "payment_rate": summary.payment_rate,
        "members": [_serialize_member(member) for member in summary.members],
    }


def serialize_dashboard(dashboard: MemberDashboard) -> dict[str, object]:
    return {
        "month": dashboard.period,
        "status": dashboard.status.value,
        "subscription": serialize_record(dashboard.record),
        "snacks": [serialize_catalog_item(item) for item in dashboard.latest_snacks],
    }


def _serialize_member(member: MemberStatus) -> dict[str, object]:
    return {
        **serialize_profile(member.profile),
        "status": member.status.value,
        "payment_status": serialize_record(member.record),
    }
