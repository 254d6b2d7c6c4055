"""Supabase repository for per-period subscription records."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from snack_club.adapters.supabase_errors import (
    format_timestamp,
    parse_timestamp,
    storage_errors,
)
from snack_club.domain.errors import StorageUnavailableError
from snack_club.domain.subscriptions import SubscriptionRecord
from snack_club.services.subscriptions import SubscriptionRepository

_TABLE = "payments_manual"
_COLUMNS = "user_id, month, paid, note, paused, paused_at, canceled, canceled_at"


@dataclass
class SupabaseSubscriptionRepository(SubscriptionRepository):
    """Supabase implementation keyed on (user_id, month)."""

    client: Client

    def get_record(self, member_id: UUID, period: str) -> SubscriptionRecord | None:
        """Return the record for a member and month."""
        with storage_errors("load the subscription"):
            response = (
                self.client.table(_TABLE)
                .select(_COLUMNS)
                .eq("user_id", str(member_id))
                .eq("month", period)
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def list_records(self, period: str) -> list[SubscriptionRecord]:
        """Return all records for a month."""
        with storage_errors("load payments"):
            response = (
                self.client.table(_TABLE).select(_COLUMNS).eq("month", period).execute()
            )
        return [_parse_row(row) for row in response.data or []]

    def upsert_fields(
        self, member_id: UUID, period: str, fields: dict[str, object]
    ) -> SubscriptionRecord:
        """Upsert only the given columns; untouched columns keep their values."""
        payload: dict[str, object] = {"user_id": str(member_id), "month": period}
        for key, value in fields.items():
            payload[key] = (
                format_timestamp(value) if isinstance(value, datetime) else value
            )
        with storage_errors("update the subscription"):
            response = (
                self.client.table(_TABLE)
                .upsert(payload, on_conflict="user_id,month", default_to_null=False)
                .execute()
            )
        if not response.data:
            raise StorageUnavailableError(
                "We couldn't update the subscription. Please try again."
            )
        return _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> SubscriptionRecord:
    return SubscriptionRecord(
        member_id=UUID(str(row["user_id"])),
        period=str(row["month"]),
        paid=bool(row.get("paid")),
        paused=bool(row.get("paused")),
        paused_at=parse_timestamp(row.get("paused_at")),
        canceled=bool(row.get("canceled")),
        canceled_at=parse_timestamp(row.get("canceled_at")),
        note=row.get("note"),
    )
