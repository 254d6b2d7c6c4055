"""Supabase-backed snack request repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from snack_club.adapters.supabase_errors import (
    EARLIEST,
    format_timestamp,
    parse_timestamp,
    storage_errors,
)
from snack_club.domain.errors import StorageUnavailableError
from snack_club.domain.requests import Requester, SnackRequest, SnackRequestStatus
from snack_club.services.snack_requests import SnackRequestRepository

_TABLE = "snack_requests"
_COLUMNS = (
    "id, user_id, snack_name, details, source, status, created_at, updated_at, "
    "profiles(full_name, email)"
)


@dataclass
class SupabaseSnackRequestRepository(SnackRequestRepository):
    """Supabase implementation for snack requests."""

    client: Client

    def create_request(  # noqa: PLR0913
        self,
        requester_id: UUID,
        snack_name: str,
        details: str | None,
        source: str | None,
        status: SnackRequestStatus,
    ) -> SnackRequest:
        """Insert a request row and return it."""
        with storage_errors("save your snack request"):
            response = (
                self.client.table(_TABLE)
                .insert(
                    {
                        "user_id": str(requester_id),
                        "snack_name": snack_name,
                        "details": details,
                        "source": source,
                        "status": status.value,
                    }
                )
                .execute()
            )
        if not response.data:
            raise StorageUnavailableError(
                "We couldn't save your snack request. Please try again."
            )
        return _parse_row(response.data[0])

    def get_request(self, request_id: UUID) -> SnackRequest | None:
        """Return a request by id."""
        with storage_errors("load that request"):
            response = (
                self.client.table(_TABLE)
                .select(_COLUMNS)
                .eq("id", str(request_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def list_requests(
        self,
        requester_id: UUID | None,
        statuses: set[SnackRequestStatus],
    ) -> list[SnackRequest]:
        """Return requests newest first."""
        query = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .order("created_at", desc=True)
        )
        if statuses:
            query = query.in_("status", sorted(status.value for status in statuses))
        if requester_id is not None:
            query = query.eq("user_id", str(requester_id))
        with storage_errors("load snack requests"):
            response = query.execute()
        return [_parse_row(row) for row in response.data or []]

    def update_status(
        self,
        request_id: UUID,
        expected: SnackRequestStatus,
        status: SnackRequestStatus,
        updated_at: datetime,
    ) -> SnackRequest | None:
        """Conditionally update the status of a request."""
        with storage_errors("update that request"):
            response = (
                self.client.table(_TABLE)
                .update(
                    {
                        "status": status.value,
                        "updated_at": format_timestamp(updated_at),
                    }
                )
                .eq("id", str(request_id))
                .eq("status", expected.value)
                .execute()
            )
        if not response.data:
            return None
        # The update response carries no profiles embed; reload to join it.
        return self.get_request(request_id) or _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> SnackRequest:
    created_at = parse_timestamp(row.get("created_at")) or EARLIEST
    profile = row.get("profiles")
    requester = (
        Requester(full_name=profile.get("full_name"), email=profile.get("email"))
        if isinstance(profile, dict)
        else None
    )
    try:
        status = SnackRequestStatus(str(row.get("status")))
    except ValueError:
        status = SnackRequestStatus.PENDING
    return SnackRequest(
        id=UUID(str(row["id"])),
        requester_id=UUID(str(row["user_id"])),
        snack_name=str(row.get("snack_name") or ""),
        details=row.get("details"),
        source=row.get("source"),
        status=status,
        created_at=created_at,
        updated_at=parse_timestamp(row.get("updated_at")) or created_at,
        requester=requester,
    )
