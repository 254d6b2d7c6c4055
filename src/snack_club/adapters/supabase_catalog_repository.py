"""Supabase repository for catalog snacks."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from snack_club.adapters.supabase_errors import (
    EARLIEST,
    parse_timestamp,
    storage_errors,
)
from snack_club.domain.catalog import CatalogItem
from snack_club.domain.errors import StorageUnavailableError
from snack_club.services.catalog import CatalogRepository


@dataclass
class SupabaseCatalogRepository(CatalogRepository):
    """Supabase implementation for the snacks table."""

    client: Client

    def create_item(
        self, name: str, description: str | None, photo_url: str | None
    ) -> CatalogItem:
        """Insert a snack row and return it."""
        with storage_errors("add that snack"):
            response = (
                self.client.table("snacks")
                .insert(
                    {"name": name, "description": description, "photo_url": photo_url}
                )
                .execute()
            )
        if not response.data:
            raise StorageUnavailableError(
                "We couldn't add that snack. Please try again."
            )
        return _parse_row(response.data[0])

    def list_items(self, limit: int | None) -> list[CatalogItem]:
        """Return snacks newest first."""
        query = (
            self.client.table("snacks")
            .select("id, name, description, photo_url, created_at")
            .order("created_at", desc=True)
        )
        if limit is not None:
            query = query.limit(limit)
        with storage_errors("load snacks"):
            response = query.execute()
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> CatalogItem:
    return CatalogItem(
        id=UUID(str(row["id"])),
        name=str(row.get("name") or ""),
        description=row.get("description"),
        photo_url=row.get("photo_url"),
        created_at=parse_timestamp(row.get("created_at")) or EARLIEST,
    )
