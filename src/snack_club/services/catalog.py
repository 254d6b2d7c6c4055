"""Snack catalog service."""

from dataclasses import dataclass
from typing import Protocol

from snack_club.domain.catalog import CatalogItem
from snack_club.domain.errors import ValidationError
from snack_club.domain.models import Profile
from snack_club.domain.requests import MAX_SNACK_NAME_LENGTH, MAX_TEXT_FIELD_LENGTH
from snack_club.services.authorization import Action, authorize, ensure_allowed


class CatalogRepository(Protocol):
    """Persistence interface for catalog items."""

    def create_item(
        self, name: str, description: str | None, photo_url: str | None
    ) -> CatalogItem:
        """Create a catalog item and return it."""

    def list_items(self, limit: int | None) -> list[CatalogItem]:
        """Return catalog items, newest first."""


@dataclass
class CatalogService:
    """Admin-authored list of featured snacks."""

    repository: CatalogRepository

    def add_item(
        self,
        actor: Profile,
        name: str,
        description: str | None = None,
        photo_url: str | None = None,
    ) -> CatalogItem:
        """Add a snack to the catalog."""
        ensure_allowed(authorize(actor, Action.ADD_CATALOG_ITEM))
        cleaned = name.strip()
        if not cleaned:
            raise ValidationError("Please add a name for the snack before uploading.")
        if len(cleaned) > MAX_SNACK_NAME_LENGTH:
            raise ValidationError(
                f"Snack names can be at most {MAX_SNACK_NAME_LENGTH} characters."
            )
        return self.repository.create_item(
            name=cleaned,
            description=(description or "").strip()[:MAX_TEXT_FIELD_LENGTH] or None,
            photo_url=(photo_url or "").strip() or None,
        )

    def list_items(self, limit: int | None = None) -> list[CatalogItem]:
        """Return catalog items, newest first."""
        return self.repository.list_items(limit)
