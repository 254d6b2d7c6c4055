"""Domain models for the snack catalog."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class CatalogItem:
    """A snack featured in the shared catalog."""

    id: UUID
    name: str
    description: str | None
    photo_url: str | None
    created_at: datetime
