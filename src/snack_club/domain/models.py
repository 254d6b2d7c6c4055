"""Domain models for identities and member profiles."""

from dataclasses import dataclass, field
from enum import StrEnum
from uuid import UUID


class Role(StrEnum):
    """Role assigned to a profile."""

    MEMBER = "member"
    ADMIN = "admin"


@dataclass(frozen=True)
class Identity:
    """Authenticated principal as reported by the auth provider."""

    id: UUID
    email: str | None
    metadata: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class Profile:
    """Member profile, one per identity."""

    id: UUID
    email: str
    full_name: str | None
    dietary_preferences: str | None
    role: Role = Role.MEMBER

    @property
    def is_admin(self) -> bool:
        """Return True when the profile has the admin role."""
        return self.role is Role.ADMIN


@dataclass(frozen=True)
class PendingRegistration:
    """Details captured at sign-up, applied when the profile is first created."""

    full_name: str | None = None
    dietary_preferences: str | None = None
