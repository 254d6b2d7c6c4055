"""Profile self-service."""

from dataclasses import dataclass

from snack_club.domain.errors import NotFoundError, ValidationError
from snack_club.domain.models import Profile
from snack_club.domain.requests import MAX_SNACK_NAME_LENGTH, MAX_TEXT_FIELD_LENGTH
from snack_club.services.authorization import Action, authorize, ensure_allowed
from snack_club.services.identity import ProfileRepository

MAX_NAME_LENGTH = MAX_SNACK_NAME_LENGTH


@dataclass
class ProfileService:
    """Lets members edit their own name and dietary note."""

    repository: ProfileRepository

    def update_profile(
        self, actor: Profile, full_name: str, dietary_preferences: str | None
    ) -> Profile:
        """Update the actor's own profile; role is never written."""
        ensure_allowed(authorize(actor, Action.UPDATE_PROFILE, actor.id))
        name = full_name.strip()
        if not name:
            raise ValidationError("Please add your name before saving.")
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError(
                f"Names can be at most {MAX_NAME_LENGTH} characters."
            )
        note = (dietary_preferences or "").strip()[:MAX_TEXT_FIELD_LENGTH] or None
        updated = self.repository.update_profile(actor.id, name, note)
        if updated is None:
            raise NotFoundError("Your profile could not be found.")
        return updated
