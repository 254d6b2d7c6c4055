"""Pydantic request bodies for the HTTP API."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from snack_club.domain.requests import MAX_SNACK_NAME_LENGTH, MAX_TEXT_FIELD_LENGTH

# Free-text fields are capped by the services; this only bounds the payload.
MAX_FREE_TEXT_PAYLOAD = 5000


class _Body(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
        str_strip_whitespace=True,
    )


class CreateSnackRequestBody(_Body):
    """Body for submitting a snack request."""

    snack_name: str = Field(
        alias="snackName", min_length=1, max_length=MAX_SNACK_NAME_LENGTH
    )
    details: str | None = Field(default=None, max_length=MAX_FREE_TEXT_PAYLOAD)
    source: str | None = Field(default=None, max_length=MAX_FREE_TEXT_PAYLOAD)


class UpdateSnackRequestBody(_Body):
    """Body for moving a snack request to a new status."""

    status: str = Field(max_length=32)


class SubscriptionStatusBody(_Body):
    """Body for self-service subscription actions."""

    action: str = Field(max_length=32)
    user_id: UUID | None = Field(default=None, alias="userId")

    @field_validator("user_id", mode="before")
    @classmethod
    def _blank_user_id(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class PaymentBody(_Body):
    """Body for recording a member's payment for a period."""

    paid: bool
    period: str | None = Field(default=None, max_length=7)
    note: str | None = Field(default=None, max_length=MAX_TEXT_FIELD_LENGTH)


class PendingRegistrationBody(_Body):
    """Details captured at sign-up and applied on first sign-in."""

    full_name: str | None = Field(
        default=None, alias="fullName", max_length=MAX_SNACK_NAME_LENGTH
    )
    dietary_preferences: str | None = Field(
        default=None, alias="dietaryPreferences", max_length=MAX_TEXT_FIELD_LENGTH
    )


class ProfileUpdateBody(_Body):
    """Body for editing one's own profile."""

    full_name: str = Field(
        alias="fullName", min_length=1, max_length=MAX_SNACK_NAME_LENGTH
    )
    dietary_preferences: str | None = Field(
        default=None, alias="dietaryPreferences", max_length=MAX_TEXT_FIELD_LENGTH
    )


class CatalogItemBody(_Body):
    """Body for adding a snack to the catalog."""

    name: str = Field(min_length=1, max_length=MAX_SNACK_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=MAX_TEXT_FIELD_LENGTH)
    photo_url: str | None = Field(default=None, alias="photoUrl", max_length=2048)
