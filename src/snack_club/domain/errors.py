"""Domain errors raised by the snack club services."""

from enum import StrEnum


class SnackClubError(Exception):
    """Base class for errors surfaced to callers with a short message."""

    default_message = "Something went wrong."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class UnauthenticatedError(SnackClubError):
    """No session, or the session could not be validated."""

    default_message = "You must be signed in."


class DenyReason(StrEnum):
    """Why the authorization gate denied an action."""

    INSUFFICIENT_ROLE = "insufficient_role"
    NOT_OWNER = "not_owner"


class NotAuthorizedError(SnackClubError):
    """The actor may not perform the requested action."""

    default_message = "You don't have access to do that."

    def __init__(
        self,
        message: str | None = None,
        reason: DenyReason = DenyReason.INSUFFICIENT_ROLE,
    ) -> None:
        super().__init__(message)
        self.reason = reason


class ValidationError(SnackClubError):
    """Input was missing, oversized, or malformed."""

    default_message = "The request was invalid."


class InvalidTransitionError(SnackClubError):
    """A status change is not permitted from the current state."""

    default_message = "That status change isn't allowed."


class InvalidActionError(SnackClubError):
    """An action token was not recognized."""

    default_message = "That action isn't recognized."


class NotFoundError(SnackClubError):
    """The target entity does not exist."""

    default_message = "That record could not be found."


class StorageUnavailableError(SnackClubError):
    """A storage or auth collaborator call failed."""

    default_message = "We couldn't reach storage. Please try again."
