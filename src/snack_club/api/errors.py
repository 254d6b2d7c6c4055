"""Translate domain errors into JSON error responses."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from snack_club.domain.errors import (
    InvalidActionError,
    InvalidTransitionError,
    NotAuthorizedError,
    NotFoundError,
    SnackClubError,
    StorageUnavailableError,
    UnauthenticatedError,
    ValidationError,
)

if TYPE_CHECKING:
    from snack_club.containers import AppContainer

_logger = logging.getLogger(__name__)

INVALID_BODY_MESSAGE = "The request body is missing fields or has invalid values."

_STATUS_CODES: dict[type[SnackClubError], int] = {
    UnauthenticatedError: status.HTTP_401_UNAUTHORIZED,
    NotAuthorizedError: status.HTTP_403_FORBIDDEN,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidTransitionError: status.HTTP_400_BAD_REQUEST,
    InvalidActionError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    StorageUnavailableError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_code_for(exc: SnackClubError) -> int:
    """Return the HTTP status for a domain error."""
    for error_type in type(exc).__mro__:
        code = _STATUS_CODES.get(error_type)
        if code is not None:
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def register_error_handlers(app: FastAPI) -> None:
    """Install handlers that render errors as ``{"error": message}``."""

    @app.exception_handler(SnackClubError)
    async def handle_domain_error(
        request: Request, exc: SnackClubError
    ) -> JSONResponse:
        code = status_code_for(exc)
        message = exc.message
        if code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            _logger.error(
                "Request failed: path=%s error=%s",
                request.url.path,
                exc.message,
                exc_info=exc,
            )
            message = _format_storage_error(request.app.state.container, exc)
        return JSONResponse(status_code=code, content={"error": message})

    @app.exception_handler(RequestValidationError)
    async def handle_invalid_body(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        _logger.info(
            "Rejected request body: path=%s errors=%s",
            request.url.path,
            len(exc.errors()),
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": INVALID_BODY_MESSAGE},
        )


def _format_storage_error(container: AppContainer, exc: SnackClubError) -> str:
    """Return the user-facing message, with the cause appended locally."""
    if container.settings.environment == "local":
        cause = exc.__cause__ or exc
        detail = f"{type(cause).__name__}: {cause}".strip()
        if detail:
            return f"{exc.message} (debug: {detail})"
    return exc.message
