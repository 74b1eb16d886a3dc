"""Error handlers: project errors, request validation, catch-all."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from typing_extensions import assert_never

from storehub_core.primitives.exceptions import (
    ErrorKind,
    StoreHubError,
    ValidationError,
)

from .schemas import INTERNAL_ERROR_TEXT, INVALID_ARGUMENT_TEXT, Envelope

if TYPE_CHECKING:
    from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)

# pydantic error type -> rule name reported to clients
_RULES = {
    "missing": "required",
    "string_too_short": "min",
    "string_too_long": "max",
}


def status_for(kind: ErrorKind) -> int:
    match kind:
        case ErrorKind.VALIDATION:
            return status.HTTP_400_BAD_REQUEST
        case ErrorKind.AUTHENTICATION:
            return status.HTTP_401_UNAUTHORIZED
        case ErrorKind.PERMISSION_DENIED:
            return status.HTTP_403_FORBIDDEN
        case ErrorKind.NOT_FOUND:
            return status.HTTP_404_NOT_FOUND
        case ErrorKind.CONFLICT:
            return status.HTTP_409_CONFLICT
        case ErrorKind.PERSISTENCE:
            return status.HTTP_503_SERVICE_UNAVAILABLE
        case ErrorKind.DELIVERY | ErrorKind.INTERNAL:
            return status.HTTP_500_INTERNAL_SERVER_ERROR
        case _:
            assert_never(kind)


def _error_response(status_code: int, body: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content=Envelope.error(body).model_dump()
    )


def validation_body(errors: list[dict[str, Any]]) -> dict[str, str] | str:
    """Collapse pydantic errors to ``{field: rule}``.

    Errors not attached to a body field (unparsable JSON, non-object body)
    collapse to a single generic text.
    """
    fields: dict[str, str] = {}
    for error in errors:
        loc = error.get("loc", ())
        if len(loc) < 2 or loc[0] != "body" or error["type"] == "json_invalid":
            return INVALID_ARGUMENT_TEXT
        fields[str(loc[-1])] = _RULES.get(error["type"], error["type"])
    return fields or INVALID_ARGUMENT_TEXT


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(StoreHubError)
    async def storehub_error_handler(
        request: Request, exc: StoreHubError
    ) -> JSONResponse:
        logger.warning(
            "%s on %s: %s",
            type(exc).__name__,
            request.url.path,
            exc.message,
            extra={"error_kind": exc.kind.value},
        )
        if exc.kind is ErrorKind.INTERNAL:
            body: Any = INTERNAL_ERROR_TEXT
        elif isinstance(exc, ValidationError) and exc.errors:
            body = exc.errors
        else:
            body = exc.message
        return _error_response(status_for(exc.kind), body)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.info("Validation error on %s: %s", request.url.path, exc.errors())
        return _error_response(
            status.HTTP_400_BAD_REQUEST, validation_body(list(exc.errors()))
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all; never leaks internal details."""
        logger.error(
            "Unhandled exception on %s: %s", request.url.path, exc, exc_info=True
        )
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_TEXT
        )
