"""Global exception handlers — translate domain errors to HTTP responses.

Every :class:`StudyAidsError` is answered with the status code of its most
specific entry in ``_EXCEPTION_STATUS`` and the standard
``{"status": "error", "message": "..."}`` envelope.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from study_aids.domain.exceptions import (
    GatewayError,
    InvalidRequestError,
    MalformedResponseError,
    MissingCredentialError,
    StudyAidsError,
    TransportFailureError,
)

logger = logging.getLogger(__name__)

# Ordered most specific first.
_EXCEPTION_STATUS: list[tuple[type[StudyAidsError], int]] = [
    (InvalidRequestError, 422),
    (MissingCredentialError, 503),
    (TransportFailureError, 502),
    (MalformedResponseError, 502),
    (GatewayError, 502),
]


def status_for(exc: StudyAidsError) -> int:
    for exc_type, code in _EXCEPTION_STATUS:
        if isinstance(exc, exc_type):
            return code
    return 500


def _error_json(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    @app.exception_handler(StudyAidsError)
    async def domain_handler(request: Request, exc: StudyAidsError) -> JSONResponse:
        status_code = status_for(exc)
        logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc)
        return _error_json(status_code, str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = []
        for err in exc.errors():
            loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
            messages.append(f"{loc}: {err.get('msg', 'validation error')}")
        return _error_json(422, "; ".join(messages))

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return _error_json(500, "An unexpected error occurred. Please try again later.")
