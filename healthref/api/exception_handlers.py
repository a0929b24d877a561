"""Exception handlers rendering every error as ``{"error": ...}`` JSON."""

from __future__ import annotations

import logging
import traceback

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from healthref.services.errors import ReferralAPIError, StoreError

logger = logging.getLogger("healthref.errors")


def _error_body(message: str, details: object | None = None) -> dict:
    body: dict = {"error": message}
    if details is not None:
        body["details"] = details
    return body


async def referral_api_exception_handler(
    request: Request, exc: ReferralAPIError
) -> JSONResponse:
    """Map the service error taxonomy to its HTTP status.

    Store failures are already logged where they are raised.
    """
    if exc.status_code < 500:
        logger.info(
            "%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.message
        )
    elif not isinstance(exc, StoreError):
        logger.error(
            "%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.message
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, exc.details),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Unknown routes, wrong methods and any explicit ``HTTPException``."""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail)),
        headers=exc.headers,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request bodies are client input errors (400)."""
    return JSONResponse(
        status_code=400,
        content=_error_body("Invalid request", jsonable_encoder(exc.errors())),
    )


async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Log the traceback; return a generic 500 that leaks nothing."""
    logger.error(
        "Unhandled exception on %s %s:\n%s",
        request.method,
        request.url.path,
        traceback.format_exc(),
    )
    return JSONResponse(
        status_code=500,
        content=_error_body("Internal server error"),
    )
