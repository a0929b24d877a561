"""Error taxonomy shared by the referral resolver and the lookup queries.

Each error carries the HTTP status it maps to; the API layer renders it as
``{"error": message}`` with an optional ``details`` field.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import SQLAlchemyError

from healthref.services.metrics import metrics

logger = logging.getLogger(__name__)


class ReferralAPIError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500

    def __init__(self, message: str, details: str | None = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)


class ClientInputError(ReferralAPIError):
    """Missing or invalid request parameters, unknown tier, terminal tier."""

    status_code = 400


class NotFoundError(ReferralAPIError):
    """No origin facility, or no higher-tier facilities in its district."""

    status_code = 404


class DataIntegrityError(ReferralAPIError):
    """Stored data that cannot be used, e.g. malformed origin coordinates."""

    status_code = 500


class StoreError(ReferralAPIError):
    """The database rejected or failed a query."""

    status_code = 500


@asynccontextmanager
async def store_errors(message: str, *, expose_details: bool = False) -> AsyncIterator[None]:
    """Re-raise any ``SQLAlchemyError`` inside the block as :class:`StoreError`.

    Failures are not retried.  With *expose_details* the driver message is
    passed back to the client in ``details``.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        metrics.inc_store_error()
        logger.exception("%s", message)
        raise StoreError(message, details=str(exc) if expose_details else None) from exc
