"""Tests for the error taxonomy and store error wrapping."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from healthref.services.errors import (
    ClientInputError,
    DataIntegrityError,
    NotFoundError,
    ReferralAPIError,
    StoreError,
    store_errors,
)


@pytest.mark.parametrize(
    "cls,status",
    [
        (ClientInputError, 400),
        (NotFoundError, 404),
        (DataIntegrityError, 500),
        (StoreError, 500),
    ],
)
def test_status_codes(cls, status):
    exc = cls("message")
    assert isinstance(exc, ReferralAPIError)
    assert exc.status_code == status
    assert exc.message == "message"
    assert exc.details is None


async def test_store_errors_wraps_sqlalchemy_error():
    original = OperationalError("SELECT 1", {}, Exception("could not connect"))
    with pytest.raises(StoreError) as excinfo:
        async with store_errors("Failed to fetch states"):
            raise original
    assert excinfo.value.message == "Failed to fetch states"
    assert excinfo.value.details is None
    assert excinfo.value.__cause__ is original


async def test_store_errors_exposes_details_on_request():
    with pytest.raises(StoreError) as excinfo:
        async with store_errors("Internal Server Error", expose_details=True):
            raise SQLAlchemyError("syntax error at or near")
    assert "syntax error" in excinfo.value.details


async def test_store_errors_leaves_other_errors_alone():
    with pytest.raises(NotFoundError):
        async with store_errors("Failed"):
            raise NotFoundError("missing")


async def test_store_errors_passes_through_success():
    async with store_errors("Failed"):
        value = 42
    assert value == 42
