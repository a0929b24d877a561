"""KPI dashboard lookups under /api/kpi.

Query parameters are declared optional and checked by hand so that a
missing value gets this API's 400 message rather than a validation error.
Store failures include the driver message in ``details``.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from healthref.api.dependencies import get_db
from healthref.api.schemas import (
    ErrorResponse,
    KpiDataRowModel,
    KpiDefinitionModel,
    KpiDistrictModel,
    KpiStateModel,
)
from healthref.services import lookups
from healthref.services.errors import ClientInputError, store_errors

router = APIRouter(prefix="/api/kpi", tags=["kpi"])

STORE_ERROR = "Internal Server Error"

_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or invalid parameter"},
    500: {"model": ErrorResponse, "description": "Database failure"},
}


def _parse_int(value: str, name: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        raise ClientInputError(f"{name} must be an integer.") from None


@router.get("/states", response_model=list[KpiStateModel], responses=_RESPONSES)
async def get_kpi_states(session: AsyncSession = Depends(get_db)):
    """Distinct states in the districts table."""
    async with store_errors(STORE_ERROR, expose_details=True):
        return await lookups.list_kpi_states(session)


@router.get("/districts", response_model=list[KpiDistrictModel], responses=_RESPONSES)
async def get_kpi_districts(
    state: str | None = Query(None, description="State name"),
    session: AsyncSession = Depends(get_db),
):
    if not state:
        raise ClientInputError("State parameter is required.")
    async with store_errors(STORE_ERROR, expose_details=True):
        return await lookups.list_kpi_districts(session, state)


@router.get("/available-sources", response_model=list[str], responses=_RESPONSES)
async def get_available_sources(
    districtId: str | None = Query(None, description="District ID"),
    session: AsyncSession = Depends(get_db),
):
    """Data sources (e.g. 'HMIS Data', 'NFHS 2019') with values for the district."""
    if not districtId:
        raise ClientInputError("districtId parameter is required.")
    district_id = _parse_int(districtId, "districtId")
    async with store_errors(STORE_ERROR, expose_details=True):
        return await lookups.list_available_sources(session, district_id)


@router.get("/available-years", response_model=list[int], responses=_RESPONSES)
async def get_available_years(
    districtId: str | None = Query(None, description="District ID"),
    source: str | None = Query(None, description="Data source"),
    session: AsyncSession = Depends(get_db),
):
    """Years with data for the district and source, newest first."""
    if not districtId or not source:
        raise ClientInputError("districtId and source parameters are required.")
    district_id = _parse_int(districtId, "districtId")
    async with store_errors(STORE_ERROR, expose_details=True):
        return await lookups.list_available_years(session, district_id, source)


@router.get("/kpi-data", response_model=list[KpiDataRowModel], responses=_RESPONSES)
async def get_kpi_data(
    districtId: str | None = Query(None, description="District ID"),
    source: str | None = Query(None, description="Data source"),
    year: str | None = Query(None, description="Year"),
    session: AsyncSession = Depends(get_db),
):
    """KPI values with definitions and district metadata, by category then name."""
    if not districtId or not source or not year:
        raise ClientInputError("districtId, source, and year parameters are required.")
    district_id = _parse_int(districtId, "districtId")
    year_value = _parse_int(year, "year")
    async with store_errors(STORE_ERROR, expose_details=True):
        return await lookups.get_kpi_data(session, district_id, source, year_value)


@router.get("/kpi-definitions", response_model=list[KpiDefinitionModel], responses=_RESPONSES)
async def get_kpi_definitions(session: AsyncSession = Depends(get_db)):
    async with store_errors(STORE_ERROR, expose_details=True):
        return await lookups.list_kpi_definitions(session)
