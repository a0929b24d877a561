"""Facility pickers and the POST /api/referral computation."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from healthref.api.dependencies import get_db
from healthref.api.schemas import ErrorResponse, ReferralRequest, ReferralResponse
from healthref.services import lookups
from healthref.services.errors import ClientInputError, ReferralAPIError, store_errors
from healthref.services.metrics import metrics
from healthref.services.referral import resolve_referral

router = APIRouter(prefix="/api", tags=["referral"])

_STORE_ERROR_RESPONSES = {500: {"model": ErrorResponse, "description": "Database failure"}}

MISSING_SELECTION = (
    "Please provide all selection parameters: state, district, subdistrict, "
    "and facility name."
)


@router.get(
    "/states",
    summary="List states",
    response_model=list[str],
    responses=_STORE_ERROR_RESPONSES,
)
async def get_states(session: AsyncSession = Depends(get_db)):
    async with store_errors("Failed to fetch states"):
        return await lookups.list_states(session)


@router.get(
    "/districts/{stateName}",
    summary="List districts in a state",
    response_model=list[str],
    responses=_STORE_ERROR_RESPONSES,
)
async def get_districts(stateName: str, session: AsyncSession = Depends(get_db)):
    async with store_errors("Failed to fetch districts"):
        return await lookups.list_districts(session, stateName)


@router.get(
    "/subdistricts/{stateName}/{districtName}",
    summary="List subdistricts in a district",
    description="Blank subdistrict names are omitted; the list is sorted.",
    response_model=list[str],
    responses=_STORE_ERROR_RESPONSES,
)
async def get_subdistricts(
    stateName: str, districtName: str, session: AsyncSession = Depends(get_db)
):
    async with store_errors("Failed to fetch subdistricts"):
        return await lookups.list_subdistricts(session, stateName, districtName)


@router.get(
    "/facilities/{stateName}/{districtName}/{subdistrictName}",
    summary="List facilities in a subdistrict",
    response_model=list[str],
    responses=_STORE_ERROR_RESPONSES,
)
async def get_facilities(
    stateName: str,
    districtName: str,
    subdistrictName: str,
    session: AsyncSession = Depends(get_db),
):
    async with store_errors("Failed to fetch facilities"):
        return await lookups.list_facilities(
            session, stateName, districtName, subdistrictName
        )


@router.post(
    "/referral",
    summary="Nearest higher-level facilities",
    description=(
        "Look up the selected facility, then rank every facility of a strictly "
        "higher tier in the same district by great-circle distance. Returns the "
        "closest one and up to five nearest.\n\n"
        "Tiers, lowest to highest: `SUB_CEN`, `PHC`, `CHC`, `S_T_H`, "
        "`District Hospital`, `Medical College`."
    ),
    response_model=ReferralResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing selection, unknown or top-level facility type"},
        404: {"model": ErrorResponse, "description": "Facility or higher-level facilities not found"},
        500: {"model": ErrorResponse, "description": "Invalid origin coordinates or database failure"},
    },
)
async def post_referral(
    payload: ReferralRequest | None = None,
    session: AsyncSession = Depends(get_db),
):
    """Resolve the referral for the selected facility."""
    if payload is None or not payload.is_complete():
        raise ClientInputError(MISSING_SELECTION)

    try:
        result = await resolve_referral(
            session,
            payload.selectedState,
            payload.selectedDistrict,
            payload.selectedSubdistrict,
            payload.selectedFacilityName,
        )
    except ReferralAPIError:
        metrics.inc_referral(success=False)
        raise
    metrics.inc_referral(success=True)

    return {
        "startFacility": asdict(result.start_facility),
        "closestNextLevelFacility": asdict(result.closest) if result.closest else None,
        "allNextLevelFacilities": [asdict(c) for c in result.candidates],
    }
