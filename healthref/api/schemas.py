"""Pydantic request/response models for OpenAPI documentation.

Referral payloads keep the space-separated keys (``"Facility Name"``,
``"Distance (km)"``) that existing front-ends consume; they are declared
as aliases so Python code can use snake_case attribute names.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error: str = Field(..., description="Human-readable error message")
    details: str | list | None = Field(
        None,
        description="Underlying error detail (KPI endpoints and validation errors only)",
    )


class HealthResponse(BaseModel):
    status: str = Field(..., description="'ok' or 'degraded'")
    database: str = Field(..., description="'connected' or 'unreachable'")
    detail: str | None = Field(None, description="Error detail when the database is unreachable")
    uptime_seconds: float | None = Field(None, description="Seconds since the process started")


# ---------------------------------------------------------------------------
# /api/referral
# ---------------------------------------------------------------------------


class ReferralRequest(BaseModel):
    """Selection made in the cascading state/district/subdistrict/facility pickers.

    Every field is optional at the schema level so that a missing value
    produces the API's own 400 message instead of a validation error.
    """

    selectedState: str | None = None
    selectedDistrict: str | None = None
    selectedSubdistrict: str | None = None
    selectedFacilityName: str | None = None

    def is_complete(self) -> bool:
        return all(
            (
                self.selectedState,
                self.selectedDistrict,
                self.selectedSubdistrict,
                self.selectedFacilityName,
            )
        )


class StartFacilityModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., alias="Facility Name")
    facility_type: str = Field(..., alias="Facility Type")
    district: str = Field(..., alias="District Name")
    latitude: float = Field(..., alias="Latitude")
    longitude: float = Field(..., alias="Longitude")


class ReferralCandidateModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., alias="Facility Name")
    distance_km: float = Field(..., alias="Distance (km)")
    facility_type: str = Field(..., alias="Facility Type")
    state: str = Field(..., alias="State Name")
    district: str = Field(..., alias="District Name")
    latitude: float = Field(..., alias="Latitude")
    longitude: float = Field(..., alias="Longitude")


class ReferralResponse(BaseModel):
    startFacility: StartFacilityModel
    closestNextLevelFacility: ReferralCandidateModel | None = Field(
        None,
        description="Nearest higher-tier facility; null if every candidate had bad coordinates",
    )
    allNextLevelFacilities: list[ReferralCandidateModel] = Field(
        ..., description="Up to five nearest higher-tier facilities, nearest first"
    )


# ---------------------------------------------------------------------------
# /api/kpi/*
# ---------------------------------------------------------------------------


class KpiStateModel(BaseModel):
    state_name: str


class KpiDistrictModel(BaseModel):
    district_id: int
    district_name: str


class KpiDataRowModel(BaseModel):
    kpi_id: int
    kpi_value: float | None = None
    year: int
    kpi_name: str
    unit: str | None = None
    description: str | None = None
    category: str | None = None
    district_name: str
    state_name: str
    country_name: str | None = None


class KpiDefinitionModel(BaseModel):
    kpi_id: int
    kpi_name: str
    unit: str | None = None
    source: str
    description: str | None = None
    category: str | None = None
