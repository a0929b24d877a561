"""Nearest higher-tier facility referral within a district."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from sqlalchemy import Row, select
from sqlalchemy.ext.asyncio import AsyncSession

from healthref.config import settings
from healthref.db.models import HealthcareFacility
from healthref.services.distance import haversine_km, parse_coordinate
from healthref.services.errors import (
    ClientInputError,
    DataIntegrityError,
    NotFoundError,
    store_errors,
)
from healthref.services.hierarchy import (
    UnknownTierError,
    is_terminal,
    tier_for,
    tiers_above,
)
from healthref.services.metrics import metrics

logger = logging.getLogger(__name__)

REFERRAL_STORE_ERROR = "Failed to process referral request"

# Column rows, not ORM entities: rows sharing a natural key must stay distinct.
_FACILITY_COLUMNS = (
    HealthcareFacility.facility_name,
    HealthcareFacility.facility_type,
    HealthcareFacility.state_name,
    HealthcareFacility.district_name,
    HealthcareFacility.latitude,
    HealthcareFacility.longitude,
)


@dataclass(frozen=True)
class OriginFacility:
    name: str
    facility_type: str
    district: str
    latitude: float
    longitude: float


@dataclass(frozen=True)
class ReferralCandidate:
    name: str
    distance_km: float
    facility_type: str
    state: str
    district: str
    latitude: float
    longitude: float


@dataclass(frozen=True)
class ReferralResult:
    start_facility: OriginFacility
    closest: ReferralCandidate | None
    candidates: list[ReferralCandidate]


async def resolve_referral(
    session: AsyncSession,
    state: str,
    district: str,
    subdistrict: str,
    facility_name: str,
    *,
    limit: int | None = None,
) -> ReferralResult:
    """Find the nearest facilities of a strictly higher tier in the origin's district.

    Raises :class:`NotFoundError` when the origin or any higher-tier facility
    is missing, :class:`ClientInputError` for an unknown or top-tier origin
    type, and :class:`DataIntegrityError` when the origin has unusable
    coordinates.  Candidates with unusable coordinates are skipped.
    """
    if limit is None:
        limit = settings.referral_max_results

    origin_row = await _fetch_origin(session, state, district, subdistrict, facility_name)

    lat = parse_coordinate(origin_row.latitude)
    lon = parse_coordinate(origin_row.longitude)
    if lat is None or lon is None:
        raise DataIntegrityError(
            f"Starting facility ({origin_row.facility_name}) has invalid geographic "
            f"coordinates: Lat='{origin_row.latitude}', Lon='{origin_row.longitude}'."
        )

    try:
        tier = tier_for(origin_row.facility_type)
    except UnknownTierError:
        raise ClientInputError(
            f"'{origin_row.facility_type}' is not a recognized facility type in the hierarchy."
        ) from None

    if is_terminal(tier):
        raise ClientInputError(
            f"'{origin_row.facility_type}' is the highest level facility in the "
            "hierarchy, no higher levels to refer to."
        )

    origin = OriginFacility(
        name=origin_row.facility_name,
        facility_type=origin_row.facility_type,
        district=origin_row.district_name,
        latitude=lat,
        longitude=lon,
    )

    higher = tiers_above(tier)
    stmt = select(*_FACILITY_COLUMNS).where(
        HealthcareFacility.district_name == origin.district,
        HealthcareFacility.facility_type.in_([t.label for t in higher]),
    )
    async with store_errors(REFERRAL_STORE_ERROR):
        result = await session.execute(stmt)
        rows = result.all()

    if not rows:
        raise NotFoundError(
            f"No higher level facilities found in the same district ({origin.district})."
        )

    ranked = rank_candidates(origin, rows)[:limit]
    logger.info(
        "Referral for %r (%s): %d candidate(s), closest=%r",
        origin.name,
        origin.facility_type,
        len(ranked),
        ranked[0].name if ranked else None,
    )
    return ReferralResult(
        start_facility=origin,
        closest=ranked[0] if ranked else None,
        candidates=ranked,
    )


def rank_candidates(
    origin: OriginFacility, rows: Sequence[Row]
) -> list[ReferralCandidate]:
    """Annotate rows with distance from *origin* and sort nearest first.

    ``sorted`` is stable, so equal distances keep the store's row order.
    """
    candidates: list[ReferralCandidate] = []
    for row in rows:
        lat = parse_coordinate(row.latitude)
        lon = parse_coordinate(row.longitude)
        if lat is None or lon is None:
            logger.warning(
                "Skipping facility %s due to invalid coordinates: Lat='%s', Lon='%s'",
                row.facility_name,
                row.latitude,
                row.longitude,
            )
            metrics.inc_candidates_dropped()
            continue
        candidates.append(
            ReferralCandidate(
                name=row.facility_name,
                distance_km=haversine_km(origin.latitude, origin.longitude, lat, lon),
                facility_type=row.facility_type,
                state=row.state_name,
                district=row.district_name,
                latitude=lat,
                longitude=lon,
            )
        )
    return sorted(candidates, key=lambda c: c.distance_km)


async def _fetch_origin(
    session: AsyncSession,
    state: str,
    district: str,
    subdistrict: str,
    facility_name: str,
) -> Row:
    stmt = (
        select(*_FACILITY_COLUMNS)
        .where(
            HealthcareFacility.state_name == state,
            HealthcareFacility.district_name == district,
            HealthcareFacility.subdistrict_name == subdistrict,
            HealthcareFacility.facility_name == facility_name,
        )
        .limit(2)
    )
    async with store_errors(REFERRAL_STORE_ERROR):
        result = await session.execute(stmt)
        rows = result.all()

    if not rows:
        raise NotFoundError(f"Starting facility '{facility_name}' not found.")
    if len(rows) > 1:
        logger.warning(
            "Facility key (%s, %s, %s, %s) matches more than one row; using the first",
            state,
            district,
            subdistrict,
            facility_name,
        )
    return rows[0]
