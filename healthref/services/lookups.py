"""Filtered, ordered selects behind the geographic and KPI lookup endpoints."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from healthref.db.models import District, HealthcareFacility, HealthKpi, KpiDefinition

# ---------------------------------------------------------------------------
# Facility hierarchy (state -> district -> subdistrict -> facility)
# ---------------------------------------------------------------------------


async def list_states(session: AsyncSession) -> list[str]:
    stmt = (
        select(HealthcareFacility.state_name)
        .distinct()
        .order_by(HealthcareFacility.state_name)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def list_districts(session: AsyncSession, state: str) -> list[str]:
    stmt = (
        select(HealthcareFacility.district_name)
        .where(HealthcareFacility.state_name == state)
        .distinct()
        .order_by(HealthcareFacility.district_name)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def list_subdistricts(session: AsyncSession, state: str, district: str) -> list[str]:
    """Distinct non-blank subdistricts, sorted."""
    stmt = (
        select(HealthcareFacility.subdistrict_name)
        .where(
            HealthcareFacility.state_name == state,
            HealthcareFacility.district_name == district,
        )
        .distinct()
        .order_by(HealthcareFacility.subdistrict_name)
    )
    result = await session.execute(stmt)
    return sorted({name for name in result.scalars().all() if name})


async def list_facilities(
    session: AsyncSession, state: str, district: str, subdistrict: str
) -> list[str]:
    stmt = (
        select(HealthcareFacility.facility_name)
        .where(
            HealthcareFacility.state_name == state,
            HealthcareFacility.district_name == district,
            HealthcareFacility.subdistrict_name == subdistrict,
        )
        .order_by(HealthcareFacility.facility_name)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


# ---------------------------------------------------------------------------
# KPI dashboard
# ---------------------------------------------------------------------------


async def list_kpi_states(session: AsyncSession) -> list[dict[str, Any]]:
    stmt = select(District.state_name).distinct().order_by(District.state_name)
    result = await session.execute(stmt)
    return [{"state_name": row.state_name} for row in result.all()]


async def list_kpi_districts(session: AsyncSession, state: str) -> list[dict[str, Any]]:
    stmt = (
        select(District.district_id, District.district_name)
        .where(District.state_name == state)
        .order_by(District.district_name)
    )
    result = await session.execute(stmt)
    return [
        {"district_id": row.district_id, "district_name": row.district_name}
        for row in result.all()
    ]


async def list_available_sources(session: AsyncSession, district_id: int) -> list[str]:
    stmt = (
        select(KpiDefinition.source)
        .join(HealthKpi, HealthKpi.kpi_id == KpiDefinition.kpi_id)
        .where(HealthKpi.district_id == district_id)
        .distinct()
        .order_by(KpiDefinition.source)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def list_available_years(
    session: AsyncSession, district_id: int, source: str
) -> list[int]:
    """Years with data for the district and source, newest first."""
    stmt = (
        select(HealthKpi.year)
        .join(KpiDefinition, HealthKpi.kpi_id == KpiDefinition.kpi_id)
        .where(HealthKpi.district_id == district_id, KpiDefinition.source == source)
        .distinct()
        .order_by(HealthKpi.year.desc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


_KPI_DATA_COLUMNS = (
    HealthKpi.kpi_id,
    HealthKpi.kpi_value,
    HealthKpi.year,
    KpiDefinition.kpi_name,
    KpiDefinition.unit,
    KpiDefinition.description,
    KpiDefinition.category,
    District.district_name,
    District.state_name,
    District.country_name,
)


async def get_kpi_data(
    session: AsyncSession, district_id: int, source: str, year: int
) -> list[dict[str, Any]]:
    """KPI values with their definitions and district metadata.

    Ordered by category, then KPI name.  An empty list is a valid answer.
    """
    stmt = (
        select(*_KPI_DATA_COLUMNS)
        .join(KpiDefinition, HealthKpi.kpi_id == KpiDefinition.kpi_id)
        .join(District, HealthKpi.district_id == District.district_id)
        .where(
            HealthKpi.district_id == district_id,
            KpiDefinition.source == source,
            HealthKpi.year == year,
        )
        .order_by(KpiDefinition.category, KpiDefinition.kpi_name)
    )
    result = await session.execute(stmt)
    return [dict(row._mapping) for row in result.all()]


async def list_kpi_definitions(session: AsyncSession) -> list[dict[str, Any]]:
    stmt = select(
        KpiDefinition.kpi_id,
        KpiDefinition.kpi_name,
        KpiDefinition.unit,
        KpiDefinition.source,
        KpiDefinition.description,
        KpiDefinition.category,
    ).order_by(KpiDefinition.kpi_name)
    result = await session.execute(stmt)
    return [dict(row._mapping) for row in result.all()]
