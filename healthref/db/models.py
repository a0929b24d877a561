"""Read-only mappings of the externally owned facility and KPI tables."""

from sqlalchemy import Column, ForeignKey, Integer, Numeric, Text
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class HealthcareFacility(Base):
    __tablename__ = "HealthcareFacilities"

    # The table has no surrogate key; the natural key is mapped as the PK.
    state_name = Column("StateName", Text, primary_key=True)
    district_name = Column("DistrictName", Text, primary_key=True, index=True)
    subdistrict_name = Column("SubdistrictName", Text, primary_key=True)
    facility_name = Column("FacilityName", Text, primary_key=True)
    facility_type = Column("FacilityType", Text, nullable=True)

    # Stored as text upstream; parsed per request.
    latitude = Column(Text, nullable=True)
    longitude = Column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<HealthcareFacility {self.facility_name!r} type={self.facility_type!r}>"


class District(Base):
    __tablename__ = "districts"

    district_id = Column(Integer, primary_key=True)
    district_name = Column(Text, nullable=False)
    state_name = Column(Text, nullable=False, index=True)
    country_name = Column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<District id={self.district_id} name={self.district_name!r}>"


class KpiDefinition(Base):
    __tablename__ = "kpi_definitions"

    kpi_id = Column(Integer, primary_key=True)
    kpi_name = Column(Text, nullable=False)
    unit = Column(Text, nullable=True)
    source = Column(Text, nullable=False, comment="Data source, e.g. 'HMIS Data', 'NFHS 2019'")
    description = Column(Text, nullable=True)
    category = Column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<KpiDefinition id={self.kpi_id} name={self.kpi_name!r}>"


class HealthKpi(Base):
    __tablename__ = "health_kpis"

    district_id = Column(Integer, ForeignKey("districts.district_id"), primary_key=True)
    kpi_id = Column(Integer, ForeignKey("kpi_definitions.kpi_id"), primary_key=True)
    year = Column(Integer, primary_key=True)
    kpi_value = Column(Numeric, nullable=True)

    def __repr__(self) -> str:
        return f"<HealthKpi district={self.district_id} kpi={self.kpi_id} year={self.year}>"
