"""facilities and kpi tables

Creates the four tables the API reads from.  Production databases are
populated upstream; this revision exists for local development.

Revision ID: 0001
Revises:
Create Date: 2025-01-01 00:00:00.000000

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "HealthcareFacilities",
        sa.Column("StateName", sa.Text(), nullable=False),
        sa.Column("DistrictName", sa.Text(), nullable=False),
        sa.Column("SubdistrictName", sa.Text(), nullable=False),
        sa.Column("FacilityName", sa.Text(), nullable=False),
        sa.Column("FacilityType", sa.Text(), nullable=True),
        sa.Column("latitude", sa.Text(), nullable=True),
        sa.Column("longitude", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint(
            "StateName", "DistrictName", "SubdistrictName", "FacilityName"
        ),
    )
    op.create_index(
        "ix_HealthcareFacilities_DistrictName", "HealthcareFacilities", ["DistrictName"]
    )

    op.create_table(
        "districts",
        sa.Column("district_id", sa.Integer(), primary_key=True),
        sa.Column("district_name", sa.Text(), nullable=False),
        sa.Column("state_name", sa.Text(), nullable=False),
        sa.Column("country_name", sa.Text(), nullable=True),
    )
    op.create_index("ix_districts_state_name", "districts", ["state_name"])

    op.create_table(
        "kpi_definitions",
        sa.Column("kpi_id", sa.Integer(), primary_key=True),
        sa.Column("kpi_name", sa.Text(), nullable=False),
        sa.Column("unit", sa.Text(), nullable=True),
        sa.Column("source", sa.Text(), nullable=False,
                  comment="Data source, e.g. 'HMIS Data', 'NFHS 2019'"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.Text(), nullable=True),
    )

    op.create_table(
        "health_kpis",
        sa.Column("district_id", sa.Integer(),
                  sa.ForeignKey("districts.district_id"), nullable=False),
        sa.Column("kpi_id", sa.Integer(),
                  sa.ForeignKey("kpi_definitions.kpi_id"), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("kpi_value", sa.Numeric(), nullable=True),
        sa.PrimaryKeyConstraint("district_id", "kpi_id", "year"),
    )


def downgrade() -> None:
    op.drop_table("health_kpis")
    op.drop_table("kpi_definitions")
    op.drop_index("ix_districts_state_name", table_name="districts")
    op.drop_table("districts")
    op.drop_index("ix_HealthcareFacilities_DistrictName", table_name="HealthcareFacilities")
    op.drop_table("HealthcareFacilities")
