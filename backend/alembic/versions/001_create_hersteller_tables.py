"""Create hersteller and schlagwort tables

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

What:  Creates `hersteller` (manufacturers) and its owned `schlagwort` rows.
How:   Portable column types only; ids are UUID strings assigned by the service.

Rollback: downgrade() drops both tables (all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "hersteller",
        sa.Column(
            "id",
            sa.String(36),
            nullable=False,
            comment="UUID assigned by the service on creation",
        ),
        sa.Column(
            "version",
            sa.Integer(),
            nullable=False,
            comment="Optimistic-lock counter, 0 on insert",
        ),
        sa.Column("name", sa.String(40), nullable=False),
        sa.Column("telephone", sa.String(20), nullable=True),
        sa.Column("homepage", sa.String(255), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    # Unique: concurrent creates with one name cannot both commit
    op.create_index("ix_hersteller_name", "hersteller", ["name"], unique=True)

    op.create_table(
        "schlagwort",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("hersteller_id", sa.String(36), nullable=False),
        sa.Column("schlagwort", sa.String(16), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["hersteller_id"], ["hersteller.id"]),
    )
    op.create_index("ix_schlagwort_hersteller_id", "schlagwort", ["hersteller_id"])


def downgrade() -> None:
    op.drop_index("ix_schlagwort_hersteller_id", table_name="schlagwort")
    op.drop_table("schlagwort")
    op.drop_index("ix_hersteller_name", table_name="hersteller")
    op.drop_table("hersteller")
