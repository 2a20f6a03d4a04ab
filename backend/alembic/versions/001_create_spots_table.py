"""Create spots table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `spots` table holding every surf spot and its location.
How:   UUID primary key generated by PostgreSQL, DOUBLE PRECISION coordinates,
       TIMESTAMP WITH TIME ZONE creation time.

Rollback: downgrade() drops the table (all spots are lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # gen_random_uuid() is built in from PostgreSQL 13; older servers need pgcrypto
    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto")

    op.create_table(
        "spots",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("name", sa.Text(), nullable=False, comment="Display name of the spot"),
        sa.Column("latitude", sa.Double(), nullable=False),
        sa.Column("longitude", sa.Double(), nullable=False),
        sa.Column(
            "locality",
            sa.Text(),
            nullable=False,
            comment="Nearest named place (village, town, city...)",
        ),
        sa.Column(
            "country_code",
            sa.Text(),
            nullable=False,
            comment="Lowercase ISO 3166-1 alpha-2 code",
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # Listings are always newest first
    op.create_index(
        "idx_spots_created_at",
        "spots",
        [sa.text("created_at DESC")],
    )
    op.create_index("idx_spots_country_code", "spots", ["country_code"])


def downgrade() -> None:
    op.drop_index("idx_spots_country_code", table_name="spots")
    op.drop_index("idx_spots_created_at", table_name="spots")
    op.drop_table("spots")
