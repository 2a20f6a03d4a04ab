"""
SurfSpots Backend — Spot SQLAlchemy Model
===========================================

What:  ORM model representing the `spots` table in PostgreSQL.
How:   Inherits from the shared DeclarativeBase; Alembic reads this for migrations.
Who:   Queried and written by SqlSpotStore.

Table Design:
    - UUID primary key generated server-side (gen_random_uuid())
    - latitude / longitude as DOUBLE PRECISION, filtered with BETWEEN
    - country_code stored lowercase ISO-2
    - created_at assigned on insert, never updated
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Double, Index, Text, text
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID
from sqlalchemy.orm import Mapped, mapped_column

from surfspots.database import Base
from surfspots.geo.types import Coordinates, Location
from surfspots.surf import Spot


class SpotRecord(Base):
    """A surf spot row."""

    __tablename__ = "spots"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        server_default=text("gen_random_uuid()"),
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    latitude: Mapped[float] = mapped_column(Double, nullable=False)
    longitude: Mapped[float] = mapped_column(Double, nullable=False)
    locality: Mapped[str] = mapped_column(Text, nullable=False)
    country_code: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_spots_created_at", created_at.desc()),
        Index("idx_spots_country_code", "country_code"),
    )

    def to_spot(self) -> Spot:
        return Spot(
            id=str(self.id),
            name=self.name,
            created_at=self.created_at,
            location=Location(
                locality=self.locality,
                country_code=self.country_code,
                coordinates=Coordinates(
                    latitude=self.latitude,
                    longitude=self.longitude,
                ),
            ),
        )

    def __repr__(self) -> str:
        return f"<SpotRecord(id={self.id}, name='{self.name}')>"
