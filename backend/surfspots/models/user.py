"""
SurfSpots Backend — User SQLAlchemy Model
===========================================

What:  ORM model representing the `users` table (API operators).
How:   E-mail is unique; role is a PostgreSQL enum `user_role`; only the
       bcrypt hash of the password is stored.
Who:   Read and written by SqlUserStore.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Enum, Text, text
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID
from sqlalchemy.orm import Mapped, mapped_column

from surfspots.database import Base
from surfspots.security import Role


class UserRecord(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        server_default=text("gen_random_uuid()"),
    )
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    role: Mapped[Role] = mapped_column(
        Enum(
            Role,
            name="user_role",
            values_callable=lambda roles: [role.value for role in roles],
        ),
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<UserRecord(id={self.id}, email='{self.email}', role='{self.role.value}')>"
