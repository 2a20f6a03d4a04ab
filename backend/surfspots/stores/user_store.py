"""
SurfSpots Backend — PostgreSQL User Store
===========================================

What:  Lookup and creation of API operators in the `users` table.
How:   Same session-based pattern as SqlSpotStore. A unique-violation on
       e-mail surfaces as EmailTakenError; other driver errors as
       DatabaseError.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from surfspots.exceptions import DatabaseError
from surfspots.models.user import UserRecord
from surfspots.security import Role

logger = logging.getLogger(__name__)


class UserNotFoundError(Exception):
    """No user is registered under the e-mail."""


class EmailTakenError(Exception):
    """Another user already uses the e-mail."""


@dataclass(frozen=True)
class User:
    id: str
    email: str
    role: Role
    password_hash: str
    created_at: datetime


@dataclass(frozen=True)
class UserCreationEntry:
    email: str
    role: Role
    password_hash: str


def to_user(record: UserRecord) -> User:
    return User(
        id=str(record.id),
        email=record.email,
        role=Role(record.role),
        password_hash=record.password_hash,
        created_at=record.created_at,
    )


class SqlUserStore:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def user_by_email(self, email: str) -> User:
        try:
            result = await self.session.execute(
                select(UserRecord).where(UserRecord.email == email).limit(1)
            )
            record = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching user: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})

        if record is None:
            raise UserNotFoundError(email)
        return to_user(record)

    async def create_user(self, entry: UserCreationEntry) -> User:
        stmt = (
            insert(UserRecord)
            .values(
                email=entry.email,
                role=entry.role,
                password_hash=entry.password_hash,
            )
            .returning(UserRecord)
        )
        try:
            result = await self.session.execute(stmt)
            record = result.scalar_one()
        except IntegrityError:
            await self.session.rollback()
            raise EmailTakenError(entry.email)
        except SQLAlchemyError as e:
            logger.error("Database error creating user: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("User created: %s (%s)", record.id, entry.role.value)
        return to_user(record)
