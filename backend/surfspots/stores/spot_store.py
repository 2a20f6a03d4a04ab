"""
SurfSpots Backend — PostgreSQL Spot Store
===========================================

What:  SpotStore implementation on top of an async SQLAlchemy session.
How:   SQLAlchemy Core/ORM statements are the query builder. IDs are
       compared as CAST(id AS VARCHAR) so a malformed ID simply matches
       nothing instead of raising a UUID parse error.
Who:   Built per request by route dependencies, and by the CLI importer.

Query composition for spots():
    SELECT ... FROM spots
    [WHERE country_code = :cc]
    [AND (name ILIKE :q OR locality ILIKE :q [OR CAST(id AS VARCHAR) ILIKE :q])]
    [AND latitude BETWEEN :sw_lat AND :ne_lat AND longitude BETWEEN :sw_lon AND :ne_lon]
    ORDER BY created_at DESC, id
    LIMIT :limit OFFSET :offset

Transactions:
    Single-spot writes run inside the caller's session transaction (committed
    by get_db_session). create_spots() owns its transaction: every batch is
    inserted first, then the session commits exactly once; any failure rolls
    back all batches.
"""

import logging
from typing import Any, Dict, List, Sequence

from sqlalchemy import String, Select, cast, delete, insert, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from surfspots.batch import Batcher
from surfspots.exceptions import DatabaseError
from surfspots.models.spot import SpotRecord
from surfspots.surf import (
    EmptySpotUpdateError,
    Spot,
    SpotCreationEntry,
    SpotNotFoundError,
    SpotsParams,
    SpotStore,
    SpotUpdateEntry,
)

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100


def wildcard(query: str) -> str:
    return f"%{query}%"


def id_as_varchar():
    return cast(SpotRecord.id, String)


def build_spots_statement(params: SpotsParams) -> Select:
    """Compose the filtered, ordered and paginated SELECT for spots()."""
    stmt = select(SpotRecord)

    if params.country_code:
        stmt = stmt.where(SpotRecord.country_code == params.country_code)

    search = params.search_query
    if search.query:
        pattern = wildcard(search.query)
        clauses = [
            SpotRecord.name.ilike(pattern),
            SpotRecord.locality.ilike(pattern),
        ]
        if search.with_spot_id:
            clauses.append(id_as_varchar().ilike(pattern))
        stmt = stmt.where(or_(*clauses))

    if params.bounds is not None:
        ne = params.bounds.north_east
        sw = params.bounds.south_west
        stmt = stmt.where(
            SpotRecord.latitude.between(sw.latitude, ne.latitude),
            SpotRecord.longitude.between(sw.longitude, ne.longitude),
        )

    return (
        stmt.order_by(SpotRecord.created_at.desc(), SpotRecord.id)
        .limit(params.limit)
        .offset(params.offset)
    )


def creation_row(entry: SpotCreationEntry) -> Dict[str, Any]:
    return {
        "name": entry.name,
        "latitude": entry.location.coordinates.latitude,
        "longitude": entry.location.coordinates.longitude,
        "locality": entry.location.locality,
        "country_code": entry.location.country_code,
    }


def update_values(entry: SpotUpdateEntry) -> Dict[str, Any]:
    """SET map built from present fields only."""
    values: Dict[str, Any] = {}
    if entry.name is not None:
        values["name"] = entry.name
    if entry.latitude is not None:
        values["latitude"] = entry.latitude
    if entry.longitude is not None:
        values["longitude"] = entry.longitude
    if entry.locality is not None:
        values["locality"] = entry.locality
    if entry.country_code is not None:
        values["country_code"] = entry.country_code
    return values


class SqlSpotStore(SpotStore):
    """
    PostgreSQL spot store.

    Args:
        session:    Async session; owned by the caller.
        batch_size: Rows per multi-row INSERT in create_spots(). Must be at least 1.

    Raises:
        ValueError: batch_size is below 1.
    """

    def __init__(self, session: AsyncSession, batch_size: int = DEFAULT_BATCH_SIZE):
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")
        self.session = session
        self.batch_size = batch_size

    async def spot(self, spot_id: str) -> Spot:
        try:
            result = await self.session.execute(
                select(SpotRecord).where(id_as_varchar() == spot_id)
            )
            record = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching spot %s: %s", spot_id, str(e))
            raise DatabaseError(context={"spot_id": spot_id})

        if record is None:
            raise SpotNotFoundError(spot_id)
        return record.to_spot()

    async def spots(self, params: SpotsParams) -> List[Spot]:
        try:
            result = await self.session.execute(build_spots_statement(params))
            records = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing spots: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        return [record.to_spot() for record in records]

    async def create_spot(self, entry: SpotCreationEntry) -> Spot:
        try:
            result = await self.session.execute(
                insert(SpotRecord).values(**creation_row(entry)).returning(SpotRecord)
            )
            record = result.scalar_one()
        except SQLAlchemyError as e:
            logger.error("Database error creating spot: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("Spot created: %s", record.id)
        return record.to_spot()

    async def update_spot(self, entry: SpotUpdateEntry) -> Spot:
        values = update_values(entry)
        if not values:
            raise EmptySpotUpdateError(entry.id)

        stmt = (
            update(SpotRecord)
            .where(id_as_varchar() == entry.id)
            .values(**values)
            .returning(SpotRecord)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.execute(stmt)
            record = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error updating spot %s: %s", entry.id, str(e))
            raise DatabaseError(context={"spot_id": entry.id})

        if record is None:
            raise SpotNotFoundError(entry.id)

        logger.info("Spot updated: %s (%s)", entry.id, ", ".join(sorted(values)))
        return record.to_spot()

    async def delete_spot(self, spot_id: str) -> None:
        stmt = (
            delete(SpotRecord)
            .where(id_as_varchar() == spot_id)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logger.error("Database error deleting spot %s: %s", spot_id, str(e))
            raise DatabaseError(context={"spot_id": spot_id})

        if result.rowcount == 0:
            raise SpotNotFoundError(spot_id)

        logger.info("Spot deleted: %s", spot_id)

    async def create_spots(self, entries: Sequence[SpotCreationEntry]) -> int:
        """
        Insert all entries in one transaction, ``batch_size`` rows per INSERT.

        Raises:
            ValueError: ``entries`` is empty.
            DatabaseError: any batch failed; nothing was committed.
        """
        if not entries:
            raise ValueError("no spot entries to create")

        batcher = Batcher(len(entries), self.batch_size)
        try:
            while batcher.has_next():
                batch = batcher.next_batch()
                rows = [creation_row(entry) for entry in entries[batch.as_slice()]]
                result = await self.session.execute(insert(SpotRecord).values(rows))
                if result.rowcount == 0:
                    raise DatabaseError(
                        message="No rows were inserted.",
                        context={"batch": [batch.i, batch.j]},
                    )
                logger.debug("Inserted %d spots (%d..%d)", len(batch), batch.i, batch.j)
        except (SQLAlchemyError, DatabaseError) as e:
            await self.session.rollback()
            logger.error("Bulk spot insert rolled back: %s", str(e))
            if isinstance(e, DatabaseError):
                raise
            raise DatabaseError(
                message="Could not import spots. Nothing was saved.",
                context={"error_type": type(e).__name__},
            )

        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Bulk spot insert commit failed: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("Bulk inserted %d spots", len(entries))
        return len(entries)
