"""
SurfSpots Backend — Bulk Spot Import
======================================

What:  Imports spots from a CSV file in one all-or-nothing transaction.
How:   CsvSpotEntrySource reads the file asynchronously (aiofiles) and parses
       it with the csv module. ImportingService sanitizes and validates every
       entry before anything is written; the first invalid entry aborts the
       import. Valid entries go to SpotStore.create_spots(), which inserts
       them in batches inside a single transaction.
Who:   Called by the `surfspots-cli import` command.

CSV format (header row required, then one spot per line):
    name,latitude,longitude,locality,country_code
    Pipeline,21.665,-158.053,Haleiwa,us
"""

import csv
import io
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Union

import aiofiles

from surfspots.geo.types import Coordinates, Location
from surfspots.services.params import CreateSpotParams
from surfspots.surf import SpotCreationEntry, SpotStore

logger = logging.getLogger(__name__)

CSV_FIELDS = ("name", "latitude", "longitude", "locality", "country_code")


class ImportSourceError(Exception):
    """The import source could not be read or contains a malformed record."""


class SpotEntrySource(ABC):
    @abstractmethod
    async def spot_entries(self) -> List[SpotCreationEntry]:
        ...


def parse_csv(text: str) -> List[SpotCreationEntry]:
    """
    Parse CSV text into creation entries, skipping the header row.

    Raises:
        ImportSourceError: a record does not have exactly five fields or a
            coordinate is not a number.
    """
    try:
        records = list(csv.reader(io.StringIO(text)))
    except csv.Error as e:
        raise ImportSourceError(f"could not read csv: {e}")

    entries = []
    # line numbers are 1-based and include the header
    for line, record in enumerate(records[1:], start=2):
        if not record:
            continue
        if len(record) != len(CSV_FIELDS):
            raise ImportSourceError(
                f"invalid csv record on line {line}: must contain exactly "
                f"{len(CSV_FIELDS)} fields ({', '.join(CSV_FIELDS)})"
            )

        name, latitude, longitude, locality, country_code = record
        try:
            coordinates = Coordinates(latitude=float(latitude), longitude=float(longitude))
        except ValueError:
            raise ImportSourceError(f"invalid coordinates on line {line}")

        entries.append(
            SpotCreationEntry(
                name=name,
                location=Location(
                    locality=locality,
                    country_code=country_code,
                    coordinates=coordinates,
                ),
            )
        )
    return entries


class CsvSpotEntrySource(SpotEntrySource):
    """Reads entries from a CSV file path, or from already loaded CSV text."""

    def __init__(self, source: Union[str, Path, io.StringIO]):
        self.source = source

    async def _read(self) -> str:
        if isinstance(self.source, io.StringIO):
            return self.source.getvalue()
        try:
            async with aiofiles.open(self.source, "r", encoding="utf-8", newline="") as f:
                return await f.read()
        except OSError as e:
            raise ImportSourceError(f"could not read csv file {self.source}: {e}")

    async def spot_entries(self) -> List[SpotCreationEntry]:
        return parse_csv(await self._read())


class ImportingService:
    def __init__(self, spot_store: SpotStore):
        self.spot_store = spot_store

    async def import_spots(self, source: SpotEntrySource) -> int:
        """
        Validate every entry, then insert them all.

        Returns:
            Number of imported spots.

        Raises:
            ImportSourceError: unreadable source or no entries at all.
            ValidationError: an entry is invalid; ``context["entry"]`` is its
                1-based position. Nothing is inserted.
            DatabaseError: the insert failed and was rolled back.
        """
        raw_entries = await source.spot_entries()
        if not raw_entries:
            raise ImportSourceError("no spot entries to import")

        entries = []
        for number, raw in enumerate(raw_entries, start=1):
            params = CreateSpotParams(
                name=raw.name,
                latitude=raw.location.coordinates.latitude,
                longitude=raw.location.coordinates.longitude,
                locality=raw.location.locality,
                country_code=raw.location.country_code,
            ).sanitized()
            params.validate(context={"entry": number})
            entries.append(params.to_entry())

        count = await self.spot_store.create_spots(entries)
        logger.info("Imported %d spots", count)
        return count
