import json
import logging
import math
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Union

from core.config import settings
from features.common.utils.geo import GeoUtils
from features.stations.exceptions.catalog_exceptions import (
    CatalogLoadError,
    InvalidStationEntryError,
    ReferencePointError,
    StationNotFoundError
)
from features.stations.models.station_types import (
    STATION_FIELDS,
    RawStationEntry,
    StationRecord,
    StationRecordBuilder
)

logger = logging.getLogger(__name__)

RawEntry = Union[RawStationEntry, tuple, Mapping[str, Any]]

def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)

class StationCatalog:
    """Loads tide stations from a station list and hands out validated records.

    All validation of station data happens here: records themselves accept
    whatever they are given, so nothing reaches consumers without passing
    ``validate_entry`` first.
    """

    def __init__(
        self,
        stations_file: Optional[Path] = None,
        allowed_units: Optional[List[str]] = None,
        distance_units: Optional[str] = None
    ):
        self.stations_file = Path(stations_file or settings.stations_file)
        self.allowed_units = [u.lower() for u in (allowed_units or settings.allowed_units)]
        self.distance_units = distance_units or settings.distance_units
        self._stations: Optional[List[StationRecord]] = None

    @staticmethod
    def to_entry(raw: RawEntry) -> RawStationEntry:
        """Normalize a tuple or mapping into a RawStationEntry.

        Mapping keys that are missing are treated as absent; text fields given
        as None become empty text, except ``name`` which stays None.
        """
        if isinstance(raw, Mapping):
            values = [raw.get(field) for field in STATION_FIELDS]
        elif isinstance(raw, (tuple, list)):
            values = list(raw)
            if len(values) != len(STATION_FIELDS):
                raise InvalidStationEntryError(
                    raw, [f"expected {len(STATION_FIELDS)} fields, got {len(values)}"]
                )
        else:
            raise InvalidStationEntryError(raw, ["entry must be an object or a 6-field sequence"])
        name, units, state, distance, latitude, longitude = values
        return RawStationEntry(
            name=name,
            units="" if units is None else units,
            state="" if state is None else state,
            distance=distance,
            latitude=latitude,
            longitude=longitude
        )

    def validate_entry(self, entry: RawStationEntry) -> List[str]:
        """Return a list of problems with an entry; empty means valid."""
        problems = []

        if entry.name is None:
            problems.append("missing name")
        elif not isinstance(entry.name, str):
            problems.append("name must be text")

        for field in ("units", "state"):
            if not isinstance(getattr(entry, field), str):
                problems.append(f"{field} must be text")

        if isinstance(entry.units, str) and entry.units and entry.units.lower() not in self.allowed_units:
            problems.append(f"unknown units '{entry.units}'")

        for field in ("distance", "latitude", "longitude"):
            value = getattr(entry, field)
            if value is None:
                continue
            if not _is_number(value):
                problems.append(f"{field} must be a number")
            elif not math.isfinite(value):
                problems.append(f"{field} must be finite")

        if _is_number(entry.latitude) and math.isfinite(entry.latitude):
            if not GeoUtils.is_valid_latitude(entry.latitude):
                problems.append(f"latitude {entry.latitude} outside [-90, 90]")
        if _is_number(entry.longitude) and math.isfinite(entry.longitude):
            if not GeoUtils.is_valid_longitude(entry.longitude):
                problems.append(f"longitude {entry.longitude} outside [-180, 180]")
        if _is_number(entry.distance) and entry.distance < 0:
            problems.append("distance must not be negative")

        return problems

    def record_from_entry(self, raw: RawEntry) -> StationRecord:
        """Validate a raw entry and build its record."""
        entry = self.to_entry(raw)
        problems = self.validate_entry(entry)
        if problems:
            raise InvalidStationEntryError(raw, problems)
        return StationRecordBuilder.from_entry(entry).build()

    def load_entries(self, entries: Iterable[RawEntry], strict: bool = False) -> List[StationRecord]:
        """Materialize records from raw entries and make them the catalog contents.

        Invalid entries and repeated names are skipped with a warning, or raise
        when ``strict`` is set.
        """
        records: List[StationRecord] = []
        seen = set()
        skipped = 0

        for raw in entries:
            try:
                record = self.record_from_entry(raw)
                if record.name in seen:
                    raise InvalidStationEntryError(raw, [f"duplicate station name '{record.name}'"])
            except InvalidStationEntryError as e:
                if strict:
                    raise
                logger.warning(f"Skipping station entry: {e}")
                skipped += 1
                continue
            seen.add(record.name)
            records.append(record)

        logger.info(f"Loaded {len(records)} tide stations ({skipped} skipped)")
        self._stations = records
        return records

    def load_file(self, path: Optional[Path] = None, strict: bool = False) -> List[StationRecord]:
        """Load a JSON array of station objects."""
        path = Path(path or self.stations_file)
        try:
            with open(path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error reading tide stations from {path}: {str(e)}")
            raise CatalogLoadError(f"Error loading station data from {path}: {str(e)}") from e

        if not isinstance(data, list):
            raise CatalogLoadError(f"Station data in {path} must be a JSON array")
        return self.load_entries(data, strict=strict)

    def stations(self) -> List[StationRecord]:
        """All catalog stations, loading the station list on first use."""
        if self._stations is None:
            self.load_file()
        return self._stations

    def get_station(self, name: str) -> StationRecord:
        """Get station by exact name."""
        station = next((s for s in self.stations() if s.name == name), None)
        if station is None:
            raise StationNotFoundError(name)
        return station

    def search(self, query: str) -> List[StationRecord]:
        """Case-insensitive substring match on station name and state."""
        needle = query.strip().lower()
        if not needle:
            return list(self.stations())
        return [
            s for s in self.stations()
            if needle in s.name.lower() or needle in s.state.lower()
        ]

    def nearest(
        self,
        latitude: float,
        longitude: float,
        limit: Optional[int] = None
    ) -> List[StationRecord]:
        """Stations closest to a reference point, with ``distance`` filled in.

        Stations without both coordinates are left out.
        """
        if not (_is_number(latitude) and GeoUtils.is_valid_latitude(latitude)):
            raise ReferencePointError(f"Reference latitude {latitude} outside [-90, 90]")
        if not (_is_number(longitude) and GeoUtils.is_valid_longitude(longitude)):
            raise ReferencePointError(f"Reference longitude {longitude} outside [-180, 180]")

        limit = settings.nearest_limit if limit is None else limit
        if limit < 1:
            raise ReferencePointError(f"limit must be at least 1, got {limit}")

        located = []
        for station in self.stations():
            if station.coordinates is None:
                continue
            distance = GeoUtils.calculate_distance(
                latitude, longitude, station.latitude, station.longitude, units=self.distance_units
            )
            located.append(station.replace(distance=round(distance, 2)))

        located.sort(key=lambda s: s.distance)
        return located[:limit]
