from typing import NamedTuple, Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, StrictStr

from features.stations.exceptions.catalog_exceptions import IncompleteStationError

# Numbers are kept as given: ints stay ints and strings are never parsed
Number = Union[StrictInt, StrictFloat]

STATION_FIELDS = ("name", "units", "state", "distance", "latitude", "longitude")

class RawStationEntry(NamedTuple):
    """Decoded station-list entry, in catalog field order."""
    name: Optional[str]
    units: str = ""
    state: str = ""
    distance: Optional[Number] = None
    latitude: Optional[Number] = None
    longitude: Optional[Number] = None

class StationRecord(BaseModel):
    """Descriptive metadata for one tide station.

    Numeric fields use None for "not supplied by the data source", which is
    distinct from zero. Records are frozen: use ``replace`` to derive a copy
    with different values. No range checks happen here; the catalog validates
    entries before they become records.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: StrictStr = ""
    units: StrictStr = ""  # height unit label, e.g. "feet" or "meters"
    state: StrictStr = ""
    distance: Optional[Number] = None  # from a reference location
    latitude: Optional[Number] = None  # degrees
    longitude: Optional[Number] = None  # degrees

    @property
    def coordinates(self) -> Optional[Tuple[float, float]]:
        """(latitude, longitude) when both are known, otherwise None."""
        if self.latitude is None or self.longitude is None:
            return None
        return (self.latitude, self.longitude)

    def replace(self, **changes) -> "StationRecord":
        """Return a copy with the given fields stored verbatim."""
        unknown = set(changes) - set(STATION_FIELDS)
        if unknown:
            raise TypeError(f"Unknown station fields: {', '.join(sorted(unknown))}")
        return self.model_copy(update=changes)

    def to_entry(self) -> RawStationEntry:
        return RawStationEntry(*(getattr(self, field) for field in STATION_FIELDS))

class StationRecordBuilder:
    """Collects station fields one at a time and yields a frozen record.

    ``name`` starts unset; ``build`` refuses to produce a record until it has
    been supplied (an empty string counts as supplied).
    """

    def __init__(self) -> None:
        self.name: Optional[str] = None
        self.units: str = ""
        self.state: str = ""
        self.distance: Optional[Number] = None
        self.latitude: Optional[Number] = None
        self.longitude: Optional[Number] = None

    @classmethod
    def from_entry(cls, entry: RawStationEntry) -> "StationRecordBuilder":
        builder = cls()
        for field, value in zip(STATION_FIELDS, entry):
            setattr(builder, field, value)
        return builder

    def with_name(self, name: str) -> "StationRecordBuilder":
        self.name = name
        return self

    def with_units(self, units: str) -> "StationRecordBuilder":
        self.units = units
        return self

    def with_state(self, state: str) -> "StationRecordBuilder":
        self.state = state
        return self

    def with_distance(self, distance: Optional[Number]) -> "StationRecordBuilder":
        self.distance = distance
        return self

    def with_latitude(self, latitude: Optional[Number]) -> "StationRecordBuilder":
        self.latitude = latitude
        return self

    def with_longitude(self, longitude: Optional[Number]) -> "StationRecordBuilder":
        self.longitude = longitude
        return self

    def is_complete(self) -> bool:
        return self.name is not None

    def build(self) -> StationRecord:
        if not self.is_complete():
            raise IncompleteStationError("Station name must be supplied before building a record")
        return StationRecord(**{field: getattr(self, field) for field in STATION_FIELDS})
