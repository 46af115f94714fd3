"""
Unit tests for StationCatalog: validation at the catalog boundary, loading,
lookup and nearest-station queries.
"""
import json
import math

import pytest

from features.stations.exceptions.catalog_exceptions import (
    CatalogLoadError,
    InvalidStationEntryError,
    ReferencePointError,
    StationNotFoundError,
)
from features.stations.models.station_types import RawStationEntry, StationRecord
from features.stations.services.catalog_service import StationCatalog

BOSTON = ("Boston", "feet", "MA", 0.0, 42.3601, -71.0589)


@pytest.fixture
def bare_catalog(tmp_path):
    return StationCatalog(
        stations_file=tmp_path / "missing.json",
        allowed_units=["feet", "meters"],
        distance_units="kilometers",
    )


class TestValidation:
    """Tests for validate_entry and record_from_entry."""

    def test_boston_entry_builds_verbatim(self, bare_catalog):
        record = bare_catalog.record_from_entry(BOSTON)
        assert record.to_entry() == BOSTON

    def test_reference_station_entry(self, bare_catalog):
        record = bare_catalog.record_from_entry(
            ("Reference Station", "meters", "", None, None, None)
        )
        assert record.distance is None
        assert record.latitude is None
        assert record.longitude is None

    @pytest.mark.parametrize("latitude", [90, -90])
    def test_boundary_latitudes_valid(self, bare_catalog, latitude):
        entry = RawStationEntry("Pole", "meters", "", None, latitude, 0.0)
        assert bare_catalog.validate_entry(entry) == []

    @pytest.mark.parametrize("latitude", [91, -91])
    def test_out_of_range_latitude_flagged(self, bare_catalog, latitude):
        """The record would accept these; the catalog must not."""
        entry = RawStationEntry("Pole", "meters", "", None, latitude, 0.0)
        problems = bare_catalog.validate_entry(entry)
        assert any("latitude" in p for p in problems)
        assert StationRecord(name="Pole", latitude=latitude).latitude == latitude
        with pytest.raises(InvalidStationEntryError):
            bare_catalog.record_from_entry(entry)

    @pytest.mark.parametrize("longitude", [180.5, -181])
    def test_out_of_range_longitude_flagged(self, bare_catalog, longitude):
        entry = RawStationEntry("Dateline", "feet", "", None, 0.0, longitude)
        assert any("longitude" in p for p in bare_catalog.validate_entry(entry))

    def test_missing_name_rejected(self, bare_catalog):
        entry = RawStationEntry(None, "feet", "MA", None, 42.0, -71.0)
        assert "missing name" in bare_catalog.validate_entry(entry)

    def test_empty_name_allowed(self, bare_catalog):
        assert bare_catalog.record_from_entry(("", "feet", "", None, None, None)).name == ""

    def test_unknown_units_rejected(self, bare_catalog):
        entry = RawStationEntry("Boston", "fathoms", "MA", None, None, None)
        assert "unknown units 'fathoms'" in bare_catalog.validate_entry(entry)

    def test_units_case_insensitive(self, bare_catalog):
        record = bare_catalog.record_from_entry(("Boston", "Feet", "MA", None, None, None))
        assert record.units == "Feet"

    def test_empty_units_allowed(self, bare_catalog):
        assert bare_catalog.validate_entry(RawStationEntry("Boston", "", "", None, None, None)) == []

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_rejected(self, bare_catalog, value):
        entry = RawStationEntry("Boston", "feet", "MA", value, None, None)
        assert "distance must be finite" in bare_catalog.validate_entry(entry)

    @pytest.mark.parametrize("value", ["42.0", True])
    def test_non_numeric_rejected(self, bare_catalog, value):
        entry = RawStationEntry("Boston", "feet", "MA", None, value, None)
        assert "latitude must be a number" in bare_catalog.validate_entry(entry)

    def test_negative_distance_rejected(self, bare_catalog):
        entry = RawStationEntry("Boston", "feet", "MA", -1.0, None, None)
        assert "distance must not be negative" in bare_catalog.validate_entry(entry)

    def test_wrong_arity_rejected(self, bare_catalog):
        with pytest.raises(InvalidStationEntryError, match="expected 6 fields"):
            bare_catalog.record_from_entry(("Boston", "feet"))

    def test_mapping_with_missing_keys(self, bare_catalog):
        record = bare_catalog.record_from_entry({"name": "Boston", "units": None})
        assert record == StationRecord(name="Boston")

    def test_errors_report_every_problem(self, bare_catalog):
        with pytest.raises(InvalidStationEntryError) as excinfo:
            bare_catalog.record_from_entry((None, "fathoms", "", None, 95.0, 200.0))
        assert len(excinfo.value.problems) == 4


class TestLoading:
    """Tests for load_entries, load_file and lazy loading."""

    def test_invalid_entries_skipped(self, bare_catalog):
        records = bare_catalog.load_entries([
            BOSTON,
            (None, "feet", "", None, None, None),
            ("North Pole", "meters", "", None, 91.0, 0.0),
        ])
        assert [r.name for r in records] == ["Boston"]
        assert bare_catalog.stations() == records

    def test_strict_raises_on_first_invalid(self, bare_catalog):
        with pytest.raises(InvalidStationEntryError):
            bare_catalog.load_entries([BOSTON, (None, "", "", None, None, None)], strict=True)

    def test_duplicate_names_skipped(self, bare_catalog):
        records = bare_catalog.load_entries([BOSTON, ("Boston", "meters", "MA", None, None, None)])
        assert len(records) == 1
        assert records[0].units == "feet"

    def test_lazy_file_load(self, catalog):
        stations = catalog.stations()
        assert len(stations) == 5
        assert catalog.stations() is stations

    def test_file_values_verbatim(self, catalog):
        boston = catalog.get_station("Boston")
        assert boston.to_entry() == BOSTON

    def test_missing_file(self, bare_catalog):
        with pytest.raises(CatalogLoadError):
            bare_catalog.stations()

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(CatalogLoadError):
            StationCatalog(stations_file=path).load_file()

    def test_non_array_file(self, tmp_path):
        path = tmp_path / "object.json"
        path.write_text(json.dumps({"name": "Boston"}))
        with pytest.raises(CatalogLoadError, match="JSON array"):
            StationCatalog(stations_file=path).load_file()

    @pytest.mark.parametrize("bad", [1, None, "abcdef"])
    def test_non_entry_elements_skipped(self, tmp_path, bad):
        path = tmp_path / "stations.json"
        path.write_text(json.dumps([bad, {"name": "Boston", "units": "feet"}]))
        records = StationCatalog(stations_file=path, allowed_units=["feet"]).load_file()
        assert [r.name for r in records] == ["Boston"]

    @pytest.mark.parametrize("bad", [1, None, "abcdef"])
    def test_non_entry_elements_rejected_when_strict(self, tmp_path, bad):
        path = tmp_path / "stations.json"
        path.write_text(json.dumps([bad]))
        with pytest.raises(InvalidStationEntryError, match="6-field sequence"):
            StationCatalog(stations_file=path).load_file(strict=True)


class TestLookup:
    """Tests for get_station and search."""

    def test_get_station(self, catalog):
        assert catalog.get_station("Halifax, Nova Scotia").units == "meters"

    def test_get_station_not_found(self, catalog):
        with pytest.raises(StationNotFoundError):
            catalog.get_station("Atlantis")

    def test_search_by_name(self, catalog):
        assert [s.name for s in catalog.search("jolla")] == ["La Jolla, California"]

    def test_search_by_state(self, catalog):
        assert [s.name for s in catalog.search("wa")] == ["Seattle, Washington"]

    def test_blank_search_returns_all(self, catalog):
        assert len(catalog.search("  ")) == 5


class TestNearest:
    """Tests for nearest-station queries."""

    def test_ordering_and_distance(self, catalog):
        stations = catalog.nearest(42.3601, -71.0589, limit=2)
        assert [s.name for s in stations] == ["Boston", "Halifax, Nova Scotia"]
        assert stations[0].distance == 0.0
        assert 350 < stations[1].distance < 450  # miles

    def test_stations_without_coordinates_skipped(self, catalog):
        names = [s.name for s in catalog.nearest(0.0, 0.0, limit=10)]
        assert "Reference Station" not in names
        assert len(names) == 4

    def test_catalog_records_unchanged(self, catalog):
        catalog.nearest(32.0, -117.0, limit=1)
        assert catalog.get_station("La Jolla, California").distance is None

    def test_kilometers(self, catalog):
        catalog.distance_units = "kilometers"
        halifax = catalog.nearest(42.3601, -71.0589, limit=2)[1]
        assert 600 < halifax.distance < 700

    def test_antipodal_points(self, bare_catalog):
        bare_catalog.load_entries([("South", "meters", "", None, -87.5, 0.0)])
        [south] = bare_catalog.nearest(87.5, 180.0, limit=1)
        assert south.distance == pytest.approx(20015.09, abs=0.01)  # half the circumference

    @pytest.mark.parametrize("lat", [x / 4 for x in range(-360, 361, 5)])
    def test_antipodal_sweep(self, lat):
        from features.common.utils.geo import GeoUtils
        assert GeoUtils.calculate_distance(lat, 0.0, -lat, 180.0) == pytest.approx(20015.09, abs=0.01)

    @pytest.mark.parametrize("lat,lon", [(91.0, 0.0), (0.0, -181.0)])
    def test_invalid_reference_point(self, catalog, lat, lon):
        with pytest.raises(ReferencePointError):
            catalog.nearest(lat, lon)

    def test_invalid_limit(self, catalog):
        with pytest.raises(ReferencePointError):
            catalog.nearest(0.0, 0.0, limit=0)
